"""
Fast Cyclic Math

Small helpers for values that live on a circle of period 1:
gradient positions, animation time, and the plasma wave field.

All functions accept plain floats or numpy arrays.
"""

import math

import numpy as np


def wave(x):
    """
    Like sin(), except its period is 1 instead of 2*pi.

    Each half period is a parabola, so the curve is close to a sine wave but
    not identical:

            xxx  |
          xx   xx|
        -x-------x-------x-
                 |xx   xx
                 |  xxx

    wave(0) = 0, wave(0.25) = 1, wave(0.5) = 0, wave(0.75) = -1
    """
    # Shifted by half a period: when x is 0, x0 is -0.5
    x0 = x - np.floor(x) - 0.5
    # The abs() flips the parabola upside-down for negative x0
    return x0 * (np.abs(x0) * 16.0 - 8.0)


def cowave(x):
    """Like cos(), except with a period of 1"""
    return wave(x + 0.25)


def wrap(x):
    """Wrap a value onto [0.0, 1.0). wrap(-0.25) == 0.75"""
    r = x - np.floor(x)
    # Tiny negatives round up to exactly 1.0, which belongs to 0.0
    if np.ndim(r) == 0:
        return float(r) if r < 1.0 else 0.0
    return np.where(r >= 1.0, 0.0, r).astype(r.dtype, copy=False)


def lerp(a, b, t):
    """Linear interpolation from a to b (t is not restricted to [0, 1])"""
    return a * (1.0 - t) + b * t


def clamp(x, lower, upper):
    """Restrict x to [lower, upper], inclusive"""
    return max(lower, min(upper, x))


def round_half_up(x: float) -> int:
    """
    Round to the nearest integer, ties going up.

    Used for every "round to nearest" in the colour pipeline so results do not
    depend on Python's banker's rounding.
    """
    return int(math.floor(x + 0.5))
