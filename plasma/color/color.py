"""
Color Representations

Two views of the same 24-bit color space:

- Color: the usual gamma-encoded 8 bits per channel (what ends up on screen
  and in GIF palettes)
- LinearColor: linear-light 16 bits per channel (what gradients, clustering
  and dithering do their math in)

A Color survives the trip to LinearColor and back unchanged. This is what
lets the rest of the pipeline work purely in linear light and gamma-encode
exactly once at the end.
"""

import math
from typing import NamedTuple, Sequence

from ..fastmath import clamp, lerp, round_half_up, wrap


GAMMA = 2.2
INV_GAMMA = 1.0 / GAMMA

MAX_COMPONENT = 255
MAX_LINEAR_COMPONENT = 65535


# =============================================================================
# Component Conversions
# =============================================================================

def component_to_linear(c: int) -> int:
    """
    Convert one gamma-encoded channel (0-255) to linear light (0-65535).

    Rounding to nearest would lose information at the dark end:
        65535 * (0/255) ** 2.2 = 0.0     -> 0
        65535 * (1/255) ** 2.2 = 0.3327  -> 0
    so Color(1, 1, 1) and Color(0, 0, 0) would collide. Rounding up here and
    down in component_to_gamma() is just enough nudging for gamma 2.2 to keep
    every byte value distinct.
    """
    gamma_float = c / MAX_COMPONENT
    return int(math.ceil(gamma_float ** GAMMA * MAX_LINEAR_COMPONENT))


def component_to_gamma(c: int) -> int:
    """Convert one linear channel (0-65535) to gamma-encoded (0-255)"""
    linear_float = c / MAX_LINEAR_COMPONENT
    return int(math.floor(linear_float ** INV_GAMMA * MAX_COMPONENT))


# =============================================================================
# Color Types
# =============================================================================

class Color(NamedTuple):
    """Traditional 24-bit color, each channel gamma encoded (0-255)"""
    r: int
    g: int
    b: int

    def to_linear(self) -> 'LinearColor':
        return LinearColor.from_gamma(self)


class LinearColor(NamedTuple):
    """
    A color whose channels are stored linearly (no gamma encoding), 0-65535.

    48 bits wide, but it covers the same range as a 24-bit Color.
    """
    r: int
    g: int
    b: int

    @classmethod
    def from_gamma(cls, color: Color) -> 'LinearColor':
        return cls(
            component_to_linear(color[0]),
            component_to_linear(color[1]),
            component_to_linear(color[2]),
        )

    @classmethod
    def from_floats(cls, r: float, g: float, b: float) -> 'LinearColor':
        """Create from linear floats in [0.0, 1.0]"""
        def to_component(f: float) -> int:
            return clamp(round_half_up(f * MAX_LINEAR_COMPONENT), 0, MAX_LINEAR_COMPONENT)
        return cls(to_component(r), to_component(g), to_component(b))

    def to_gamma(self) -> Color:
        return Color(
            component_to_gamma(self.r),
            component_to_gamma(self.g),
            component_to_gamma(self.b),
        )

    def lerp(self, other: 'LinearColor', position: float) -> 'LinearColor':
        """
        Blend toward other in linear light.

        Channels round half up, so position 0.0 gives self and 1.0 gives other
        exactly. Between two colors one step apart, each end owns half the
        space its neighbours get:

            black    darker_blue   dark_blue
          +-------+---------------+-------+
          0      0.25            0.75     1

        In a multi-stop gradient the end of one fade is the start of the next,
        so the extremes show up twice and it balances out.
        """
        if not 0.0 <= position <= 1.0:
            raise ValueError(f"Interpolation position must be in [0, 1], got {position}")

        def mix(a: int, b: int) -> int:
            return round_half_up(a * (1.0 - position) + b * position)

        return LinearColor(mix(self.r, other.r), mix(self.g, other.g), mix(self.b, other.b))

    def squared_distance(self, other: 'LinearColor') -> int:
        """Sum of squared channel differences, in linear light"""
        dr = self.r - other.r
        dg = self.g - other.g
        db = self.b - other.b
        return dr * dr + dg * dg + db * db

    @staticmethod
    def average(colors: Sequence['LinearColor']) -> 'LinearColor':
        """Per-channel mean, rounded half up"""
        n = len(colors)
        if n == 0:
            raise ValueError("Cannot average an empty list of colors")
        totals = [sum(c[i] for c in colors) for i in range(3)]
        # Exact integer form of round_half_up(total / n)
        return LinearColor(*((2 * t + n) // (2 * n) for t in totals))

    # -------------------------------------------------------------------------
    # HSL constructors
    # -------------------------------------------------------------------------

    @classmethod
    def from_hsl(cls, hue: float, saturation: float, lightness: float) -> 'LinearColor':
        """
        HSL computed in linear light.

        Hue wraps around (1.0 == 0.0 == red); saturation and lightness are
        clamped to [0, 1].
        """
        h = wrap(hue)
        s = clamp(saturation, 0.0, 1.0)
        l = clamp(lightness, 0.0, 1.0)

        # Bounds on channel values at 50% lightness
        upper_l50 = 0.5 + s / 2.0
        lower_l50 = 0.5 - s / 2.0

        # Pull both bounds toward black or white as lightness moves away from 50%
        black_white = float(round_half_up(l))
        position = abs(l - 0.5) * 2.0
        upper = lerp(upper_l50, black_white, position)
        lower = lerp(lower_l50, black_white, position)

        sector = int(h * 6.0) % 6
        offset = h * 6.0 - math.floor(h * 6.0)
        if sector == 0:
            rgb = (upper, lerp(lower, upper, offset), lower)
        elif sector == 1:
            rgb = (lerp(upper, lower, offset), upper, lower)
        elif sector == 2:
            rgb = (lower, upper, lerp(lower, upper, offset))
        elif sector == 3:
            rgb = (lower, lerp(upper, lower, offset), upper)
        elif sector == 4:
            rgb = (lerp(lower, upper, offset), lower, upper)
        else:
            rgb = (upper, lower, lerp(upper, lower, offset))
        return cls.from_floats(*rgb)

    @classmethod
    def from_square_hsl(cls, color_x: float, color_y: float, lightness: float) -> 'LinearColor':
        """
        HSL with Cartesian instead of cylindrical hue/saturation.

        color_x and color_y address a square color wheel:
            (0.0, 1.0) upper-left corner   -> H = 0.0, S = 1.0
            (1.0, 0.7) 1/4 + 3/40 of the way clockwise around the edge
                                           -> H = 0.325, S = 1.0
            (0.5, 0.5) center              -> S = 0.0
        Lightness works as in regular HSL.
        """
        x = lerp(-1.0, 1.0, clamp(color_x, 0.0, 1.0))
        y = lerp(-1.0, 1.0, clamp(color_y, 0.0, 1.0))
        saturation = max(abs(x), abs(y))
        if saturation == 0.0:
            return cls.from_hsl(0.0, saturation, lightness)

        # Walk clockwise around the square of this saturation, starting top-left
        side_length = saturation * 2.0
        perimeter = side_length * 4.0
        adj_x = (x + saturation) / perimeter
        adj_y = (y + saturation) / perimeter
        above_diagonal = y > x
        above_antidiagonal = y > -x
        if above_diagonal and above_antidiagonal:
            hue = adj_x
        elif above_antidiagonal:
            hue = 0.25 + (0.25 - adj_y)
        elif not above_diagonal:
            hue = 0.5 + (0.25 - adj_x)
        else:
            hue = 0.75 + adj_y
        return cls.from_hsl(hue, saturation, lightness)


BLACK = LinearColor(0, 0, 0)
WHITE = LinearColor(MAX_LINEAR_COMPONENT, MAX_LINEAR_COMPONENT, MAX_LINEAR_COMPONENT)
