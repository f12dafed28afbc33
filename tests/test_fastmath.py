import numpy as np
import pytest

from plasma.fastmath import clamp, cowave, lerp, round_half_up, wave, wrap


def test_wave_quarter_points():
    assert wave(0.0) == pytest.approx(0.0)
    assert wave(0.25) == pytest.approx(1.0)
    assert wave(0.5) == pytest.approx(0.0)
    assert wave(0.75) == pytest.approx(-1.0)


def test_wave_has_period_one():
    xs = np.linspace(-3.0, 3.0, 101)
    np.testing.assert_allclose(wave(xs), wave(xs + 1.0), atol=1e-9)


def test_cowave_is_shifted_wave():
    assert cowave(0.0) == pytest.approx(1.0)
    assert cowave(0.5) == pytest.approx(-1.0)


def test_wrap():
    assert wrap(-0.25) == pytest.approx(0.75)
    assert wrap(1.0) == 0.0
    assert wrap(2.5) == pytest.approx(0.5)


def test_wrap_tiny_negative_lands_on_zero():
    assert wrap(-1e-17) == 0.0
    assert wrap(np.float32(-1e-9)) < 1.0
    wrapped = wrap(np.array([-1e-17, -0.25]))
    assert np.all(wrapped < 1.0)
    assert wrapped[0] == 0.0


def test_lerp_and_clamp():
    assert lerp(-1.0, 1.0, 0.5) == 0.0
    assert lerp(2.0, 4.0, 1.5) == 5.0
    assert clamp(5, 0, 3) == 3
    assert clamp(-1, 0, 3) == 0


def test_round_half_up():
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(-0.5) == 0
    assert round_half_up(1.49) == 1
