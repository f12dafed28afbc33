import pytest

from plasma.color.color import BLACK, WHITE, Color, LinearColor
from plasma.color.gradient import ControlPoint, Gradient, Subgradient

GRAY = LinearColor(32768, 32768, 32768)


def black_white():
    return Gradient([ControlPoint(BLACK, 0.0), ControlPoint(WHITE, 0.5)])


def test_control_point_wraps_position():
    assert ControlPoint(BLACK, 1.25).position == pytest.approx(0.25)
    assert ControlPoint(BLACK, -0.25).position == pytest.approx(0.75)


def test_control_point_lerp_needs_distinct_positions():
    with pytest.raises(ValueError):
        ControlPoint(BLACK, 0.3).lerp(ControlPoint(WHITE, 0.3), 0.3)


def test_gradient_hits_control_points():
    gradient = black_white()
    assert gradient.get_color(0.0) == BLACK
    assert gradient.get_color(0.5) == WHITE
    assert gradient.get_color(1.0) == BLACK


def test_gradient_blends_in_linear_light():
    gradient = black_white()
    assert gradient.get_color(0.25) == GRAY
    # Across the wrap from white back to black
    assert gradient.get_color(0.75) == GRAY


def test_subgradient_contains_across_wrap():
    sub = Subgradient(ControlPoint(BLACK, 0.75), ControlPoint(WHITE, 0.25))
    assert sub.contains(0.9)
    assert sub.contains(0.1)
    assert sub.contains(0.75)
    assert sub.contains(0.25)
    assert not sub.contains(0.5)
    with pytest.raises(ValueError):
        sub.get_color(0.5)


def test_subgradients_start_with_wrapping_pair():
    pairs = list(black_white().subgradients())
    assert len(pairs) == 2
    assert pairs[0].point1.color == WHITE
    assert pairs[0].point2.color == BLACK


def test_empty_gradient_is_gray():
    gradient = Gradient([])
    expected = Color(128, 128, 128).to_linear()
    assert len(gradient) == 2
    for position in (0.0, 0.3, 0.9):
        assert gradient.get_color(position) == expected


def test_single_point_gradient_is_solid():
    color = LinearColor(100, 200, 300)
    gradient = Gradient([ControlPoint(color, 0.8)])
    assert len(gradient) == 2
    assert gradient.get_color(0.1) == color
    assert gradient.get_color(0.5) == color


def test_points_sharing_a_position_keep_the_first():
    gradient = Gradient([ControlPoint(WHITE, 0.4), ControlPoint(BLACK, 0.4)])
    assert gradient.get_color(0.0) == WHITE
    assert gradient.get_color(0.6) == WHITE


def test_points_are_sorted():
    gradient = Gradient([ControlPoint(WHITE, 0.5), ControlPoint(BLACK, 0.0)])
    assert [p.position for p in gradient.points] == [0.0, 0.5]


def test_sample():
    samples = black_white().sample(4)
    assert samples == [BLACK, GRAY, WHITE, GRAY]


def test_subgradient_containment_bounds():
    forward = Subgradient(ControlPoint(BLACK, 0.25), ControlPoint(WHITE, 0.75))
    assert not forward.contains(0.24)
    assert forward.contains(0.25)
    assert forward.contains(0.75)
    assert not forward.contains(0.76)

    reverse = Subgradient(ControlPoint(WHITE, 0.75), ControlPoint(BLACK, 0.25))
    assert reverse.contains(0.75)
    assert reverse.contains(1.0)
    assert reverse.contains(0.25)
    assert not reverse.contains(0.5)


def test_tiny_negative_position_wraps_to_zero():
    assert ControlPoint(BLACK, -1e-17).position == 0.0
    gradient = Gradient([ControlPoint(BLACK, 0.0), ControlPoint(WHITE, -1e-17)])
    samples = gradient.sample(512)
    assert len(samples) == 512
    assert samples[0] == BLACK
