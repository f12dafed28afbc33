import numpy as np
import pytest

from plasma.color.color import BLACK, WHITE, LinearColor
from plasma.color.dither import BAYER_MATRIX, DitherPattern
from plasma.color.gradient import ControlPoint, Gradient
from plasma.color.palette import Palette

GRAY = LinearColor(32768, 32768, 32768)


def test_bayer_matrix_uses_each_threshold_once():
    assert sorted(BAYER_MATRIX.flatten().tolist()) == list(range(64))


def test_gray_mixes_black_and_white_evenly():
    pattern = DitherPattern.from_color(GRAY, Palette([BLACK, WHITE]))
    assert pattern.palette_indexes == (0, 1, 0, 0)
    assert pattern.palette_proportions == (32, 32, 0, 0)


def test_exact_palette_color_uses_one_slot():
    palette = Palette([BLACK, WHITE])
    assert DitherPattern.from_color(WHITE, palette).palette_proportions == (64, 0, 0, 0)
    assert DitherPattern.from_color(WHITE, palette).palette_indexes == (1, 0, 0, 0)
    assert DitherPattern.from_color(BLACK, palette).palette_indexes == (0, 0, 0, 0)


def test_proportions_always_total_64():
    gradient = Gradient([
        ControlPoint(LinearColor(65535, 0, 0), 0.0),
        ControlPoint(LinearColor(0, 65535, 0), 0.33),
        ControlPoint(LinearColor(0, 0, 65535), 0.66),
    ])
    samples = gradient.sample(64)
    palette = Palette.from_samples(6, samples, maximize_range=True)
    for color in samples:
        pattern = palette.get_dither_pattern(color)
        assert sum(pattern.palette_proportions) == 64
        assert all(i < len(palette) for i in pattern.palette_indexes)


def test_tile_holds_each_color_in_proportion():
    pattern = DitherPattern((2, 5, 7, 0), (10, 30, 24, 0))
    tile = pattern.to_tile()
    assert tile.shape == (8, 8)
    assert np.count_nonzero(tile == 2) == 10
    assert np.count_nonzero(tile == 5) == 30
    assert np.count_nonzero(tile == 7) == 24


def test_tile_matches_pixel_lookup():
    pattern = DitherPattern((2, 5, 7, 9), (1, 30, 24, 9))
    tile = pattern.to_tile()
    for y in range(8):
        for x in range(8):
            assert tile[y, x] == pattern.get_palette_index(x, y)
            assert pattern.get_palette_index(x + 8, y + 16) == pattern.get_palette_index(x, y)


def test_lowest_threshold_picks_first_slot():
    pattern = DitherPattern((3, 4, 0, 0), (1, 63, 0, 0))
    # BAYER_MATRIX[0][0] is 0
    assert pattern.get_palette_index(0, 0) == 3
    assert pattern.get_palette_index(1, 0) == 4


@pytest.mark.parametrize('proportions', [(10, 0, 0, 0), (65, -1, 0, 0)])
def test_invalid_proportions(proportions):
    with pytest.raises(ValueError):
        DitherPattern((0, 0, 0, 0), proportions)


@pytest.mark.parametrize('indexes, proportions, expected', [
    ((0, 1, 2, 3), (16, 16, 16, 16), {0: 16, 1: 16, 2: 16, 3: 16}),
    ((0, 0, 0, 0), (64, 0, 0, 0), {0: 64}),
    ((0, 1, 0, 0), (1, 63, 0, 0), {0: 1, 1: 63}),
])
def test_spatial_fidelity(indexes, proportions, expected):
    pattern = DitherPattern(indexes, proportions)
    counts = {}
    for y in range(8):
        for x in range(8):
            index = pattern.get_palette_index(x, y)
            counts[index] = counts.get(index, 0) + 1
    assert counts == expected
