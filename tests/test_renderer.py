import numpy as np
import pytest

from plasma.core.renderer import PlasmaRenderer, pixel_coordinates
from plasma.genetics import Genome
from plasma.settings import RenderingSettings


@pytest.fixture
def genome():
    return Genome.random(np.random.default_rng(42))


def test_pixel_coordinates_center_the_image():
    y, x = pixel_coordinates(4, 2)
    np.testing.assert_allclose(x.ravel(), [-2.0, -1.0, 0.0, 1.0])
    np.testing.assert_allclose(y.ravel(), [-1.0, 0.0])
    assert x.shape == (1, 4)
    assert y.shape == (2, 1)


def test_render_produces_rgb_frame(genome):
    settings = RenderingSettings(width=16, height=12, palette_size=8)
    image = PlasmaRenderer(genome, settings).render(0.2)
    assert (image.width, image.height) == (16, 12)
    assert image.pixel_data.shape == (12, 16, 3)
    assert image.pixel_data.dtype == np.uint8


def test_render_uses_only_palette_colors(genome):
    settings = RenderingSettings(width=20, height=10, palette_size=6, dithering=True)
    renderer = PlasmaRenderer(genome, settings)
    indexes = renderer.render_indexed(0.4)
    assert indexes.shape == (10, 20)
    assert indexes.max() < 6
    palette = {tuple(c) for c in renderer.color_mapper.get_palette()}
    pixels = {tuple(p) for p in renderer.render(0.4).pixel_data.reshape(-1, 3).tolist()}
    assert pixels <= palette


def test_time_wraps(genome):
    renderer = PlasmaRenderer(genome, RenderingSettings(width=8, height=8, palette_size=4))
    np.testing.assert_array_equal(renderer.render(0.25).pixel_data, renderer.render(1.25).pixel_data)


def test_render_size_override(genome):
    renderer = PlasmaRenderer(genome, RenderingSettings(width=8, height=8, palette_size=4))
    assert renderer.render(0.0, 5, 3).pixel_data.shape == (3, 5, 3)


def test_zero_size_is_rejected_not_replaced(genome):
    renderer = PlasmaRenderer(genome, RenderingSettings(width=8, height=8, palette_size=4))
    with pytest.raises(ValueError):
        renderer.render(0.0, 0, 4)
    with pytest.raises(ValueError):
        renderer.render_indexed(0.0, 4, -1)


def test_missing_size_falls_back_to_settings(genome):
    renderer = PlasmaRenderer(genome, RenderingSettings(width=8, height=6, palette_size=4))
    assert renderer.render(0.0, height=2).pixel_data.shape == (2, 8, 3)
