import pytest

from plasma.settings import (
    OutputMode, OutputSettings, RenderingSettings, load_rendering_settings,
    save_rendering_settings,
)


def test_defaults():
    settings = RenderingSettings()
    assert not settings.dithering
    assert settings.frames_per_second == 16.0
    assert settings.palette_size is None
    assert (settings.width, settings.height) == (640, 480)


def test_file_output_defaults():
    settings = RenderingSettings.for_file_output()
    assert settings.dithering
    assert settings.palette_size == 64
    assert (settings.width, settings.height) == (320, 240)
    assert settings.frame_count == 600


@pytest.mark.parametrize('kwargs', [
    {'frames_per_second': 0},
    {'loop_duration': -1},
    {'width': 0},
    {'palette_size': 1},
    {'palette_size': 65536},
])
def test_invalid_settings(kwargs):
    with pytest.raises(ValueError):
        RenderingSettings(**kwargs)


def test_maximize_range_follows_dithering():
    assert RenderingSettings(dithering=True).effective_maximize_range
    assert not RenderingSettings(dithering=False).effective_maximize_range
    assert not RenderingSettings(dithering=True, maximize_range=False).effective_maximize_range


def test_from_dict_ignores_unknown_keys():
    settings = RenderingSettings.from_dict({'fps': 30, 'palette': 12, 'colour': 'red'})
    assert settings.frames_per_second == 30
    assert settings.palette_size == 12


def test_yaml_round_trip(tmp_path):
    path = tmp_path / "settings.yaml"
    original = RenderingSettings(dithering=True, palette_size=32, width=100, height=50)
    save_rendering_settings(original, path)
    assert load_rendering_settings(path) == original


def test_yaml_keeps_defaults(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("width: 200\nheight: 100\n")
    settings = load_rendering_settings(path, defaults=RenderingSettings.for_file_output())
    assert (settings.width, settings.height) == (200, 100)
    assert settings.palette_size == 64


def test_yaml_must_be_mapping(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("- 1\n- 2\n")
    with pytest.raises(ValueError):
        load_rendering_settings(path)


def test_file_output_needs_path():
    with pytest.raises(ValueError):
        OutputSettings(OutputMode.FILE)
    assert OutputSettings(OutputMode.FILE, "out.gif").path == "out.gif"
