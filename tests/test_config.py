import pytest
from pydantic import ValidationError

from lottieframe.config import Settings
from lottieframe.core.builder import CompositionBuilder


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.resolution_scale == 1
    assert settings.image_warning_threshold == 4
    assert settings.max_control_point == 100
    assert settings.curve_samples == 32


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("LOTTIEFRAME_IMAGE_WARNING_THRESHOLD", "10")
    monkeypatch.setenv("LOTTIEFRAME_RESOLUTION_SCALE", "2.5")
    settings = Settings(_env_file=None)
    assert settings.image_warning_threshold == 10
    assert settings.resolution_scale == 2.5


def test_invalid_values_are_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, resolution_scale=0)
    with pytest.raises(ValidationError):
        Settings(_env_file=None, curve_samples=1)


def test_builder_falls_back_to_settings(monkeypatch):
    monkeypatch.setattr("lottieframe.core.builder.settings", Settings(_env_file=None, resolution_scale=3))
    builder = CompositionBuilder()
    assert builder.scale == 3
    assert CompositionBuilder(scale=1).scale == 1
