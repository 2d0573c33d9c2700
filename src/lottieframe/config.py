"""Runtime configuration.

Values are read from ``LOTTIEFRAME_*`` environment variables and an optional ``.env`` file.
"""
from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine defaults shared by the loaders and the path geometry code."""

    model_config = SettingsConfigDict(
        env_prefix="LOTTIEFRAME_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    resolution_scale: float = Field(default=1.0, gt=0)
    image_warning_threshold: int = 4
    # Some exporters write easing control points in the tens of thousands
    max_control_point: float = 100.0
    fetch_timeout: float = 30.0
    curve_samples: int = Field(default=32, ge=2)


settings = Settings()
