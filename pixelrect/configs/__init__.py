"""Configuration loading and validation."""

from pixelrect.configs.loader import (
    LoggingSettings,
    OutputSettings,
    PixelRectConfig,
    RenderSettings,
    load_config,
)
from pixelrect.errors import ConfigError

__all__ = [
    "ConfigError",
    "LoggingSettings",
    "OutputSettings",
    "PixelRectConfig",
    "RenderSettings",
    "load_config",
]
