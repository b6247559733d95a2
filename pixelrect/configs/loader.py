"""Configuration loader.

Loads ``pixelrect.yaml`` style files and validates them with pydantic for
fail-fast errors that name the offending key. Unknown keys are rejected so
typos do not silently fall back to defaults.

Usage::

    from pixelrect.configs.loader import load_config
    cfg = load_config()                      # shipped defaults.yaml
    cfg = load_config("/custom/pixelrect.yaml")
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from pixelrect.errors import ConfigError
from pixelrect.utils.fs import load_yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "defaults.yaml"


# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------


class RenderSettings(BaseModel):
    """Render behaviour."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    auto_scale_target: int = Field(512, ge=1, le=65535, description="Auto-scale display size")
    validate_input: bool = Field(True, alias="validate", description="Run safe-path checks")


class OutputSettings(BaseModel):
    """Output file handling."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    atomic_write: bool = True


class RotateSettings(BaseModel):
    """Log file rotation, passed to setup_logging(rotate=...)."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    mode: Literal["size", "time"] = "size"
    max_bytes: int = Field(10_000_000, ge=1, description="Size mode: rotate past this size")
    backup_count: int = Field(3, ge=0)
    when: str = Field("D", description="Time mode: TimedRotatingFileHandler unit")
    interval: int = Field(1, ge=1)


class LoggingSettings(BaseModel):
    """Arguments for setup_logging()."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file: Optional[str] = None
    json_format: bool = Field(False, alias="json")
    color: bool = True
    rotate: Optional[RotateSettings] = None

    @field_validator("level", mode="before")
    @classmethod
    def upper_level(cls, v: object) -> object:
        return v.upper() if isinstance(v, str) else v


class PixelRectConfig(BaseModel):
    """Top-level configuration file."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    render: RenderSettings = Field(default_factory=RenderSettings)
    output: OutputSettings = Field(default_factory=OutputSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def load_config(path: str | Path | None = None) -> PixelRectConfig:
    """Load and validate configuration from YAML.

    Parameters
    ----------
    path : str | Path | None
        Config file. ``None`` loads the defaults shipped with the package.

    Returns
    -------
    PixelRectConfig
        Validated, frozen configuration. Sections missing from the file
        take their defaults.

    Raises
    ------
    ConfigError
        If the file is not a mapping or fails schema validation.
    FileNotFoundError
        If *path* does not exist.
    """
    path = DEFAULT_CONFIG_PATH if path is None else Path(path)
    logger.debug("Loading configuration from %s", path)

    data = load_yaml(path)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping at top level, got {type(data).__name__}")

    try:
        return PixelRectConfig.model_validate(data)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in exc.errors()
        )
        raise ConfigError(f"Invalid configuration {path}: {problems}") from exc
