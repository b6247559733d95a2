"""Tests for configuration loading and schema validation.

Run: pytest tests/test_config.py -v
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from pixelrect.configs.loader import PixelRectConfig, load_config
from pixelrect.errors import ConfigError


def write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "pixelrect.yaml"
    path.write_text(text, encoding="utf-8")
    return path


class TestDefaults:
    def test_shipped_defaults_load(self) -> None:
        cfg = load_config()
        assert isinstance(cfg, PixelRectConfig)
        assert cfg.render.auto_scale_target == 512
        assert cfg.render.validate_input is True
        assert cfg.output.atomic_write is True
        assert cfg.logging.level == "INFO"
        assert cfg.logging.file is None

    def test_shipped_defaults_match_model_defaults(self) -> None:
        assert load_config() == PixelRectConfig()

    def test_empty_file_uses_defaults(self, tmp_path: Path) -> None:
        assert load_config(write(tmp_path, "")) == PixelRectConfig()


class TestOverrides:
    def test_partial_file(self, tmp_path: Path) -> None:
        cfg = load_config(write(tmp_path, "render:\n  validate: false\n"))
        assert cfg.render.validate_input is False
        assert cfg.render.auto_scale_target == 512

    def test_logging_section(self, tmp_path: Path) -> None:
        cfg = load_config(write(
            tmp_path, "logging:\n  level: debug\n  json: true\n  file: out/run.log\n"
        ))
        assert cfg.logging.level == "DEBUG"
        assert cfg.logging.json_format is True
        assert cfg.logging.file == "out/run.log"

    def test_log_rotation(self, tmp_path: Path) -> None:
        cfg = load_config(write(
            tmp_path,
            "logging:\n  file: run.log\n  rotate:\n    mode: time\n    when: H\n"
            "    backup_count: 24\n",
        ))
        assert cfg.logging.rotate is not None
        assert cfg.logging.rotate.mode == "time"
        assert cfg.logging.rotate.when == "H"
        assert cfg.logging.rotate.backup_count == 24
        assert cfg.logging.rotate.interval == 1

    def test_rotation_off_by_default(self) -> None:
        assert load_config().logging.rotate is None

    def test_frozen(self) -> None:
        cfg = load_config()
        with pytest.raises(ValidationError):
            cfg.render.auto_scale_target = 1


class TestRejections:
    def test_unknown_key(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="render.auto_scale"):
            load_config(write(tmp_path, "render:\n  auto_scale: 10\n"))

    def test_out_of_range(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="auto_scale_target"):
            load_config(write(tmp_path, "render:\n  auto_scale_target: 0\n"))

    def test_bad_level(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="logging.level"):
            load_config(write(tmp_path, "logging:\n  level: LOUD\n"))

    def test_bad_rotation_mode(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="logging.rotate.mode"):
            load_config(write(tmp_path, "logging:\n  rotate:\n    mode: weekly\n"))

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="mapping"):
            load_config(write(tmp_path, "- a\n- b\n"))

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "absent.yaml")
