"""Tests for dsasheet.config – environment-driven settings."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from dsasheet.config import AppSettings


class TestAppSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
        monkeypatch.setattr(Path, "home", lambda: tmp_path)
        settings = AppSettings.from_env({})
        assert settings.data_dir == tmp_path / ".dsasheet"
        assert settings.catalog_path is None
        assert settings.log_level == "INFO"
        assert settings.log_level_value == logging.INFO

    def test_overrides(self, tmp_path: Path):
        settings = AppSettings.from_env(
            {
                "DSASHEET_HOME": str(tmp_path / "home"),
                "DSASHEET_CATALOG": str(tmp_path / "sheet.yaml"),
                "DSASHEET_LOG_LEVEL": "debug",
            }
        )
        assert settings.data_dir == tmp_path / "home"
        assert settings.catalog_path == tmp_path / "sheet.yaml"
        assert settings.log_level_value == logging.DEBUG

    def test_reads_process_environment(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
        monkeypatch.setenv("DSASHEET_HOME", str(tmp_path))
        assert AppSettings.from_env().data_dir == tmp_path

    def test_invalid_log_level(self):
        with pytest.raises(ValueError, match="log level"):
            AppSettings.from_env({"DSASHEET_LOG_LEVEL": "chatty"})

    def test_blank_log_level_falls_back(self):
        assert AppSettings.from_env({"DSASHEET_LOG_LEVEL": "  "}).log_level == "INFO"

    def test_frozen(self, tmp_path: Path):
        settings = AppSettings(data_dir=tmp_path)
        with pytest.raises(AttributeError):
            settings.log_level = "DEBUG"  # type: ignore[misc]
