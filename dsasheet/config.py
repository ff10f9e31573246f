"""Runtime settings read from the environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional


@dataclass(frozen=True)
class AppSettings:
    """Where data lives and how loudly to log.

    DSASHEET_HOME       storage directory (default ~/.dsasheet)
    DSASHEET_CATALOG    catalog YAML to use instead of the bundled one
    DSASHEET_LOG_LEVEL  logging level name (default INFO)
    """

    data_dir: Path
    catalog_path: Optional[Path] = None
    log_level: str = "INFO"

    def validate(self) -> None:
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"unknown log level: {self.log_level!r}")

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppSettings":
        env = os.environ if environ is None else environ
        home = env.get("DSASHEET_HOME")
        catalog = env.get("DSASHEET_CATALOG")
        settings = cls(
            data_dir=Path(home).expanduser() if home else Path.home() / ".dsasheet",
            catalog_path=Path(catalog).expanduser() if catalog else None,
            log_level=env.get("DSASHEET_LOG_LEVEL", "INFO").strip().upper() or "INFO",
        )
        settings.validate()
        return settings
