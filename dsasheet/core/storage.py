from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Optional

from dsasheet.core.errors import PersistenceReadError, PersistenceWriteError


_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


class LocalStorage:
    """String key-value storage in a private directory, one file per key.

    Default location: ~/.dsasheet. Only the completion store writes here.
    """

    def __init__(self, directory: Optional[Path] = None) -> None:
        self._directory = Path(directory) if directory is not None else Path.home() / ".dsasheet"

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, key: str) -> Path:
        if not _KEY_RE.match(key):
            raise ValueError(f"invalid storage key: {key!r}")
        return self._directory / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        """Return the stored value, or None when nothing is stored under *key*."""
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceReadError(f"Could not read {path}: {e}", key=key) from e

    def set_item(self, key: str, value: str) -> None:
        path = self.path_for(key)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(value, encoding="utf-8")
            os.replace(tmp_path, path)
        except OSError as e:
            raise PersistenceWriteError(f"Could not write {path}: {e}", key=key) from e

    def remove_item(self, key: str) -> None:
        path = self.path_for(key)
        try:
            path.unlink()
        except FileNotFoundError:
            return
        except OSError as e:
            raise PersistenceWriteError(f"Could not remove {path}: {e}", key=key) from e
