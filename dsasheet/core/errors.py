"""Exceptions raised by the catalog and persistence layers.

Everything derives from ``DsaSheetError`` so the UI can catch the whole family
in one place when it only needs to log.
"""

from __future__ import annotations

from typing import Any, Optional


class DsaSheetError(Exception):
    """Base exception for dsasheet errors."""

    def __init__(self, message: str = "", details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.details: dict[str, Any] = details or {}


class PersistenceError(DsaSheetError):
    """Local storage could not be read or written."""

    def __init__(
        self,
        message: str = "Persistence failure",
        key: str = "",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details)
        self.key = key


class PersistenceReadError(PersistenceError):
    """Stored data is corrupt or inaccessible.

    Callers recover by treating the record as empty.
    """


class PersistenceWriteError(PersistenceError):
    """A write or delete did not reach storage.

    In-memory state has already changed when this is raised, so displayed and
    persisted state differ until the next successful write.
    """


class CatalogMalformedError(DsaSheetError):
    """The bundled catalog violates its structural assumptions."""

    def __init__(
        self,
        message: str = "Malformed catalog",
        section: str = "",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details)
        self.section = section
