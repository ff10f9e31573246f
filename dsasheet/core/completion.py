from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Optional

from dsasheet.core.errors import PersistenceError, PersistenceReadError, PersistenceWriteError
from dsasheet.core.storage import LocalStorage

logger = logging.getLogger(__name__)

STORAGE_KEY = "completedProblems"
SCHEMA_VERSION = 1

CompletionRecord = Dict[str, bool]
Listener = Callable[[Mapping[str, bool]], None]


@dataclass(frozen=True)
class WriteResult:
    """Outcome of a mutating store call.

    ``completed`` is the in-memory snapshot after the change. ``error`` is set
    when persisting failed; the in-memory change is kept regardless.
    """

    completed: Mapping[str, bool]
    error: Optional[PersistenceWriteError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def encode_record(record: Mapping[str, bool]) -> str:
    return json.dumps({"version": SCHEMA_VERSION, "completed": dict(record)}, sort_keys=True)


def decode_record(text: str) -> CompletionRecord:
    """Parse a stored blob. Accepts the current versioned form and the bare legacy mapping."""
    try:
        payload = json.loads(text)
    except (ValueError, RecursionError) as e:
        # ValueError covers JSONDecodeError and oversized integer literals.
        raise PersistenceReadError(f"Stored completions are not valid JSON: {e}", key=STORAGE_KEY) from e
    if not isinstance(payload, dict):
        raise PersistenceReadError("Stored completions are not an object", key=STORAGE_KEY)

    if "version" in payload:
        version = payload.get("version")
        if version != SCHEMA_VERSION:
            raise PersistenceReadError(
                f"Unsupported completions version {version!r}",
                key=STORAGE_KEY,
                details={"version": version},
            )
        entries = payload.get("completed", {})
        if not isinstance(entries, dict):
            raise PersistenceReadError("'completed' is not an object", key=STORAGE_KEY)
    else:
        entries = payload

    # Presence means completed, so anything that is not literally true is dropped.
    return {str(key): True for key, value in entries.items() if value is True}


class CompletionStore:
    """Owns the set of completed problem ids and keeps it in local storage.

    Mutations update memory first and then rewrite the whole record. A failed
    write is logged and reported through ``WriteResult.error``; it is never
    rolled back or retried.
    """

    def __init__(self, storage: LocalStorage) -> None:
        self._storage = storage
        self._completed: CompletionRecord = {}
        self._listeners: List[Listener] = []

    def load(self) -> CompletionRecord:
        """Read the persisted record. Raises PersistenceReadError on corrupt data."""
        text = self._storage.get_item(STORAGE_KEY)
        if text is None:
            return {}
        return decode_record(text)

    def refresh(self) -> Mapping[str, bool]:
        """Replace the in-memory record with what is stored (last write wins)."""
        try:
            record = self.load()
        except PersistenceError as e:
            logger.warning("Could not load completed problems, starting empty: %s", e)
            record = {}
        self._completed = record
        logger.debug("Loaded %d completed problems", len(record))
        self._notify()
        return self.snapshot()

    def snapshot(self) -> Mapping[str, bool]:
        return MappingProxyType(dict(self._completed))

    def is_completed(self, problem_id: str) -> bool:
        return problem_id in self._completed

    @property
    def completed_count(self) -> int:
        return len(self._completed)

    def toggle(self, problem_id: str) -> WriteResult:
        if problem_id in self._completed:
            del self._completed[problem_id]
        else:
            self._completed[problem_id] = True
        self._notify()

        error: Optional[PersistenceWriteError] = None
        try:
            self._storage.set_item(STORAGE_KEY, encode_record(self._completed))
        except PersistenceWriteError as e:
            logger.warning("Could not save completion of %s: %s", problem_id, e)
            error = e
        return WriteResult(completed=self.snapshot(), error=error)

    def clear(self) -> WriteResult:
        """Forget all completions, in memory and on disk."""
        self._completed = {}
        self._notify()

        error: Optional[PersistenceWriteError] = None
        try:
            self._storage.remove_item(STORAGE_KEY)
        except PersistenceWriteError as e:
            logger.warning("Could not clear completed problems: %s", e)
            error = e
        return WriteResult(completed=self.snapshot(), error=error)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener* for snapshots after each change. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self) -> None:
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)
