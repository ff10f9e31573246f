"""Tests for dsasheet.core.completion – completion record persistence."""

from __future__ import annotations

import json
import logging

import pytest

from dsasheet.core.completion import (
    SCHEMA_VERSION,
    STORAGE_KEY,
    CompletionStore,
    WriteResult,
    decode_record,
    encode_record,
)
from dsasheet.core.errors import PersistenceReadError, PersistenceWriteError
from dsasheet.core.storage import LocalStorage


def _stored(storage: LocalStorage) -> dict:
    return json.loads(storage.get_item(STORAGE_KEY))


class _FailingStorage(LocalStorage):
    """Storage whose writes always fail."""

    def set_item(self, key: str, value: str) -> None:
        raise PersistenceWriteError("disk full", key=key)

    def remove_item(self, key: str) -> None:
        raise PersistenceWriteError("disk full", key=key)


# ---------------------------------------------------------------------------
# Blob encoding
# ---------------------------------------------------------------------------

class TestRecordEncoding:
    def test_encode_is_versioned(self):
        payload = json.loads(encode_record({"p1": True}))
        assert payload == {"version": SCHEMA_VERSION, "completed": {"p1": True}}

    def test_decode_versioned(self):
        assert decode_record('{"version": 1, "completed": {"p1": true}}') == {"p1": True}

    def test_decode_legacy_bare_mapping(self):
        assert decode_record('{"p1": true, "p2": true}') == {"p1": True, "p2": True}

    def test_decode_drops_non_true_values(self):
        assert decode_record('{"p1": true, "p2": false, "p3": 1, "p4": "yes"}') == {"p1": True}

    def test_decode_invalid_json(self):
        with pytest.raises(PersistenceReadError, match="not valid JSON"):
            decode_record("NOT VALID JSON")

    def test_decode_oversized_integer(self):
        with pytest.raises(PersistenceReadError):
            decode_record("1" * 5000)

    def test_decode_deeply_nested(self):
        with pytest.raises(PersistenceReadError):
            decode_record("[" * 100000)

    def test_decode_not_object(self):
        with pytest.raises(PersistenceReadError, match="not an object"):
            decode_record("[1, 2]")

    def test_decode_unknown_version(self):
        with pytest.raises(PersistenceReadError, match="Unsupported") as exc:
            decode_record('{"version": 99, "completed": {}}')
        assert exc.value.details == {"version": 99}

    def test_decode_completed_not_object(self):
        with pytest.raises(PersistenceReadError):
            decode_record('{"version": 1, "completed": ["p1"]}')


# ---------------------------------------------------------------------------
# load / refresh
# ---------------------------------------------------------------------------

class TestLoad:
    def test_no_entry_is_empty(self, store: CompletionStore):
        assert store.load() == {}
        assert dict(store.snapshot()) == {}

    def test_corrupt_entry_raises(self, storage: LocalStorage):
        storage.set_item(STORAGE_KEY, "NOT VALID JSON")
        with pytest.raises(PersistenceReadError):
            CompletionStore(storage).load()

    def test_refresh_degrades_corrupt_to_empty(self, storage: LocalStorage, caplog: pytest.LogCaptureFixture):
        storage.set_item(STORAGE_KEY, "NOT VALID JSON")
        s = CompletionStore(storage)
        with caplog.at_level(logging.WARNING):
            snapshot = s.refresh()
        assert dict(snapshot) == {}
        assert "Could not load completed problems" in caplog.text

    @pytest.mark.parametrize("blob", ["1" * 5000, "[" * 100000])
    def test_refresh_degrades_undecodable_to_empty(self, storage: LocalStorage, blob: str):
        storage.set_item(STORAGE_KEY, blob)
        s = CompletionStore(storage)
        assert dict(s.refresh()) == {}
        assert s.completed_count == 0

    def test_refresh_reads_legacy_blob(self, storage: LocalStorage):
        storage.set_item(STORAGE_KEY, json.dumps({"p1": True}))
        s = CompletionStore(storage)
        s.refresh()
        assert s.is_completed("p1")

    def test_refresh_replaces_in_memory_state(self, storage: LocalStorage, store: CompletionStore):
        store.toggle("p1")
        # Another writer replaces the stored record while we are in the background.
        storage.set_item(STORAGE_KEY, encode_record({"p2": True}))
        store.refresh()
        assert dict(store.snapshot()) == {"p2": True}


# ---------------------------------------------------------------------------
# toggle
# ---------------------------------------------------------------------------

class TestToggle:
    def test_marks_completed(self, store: CompletionStore):
        result = store.toggle("p1")
        assert isinstance(result, WriteResult)
        assert result.ok
        assert dict(result.completed) == {"p1": True}
        assert store.is_completed("p1")

    def test_second_toggle_deletes_entry(self, store: CompletionStore, storage: LocalStorage):
        store.toggle("p1")
        result = store.toggle("p1")
        assert dict(result.completed) == {}
        assert "p1" not in _stored(storage)["completed"]

    def test_double_toggle_is_identity(self, store: CompletionStore):
        store.toggle("p1")
        before = dict(store.snapshot())
        store.toggle("p2")
        store.toggle("p2")
        assert dict(store.snapshot()) == before

    def test_never_stores_false(self, store: CompletionStore, storage: LocalStorage):
        store.toggle("p1")
        store.toggle("p2")
        store.toggle("p1")
        assert _stored(storage)["completed"] == {"p2": True}

    def test_persists_whole_record(self, store: CompletionStore, storage: LocalStorage):
        store.toggle("p1")
        store.toggle("p3")
        assert _stored(storage) == {"version": SCHEMA_VERSION, "completed": {"p1": True, "p3": True}}

    def test_orphan_id_is_persisted(self, store: CompletionStore, storage: LocalStorage):
        result = store.toggle("p9")
        assert result.ok
        assert _stored(storage)["completed"] == {"p9": True}

    def test_survives_reload(self, store: CompletionStore, storage: LocalStorage):
        store.toggle("p1")
        fresh = CompletionStore(storage)
        fresh.refresh()
        assert fresh.is_completed("p1")

    def test_completed_count(self, store: CompletionStore):
        store.toggle("p1")
        store.toggle("p2")
        assert store.completed_count == 2

    def test_snapshot_is_read_only_copy(self, store: CompletionStore):
        store.toggle("p1")
        snapshot = store.snapshot()
        with pytest.raises(TypeError):
            snapshot["p2"] = True  # type: ignore[index]
        store.toggle("p2")
        assert "p2" not in snapshot


# ---------------------------------------------------------------------------
# clear
# ---------------------------------------------------------------------------

class TestClear:
    def test_clear_then_load_is_empty(self, store: CompletionStore, storage: LocalStorage):
        store.toggle("p1")
        result = store.clear()
        assert result.ok
        assert dict(result.completed) == {}
        assert storage.get_item(STORAGE_KEY) is None
        assert store.load() == {}

    def test_clear_when_nothing_stored(self, store: CompletionStore):
        assert store.clear().ok


# ---------------------------------------------------------------------------
# Write failures: optimistic update, reported error, no rollback
# ---------------------------------------------------------------------------

class TestWriteFailures:
    @pytest.fixture()
    def failing(self, tmp_path) -> CompletionStore:
        return CompletionStore(_FailingStorage(tmp_path))

    def test_toggle_keeps_memory_change(self, failing: CompletionStore):
        result = failing.toggle("p1")
        assert not result.ok
        assert isinstance(result.error, PersistenceWriteError)
        assert dict(result.completed) == {"p1": True}
        assert failing.is_completed("p1")

    def test_toggle_failure_is_logged(self, failing: CompletionStore, caplog: pytest.LogCaptureFixture):
        with caplog.at_level(logging.WARNING):
            failing.toggle("p1")
        assert "Could not save completion of p1" in caplog.text

    def test_clear_keeps_memory_change(self, failing: CompletionStore):
        failing.toggle("p1")
        result = failing.clear()
        assert not result.ok
        assert dict(failing.snapshot()) == {}


# ---------------------------------------------------------------------------
# Listeners
# ---------------------------------------------------------------------------

class TestListeners:
    def test_notified_on_toggle_clear_refresh(self, store: CompletionStore):
        seen = []
        store.subscribe(lambda snap: seen.append(dict(snap)))
        store.toggle("p1")
        store.clear()
        store.refresh()
        assert seen == [{"p1": True}, {}, {}]

    def test_notified_before_write(self, tmp_path):
        failing = CompletionStore(_FailingStorage(tmp_path))
        seen = []
        failing.subscribe(lambda snap: seen.append(dict(snap)))
        failing.toggle("p1")
        assert seen == [{"p1": True}]

    def test_unsubscribe(self, store: CompletionStore):
        seen = []
        unsubscribe = store.subscribe(lambda snap: seen.append(dict(snap)))
        unsubscribe()
        unsubscribe()
        store.toggle("p1")
        assert seen == []
