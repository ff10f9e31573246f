"""Shared fixtures: small in-memory catalogs and a temp-dir completion store."""

from __future__ import annotations

from pathlib import Path

import pytest

from dsasheet.core.catalog import Catalog
from dsasheet.core.completion import CompletionStore
from dsasheet.core.storage import LocalStorage


def raw_problem(problem_id: str, difficulty: int = 0, **extra) -> dict:
    entry = {"id": problem_id, "title": f"Problem {problem_id}", "difficulty": difficulty}
    entry.update(extra)
    return entry


@pytest.fixture()
def scenario_catalog() -> Catalog:
    """Two topics, three problems each; difficulties Easy, Easy, Medium, Medium, Hard, Hard."""
    return Catalog.from_raw(
        [
            {
                "head_step_no": "T1",
                "topics": [raw_problem("p1", 0), raw_problem("p2", 0), raw_problem("p3", 1)],
            },
            {
                "head_step_no": "T2",
                "topics": [raw_problem("p4", 1), raw_problem("p5", 2), raw_problem("p6", 2)],
            },
        ]
    )


@pytest.fixture()
def storage(tmp_path: Path) -> LocalStorage:
    return LocalStorage(tmp_path / "data")


@pytest.fixture()
def store(storage: LocalStorage) -> CompletionStore:
    """CompletionStore backed by a temp directory so tests don't touch ~/.dsasheet."""
    s = CompletionStore(storage)
    s.refresh()
    return s
