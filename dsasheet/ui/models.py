"""Data models used by the UI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Mapping

from dsasheet.core.catalog import LINK_LABELS, Problem


@dataclass
class ProblemRowState:
    """UI state for one problem row: the problem and whether it is completed."""

    problem: Problem
    completed: bool

    @property
    def action_label(self) -> str:
        return "Completed ✓" if self.completed else "Mark as Complete"

    def link_buttons(self) -> List[tuple[str, str, str]]:
        """``(kind, label, url)`` for each link the problem has, in display order."""
        return [
            (kind, LINK_LABELS[kind], self.problem.links.get(kind) or "")
            for kind in self.problem.links.available()
        ]


@dataclass
class TopicRowState:
    """UI state for a topic header and its visible problems."""

    name: str
    problems: List[ProblemRowState]

    @property
    def completed(self) -> int:
        return sum(1 for row in self.problems if row.completed)


def build_topic_rows(
    filtered: Dict[str, List[Problem]],
    completed: Mapping[str, bool],
) -> List[TopicRowState]:
    return [
        TopicRowState(
            name=name,
            problems=[ProblemRowState(problem=p, completed=p.id in completed) for p in problems],
        )
        for name, problems in filtered.items()
    ]


def short_topic_name(name: str, limit: int = 15) -> str:
    """Abbreviate long topic names for narrow chart labels."""
    if len(name) <= limit:
        return name
    return name[: max(1, limit - 2)].rstrip() + "..."
