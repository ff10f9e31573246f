"""Progress statistics derived from the catalog and a completion snapshot.

Everything here is a pure function of its inputs and cheap enough to recompute
on every change for catalogs of a few hundred problems.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Mapping, Tuple

from dsasheet.core.catalog import Catalog, Difficulty


@dataclass
class TopicStats:
    completed: int = 0
    total: int = 0

    @property
    def percentage(self) -> float:
        return progress_percentage(self.completed, self.total)


class MotivationBand(str, Enum):
    STARTING = "starting"
    MOMENTUM = "momentum"
    PROGRESSING = "progressing"
    ALMOST = "almost"
    COMPLETE = "complete"


_MESSAGES: Dict[MotivationBand, Tuple[str, str]] = {
    MotivationBand.STARTING: (
        "You're just getting started!",
        "Every problem you solve builds your foundation. Keep going!",
    ),
    MotivationBand.MOMENTUM: (
        "Keep up the good work!",
        "You're developing good momentum. Stay consistent!",
    ),
    MotivationBand.PROGRESSING: (
        "You're making great progress!",
        "You've mastered a significant portion. The hard work is paying off!",
    ),
    MotivationBand.ALMOST: (
        "Almost there!",
        "You're in the final stretch. Just a few more to conquer!",
    ),
    MotivationBand.COMPLETE: (
        "Congratulations! You've completed everything!",
        "You've completed all the problems! Time to celebrate your achievement!",
    ),
}


@dataclass
class ProgressSummary:
    """All statistics the progress screen needs, computed in one pass."""

    total: int
    completed: int
    percentage: float
    per_topic: Dict[str, TopicStats] = field(default_factory=dict)
    per_difficulty: Dict[Difficulty, List[int]] = field(default_factory=dict)

    @property
    def remaining(self) -> int:
        # Orphan ids can push completed above total.
        return max(self.total - self.completed, 0)

    @property
    def band(self) -> MotivationBand:
        return motivation_band(self.percentage)


def total_count(catalog: Catalog) -> int:
    return sum(len(section.problems) for section in catalog)


def completed_count(record: Mapping[str, bool]) -> int:
    """Cardinality of the record; presence means completed."""
    return len(record)


def progress_percentage(completed: int, total: int) -> float:
    if total <= 0:
        return 0.0
    return completed / total * 100.0


def per_topic_stats(catalog: Catalog, record: Mapping[str, bool]) -> Dict[str, TopicStats]:
    """Completed/total per topic name; sections with the same name share a bucket."""
    stats: Dict[str, TopicStats] = {}
    for section in catalog:
        bucket = stats.setdefault(section.name, TopicStats())
        for problem in section.problems:
            bucket.total += 1
            if problem.id in record:
                bucket.completed += 1
    return stats


def per_difficulty_stats(catalog: Catalog, record: Mapping[str, bool]) -> Dict[Difficulty, List[int]]:
    """``[completed, total]`` per difficulty. Every difficulty is present, even at zero."""
    stats: Dict[Difficulty, List[int]] = {d: [0, 0] for d in Difficulty}
    for section in catalog:
        for problem in section.problems:
            pair = stats[problem.difficulty]
            pair[1] += 1
            if problem.id in record:
                pair[0] += 1
    return stats


def motivation_band(percentage: float) -> MotivationBand:
    if percentage < 25:
        return MotivationBand.STARTING
    if percentage < 50:
        return MotivationBand.MOMENTUM
    if percentage < 75:
        return MotivationBand.PROGRESSING
    if percentage < 100:
        return MotivationBand.ALMOST
    return MotivationBand.COMPLETE


def motivation_message(band: MotivationBand) -> Tuple[str, str]:
    """Return ``(title, body)`` for *band*."""
    return _MESSAGES[band]


def summarize(catalog: Catalog, record: Mapping[str, bool]) -> ProgressSummary:
    total = total_count(catalog)
    completed = completed_count(record)
    return ProgressSummary(
        total=total,
        completed=completed,
        percentage=progress_percentage(completed, total),
        per_topic=per_topic_stats(catalog, record),
        per_difficulty=per_difficulty_stats(catalog, record),
    )
