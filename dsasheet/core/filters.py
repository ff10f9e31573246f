from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

from dsasheet.core.catalog import LINK_FIELDS, Catalog, Difficulty, Problem

ALL = "all"
SOURCE_CHOICES = (ALL, *LINK_FIELDS)
DIFFICULTY_CHOICES = (ALL, "easy", "medium", "hard")


@dataclass(frozen=True)
class ProblemFilter:
    """Company, source and difficulty criteria; a problem must satisfy all three."""

    company: str = ""
    source: str = ALL
    difficulty: str = ALL

    def __post_init__(self) -> None:
        if self.source not in SOURCE_CHOICES:
            raise ValueError(f"source must be one of {SOURCE_CHOICES}, got {self.source!r}")
        if self.difficulty not in DIFFICULTY_CHOICES:
            raise ValueError(
                f"difficulty must be one of {DIFFICULTY_CHOICES}, got {self.difficulty!r}"
            )

    @property
    def is_active(self) -> bool:
        return self.company != "" or self.source != ALL or self.difficulty != ALL

    def matches(self, problem: Problem) -> bool:
        return (
            self._company_matches(problem)
            and self._source_matches(problem)
            and self._difficulty_matches(problem)
        )

    def _company_matches(self, problem: Problem) -> bool:
        if not self.company:
            return True
        needle = self.company.lower()
        return any(needle in tag.lower() for tag in problem.company_tags)

    def _source_matches(self, problem: Problem) -> bool:
        return self.source == ALL or bool(problem.links.get(self.source))

    def _difficulty_matches(self, problem: Problem) -> bool:
        return self.difficulty == ALL or problem.difficulty is Difficulty[self.difficulty.upper()]


def filter_problems(catalog: Catalog, problem_filter: ProblemFilter) -> Dict[str, List[Problem]]:
    """Matching problems per topic name, in catalog order.

    Topics without a match are left out. Sections sharing a name are merged.
    """
    result: Dict[str, List[Problem]] = {}
    for section in catalog:
        matched = [p for p in section.problems if problem_filter.matches(p)]
        if matched:
            result.setdefault(section.name, []).extend(matched)
    return result
