from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path
from typing import Any, Dict, FrozenSet, Iterator, List, Optional, Tuple

import yaml

from dsasheet.core.errors import CatalogMalformedError

logger = logging.getLogger(__name__)

LEETCODE = "leetcode"
GFG = "gfg"
CODING_NINJAS = "codingninjas"
YOUTUBE = "youtube"

# Display order, and the raw field each kind is read from.
LINK_FIELDS: Dict[str, str] = {
    LEETCODE: "lc_link",
    GFG: "gfg_link",
    CODING_NINJAS: "cs_link",
    YOUTUBE: "yt_link",
}

LINK_LABELS: Dict[str, str] = {
    LEETCODE: "LeetCode",
    GFG: "GFG",
    CODING_NINJAS: "Coding Ninjas",
    YOUTUBE: "YouTube",
}


class Difficulty(IntEnum):
    EASY = 0
    MEDIUM = 1
    HARD = 2

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def parse(cls, value: Any) -> "Difficulty":
        """Accept the raw integer code, an enum member or a label like 'medium'."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise ValueError(f"unknown difficulty: {value!r}") from None
        if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
            raise ValueError(f"unknown difficulty: {value!r}")
        return cls(int(value))


@dataclass(frozen=True)
class SourceLinks:
    leetcode: Optional[str] = None
    gfg: Optional[str] = None
    coding_ninjas: Optional[str] = None
    youtube: Optional[str] = None

    def get(self, kind: str) -> Optional[str]:
        if kind == CODING_NINJAS:
            return self.coding_ninjas
        if kind in (LEETCODE, GFG, YOUTUBE):
            return getattr(self, kind)
        raise ValueError(f"unknown link kind: {kind!r}")

    def available(self) -> List[str]:
        return [kind for kind in LINK_FIELDS if self.get(kind)]


@dataclass(frozen=True)
class Problem:
    id: str
    title: str
    difficulty: Difficulty
    links: SourceLinks = field(default_factory=SourceLinks)
    company_tags: FrozenSet[str] = frozenset()


@dataclass(frozen=True)
class TopicSection:
    name: str
    problems: Tuple[Problem, ...]


class Catalog:
    """Ordered, read-only collection of topic sections."""

    def __init__(self, sections: List[TopicSection]) -> None:
        self._sections: Tuple[TopicSection, ...] = tuple(sections)
        self._by_id: Dict[str, Problem] = {}
        for section in self._sections:
            for problem in section.problems:
                if problem.id in self._by_id:
                    raise CatalogMalformedError(
                        f"duplicate problem id {problem.id!r}", section=section.name
                    )
                self._by_id[problem.id] = problem

        names = [s.name for s in self._sections]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            # Stats and filter results for these topics are merged.
            logger.warning("Catalog has repeated topic names: %s", ", ".join(duplicates))

    @property
    def sections(self) -> Tuple[TopicSection, ...]:
        return self._sections

    def __iter__(self) -> Iterator[TopicSection]:
        return iter(self._sections)

    def __len__(self) -> int:
        return len(self._sections)

    def __contains__(self, problem_id: object) -> bool:
        return problem_id in self._by_id

    def problems(self) -> List[Problem]:
        return [p for s in self._sections for p in s.problems]

    def get(self, problem_id: str) -> Problem:
        return self._by_id[problem_id]

    def topic_names(self) -> List[str]:
        return list(dict.fromkeys(s.name for s in self._sections))

    @classmethod
    def from_raw(cls, raw: Any) -> "Catalog":
        """Build a catalog from the bundled nested structure.

        ``raw`` is a list of sections or a mapping whose values are sections,
        optionally wrapped in a top-level ``sheetData`` key.
        """
        if isinstance(raw, dict) and "sheetData" in raw:
            raw = raw["sheetData"]
        if isinstance(raw, dict):
            raw_sections = list(raw.values())
        elif isinstance(raw, list):
            raw_sections = raw
        else:
            raise CatalogMalformedError("expected a list or mapping of sections")
        return cls([_parse_section(entry, index) for index, entry in enumerate(raw_sections)])


def _parse_section(raw: Any, index: int) -> TopicSection:
    if not isinstance(raw, dict):
        raise CatalogMalformedError(f"section #{index}: expected a mapping")
    name = raw.get("head_step_no")
    if not name or not isinstance(name, str):
        raise CatalogMalformedError(f"section #{index}: missing or invalid 'head_step_no'")
    name = name.strip()
    topics = raw.get("topics")
    if not isinstance(topics, list):
        raise CatalogMalformedError(f"{name}: missing 'topics' list", section=name)
    return TopicSection(name=name, problems=tuple(_parse_problem(t, name) for t in topics))


def _parse_problem(raw: Any, section: str) -> Problem:
    if not isinstance(raw, dict):
        raise CatalogMalformedError(f"{section}: problem entry is not a mapping", section=section)
    problem_id = raw.get("id")
    title = raw.get("title")
    if problem_id is None or str(problem_id).strip() == "":
        raise CatalogMalformedError(f"{section}: problem without 'id'", section=section)
    problem_id = str(problem_id).strip()
    if not title or not isinstance(title, str):
        raise CatalogMalformedError(
            f"{section}: problem {problem_id!r} missing 'title'", section=section
        )
    try:
        difficulty = Difficulty.parse(raw.get("difficulty"))
    except (TypeError, ValueError):
        raise CatalogMalformedError(
            f"{section}: problem {problem_id!r} has invalid difficulty {raw.get('difficulty')!r}",
            section=section,
        ) from None

    def _link(kind: str) -> Optional[str]:
        value = raw.get(LINK_FIELDS[kind])
        if not value or not isinstance(value, str):
            return None
        return value.strip() or None

    links = SourceLinks(
        leetcode=_link(LEETCODE),
        gfg=_link(GFG),
        coding_ninjas=_link(CODING_NINJAS),
        youtube=_link(YOUTUBE),
    )
    return Problem(
        id=problem_id,
        title=title.strip(),
        difficulty=difficulty,
        links=links,
        company_tags=parse_company_tags(raw.get("company_tags")),
    )


def parse_company_tags(value: Any) -> FrozenSet[str]:
    """Decode ``company_tags`` (a JSON array string). Anything unusable is an empty set."""
    if value is None or value == "":
        return frozenset()
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except (ValueError, RecursionError) as e:
            logger.debug("Ignoring malformed company_tags %r: %s", value, e)
            return frozenset()
    if not isinstance(value, list):
        logger.debug("Ignoring non-list company_tags %r", value)
        return frozenset()
    return frozenset(str(tag).strip() for tag in value if str(tag).strip())


def default_catalog_path() -> Path:
    return Path(__file__).resolve().parent.parent / "data" / "catalog.yaml"


def load_catalog(path: Optional[Path] = None) -> Catalog:
    catalog_path = Path(path) if path is not None else default_catalog_path()
    if not catalog_path.exists():
        raise FileNotFoundError(f"Catalog file not found: {catalog_path}")
    try:
        raw = yaml.safe_load(catalog_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise CatalogMalformedError(f"{catalog_path.name}: invalid YAML: {e}") from e
    if not raw:
        raise CatalogMalformedError(f"{catalog_path.name}: catalog is empty")
    catalog = Catalog.from_raw(raw)
    logger.info(
        "Loaded catalog %s: %d sections, %d problems",
        catalog_path.name,
        len(catalog),
        len(catalog.problems()),
    )
    return catalog
