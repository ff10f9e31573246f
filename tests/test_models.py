"""Tests for dsasheet.ui.models – view models for the problem list."""

from __future__ import annotations

import pytest

from dsasheet.core.catalog import Difficulty, Problem, SourceLinks
from dsasheet.ui.models import ProblemRowState, TopicRowState, build_topic_rows, short_topic_name


@pytest.fixture()
def sample_problem() -> Problem:
    return Problem(
        id="two-sum",
        title="Two Sum",
        difficulty=Difficulty.EASY,
        links=SourceLinks(leetcode="https://lc/two-sum", youtube="https://yt/two-sum"),
        company_tags=frozenset({"Amazon"}),
    )


class TestProblemRowState:
    def test_action_label(self, sample_problem: Problem):
        assert ProblemRowState(sample_problem, completed=False).action_label == "Mark as Complete"
        assert ProblemRowState(sample_problem, completed=True).action_label == "Completed ✓"

    def test_link_buttons(self, sample_problem: Problem):
        buttons = ProblemRowState(sample_problem, completed=False).link_buttons()
        assert buttons == [
            ("leetcode", "LeetCode", "https://lc/two-sum"),
            ("youtube", "YouTube", "https://yt/two-sum"),
        ]

    def test_no_links(self):
        problem = Problem(id="x", title="X", difficulty=Difficulty.HARD)
        assert ProblemRowState(problem, completed=False).link_buttons() == []


class TestBuildTopicRows:
    def test_marks_completed_rows(self, sample_problem: Problem):
        other = Problem(id="other", title="Other", difficulty=Difficulty.MEDIUM)
        rows = build_topic_rows({"Arrays": [sample_problem, other]}, {"other": True})
        assert len(rows) == 1
        topic = rows[0]
        assert isinstance(topic, TopicRowState)
        assert topic.name == "Arrays"
        assert [r.completed for r in topic.problems] == [False, True]
        assert topic.completed == 1

    def test_keeps_topic_order(self, sample_problem: Problem):
        rows = build_topic_rows({"B": [sample_problem], "A": [sample_problem]}, {})
        assert [r.name for r in rows] == ["B", "A"]

    def test_empty(self):
        assert build_topic_rows({}, {"p1": True}) == []


class TestShortTopicName:
    def test_short_name_unchanged(self):
        assert short_topic_name("Arrays") == "Arrays"

    def test_long_name_truncated(self):
        result = short_topic_name("Step 3: Solve Problems on Arrays", limit=15)
        assert result.endswith("...")
        assert len(result) <= 16
