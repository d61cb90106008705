from types import SimpleNamespace

import pytest

from app.core.errors import ValidationError
from app.services.scoring import (
    get_level_display,
    grade_label,
    percentage,
    summarize_attempt,
    summarize_guest,
)


@pytest.mark.parametrize(
    "score,total,expected",
    [(0, 0, 0), (2, 3, 67), (1, 3, 33), (1, 2, 50), (3, 3, 100)],
)
def test_percentage(score, total, expected):
    assert percentage(score, total) == expected


@pytest.mark.parametrize(
    "pct,grade",
    [(100, "excellent"), (90, "excellent"), (89, "good"), (80, "good"), (60, "pass"), (59, "needs_review"), (0, "needs_review")],
)
def test_grade_bands(pct, grade):
    assert grade_label(pct) == grade


def test_level_display():
    assert get_level_display("beginner") == "初級"
    assert get_level_display("advanced") == "上級"
    assert get_level_display("unknown") == "unknown"


def test_summarize_unfinished_attempt_counts_zero():
    attempt = SimpleNamespace(id=7, level="intermediate", correct_count=None, total_questions=4)
    summary = summarize_attempt(attempt)
    assert summary.score == 0
    assert summary.percentage == 0
    assert summary.grade == "needs_review"
    assert summary.attempt_id == 7


def test_summarize_guest():
    summary = summarize_guest("beginner", 4, 5)
    assert summary.percentage == 80
    assert summary.grade == "good"
    assert summary.grade_display == "良好"
    assert summary.level_display == "初級"
    assert summary.attempt_id is None


@pytest.mark.parametrize(
    "level,score,total",
    [("beginner", 1, 0), ("beginner", 6, 5), ("beginner", -1, 5), ("expert", 1, 5)],
)
def test_summarize_guest_rejects_bad_params(level, score, total):
    with pytest.raises(ValidationError):
        summarize_guest(level, score, total)
