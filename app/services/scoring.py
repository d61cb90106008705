"""Score percentage, grade bands and display labels for result summaries."""
from app.core.errors import ValidationError
from app.schemas.result import ResultSummarySchema
from app.services.questions import ensure_level

# Grade bands by percentage: (min percentage, grade key)
GRADE_BANDS = [
    (90, "excellent"),
    (80, "good"),
    (60, "pass"),
    (0, "needs_review"),
]

# Japanese display labels for grades (internal grade key -> JA)
GRADE_DISPLAY_JA = {
    "excellent": "優秀",
    "good": "良好",
    "pass": "合格",
    "needs_review": "要復習",
}

# Japanese display labels for levels (internal level key -> JA)
LEVEL_DISPLAY_JA = {
    "beginner": "初級",
    "intermediate": "中級",
    "advanced": "上級",
}


def percentage(score: int, total: int) -> int:
    """Rounded percent; 0 when there were no questions."""
    if total <= 0:
        return 0
    return int(score * 100 / total + 0.5)


def grade_label(pct: int) -> str:
    """Return grade key from percentage (0-100)."""
    for low, label in GRADE_BANDS:
        if pct >= low:
            return label
    return "needs_review"  # fallback


def get_level_display(level: str) -> str:
    return LEVEL_DISPLAY_JA.get(level, level)


def summarize(level: str, score: int, total: int, attempt_id: int | None = None) -> ResultSummarySchema:
    pct = percentage(score, total)
    grade = grade_label(pct)
    return ResultSummarySchema(
        level=level,
        level_display=get_level_display(level),
        score=score,
        total=total,
        percentage=pct,
        grade=grade,
        grade_display=GRADE_DISPLAY_JA[grade],
        attempt_id=attempt_id,
    )


def summarize_attempt(attempt) -> ResultSummarySchema:
    """Summary of a persisted attempt; an unfinished attempt counts as 0 correct."""
    return summarize(attempt.level, attempt.correct_count or 0, attempt.total_questions, attempt.id)


def summarize_guest(level: str, score: int, total: int) -> ResultSummarySchema:
    """Summary of a non-persisted quiz whose score came in as navigation parameters."""
    level = ensure_level(level)
    if total <= 0:
        raise ValidationError("total must be positive")
    if score < 0 or score > total:
        raise ValidationError(f"score must be between 0 and {total}")
    return summarize(level, score, total)
