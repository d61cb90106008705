"""Pydantic schemas for score summaries."""
from pydantic import BaseModel


class ResultSummarySchema(BaseModel):
    level: str
    level_display: str
    score: int
    total: int
    percentage: int
    grade: str
    grade_display: str
    attempt_id: int | None = None  # None for guest (non-persisted) results
