"""Pydantic schemas for attempts, answers and history."""
from datetime import datetime

from pydantic import BaseModel, Field

from app.models.question import QuestionLevel


class AttemptCreateSchema(BaseModel):
    level: QuestionLevel
    total_questions: int = Field(ge=0)


class AttemptCreatedSchema(BaseModel):
    attempt_id: int


class AttemptFinishSchema(BaseModel):
    correct_count: int = Field(ge=0)
    finished_at: datetime | None = None


class AnswerCreateSchema(BaseModel):
    question_id: int
    choice_id: int
    is_correct: bool


class AttemptSummarySchema(BaseModel):
    id: int
    level: str
    total_questions: int
    correct_count: int | None = None
    created_at: datetime
    finished_at: datetime | None = None

    class Config:
        from_attributes = True


class AttemptDetailItemSchema(BaseModel):
    question_id: int
    prompt: str
    explanation: str | None = None
    selected_choice_label: str
    correct_choice_label: str
    is_correct: bool


class AttemptDetailSchema(BaseModel):
    attempt: AttemptSummarySchema
    items: list[AttemptDetailItemSchema]
