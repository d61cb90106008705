"""Pydantic schemas for questions and choices."""
from pydantic import BaseModel


class ChoiceSchema(BaseModel):
    id: int
    label: str
    is_correct: bool

    class Config:
        from_attributes = True


class QuestionOutSchema(BaseModel):
    id: int
    level: str
    category: str
    prompt: str
    explanation: str | None = None
    choices: list[ChoiceSchema]

    class Config:
        from_attributes = True
