from app.schemas.attempt import (
    AnswerCreateSchema,
    AttemptCreatedSchema,
    AttemptCreateSchema,
    AttemptDetailItemSchema,
    AttemptDetailSchema,
    AttemptFinishSchema,
    AttemptSummarySchema,
)
from app.schemas.question import ChoiceSchema, QuestionOutSchema
from app.schemas.result import ResultSummarySchema

__all__ = [
    "AnswerCreateSchema",
    "AttemptCreatedSchema",
    "AttemptCreateSchema",
    "AttemptDetailItemSchema",
    "AttemptDetailSchema",
    "AttemptFinishSchema",
    "AttemptSummarySchema",
    "ChoiceSchema",
    "QuestionOutSchema",
    "ResultSummarySchema",
]
