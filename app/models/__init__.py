from app.models.question import LEVEL_ORDER, Choice, Question, QuestionLevel
from app.models.attempt import Attempt
from app.models.answer import Answer

__all__ = ["LEVEL_ORDER", "QuestionLevel", "Question", "Choice", "Attempt", "Answer"]
