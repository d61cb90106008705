from app.services.answers import insert_answer
from app.services.history import fetch_attempt_detail, fetch_attempt_history
from app.services.ledger import create_attempt, finish_attempt
from app.services.questions import fetch_questions_by_level
from app.services.quiz_flow import QuizSession, QuizState
from app.services.review import fetch_latest_incorrect_questions
from app.services.seeding import seed_questions

__all__ = [
    "create_attempt",
    "fetch_attempt_detail",
    "fetch_attempt_history",
    "fetch_latest_incorrect_questions",
    "fetch_questions_by_level",
    "finish_attempt",
    "insert_answer",
    "QuizSession",
    "QuizState",
    "seed_questions",
]
