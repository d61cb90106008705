"""Selecting questions the user most recently got wrong, for re-quizzing.

Two selection policies exist and are interchangeable:

- ``latest_per_question`` (default): the latest answer to each question
  across the user's whole history decides; questions whose latest answer
  is incorrect are returned.
- ``latest_attempt``: only the user's newest attempt is considered; within
  it the latest answer per question decides.

Both return questions ordered by id with their choices.
"""
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.errors import PersistenceError, ValidationError
from app.models.answer import Answer
from app.models.attempt import Attempt
from app.models.question import Question
from app.services.questions import fetch_questions_by_ids
from app.services.retention import newest_first


def latest_incorrect_question_ids(answers) -> list[int]:
    """Given answers ordered newest-first, ids of questions whose latest answer is wrong."""
    latest: dict[int, bool] = {}
    for answer in answers:
        if answer.question_id not in latest:
            latest[answer.question_id] = answer.is_correct
    return [qid for qid, ok in latest.items() if not ok]


class IncorrectQuestionStrategy:
    name = ""

    async def select_question_ids(self, db: AsyncSession, user_id: str) -> list[int]:
        raise NotImplementedError


class LatestPerQuestionStrategy(IncorrectQuestionStrategy):
    name = "latest_per_question"

    async def select_question_ids(self, db, user_id):
        result = await db.execute(
            select(Answer.question_id, Answer.is_correct)
            .where(Answer.user_id == user_id)
            .order_by(Answer.answered_at.desc(), Answer.id.desc())
        )
        return latest_incorrect_question_ids(result.all())


class LatestAttemptStrategy(IncorrectQuestionStrategy):
    name = "latest_attempt"

    async def select_question_ids(self, db, user_id):
        result = await db.execute(
            newest_first(select(Attempt.id).where(Attempt.user_id == user_id)).limit(1)
        )
        attempt_id = result.scalar_one_or_none()
        if attempt_id is None:
            return []
        result = await db.execute(
            select(Answer.question_id, Answer.is_correct)
            .where(Answer.attempt_id == attempt_id, Answer.user_id == user_id)
            .order_by(Answer.id.desc())
        )
        return latest_incorrect_question_ids(result.all())


STRATEGIES = {
    LatestPerQuestionStrategy.name: LatestPerQuestionStrategy,
    LatestAttemptStrategy.name: LatestAttemptStrategy,
}


def get_strategy(name: str | None = None) -> IncorrectQuestionStrategy:
    name = name or get_settings().incorrect_question_policy
    try:
        return STRATEGIES[name]()
    except KeyError:
        raise ValidationError(f"Unknown incorrect-question policy: {name!r}") from None


async def fetch_latest_incorrect_questions(
    db: AsyncSession,
    user_id: str,
    strategy: IncorrectQuestionStrategy | None = None,
) -> list[Question]:
    strategy = strategy or get_strategy()
    try:
        question_ids = await strategy.select_question_ids(db, user_id)
    except SQLAlchemyError as exc:
        raise PersistenceError(f"Failed to load answers: {exc}") from exc
    if not question_ids:
        return []
    return await fetch_questions_by_ids(db, question_ids)
