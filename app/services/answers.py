"""Answer recorder.

The default recorder trusts the caller's is_correct: the caller already
holds the question data it rendered. The verifying recorder re-checks the
chosen choice against the question bank instead.
"""
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.errors import PersistenceError, ValidationError
from app.models.answer import Answer
from app.services.ledger import get_attempt
from app.services.questions import fetch_choice

logger = logging.getLogger(__name__)


class AnswerRecorder:
    """Appends one answer row per call to an attempt the user owns.

    No duplicate suppression at storage level.
    """

    async def resolve_correctness(
        self, db: AsyncSession, question_id: int, choice_id: int, is_correct: bool
    ) -> bool:
        raise NotImplementedError

    async def insert_answer(
        self,
        db: AsyncSession,
        user_id: str,
        attempt_id: int,
        question_id: int,
        choice_id: int,
        is_correct: bool,
    ) -> Answer:
        # NotFoundError for a missing attempt or one owned by someone else
        await get_attempt(db, user_id, attempt_id)
        is_correct = await self.resolve_correctness(db, question_id, choice_id, is_correct)
        answer = Answer(
            user_id=user_id,
            attempt_id=attempt_id,
            question_id=question_id,
            choice_id=choice_id,
            is_correct=is_correct,
        )
        db.add(answer)
        try:
            await db.commit()
            await db.refresh(answer)
        except SQLAlchemyError as exc:
            await db.rollback()
            raise PersistenceError(f"Failed to save answer: {exc}") from exc
        return answer


class TrustingAnswerRecorder(AnswerRecorder):
    async def resolve_correctness(self, db, question_id, choice_id, is_correct):
        return bool(is_correct)


class VerifyingAnswerRecorder(AnswerRecorder):
    async def resolve_correctness(self, db, question_id, choice_id, is_correct):
        choice = await fetch_choice(db, question_id, choice_id)
        if choice is None:
            raise ValidationError(f"Choice {choice_id} does not belong to question {question_id}")
        if bool(choice.is_correct) != bool(is_correct):
            logger.warning(
                "Client reported is_correct=%s for question %s choice %s; storing %s",
                is_correct, question_id, choice_id, choice.is_correct,
            )
        return bool(choice.is_correct)


def get_answer_recorder() -> AnswerRecorder:
    if get_settings().verify_answers:
        return VerifyingAnswerRecorder()
    return TrustingAnswerRecorder()


async def insert_answer(
    db: AsyncSession,
    user_id: str,
    attempt_id: int,
    question_id: int,
    choice_id: int,
    is_correct: bool,
    recorder: AnswerRecorder | None = None,
) -> Answer:
    recorder = recorder or get_answer_recorder()
    return await recorder.insert_answer(db, user_id, attempt_id, question_id, choice_id, is_correct)
