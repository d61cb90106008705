"""Attempt history and per-attempt detail reconstruction."""
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.errors import PersistenceError
from app.models.answer import Answer
from app.models.attempt import Attempt
from app.services.ledger import get_attempt
from app.services.questions import fetch_questions_by_ids
from app.services.retention import newest_first, pick_latest_attempts_per_level

QUESTION_NOT_FOUND = "Question not found"
CHOICE_NOT_FOUND = "Choice not found"
CORRECT_NOT_FOUND = "Correct answer not found"


@dataclass
class AttemptDetailItem:
    question_id: int
    prompt: str
    explanation: str | None
    selected_choice_label: str
    correct_choice_label: str
    is_correct: bool


@dataclass
class AttemptDetail:
    attempt: Attempt
    items: list[AttemptDetailItem]


async def fetch_attempt_history(db: AsyncSession, user_id: str) -> list[Attempt]:
    """Newest-first attempts, capped per level the same way pruning caps them."""
    try:
        result = await db.execute(newest_first(select(Attempt).where(Attempt.user_id == user_id)))
    except SQLAlchemyError as exc:
        raise PersistenceError(f"Failed to load history: {exc}") from exc
    attempts = result.scalars().all()
    return pick_latest_attempts_per_level(attempts, get_settings().history_per_level)


async def fetch_attempt_detail(db: AsyncSession, user_id: str, attempt_id: int) -> AttemptDetail:
    attempt = await get_attempt(db, user_id, attempt_id)

    try:
        result = await db.execute(
            select(Answer)
            .where(Answer.attempt_id == attempt_id, Answer.user_id == user_id)
            .order_by(Answer.id.asc())
        )
    except SQLAlchemyError as exc:
        raise PersistenceError(f"Failed to load answers: {exc}") from exc
    answers = result.scalars().all()
    if not answers:
        return AttemptDetail(attempt=attempt, items=[])

    questions = await fetch_questions_by_ids(db, (a.question_id for a in answers))
    by_id = {q.id: q for q in questions}

    items = []
    for answer in answers:
        question = by_id.get(answer.question_id)
        choices = question.choices if question is not None else []
        selected = next((c for c in choices if c.id == answer.choice_id), None)
        correct = next((c for c in choices if c.is_correct), None)
        items.append(
            AttemptDetailItem(
                question_id=answer.question_id,
                prompt=question.prompt if question is not None else QUESTION_NOT_FOUND,
                explanation=question.explanation if question is not None else None,
                selected_choice_label=selected.label if selected else CHOICE_NOT_FOUND,
                correct_choice_label=correct.label if correct else CORRECT_NOT_FOUND,
                is_correct=answer.is_correct,
            )
        )
    return AttemptDetail(attempt=attempt, items=items)
