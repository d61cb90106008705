"""Question repository: read-only access to the question bank."""
from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.errors import PersistenceError, ValidationError
from app.models.question import LEVEL_ORDER, Choice, Question


def ensure_level(level: str) -> str:
    """Return level as a plain string; ValidationError for anything outside the enumeration."""
    value = getattr(level, "value", level)
    if value not in LEVEL_ORDER:
        raise ValidationError(f"Unknown level: {value!r}")
    return value


async def fetch_questions_by_level(db: AsyncSession, level: str) -> list[Question]:
    level = ensure_level(level)
    try:
        result = await db.execute(
            select(Question)
            .options(selectinload(Question.choices))
            .where(Question.level == level)
            .order_by(Question.id.asc())
        )
    except SQLAlchemyError as exc:
        raise PersistenceError(f"Failed to load questions: {exc}") from exc
    return list(result.scalars().all())


async def fetch_questions_by_ids(db: AsyncSession, question_ids: Iterable[int]) -> list[Question]:
    """Batch fetch by id, ordered by id; ids that no longer exist are skipped."""
    ids = sorted(set(question_ids))
    if not ids:
        return []
    try:
        result = await db.execute(
            select(Question)
            .options(selectinload(Question.choices))
            .where(Question.id.in_(ids))
            .order_by(Question.id.asc())
        )
    except SQLAlchemyError as exc:
        raise PersistenceError(f"Failed to load questions: {exc}") from exc
    return list(result.scalars().all())


async def fetch_choice(db: AsyncSession, question_id: int, choice_id: int) -> Choice | None:
    try:
        result = await db.execute(
            select(Choice).where(Choice.id == choice_id, Choice.question_id == question_id)
        )
    except SQLAlchemyError as exc:
        raise PersistenceError(f"Failed to load choice: {exc}") from exc
    return result.scalar_one_or_none()
