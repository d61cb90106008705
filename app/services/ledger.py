"""Attempt ledger: create and finalize attempts.

Creating an attempt triggers retention pruning for the user. Pruning is
housekeeping: it never fails the creation. Through the HTTP layer it is
handed to FastAPI's BackgroundTasks so the caller gets the id first;
called directly it runs right after the insert is committed.
"""
import logging
from datetime import datetime, timezone

from fastapi import BackgroundTasks
from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.config import get_settings
from app.core.errors import AlreadyFinishedError, NotFoundError, PersistenceError, ValidationError
from app.models.attempt import Attempt
from app.services.questions import ensure_level
from app.services.retention import prune_attempts, prune_attempts_in_new_session

logger = logging.getLogger(__name__)


async def create_attempt(
    db: AsyncSession,
    user_id: str,
    level: str,
    total_questions: int,
    background_tasks: BackgroundTasks | None = None,
    session_factory: async_sessionmaker | None = None,
) -> int:
    """Insert an in-progress attempt and return its id."""
    level = ensure_level(level)
    if total_questions < 0:
        raise ValidationError("total_questions must be >= 0")

    attempt = Attempt(user_id=user_id, level=level, total_questions=total_questions)
    db.add(attempt)
    try:
        await db.commit()
        await db.refresh(attempt)
    except SQLAlchemyError as exc:
        await db.rollback()
        raise PersistenceError(f"Failed to create attempt: {exc}") from exc

    attempt_id = attempt.id
    logger.debug("Created attempt %s (user=%s level=%s)", attempt_id, user_id, level)

    if background_tasks is not None and session_factory is not None:
        background_tasks.add_task(prune_attempts_in_new_session, session_factory, user_id)
    else:
        try:
            await prune_attempts(db, user_id)
        except Exception:
            logger.exception("Attempt cleanup failed for user %s", user_id)

    return attempt_id


async def get_attempt(db: AsyncSession, user_id: str, attempt_id: int) -> Attempt:
    """Load an attempt owned by user_id; NotFoundError otherwise."""
    try:
        result = await db.execute(
            select(Attempt).where(Attempt.id == attempt_id, Attempt.user_id == user_id)
        )
    except SQLAlchemyError as exc:
        raise PersistenceError(f"Failed to load attempt: {exc}") from exc
    attempt = result.scalar_one_or_none()
    if attempt is None:
        raise NotFoundError("Attempt not found")
    return attempt


async def finish_attempt(
    db: AsyncSession,
    user_id: str,
    attempt_id: int,
    correct_count: int,
    finished_at: datetime | None = None,
) -> None:
    """Record the final score, scoped to (attempt_id, user_id)."""
    allow_refinish = get_settings().allow_refinish
    attempt = await get_attempt(db, user_id, attempt_id)

    if attempt.is_finished and not allow_refinish:
        raise AlreadyFinishedError("Attempt already finished")
    if correct_count < 0 or correct_count > attempt.total_questions:
        raise ValidationError(
            f"correct_count must be between 0 and {attempt.total_questions}"
        )

    if finished_at is None:
        finished_at = datetime.now(timezone.utc)

    stmt = (
        update(Attempt)
        .where(Attempt.id == attempt_id, Attempt.user_id == user_id)
        .values(correct_count=correct_count, finished_at=finished_at)
    )
    if not allow_refinish:
        stmt = stmt.where(Attempt.finished_at.is_(None))

    try:
        result = await db.execute(stmt)
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        raise PersistenceError(f"Failed to save result: {exc}") from exc

    if result.rowcount == 0:
        # finished (or deleted) between the read and the update
        if allow_refinish:
            raise NotFoundError("Attempt not found")
        raise AlreadyFinishedError("Attempt already finished")

