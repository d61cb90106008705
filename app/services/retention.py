"""Bounded attempt history: keep only the newest attempts per level for each user."""
import logging
from collections.abc import Iterable
from typing import TypeVar

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.config import get_settings
from app.models.answer import Answer
from app.models.attempt import Attempt
from app.models.question import LEVEL_ORDER

logger = logging.getLogger(__name__)

T = TypeVar("T")


def pick_latest_attempts_per_level(attempts: Iterable[T], max_per_level: int) -> list[T]:
    """Greedily keep the first `max_per_level` attempts of each level.

    `attempts` must already be ordered newest-first. Attempts whose level is
    not a recognized level are dropped.
    """
    counts = {level: 0 for level in LEVEL_ORDER}
    kept = []
    for attempt in attempts:
        level = attempt.level
        if level not in counts:
            continue
        if counts[level] >= max_per_level:
            continue
        counts[level] += 1
        kept.append(attempt)
    return kept


def newest_first(query):
    """Order an attempts query newest-first; id breaks created_at ties."""
    return query.order_by(Attempt.created_at.desc(), Attempt.id.desc())


async def prune_attempts(db: AsyncSession, user_id: str, max_per_level: int | None = None) -> list[int]:
    """Delete the user's attempts beyond the per-level cap, answers first.

    Best-effort: every failure is logged and swallowed. Returns the ids that
    were selected for deletion (empty when nothing was over the cap or the
    fetch failed).
    """
    if max_per_level is None:
        max_per_level = get_settings().history_per_level

    try:
        result = await db.execute(
            newest_first(select(Attempt.id, Attempt.level).where(Attempt.user_id == user_id))
        )
        rows = result.all()
    except SQLAlchemyError as exc:
        logger.warning("Failed to fetch attempts for cleanup (user=%s): %s", user_id, exc)
        await db.rollback()
        return []

    valid = [row for row in rows if row.level in LEVEL_ORDER]
    kept_ids = {row.id for row in pick_latest_attempts_per_level(valid, max_per_level)}
    to_delete = [row.id for row in valid if row.id not in kept_ids]
    if not to_delete:
        return []

    # answers first so a failed second step never leaves orphans
    try:
        await db.execute(delete(Answer).where(Answer.attempt_id.in_(to_delete)))
        await db.commit()
    except SQLAlchemyError as exc:
        logger.warning("Failed to delete old answers (user=%s): %s", user_id, exc)
        await db.rollback()

    try:
        await db.execute(
            delete(Attempt).where(Attempt.id.in_(to_delete), Attempt.user_id == user_id)
        )
        await db.commit()
    except SQLAlchemyError as exc:
        logger.warning("Failed to delete old attempts (user=%s): %s", user_id, exc)
        await db.rollback()
    else:
        logger.info("Cleaned up %d old attempts for user %s", len(to_delete), user_id)

    return to_delete


async def prune_attempts_in_new_session(session_factory: async_sessionmaker, user_id: str) -> None:
    """Background entry point: runs pruning in its own session after the response is sent."""
    try:
        async with session_factory() as db:
            await prune_attempts(db, user_id)
    except Exception:
        logger.exception("Attempt cleanup failed for user %s", user_id)
