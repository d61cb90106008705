"""API routes: JSON for questions, attempts, answers, history and review."""
from dataclasses import asdict
from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.db.session import get_db, get_session_factory
from app.models.question import QuestionLevel
from app.routers.deps import require_user_id
from app.schemas.attempt import (
    AnswerCreateSchema,
    AttemptCreatedSchema,
    AttemptCreateSchema,
    AttemptDetailItemSchema,
    AttemptDetailSchema,
    AttemptFinishSchema,
    AttemptSummarySchema,
)
from app.schemas.question import QuestionOutSchema
from app.schemas.result import ResultSummarySchema
from app.services.answers import insert_answer
from app.services.history import fetch_attempt_detail, fetch_attempt_history
from app.services.ledger import create_attempt, finish_attempt, get_attempt
from app.services.questions import fetch_questions_by_level
from app.services.review import fetch_latest_incorrect_questions, get_strategy
from app.services.scoring import summarize_attempt, summarize_guest

router = APIRouter(prefix="/api", tags=["api"])


@router.get("/questions", response_model=list[QuestionOutSchema])
async def list_questions(
    level: QuestionLevel,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Question bank for one level, ordered by id, with choices."""
    return await fetch_questions_by_level(db, level)


@router.post("/attempts", response_model=AttemptCreatedSchema, status_code=201)
async def start_attempt(
    body: AttemptCreateSchema,
    background_tasks: BackgroundTasks,
    db: Annotated[AsyncSession, Depends(get_db)],
    session_factory: Annotated[async_sessionmaker, Depends(get_session_factory)],
    user_id: Annotated[str, Depends(require_user_id)],
):
    """Start a quiz; old attempts beyond the per-level cap are pruned after the response."""
    attempt_id = await create_attempt(
        db,
        user_id,
        body.level,
        body.total_questions,
        background_tasks=background_tasks,
        session_factory=session_factory,
    )
    return AttemptCreatedSchema(attempt_id=attempt_id)


@router.post("/attempts/{attempt_id}/answers", status_code=204)
async def submit_answer(
    attempt_id: int,
    body: AnswerCreateSchema,
    db: Annotated[AsyncSession, Depends(get_db)],
    user_id: Annotated[str, Depends(require_user_id)],
):
    await insert_answer(db, user_id, attempt_id, body.question_id, body.choice_id, body.is_correct)


@router.post("/attempts/{attempt_id}/finish", response_model=ResultSummarySchema)
async def finish(
    attempt_id: int,
    body: AttemptFinishSchema,
    db: Annotated[AsyncSession, Depends(get_db)],
    user_id: Annotated[str, Depends(require_user_id)],
):
    await finish_attempt(db, user_id, attempt_id, body.correct_count, body.finished_at)
    attempt = await get_attempt(db, user_id, attempt_id)
    return summarize_attempt(attempt)


@router.get("/attempts", response_model=list[AttemptSummarySchema])
async def history(
    db: Annotated[AsyncSession, Depends(get_db)],
    user_id: Annotated[str, Depends(require_user_id)],
):
    """Recent attempts, newest first, at most the retention cap per level."""
    return await fetch_attempt_history(db, user_id)


@router.get("/attempts/{attempt_id}", response_model=AttemptDetailSchema)
async def attempt_detail(
    attempt_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    user_id: Annotated[str, Depends(require_user_id)],
):
    detail = await fetch_attempt_detail(db, user_id, attempt_id)
    return AttemptDetailSchema(
        attempt=AttemptSummarySchema.model_validate(detail.attempt),
        items=[AttemptDetailItemSchema(**asdict(item)) for item in detail.items],
    )


@router.get("/attempts/{attempt_id}/result", response_model=ResultSummarySchema)
async def attempt_result(
    attempt_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    user_id: Annotated[str, Depends(require_user_id)],
):
    attempt = await get_attempt(db, user_id, attempt_id)
    return summarize_attempt(attempt)


@router.get("/results/guest", response_model=ResultSummarySchema)
async def guest_result(score: int, total: int, level: str):
    """Result for a guest quiz; nothing is persisted, the score arrives as query params."""
    return summarize_guest(level, score, total)


@router.get("/review/questions", response_model=list[QuestionOutSchema])
async def review_questions(
    db: Annotated[AsyncSession, Depends(get_db)],
    user_id: Annotated[str, Depends(require_user_id)],
    policy: str | None = None,
):
    """Questions whose most recent answer was wrong, ready for re-quizzing."""
    return await fetch_latest_incorrect_questions(db, user_id, get_strategy(policy))
