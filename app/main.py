"""Exam Practice - FastAPI app entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.core.config import get_settings
from app.core.errors import QuizError
from app.core.logging import configure_logging
from app.db.base import Base
from app.db.session import engine, AsyncSessionLocal
from app.routers import api
from app.services.seeding import seed_questions

logger = logging.getLogger(__name__)
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    if settings.seed_questions:
        async with AsyncSessionLocal() as db:
            await seed_questions(db)

    yield
    await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    description="Multiple-choice exam practice with bounded attempt history",
    lifespan=lifespan,
)


@app.exception_handler(QuizError)
async def quiz_error_handler(request: Request, exc: QuizError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


app.include_router(api.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
