"""Application configuration from environment."""
from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings loaded from env / .env."""

    app_name: str = "Exam Practice"
    debug: bool = False
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite+aiosqlite:///./exam_practice.db"
    seed_questions: bool = True

    # Identity tokens are issued by the external provider; we only verify them
    jwt_secret: str = "change-me-in-production-use-env"
    jwt_algorithm: str = "HS256"
    jwt_audience: str | None = None

    # Attempt history
    history_per_level: int = 2  # attempts kept per user per level
    allow_refinish: bool = False  # True: finishing twice overwrites the score

    # Answers / review
    verify_answers: bool = False  # re-check is_correct against the question bank
    incorrect_question_policy: str = "latest_per_question"  # or latest_attempt

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()
