"""Attempt model: one quiz session for one user at one level."""
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Index, Integer, String

from app.db.session import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Attempt(Base):
    __tablename__ = "attempts"
    __table_args__ = (
        Index("ix_attempts_user_created", "user_id", "created_at"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(64), nullable=False, index=True)  # subject from the identity provider
    level = Column(String(32), nullable=False)
    total_questions = Column(Integer, nullable=False)
    correct_count = Column(Integer, nullable=True)  # null while in progress
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    finished_at = Column(DateTime(timezone=True), nullable=True)

    @property
    def is_finished(self) -> bool:
        return self.finished_at is not None
