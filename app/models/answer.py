"""Answer model: one response to one question within one attempt."""
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, String

from app.db.session import Base
from app.models.attempt import utcnow


class Answer(Base):
    __tablename__ = "answers"
    __table_args__ = (
        Index("ix_answers_user_answered", "user_id", "answered_at"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(64), nullable=False)
    attempt_id = Column(Integer, ForeignKey("attempts.id"), nullable=False, index=True)
    # questions/choices are reference data; answers outlive a deleted question
    question_id = Column(Integer, nullable=False)
    choice_id = Column(Integer, nullable=False)
    is_correct = Column(Boolean, nullable=False)  # denormalized for fast scoring
    answered_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
