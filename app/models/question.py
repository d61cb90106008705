"""Question bank: reference data, never mutated by the quiz flow."""
import enum

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from app.db.session import Base


class QuestionLevel(str, enum.Enum):
    beginner = "beginner"
    intermediate = "intermediate"
    advanced = "advanced"


# Display order; also the set of levels that attempt history recognizes
LEVEL_ORDER = [QuestionLevel.beginner.value, QuestionLevel.intermediate.value, QuestionLevel.advanced.value]


class Question(Base):
    __tablename__ = "questions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    level = Column(String(32), nullable=False, index=True)  # beginner | intermediate | advanced
    category = Column(String(64), nullable=False, default="general")
    prompt = Column(Text, nullable=False)
    explanation = Column(Text, nullable=True)

    choices = relationship(
        "Choice",
        back_populates="question",
        order_by="Choice.id",
        cascade="all, delete-orphan",
    )


class Choice(Base):
    __tablename__ = "choices"

    id = Column(Integer, primary_key=True, autoincrement=True)
    question_id = Column(Integer, ForeignKey("questions.id"), nullable=False, index=True)
    label = Column(Text, nullable=False)
    # exactly one choice per question should be correct; not enforced here
    is_correct = Column(Boolean, nullable=False, default=False)

    question = relationship("Question", back_populates="choices")
