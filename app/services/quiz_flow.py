"""Quiz run state: Loading -> InProgress -> Finished.

Results are keyed by question id, so answering the same question again
replaces the earlier result instead of counting it twice.
"""
import enum
from dataclasses import dataclass, field

from app.core.errors import ValidationError


class QuizState(str, enum.Enum):
    loading = "loading"
    in_progress = "in_progress"
    finished = "finished"


@dataclass
class QuestionResult:
    question_id: int
    choice_id: int
    is_correct: bool


@dataclass
class QuizSession:
    level: str
    state: QuizState = QuizState.loading
    questions: list = field(default_factory=list)
    index: int = 0
    results: dict[int, QuestionResult] = field(default_factory=dict)

    def load(self, questions: list) -> None:
        self.questions = list(questions)
        self.index = 0
        self.results = {}
        self.state = QuizState.in_progress if self.questions else QuizState.finished

    @property
    def total(self) -> int:
        return len(self.questions)

    @property
    def current(self):
        if self.state is not QuizState.in_progress:
            return None
        return self.questions[self.index]

    @property
    def is_answered(self) -> bool:
        current = self.current
        return current is not None and current.id in self.results

    @property
    def is_last(self) -> bool:
        return self.index == self.total - 1

    @property
    def answered_count(self) -> int:
        return len(self.results)

    @property
    def correct_count(self) -> int:
        return sum(1 for r in self.results.values() if r.is_correct)

    def select(self, choice_id: int) -> QuestionResult:
        """Record the answer to the current question (replacing any earlier one)."""
        question = self.current
        if question is None:
            raise ValidationError(f"Cannot answer while quiz is {self.state.value}")
        picked = next((c for c in question.choices if c.id == choice_id), None)
        if picked is None:
            raise ValidationError(f"Choice {choice_id} is not part of question {question.id}")
        result = QuestionResult(question_id=question.id, choice_id=choice_id, is_correct=bool(picked.is_correct))
        self.results[question.id] = result
        return result

    def advance(self) -> None:
        if not self.is_answered:
            raise ValidationError("Answer the current question first")
        if self.is_last:
            self.state = QuizState.finished
        else:
            self.index += 1
