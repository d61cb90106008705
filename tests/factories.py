from app.core.security import create_access_token
from app.models.question import Choice, Question


def make_question(level, prompt, labels, correct_index, category="general", explanation=None):
    return Question(
        level=level,
        category=category,
        prompt=prompt,
        explanation=explanation or f"Because of {labels[correct_index]}",
        choices=[Choice(label=label, is_correct=i == correct_index) for i, label in enumerate(labels)],
    )


def choice(question, label):
    return next(c for c in question.choices if c.label == label)


def auth_headers(user_id):
    return {"Authorization": f"Bearer {create_access_token(user_id)}"}
