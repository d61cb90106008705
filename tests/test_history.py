import pytest
from sqlalchemy import delete

from app.core.errors import NotFoundError
from app.models.attempt import Attempt
from app.models.question import Choice, Question
from app.services.answers import insert_answer
from app.services.history import (
    CHOICE_NOT_FOUND,
    CORRECT_NOT_FOUND,
    QUESTION_NOT_FOUND,
    fetch_attempt_detail,
    fetch_attempt_history,
)
from app.services.ledger import create_attempt, finish_attempt
from tests.factories import choice


async def test_history_is_newest_first(db, settings):
    b = await create_attempt(db, "u1", "beginner", 3)
    a = await create_attempt(db, "u1", "advanced", 3)
    i = await create_attempt(db, "u1", "intermediate", 3)

    history = await fetch_attempt_history(db, "u1")
    assert [h.id for h in history] == [i, a, b]


async def test_history_caps_attempts_that_predate_pruning(db, settings):
    # rows inserted directly, as if written before pruning existed
    for _ in range(4):
        db.add(Attempt(user_id="u1", level="advanced", total_questions=2))
        await db.commit()
    db.add(Attempt(user_id="u1", level="legacy", total_questions=2))
    await db.commit()

    history = await fetch_attempt_history(db, "u1")
    assert [h.level for h in history] == ["advanced", "advanced"]
    assert history[0].id > history[1].id


async def test_history_only_shows_own_attempts(db, settings):
    await create_attempt(db, "u2", "beginner", 3)
    assert await fetch_attempt_history(db, "u1") == []


async def test_detail_reconstructs_answers_in_insertion_order(db, settings, bank):
    attempt_id = await create_attempt(db, "u1", "beginner", 3)
    await insert_answer(db, "u1", attempt_id, bank.q1.id, choice(bank.q1, "a1").id, True)
    await insert_answer(db, "u1", attempt_id, bank.q2.id, choice(bank.q2, "c2").id, False)
    await insert_answer(db, "u1", attempt_id, bank.q3.id, choice(bank.q3, "c3").id, True)
    await finish_attempt(db, "u1", attempt_id, 2)

    detail = await fetch_attempt_detail(db, "u1", attempt_id)

    assert detail.attempt.id == attempt_id
    assert detail.attempt.correct_count == 2
    assert [item.question_id for item in detail.items] == [bank.q1.id, bank.q2.id, bank.q3.id]
    assert [item.is_correct for item in detail.items] == [True, False, True]
    first, second, _ = detail.items
    assert first.prompt == "Q1 prompt"
    assert first.selected_choice_label == "a1"
    assert first.correct_choice_label == "a1"
    assert second.selected_choice_label == "c2"
    assert second.correct_choice_label == "b2"
    assert second.explanation == "Because of b2"


async def test_detail_order_follows_answers_not_question_ids(db, settings, bank):
    attempt_id = await create_attempt(db, "u1", "beginner", 2)
    await insert_answer(db, "u1", attempt_id, bank.q3.id, choice(bank.q3, "a3").id, False)
    await insert_answer(db, "u1", attempt_id, bank.q1.id, choice(bank.q1, "a1").id, True)

    detail = await fetch_attempt_detail(db, "u1", attempt_id)
    assert [item.question_id for item in detail.items] == [bank.q3.id, bank.q1.id]


async def test_detail_without_answers(db, settings):
    attempt_id = await create_attempt(db, "u1", "beginner", 3)
    detail = await fetch_attempt_detail(db, "u1", attempt_id)
    assert detail.items == []
    assert detail.attempt.finished_at is None


async def test_detail_missing_attempt(db, settings):
    with pytest.raises(NotFoundError):
        await fetch_attempt_detail(db, "u1", 12345)


async def test_detail_of_someone_elses_attempt(db, settings):
    attempt_id = await create_attempt(db, "u2", "beginner", 3)
    with pytest.raises(NotFoundError):
        await fetch_attempt_detail(db, "u1", attempt_id)


async def test_detail_placeholders_for_missing_reference_data(db, settings, bank):
    orphan_question = Question(
        level="beginner", category="general", prompt="No correct choice",
        choices=[Choice(label="x", is_correct=False)],
    )
    db.add(orphan_question)
    await db.commit()
    await db.refresh(orphan_question, attribute_names=["choices"])

    attempt_id = await create_attempt(db, "u1", "beginner", 3)
    await insert_answer(db, "u1", attempt_id, 9999, 1, False)
    await insert_answer(db, "u1", attempt_id, bank.q1.id, 8888, False)
    await insert_answer(db, "u1", attempt_id, orphan_question.id, orphan_question.choices[0].id, False)

    detail = await fetch_attempt_detail(db, "u1", attempt_id)
    deleted, bad_choice, no_correct = detail.items

    assert deleted.prompt == QUESTION_NOT_FOUND
    assert deleted.explanation is None
    assert deleted.selected_choice_label == CHOICE_NOT_FOUND
    assert deleted.correct_choice_label == CORRECT_NOT_FOUND
    assert bad_choice.prompt == "Q1 prompt"
    assert bad_choice.selected_choice_label == CHOICE_NOT_FOUND
    assert bad_choice.correct_choice_label == "a1"
    assert no_correct.selected_choice_label == "x"
    assert no_correct.correct_choice_label == CORRECT_NOT_FOUND


async def test_detail_survives_question_removed_from_bank(db, settings, bank):
    attempt_id = await create_attempt(db, "u1", "advanced", 1)
    await insert_answer(db, "u1", attempt_id, bank.q4.id, choice(bank.q4, "b4").id, True)
    q4_id = bank.q4.id
    await db.execute(delete(Choice).where(Choice.question_id == q4_id))
    await db.execute(delete(Question).where(Question.id == q4_id))
    await db.commit()

    detail = await fetch_attempt_detail(db, "u1", attempt_id)
    assert detail.items[0].question_id == q4_id
    assert detail.items[0].prompt == QUESTION_NOT_FOUND
    assert detail.items[0].is_correct is True
