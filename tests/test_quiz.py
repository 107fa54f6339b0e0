# tests/test_quiz.py
import random

import pytest

from thaivocab.exceptions import ProgressStoreError
from thaivocab.progress import get_progress, upsert_progress
from thaivocab.quiz import (
    check_answer, get_deck_pool, get_quiz_accuracy, get_quiz_questions, record_quiz_round,
)


def test_deck_pool_defaults_unseen_cards(seeded_db):
    upsert_progress(seeded_db, "u1", 1, {"srs_level": 4, "times_reviewed": 3})
    pool = get_deck_pool(seeded_db, "u1")
    assert len(pool) == 50
    assert pool[0].progress.srs_level == 4
    assert pool[1].progress.srs_level == 0


def test_get_quiz_questions(seeded_db):
    questions = get_quiz_questions(seeded_db, "u1", count=5, rng=random.Random(4))
    assert len(questions) == 5
    assert len({q.id for q in questions}) == 5
    for q in questions:
        assert len(q.options) == 4
        assert q.correct_answer in q.options


def test_get_quiz_questions_count_exceeds_deck(seeded_db):
    assert len(get_quiz_questions(seeded_db, "u1", count=500)) == 50


def test_check_answer_ignores_case_and_spaces(seeded_db):
    q = get_quiz_questions(seeded_db, "u1", count=1)[0]
    assert check_answer(q, f"  {q.correct_answer.upper()} ")
    assert not check_answer(q, "definitely wrong")


def test_record_quiz_round_and_accuracy(seeded_db):
    questions = get_quiz_questions(seeded_db, "u1", count=4, rng=random.Random(1))
    answers = [(q, i < 3, 2.0) for i, q in enumerate(questions)]
    updated = record_quiz_round(seeded_db, "u1", answers)
    assert len(updated) == 4
    assert get_progress(seeded_db, "u1", questions[0].id).srs_score == 2
    assert get_progress(seeded_db, "u1", questions[3].id).times_correct == 0
    assert get_quiz_accuracy(seeded_db, "u1") == 75.0


def test_quiz_accuracy_no_answers(seeded_db):
    assert get_quiz_accuracy(seeded_db, "u1") == 0.0


def test_deck_pool_without_schema_raises_store_error(tmp_db):
    with pytest.raises(ProgressStoreError):
        get_deck_pool(tmp_db, "u1")


def test_quiz_questions_negative_count(seeded_db):
    assert get_quiz_questions(seeded_db, "u1", count=-2) == []
