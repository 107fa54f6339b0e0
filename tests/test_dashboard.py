# tests/test_dashboard.py
from thaivocab.dashboard import (
    get_level_distribution, get_mastery_color, get_mastery_label, get_study_stats,
)
from thaivocab.flashcards import record_flashcard_result
from thaivocab.progress import upsert_progress
from thaivocab.study import record_practice_session


def test_mastery_label():
    assert get_mastery_label(13) == "MASTERED"
    assert get_mastery_label(9) == "STRONG"
    assert get_mastery_label(5) == "LEARNING"
    assert get_mastery_label(2) == "WEAK"


def test_mastery_color():
    assert get_mastery_color(12) == "green"
    assert get_mastery_color(0) == "red"


def test_level_distribution_empty(seeded_db):
    distribution = get_level_distribution(seeded_db, "u1")
    assert list(distribution) == list(range(11))
    assert sum(distribution.values()) == 0


def test_level_distribution(seeded_db):
    upsert_progress(seeded_db, "u1", 1, {"srs_level": 3, "times_reviewed": 2})
    upsert_progress(seeded_db, "u1", 2, {"srs_level": 3, "times_reviewed": 2})
    upsert_progress(seeded_db, "u1", 3, {"srs_level": 10, "times_reviewed": 9})
    upsert_progress(seeded_db, "u1", 4, {"srs_level": 0, "times_reviewed": 0})
    distribution = get_level_distribution(seeded_db, "u1")
    assert distribution[3] == 2
    assert distribution[10] == 1
    assert distribution[0] == 0


def test_study_stats_with_no_data(seeded_db):
    stats = get_study_stats(seeded_db, "u1")
    assert stats["total_cards"] == 50
    assert stats["cards_reviewed"] == 0
    assert stats["avg_srs_score"] == 0.0
    assert stats["due_today"] == 50
    assert stats["sessions_completed"] == 0


def test_study_stats_with_data(seeded_db):
    for card_id in (1, 2, 3):
        record_flashcard_result(seeded_db, "u1", card_id, is_correct=True, seconds=1)
    upsert_progress(seeded_db, "u1", 4, {"srs_level": 5, "srs_score": 12, "times_reviewed": 6})
    record_practice_session(seeded_db, "u1", "game", "flashcard", words_reviewed=3)

    stats = get_study_stats(seeded_db, "u1")
    assert stats["cards_reviewed"] == 4
    assert stats["reviews_logged"] == 3
    assert stats["weak"] == 3
    assert stats["mastered"] == 1
    assert stats["avg_srs_score"] == 4.5  # (2 + 2 + 2 + 12) / 4
    assert stats["due_today"] == 47 + 1  # card 4 has no review date yet
    assert stats["sessions_completed"] == 1
