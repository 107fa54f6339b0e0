# tests/test_srs.py
import random
from datetime import date

from thaivocab.models import FlashcardProgress
from thaivocab.srs import (
    apply_bonus, calculate_srs, combine_score, hard_reset, interval_for_level,
)

TODAY = date(2026, 1, 10)


def progress(level=0, score=0, easiness=2.5, interval=0):
    return FlashcardProgress(
        user_id="u1", flashcard_id=1, srs_level=level, srs_score=score,
        easiness_factor=easiness, interval_days=interval,
    )


def test_first_perfect_review():
    """Quality 5 on a new card: level 1, score 2, due tomorrow."""
    result = calculate_srs(progress(), quality=5, today=TODAY)
    assert result["srs_level"] == 1
    assert result["srs_score"] == 2
    assert result["interval_days"] == 1
    assert result["next_review_date"] == "2026-01-11"
    assert result["easiness_factor"] == 2.6


def test_level_two_interval_is_six_days():
    result = calculate_srs(progress(level=1, score=2), quality=5, today=TODAY)
    assert result["srs_level"] == 2
    assert result["interval_days"] == 6


def test_interval_grows_with_easiness():
    assert interval_for_level(3, 2.5) == 15  # round(6 * 2.5)
    assert interval_for_level(4, 2.5) == 38  # round(6 * 6.25)


def test_moderate_quality_holds_level():
    result = calculate_srs(progress(level=3, score=6), quality=2, today=TODAY)
    assert result["srs_level"] == 3
    assert result["srs_score"] == 7


def test_failure_costs_score_and_resets_interval():
    result = calculate_srs(progress(level=4, score=9, interval=20), quality=0, today=TODAY)
    assert result["srs_score"] == 6
    assert result["srs_level"] == 4  # score still above the demotion threshold
    assert result["interval_days"] == 1
    assert result["easiness_factor"] == 2.3


def test_failure_demotes_low_score():
    result = calculate_srs(progress(level=4, score=5), quality=0, today=TODAY)
    assert result["srs_score"] == 2
    assert result["srs_level"] == 3


def test_easiness_minimum():
    result = calculate_srs(progress(easiness=1.3), quality=0, today=TODAY)
    assert result["easiness_factor"] == 1.3


def test_higher_quality_gains_more():
    start = progress(level=2, score=6)
    q5 = calculate_srs(start, quality=5, today=TODAY)
    q2 = calculate_srs(start, quality=2, today=TODAY)
    q0 = calculate_srs(start, quality=0, today=TODAY)
    assert (q5["srs_level"], q5["srs_score"]) > (q2["srs_level"], q2["srs_score"])
    assert (q2["srs_level"], q2["srs_score"]) > (q0["srs_level"], q0["srs_score"])


def test_repeated_failures_regress_card():
    state = progress(level=6, score=12)
    for _ in range(5):
        state = FlashcardProgress(user_id="u1", flashcard_id=1, **calculate_srs(state, 0, today=TODAY))
    assert state.srs_score == 0
    assert state.srs_level < 6


def test_repeated_successes_advance_card():
    state = progress()
    for _ in range(5):
        state = FlashcardProgress(user_id="u1", flashcard_id=1, **calculate_srs(state, 5, today=TODAY))
    assert state.srs_level == 5
    assert state.srs_score == 10


def test_bounds_hold_for_random_sequences():
    rng = random.Random(7)
    state = progress()
    for _ in range(500):
        quality = rng.choice([0, 1, 2, 3, 4, 5])
        state = FlashcardProgress(user_id="u1", flashcard_id=1, **calculate_srs(state, quality, today=TODAY))
        if rng.random() < 0.2:
            state = apply_bonus(state)
        assert 0 <= state.srs_score <= 15
        assert 0 <= state.srs_level <= 10


def test_tier_cap_limits_growth():
    assert combine_score(9, 5, max_score=10) == 10
    assert combine_score(10, 5, max_score=10) == 10


def test_tier_cap_does_not_pull_down_mastered_card():
    assert combine_score(15, 5, max_score=10) == 15


def test_tier_cap_does_not_block_penalty():
    assert combine_score(15, 0, max_score=10) == 12


def test_score_never_negative():
    assert combine_score(1, 0) == 0
    assert combine_score(None, 0) == 0


def test_deadline_compresses_interval():
    result = calculate_srs(progress(level=4, score=12), quality=5, deadline_days=4, today=TODAY)
    assert result["interval_days"] == 2


def test_deadline_far_away_is_ignored():
    result = calculate_srs(progress(level=4, score=12), quality=5, deadline_days=30, today=TODAY)
    assert result["interval_days"] > 2


def test_bonus_adds_score_and_level():
    p = apply_bonus(progress(level=0, score=0))
    assert (p.srs_level, p.srs_score) == (1, 2)
    p = apply_bonus(p)
    assert (p.srs_level, p.srs_score) == (2, 4)


def test_bonus_is_capped():
    p = apply_bonus(progress(level=10, score=14))
    assert (p.srs_level, p.srs_score) == (10, 15)


def test_hard_reset():
    reset = hard_reset(progress(level=5, score=8, easiness=2.8, interval=30), today=TODAY)
    assert reset.srs_level == 0
    assert reset.srs_score == 0
    assert reset.easiness_factor == 2.5
    assert reset.interval_days == 0
    assert reset.next_review_date == "2026-01-10"
    assert reset.times_reviewed == 0


def test_hard_reset_is_idempotent():
    once = hard_reset(progress(level=5, score=8), today=TODAY)
    assert hard_reset(once, today=TODAY) == once


def test_hard_reset_clears_accuracy_counters():
    p = FlashcardProgress(user_id="u1", flashcard_id=1, srs_level=5, times_reviewed=9, times_correct=7)
    reset = hard_reset(p, today=TODAY)
    assert (reset.times_reviewed, reset.times_correct) == (0, 0)


def test_quality_three_pass_promotes_without_score_gate():
    """Any pass at quality 3 or more advances the level, whatever the score."""
    result = calculate_srs(progress(level=2, score=3), quality=3, today=TODAY)
    assert result["srs_level"] == 3
    assert result["srs_score"] == 4
