"""Spaced repetition update policy (SM-2 easiness with score/level mastery)."""
from dataclasses import replace
from datetime import date, timedelta
from typing import Optional

from thaivocab.config import (
    DEFAULT_EASINESS, MIN_EASINESS, MAX_SRS_SCORE, MAX_SRS_LEVEL,
    PASSING_QUALITY, LEVEL_UP_QUALITY, DEMOTE_SCORE_THRESHOLD, SCORE_DELTAS,
    DEADLINE_COMPRESSION_DAYS, INTERIM_BONUS_SCORE, INTERIM_BONUS_LEVEL,
)
from thaivocab.models import FlashcardProgress


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def score_delta(quality: int) -> int:
    return SCORE_DELTAS[clamp(quality, 0, 5)]


def combine_score(current: Optional[int], quality: int, max_score: int = MAX_SRS_SCORE) -> int:
    """Apply the score delta for a review of the given quality.

    ``max_score`` limits growth only: a card already above the cap keeps its
    score on a successful review instead of being pulled down to the cap.
    """
    current = current or 0
    delta = score_delta(quality)
    new_score = current + delta
    if delta > 0 and new_score > max_score:
        new_score = max(current, max_score)
    return clamp(new_score, 0, MAX_SRS_SCORE)


def update_easiness(easiness: float, quality: int) -> float:
    if quality >= PASSING_QUALITY:
        easiness = easiness + (0.1 - (5 - quality) * (0.08 + (5 - quality) * 0.02))
    else:
        easiness = easiness - 0.2
    return max(MIN_EASINESS, easiness)


def interval_for_level(level: int, easiness: float) -> int:
    if level <= 1:
        return 1
    if level == 2:
        return 6
    return round(6 * easiness ** (level - 2))


def calculate_srs(
    progress: FlashcardProgress,
    quality: int,
    deadline_days: Optional[int] = None,
    max_score: int = MAX_SRS_SCORE,
    today: Optional[date] = None,
) -> dict:
    """Calculate the next scheduling state for one review.

    Args:
        progress: Current state of the card (defaults for a never-seen card)
        quality: Rating 0-5 produced by a game adapter
        deadline_days: Days left until the learner's goal deadline, if any
        max_score: Growth cap for the game tier that produced the review
        today: Reference date for the next review (defaults to today)

    Returns:
        Dict with srs_level, srs_score, easiness_factor, interval_days
        and next_review_date (ISO string).
    """
    today = today or date.today()
    passed = quality >= PASSING_QUALITY
    level = clamp(progress.srs_level or 0, 0, MAX_SRS_LEVEL)

    new_score = combine_score(progress.srs_score, quality, max_score)
    easiness = update_easiness(progress.easiness_factor or DEFAULT_EASINESS, quality)

    if passed:
        if quality >= LEVEL_UP_QUALITY:
            level = min(MAX_SRS_LEVEL, level + 1)
    elif new_score <= DEMOTE_SCORE_THRESHOLD:
        level = max(0, level - 1)

    # Failures are always seen again tomorrow
    interval = interval_for_level(level, easiness) if passed else 1

    if deadline_days is not None and deadline_days < DEADLINE_COMPRESSION_DAYS and interval > 1:
        interval = min(interval, max(1, deadline_days // 2))

    return {
        "srs_level": level,
        "srs_score": new_score,
        "easiness_factor": round(easiness, 2),
        "interval_days": interval,
        "next_review_date": (today + timedelta(days=interval)).isoformat(),
    }


def apply_bonus(progress: FlashcardProgress) -> FlashcardProgress:
    """Interim-test reinforcement for a correctly answered card."""
    return replace(
        progress,
        srs_score=min(progress.srs_score + INTERIM_BONUS_SCORE, MAX_SRS_SCORE),
        srs_level=min(progress.srs_level + INTERIM_BONUS_LEVEL, MAX_SRS_LEVEL),
    )


def hard_reset(progress: FlashcardProgress, today: Optional[date] = None) -> FlashcardProgress:
    """Leech reset: the card is treated as never learned and is due today."""
    today = today or date.today()
    return replace(
        progress,
        srs_level=0,
        srs_score=0,
        easiness_factor=DEFAULT_EASINESS,
        interval_days=0,
        next_review_date=today.isoformat(),
        times_reviewed=0,
        times_correct=0,
    )
