"""Weak/mastered classification and weak-word identification."""
from thaivocab.config import (
    WEAK_SCORE_THRESHOLD, WEAK_LEVEL_THRESHOLD, WEAK_WORD_MIN_DIFFICULTY,
)
from thaivocab.db import get_connection
from thaivocab.models import FlashcardProgress


def is_weak(progress: FlashcardProgress) -> bool:
    return progress.srs_score < WEAK_SCORE_THRESHOLD or progress.srs_level < WEAK_LEVEL_THRESHOLD


def is_mastered(progress: FlashcardProgress) -> bool:
    return not is_weak(progress)


def partition(pool: list) -> tuple[list, list]:
    """Split pool cards (anything with a ``progress`` attribute) into (weak, mastered)."""
    weak, mastered = [], []
    for card in pool:
        (weak if is_weak(card.progress) else mastered).append(card)
    return weak, mastered


def difficulty_score(times_reviewed: int, times_correct: int, interval_days: int) -> float:
    """Low accuracy and short intervals both push a word towards 1.0."""
    accuracy = times_correct / times_reviewed if times_reviewed > 0 else 0
    interval_factor = max(0, (7 - (interval_days or 0)) / 7)
    return (1 - accuracy) * 0.7 + interval_factor * 0.3


def get_weak_words(db_path: str, user_id: str, limit: int = 50) -> list[dict]:
    """Get reviewed words ranked hardest first."""
    conn = get_connection(db_path)
    rows = conn.execute(
        """SELECT p.flashcard_id, f.front_text, f.back_text,
            p.times_reviewed, p.times_correct, p.interval_days, p.last_reviewed_at
        FROM flashcard_progress p
        JOIN flashcards f ON f.id = p.flashcard_id
        WHERE p.user_id = ? AND p.times_reviewed > 0""",
        (user_id,),
    ).fetchall()
    conn.close()
    words = [
        {
            "flashcard_id": r["flashcard_id"],
            "word": r["front_text"],
            "meaning": r["back_text"],
            "times_wrong": r["times_reviewed"] - r["times_correct"],
            "last_reviewed_at": r["last_reviewed_at"],
            "difficulty_score": round(
                difficulty_score(r["times_reviewed"], r["times_correct"], r["interval_days"]), 3
            ),
        }
        for r in rows
    ]
    words = [w for w in words if w["difficulty_score"] > WEAK_WORD_MIN_DIFFICULTY]
    words.sort(key=lambda w: w["difficulty_score"], reverse=True)
    return words[:limit]
