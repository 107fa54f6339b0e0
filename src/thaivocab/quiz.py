"""Quiz game: multiple choice over a deck, scored per answer."""
import random
import sqlite3

from thaivocab.db import get_connection
from thaivocab.exceptions import ProgressStoreError
from thaivocab.games import QUIZ, TimedSignal
from thaivocab.models import Flashcard, FlashcardProgress, PoolCard, ReviewOutcome
from thaivocab.progress import read_progress, record_round
from thaivocab.sampler import build_question


def get_deck_pool(db_path: str, user_id: str, deck: str = None) -> list[PoolCard]:
    """Every card in the deck, with progress defaulted for unseen cards."""
    try:
        conn = get_connection(db_path)
        try:
            if deck is None:
                rows = conn.execute("SELECT * FROM flashcards ORDER BY id").fetchall()
            else:
                rows = conn.execute(
                    "SELECT * FROM flashcards WHERE deck = ? ORDER BY id", (deck,)
                ).fetchall()
        finally:
            conn.close()
    except sqlite3.Error as e:
        raise ProgressStoreError(f"Could not load deck {deck or 'all'}: {e}") from e
    cards = [Flashcard.from_row(r) for r in rows]
    known = {p.flashcard_id: p for p in read_progress(db_path, user_id, [c.id for c in cards])}
    return [
        PoolCard(c, known.get(c.id) or FlashcardProgress(user_id=user_id, flashcard_id=c.id))
        for c in cards
    ]


def get_quiz_questions(db_path: str, user_id: str, count: int = 10, deck: str = None, rng=None) -> list:
    rng = rng or random.Random()
    pool = get_deck_pool(db_path, user_id, deck)
    selected = rng.sample(pool, max(0, min(count, len(pool))))
    return [build_question(card, pool, rng) for card in selected]


def check_answer(question, answer: str) -> bool:
    return answer.strip().lower() == question.correct_answer.strip().lower()


def record_quiz_round(db_path: str, user_id: str, answers: list, deadline_days: int = None) -> dict:
    """``answers`` is a list of (question, is_correct, seconds)."""
    outcomes = [
        ReviewOutcome(q.id, QUIZ, TimedSignal(is_correct, seconds))
        for q, is_correct, seconds in answers
    ]
    return record_round(db_path, user_id, outcomes, deadline_days=deadline_days)


def get_quiz_accuracy(db_path: str, user_id: str) -> float:
    """Quiz accuracy as a percentage."""
    conn = get_connection(db_path)
    row = conn.execute(
        "SELECT COUNT(*) as total, SUM(is_correct) as correct FROM review_log WHERE user_id = ? AND game_type = ?",
        (user_id, QUIZ),
    ).fetchone()
    conn.close()
    if row["total"] == 0:
        return 0.0
    return round((row["correct"] / row["total"]) * 100, 1)
