"""Flashcard review sessions scheduled by the SRS policy."""
import sqlite3
from datetime import date

from thaivocab.db import get_connection
from thaivocab.exceptions import ProgressStoreError
from thaivocab.games import FLASHCARD, FlashcardSignal
from thaivocab.models import ReviewOutcome
from thaivocab.progress import record_review


def _fetch(db_path: str, query: str, params) -> list:
    try:
        conn = get_connection(db_path)
        try:
            return conn.execute(query, params).fetchall()
        finally:
            conn.close()
    except sqlite3.Error as e:
        raise ProgressStoreError(f"Could not read due cards: {e}") from e


def get_due_cards(db_path: str, user_id: str, limit: int = 50, deck: str = None) -> list:
    """Cards never reviewed or due today or earlier, most overdue first."""
    query = """SELECT f.*, p.srs_level, p.srs_score, p.next_review_date
        FROM flashcards f
        LEFT JOIN flashcard_progress p ON p.flashcard_id = f.id AND p.user_id = ?
        WHERE (p.next_review_date IS NULL OR p.next_review_date <= ?)"""
    params = [user_id, date.today().isoformat()]
    if deck is not None:
        query += " AND f.deck = ?"
        params.append(deck)
    query += " ORDER BY p.next_review_date ASC NULLS FIRST, RANDOM() LIMIT ?"
    params.append(limit)
    return _fetch(db_path, query, params)


def count_due_cards(db_path: str, user_id: str) -> int:
    rows = _fetch(
        db_path,
        """SELECT COUNT(*) FROM flashcards f
        LEFT JOIN flashcard_progress p ON p.flashcard_id = f.id AND p.user_id = ?
        WHERE p.next_review_date IS NULL OR p.next_review_date <= ?""",
        (user_id, date.today().isoformat()),
    )
    return rows[0][0]


def record_flashcard_result(
    db_path: str,
    user_id: str,
    card_id: int,
    is_correct: bool,
    attempts: int = 1,
    seconds: float = 0.0,
    deadline_days: int = None,
):
    outcome = ReviewOutcome(card_id, FLASHCARD, FlashcardSignal(is_correct, attempts, seconds))
    return record_review(db_path, user_id, outcome, deadline_days=deadline_days)
