"""Progress store: per-user, per-flashcard review state."""
import logging
import sqlite3
from datetime import date, datetime
from typing import Optional

from thaivocab.db import get_connection
from thaivocab.exceptions import NotFoundError, ProgressStoreError
from thaivocab.games import get_game_score_cap, outcome_to_quality
from thaivocab.models import PROGRESS_FIELDS, Flashcard, FlashcardProgress, PoolCard
from thaivocab.srs import calculate_srs

logger = logging.getLogger(__name__)

_COLUMNS = ", ".join(PROGRESS_FIELDS)
_PLACEHOLDERS = ", ".join("?" for _ in PROGRESS_FIELDS)
_UPDATES = ", ".join("%s=excluded.%s" % (name, name) for name in PROGRESS_FIELDS)

UPSERT_SQL = f"""INSERT INTO flashcard_progress (user_id, flashcard_id, {_COLUMNS})
    VALUES (?, ?, {_PLACEHOLDERS})
    ON CONFLICT(user_id, flashcard_id) DO UPDATE SET {_UPDATES}"""


def read_progress(db_path: str, user_id: str, flashcard_ids: list) -> list[FlashcardProgress]:
    """Existing progress rows for the given cards (missing cards are omitted)."""
    if not flashcard_ids:
        return []
    placeholders = ", ".join("?" for _ in flashcard_ids)
    try:
        conn = get_connection(db_path)
        try:
            rows = conn.execute(
                f"""SELECT * FROM flashcard_progress
                WHERE user_id = ? AND flashcard_id IN ({placeholders})""",
                (user_id, *flashcard_ids),
            ).fetchall()
        finally:
            conn.close()
    except sqlite3.Error as e:
        raise ProgressStoreError(f"Could not read progress for {user_id}: {e}") from e
    return [FlashcardProgress.from_row(r) for r in rows]


def get_progress(db_path: str, user_id: str, flashcard_id: int) -> FlashcardProgress:
    """Progress for one card, defaulted if the learner has never seen it."""
    rows = read_progress(db_path, user_id, [flashcard_id])
    if rows:
        return rows[0]
    return FlashcardProgress(user_id=user_id, flashcard_id=flashcard_id)


def _row_values(user_id: str, flashcard_id: int, fields: dict) -> tuple:
    defaults = FlashcardProgress(user_id=user_id, flashcard_id=flashcard_id).to_row()
    defaults.update(fields)
    return (user_id, flashcard_id, *(defaults[name] for name in PROGRESS_FIELDS))


def upsert_progress(db_path: str, user_id: str, flashcard_id: int, fields: dict) -> None:
    """Write the full progress row for a card.

    Fields not given fall back to the defaults of a fresh card, so callers
    pass the complete state they computed.
    """
    unknown = set(fields) - set(PROGRESS_FIELDS)
    if unknown:
        raise ValueError(f"Unknown progress fields: {sorted(unknown)}")
    try:
        conn = get_connection(db_path)
        try:
            conn.execute(UPSERT_SQL, _row_values(user_id, flashcard_id, fields))
            conn.commit()
        finally:
            conn.close()
    except sqlite3.Error as e:
        raise ProgressStoreError(
            f"Could not save progress for card {flashcard_id}: {e}"
        ) from e


def bulk_upsert_progress(db_path: str, rows: list[FlashcardProgress]) -> list[int]:
    """Write many progress rows, one at a time.

    A failing row is logged and skipped; the rest are still written.
    Returns the flashcard ids that could not be saved.
    """
    failed = []
    conn = get_connection(db_path)
    try:
        for progress in rows:
            fields = {name: getattr(progress, name) for name in PROGRESS_FIELDS}
            try:
                conn.execute(UPSERT_SQL, _row_values(progress.user_id, progress.flashcard_id, fields))
                conn.commit()
            except sqlite3.Error as e:
                conn.rollback()
                logger.error(
                    "Failed to save progress for user %s card %s: %s",
                    progress.user_id, progress.flashcard_id, e,
                )
                failed.append(progress.flashcard_id)
    finally:
        conn.close()
    return failed


def get_flashcard(db_path: str, flashcard_id: int) -> Flashcard:
    try:
        conn = get_connection(db_path)
        try:
            row = conn.execute("SELECT * FROM flashcards WHERE id = ?", (flashcard_id,)).fetchone()
        finally:
            conn.close()
    except sqlite3.Error as e:
        raise ProgressStoreError(f"Could not read flashcard {flashcard_id}: {e}") from e
    if row is None:
        raise NotFoundError(f"Flashcard {flashcard_id} does not exist")
    return Flashcard.from_row(row)


def record_review(
    db_path: str,
    user_id: str,
    outcome,
    deadline_days: Optional[int] = None,
    quality: Optional[int] = None,
) -> FlashcardProgress:
    """Score one game outcome and persist the card's new schedule."""
    get_flashcard(db_path, outcome.flashcard_id)
    if quality is None:
        quality = outcome_to_quality(outcome.game_type, outcome.signal)
    current = get_progress(db_path, user_id, outcome.flashcard_id)
    updated = calculate_srs(
        current, quality,
        deadline_days=deadline_days,
        max_score=get_game_score_cap(outcome.game_type),
    )
    updated["times_reviewed"] = current.times_reviewed + 1
    updated["times_correct"] = current.times_correct + int(outcome.is_correct)
    updated["last_reviewed_at"] = datetime.now().isoformat()

    # progress row and log entry commit together
    try:
        conn = get_connection(db_path)
        try:
            conn.execute(UPSERT_SQL, _row_values(user_id, outcome.flashcard_id, updated))
            conn.execute(
                """INSERT INTO review_log (user_id, flashcard_id, game_type, quality, is_correct, reviewed_at)
                VALUES (?, ?, ?, ?, ?, ?)""",
                (user_id, outcome.flashcard_id, outcome.game_type, quality,
                 int(outcome.is_correct), date.today().isoformat()),
            )
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise
        finally:
            conn.close()
    except sqlite3.Error as e:
        raise ProgressStoreError(
            f"Could not record review of card {outcome.flashcard_id}: {e}"
        ) from e
    logger.debug(
        "Card %s reviewed via %s: quality %s -> level %s score %s",
        outcome.flashcard_id, outcome.game_type, quality,
        updated["srs_level"], updated["srs_score"],
    )
    return FlashcardProgress(user_id=user_id, flashcard_id=outcome.flashcard_id, **updated)


def record_round(
    db_path: str,
    user_id: str,
    outcomes: list,
    deadline_days: Optional[int] = None,
) -> dict:
    """Apply a finished game round, updating each played card exactly once.

    A card that shows up more than once in the round is scored by its
    weakest outcome. Returns {flashcard_id: FlashcardProgress}.
    """
    worst = {}
    for outcome in outcomes:
        quality = outcome_to_quality(outcome.game_type, outcome.signal)
        seen = worst.get(outcome.flashcard_id)
        if seen is None or quality < seen[1]:
            worst[outcome.flashcard_id] = (outcome, quality)
    return {
        card_id: record_review(db_path, user_id, outcome, deadline_days, quality=quality)
        for card_id, (outcome, quality) in worst.items()
    }


def load_pool(
    db_path: str,
    user_id: str,
    deck: Optional[str] = None,
    reviewed_only: bool = True,
) -> list[PoolCard]:
    """Cards the learner has progress on, joined with that progress.

    With ``reviewed_only`` cards reset to zero reviews are left out.
    """
    query = """SELECT f.id, f.front_text, f.back_text, f.part_of_speech, f.deck, p.*
        FROM flashcard_progress p
        JOIN flashcards f ON f.id = p.flashcard_id
        WHERE p.user_id = ?"""
    params = [user_id]
    if reviewed_only:
        query += " AND p.times_reviewed > 0"
    if deck is not None:
        query += " AND f.deck = ?"
        params.append(deck)
    query += " ORDER BY f.id"
    try:
        conn = get_connection(db_path)
        try:
            rows = conn.execute(query, params).fetchall()
        finally:
            conn.close()
    except sqlite3.Error as e:
        raise ProgressStoreError(f"Could not load review pool for {user_id}: {e}") from e
    return [PoolCard(Flashcard.from_row(r), FlashcardProgress.from_row(r)) for r in rows]
