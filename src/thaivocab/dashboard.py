"""Progress dashboard statistics."""
from thaivocab.config import MAX_SRS_LEVEL
from thaivocab.db import get_connection
from thaivocab.flashcards import count_due_cards
from thaivocab.progress import load_pool
from thaivocab.review import partition
from thaivocab.study import get_completed_sessions


def get_mastery_label(score: float) -> str:
    if score >= 12:
        return "MASTERED"
    elif score >= 8:
        return "STRONG"
    elif score >= 5:
        return "LEARNING"
    return "WEAK"


def get_mastery_color(score: float) -> str:
    if score >= 12:
        return "green"
    elif score >= 8:
        return "yellow"
    elif score >= 5:
        return "dark_orange"
    return "red"


def get_level_distribution(db_path: str, user_id: str) -> dict:
    """Number of reviewed cards at each srs_level (0..10)."""
    conn = get_connection(db_path)
    rows = conn.execute(
        """SELECT srs_level, COUNT(*) as n FROM flashcard_progress
        WHERE user_id = ? AND times_reviewed > 0
        GROUP BY srs_level""",
        (user_id,),
    ).fetchall()
    conn.close()
    distribution = {level: 0 for level in range(MAX_SRS_LEVEL + 1)}
    for r in rows:
        distribution[r["srs_level"]] = r["n"]
    return distribution


def get_study_stats(db_path: str, user_id: str) -> dict:
    pool = load_pool(db_path, user_id)
    weak, mastered = partition(pool)
    conn = get_connection(db_path)
    reviews = conn.execute(
        "SELECT COUNT(*) FROM review_log WHERE user_id = ?", (user_id,)
    ).fetchone()[0]
    total_cards = conn.execute("SELECT COUNT(*) FROM flashcards").fetchone()[0]
    conn.close()
    avg_score = round(sum(c.progress.srs_score for c in pool) / len(pool), 1) if pool else 0.0
    return {
        "total_cards": total_cards,
        "cards_reviewed": len(pool),
        "reviews_logged": reviews,
        "weak": len(weak),
        "mastered": len(mastered),
        "due_today": count_due_cards(db_path, user_id),
        "avg_srs_score": avg_score,
        "sessions_completed": get_completed_sessions(db_path, user_id),
    }
