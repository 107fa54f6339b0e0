"""User settings and practice-session bookkeeping."""
from datetime import date, datetime

from thaivocab.config import DEFAULT_USER
from thaivocab.db import get_connection


def get_setting(db_path: str, key: str, default: str = None) -> str | None:
    conn = get_connection(db_path)
    row = conn.execute("SELECT value FROM user_settings WHERE key = ?", (key,)).fetchone()
    conn.close()
    return row["value"] if row else default


def set_setting(db_path: str, key: str, value: str) -> None:
    conn = get_connection(db_path)
    conn.execute(
        "INSERT INTO user_settings (key, value) VALUES (?, ?) ON CONFLICT(key) DO UPDATE SET value=?",
        (key, value, value),
    )
    conn.commit()
    conn.close()


def get_current_user(db_path: str) -> str:
    return get_setting(db_path, "current_user", DEFAULT_USER)


def get_deadline_days(db_path: str) -> int | None:
    """Days left until the learner's goal deadline, or None if no goal is set."""
    deadline = get_setting(db_path, "goal_deadline")
    if not deadline:
        return None
    return max(0, (date.fromisoformat(deadline) - date.today()).days)


def record_practice_session(
    db_path: str,
    user_id: str,
    session_type: str,
    session_mode: str,
    words_learned: int = 0,
    words_reviewed: int = 0,
) -> None:
    conn = get_connection(db_path)
    conn.execute(
        """INSERT INTO practice_sessions
        (user_id, session_type, session_mode, words_learned, words_reviewed, completed, completed_at)
        VALUES (?, ?, ?, ?, ?, 1, ?)""",
        (user_id, session_type, session_mode, words_learned, words_reviewed,
         datetime.now().isoformat()),
    )
    conn.commit()
    conn.close()


def get_completed_sessions(db_path: str, user_id: str, session_mode: str = None) -> int:
    conn = get_connection(db_path)
    if session_mode is None:
        count = conn.execute(
            "SELECT COUNT(*) FROM practice_sessions WHERE user_id = ? AND completed = 1",
            (user_id,),
        ).fetchone()[0]
    else:
        count = conn.execute(
            "SELECT COUNT(*) FROM practice_sessions WHERE user_id = ? AND completed = 1 AND session_mode = ?",
            (user_id, session_mode),
        ).fetchone()[0]
    conn.close()
    return count
