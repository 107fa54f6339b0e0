"""Seed the database with the starter vocabulary deck."""
import json
from pathlib import Path
from thaivocab.db import get_connection

CONTENT_DIR = Path(__file__).parent / "content"


def is_seeded(db_path: str) -> bool:
    """Check whether the database already holds flashcards."""
    conn = get_connection(db_path)
    count = conn.execute("SELECT COUNT(*) FROM flashcards").fetchone()[0]
    conn.close()
    return count > 0


def load_deck(name: str = "starter_deck") -> dict:
    return json.loads((CONTENT_DIR / f"{name}.json").read_text(encoding="utf-8"))


def seed_flashcards(db_path: str, name: str = "starter_deck") -> int:
    """Insert every card of a bundled deck. Returns the number inserted."""
    data = load_deck(name)
    conn = get_connection(db_path)
    for card in data["flashcards"]:
        conn.execute(
            "INSERT INTO flashcards (front_text, back_text, part_of_speech, deck) VALUES (?, ?, ?, ?)",
            (card["front"], card["back"], card.get("part_of_speech"), data["deck"]),
        )
    conn.commit()
    conn.close()
    return len(data["flashcards"])


def seed_all(db_path: str) -> None:
    """Seed the starter deck once."""
    if is_seeded(db_path):
        return
    seed_flashcards(db_path)
