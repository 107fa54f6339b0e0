import pytest

from thaivocab.db import init_db
from thaivocab.models import Flashcard, FlashcardProgress, PoolCard
from thaivocab.seed import seed_all


@pytest.fixture
def tmp_db(tmp_path):
    """Provide a temporary SQLite database path for tests."""
    db_path = str(tmp_path / "test_vocab.db")
    return db_path


@pytest.fixture
def seeded_db(tmp_db):
    """A temporary database holding the starter deck."""
    init_db(tmp_db)
    seed_all(tmp_db)
    return tmp_db


def make_card(card_id, level=0, score=0, back=None, user_id="u1", **progress):
    """Build an in-memory pool card; the back text defaults to a unique value."""
    return PoolCard(
        Flashcard(id=card_id, front_text=f"word{card_id}", back_text=back or f"meaning{card_id}"),
        FlashcardProgress(
            user_id=user_id, flashcard_id=card_id, srs_level=level, srs_score=score,
            times_reviewed=progress.pop("times_reviewed", 1), **progress,
        ),
    )


def make_pool(weak=0, mastered=0):
    """Cards 1..weak are weak (level 0, score 0); the rest are mastered (level 5, score 10)."""
    pool = [make_card(i) for i in range(1, weak + 1)]
    pool += [make_card(i, level=5, score=10) for i in range(weak + 1, weak + mastered + 1)]
    return pool
