"""Data classes for the vocabulary domain model."""
from dataclasses import dataclass, field, asdict
from typing import Optional

from thaivocab.config import DEFAULT_EASINESS

PROGRESS_FIELDS = (
    "srs_level", "srs_score", "easiness_factor", "interval_days",
    "next_review_date", "times_reviewed", "times_correct", "last_reviewed_at",
)


@dataclass
class Flashcard:
    id: int
    front_text: str
    back_text: str
    part_of_speech: Optional[str] = None
    deck: str = "starter"

    @classmethod
    def from_row(cls, row) -> "Flashcard":
        return cls(
            id=row["id"],
            front_text=row["front_text"],
            back_text=row["back_text"],
            part_of_speech=row["part_of_speech"],
            deck=row["deck"],
        )


@dataclass
class FlashcardProgress:
    user_id: str
    flashcard_id: int
    srs_level: int = 0
    srs_score: int = 0
    easiness_factor: float = DEFAULT_EASINESS
    interval_days: int = 0
    next_review_date: Optional[str] = None  # ISO date
    times_reviewed: int = 0
    times_correct: int = 0
    last_reviewed_at: Optional[str] = None

    @classmethod
    def from_row(cls, row) -> "FlashcardProgress":
        return cls(
            user_id=row["user_id"],
            flashcard_id=row["flashcard_id"],
            **{name: row[name] for name in PROGRESS_FIELDS},
        )

    def to_row(self) -> dict:
        return asdict(self)


@dataclass
class PoolCard:
    """A reviewed flashcard together with the learner's progress on it."""
    flashcard: Flashcard
    progress: FlashcardProgress

    @property
    def id(self) -> int:
        return self.flashcard.id


@dataclass
class ReviewOutcome:
    flashcard_id: int
    game_type: str
    signal: object

    @property
    def is_correct(self) -> bool:
        return self.signal.is_correct


@dataclass
class TestQuestion:
    __test__ = False

    id: int
    front_text: str
    back_text: str
    options: list
    correct_answer: str
    is_weak: bool = False
    part_of_speech: Optional[str] = None


@dataclass
class AnswerRecord:
    question_id: int
    is_correct: bool
    user_answer: Optional[str] = None  # None when the question timed out
    is_weak: bool = False


@dataclass
class InterimResult:
    correct: int
    total: int
    leech_ids: list = field(default_factory=list)
    bonus_ids: list = field(default_factory=list)


@dataclass
class WrongWord:
    front: str
    back: str
    correct: str


@dataclass
class PostTestResult:
    correct: int
    total: int
    wrong_words: list = field(default_factory=list)
    score: int = 0
    answers: list = field(default_factory=list)
