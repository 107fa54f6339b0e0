"""Mini-game result signals and their mapping to review quality (0-5)."""
from dataclasses import dataclass

from thaivocab.config import MAX_SRS_SCORE

HANGMAN = "hangman"
LISTEN_CHOOSE = "listen-choose"
FLASHCARD = "flashcard"
QUIZ = "quiz"
VOCAB_BLINDER = "vocab-blinder"
MATCHING = "matching"
WORD_SEARCH = "wordsearch"
SCRAMBLE = "scramble"
NINJA = "ninja"
HONEYCOMB = "honeycomb"

# Recognition games cannot grow a card past "intermediate" on their own;
# recall games can reach full mastery.
RECOGNITION_CAP = 10
GAME_TIERS = {
    QUIZ: {"tier": 1, "cap": RECOGNITION_CAP},
    MATCHING: {"tier": 1, "cap": RECOGNITION_CAP},
    WORD_SEARCH: {"tier": 1, "cap": RECOGNITION_CAP},
    NINJA: {"tier": 1, "cap": RECOGNITION_CAP},
    LISTEN_CHOOSE: {"tier": 1, "cap": RECOGNITION_CAP},
    VOCAB_BLINDER: {"tier": 1, "cap": RECOGNITION_CAP},
    FLASHCARD: {"tier": 2, "cap": MAX_SRS_SCORE},
    SCRAMBLE: {"tier": 2, "cap": MAX_SRS_SCORE},
    HANGMAN: {"tier": 2, "cap": MAX_SRS_SCORE},
    HONEYCOMB: {"tier": 2, "cap": MAX_SRS_SCORE},
}

HANGMAN_MAX_WRONG = 6


@dataclass(frozen=True)
class HangmanSignal:
    completed: bool
    wrong_guesses: int

    @property
    def is_correct(self) -> bool:
        return self.completed and self.wrong_guesses < HANGMAN_MAX_WRONG


@dataclass(frozen=True)
class ListenChooseSignal:
    is_correct: bool
    play_count: int = 1


@dataclass(frozen=True)
class FlashcardSignal:
    is_correct: bool
    attempts: int = 1
    seconds: float = 0.0


@dataclass(frozen=True)
class TimedSignal:
    is_correct: bool
    seconds: float


@dataclass(frozen=True)
class AttemptSignal:
    is_correct: bool
    attempts: int = 1


@dataclass(frozen=True)
class ScrambleSignal:
    completed: bool
    hints_used: int = 0

    @property
    def is_correct(self) -> bool:
        return self.completed


@dataclass(frozen=True)
class WordSearchSignal:
    found: bool
    seconds: float

    @property
    def is_correct(self) -> bool:
        return self.found


def hangman_quality(signal: HangmanSignal) -> int:
    """Perfect game 5, any other win 2, lost 0."""
    if not signal.is_correct or signal.wrong_guesses > 5:
        return 0
    if signal.wrong_guesses == 0:
        return 5
    return 2


def listen_choose_quality(signal: ListenChooseSignal) -> int:
    """Replays, not misses, discriminate quality here."""
    if not signal.is_correct:
        return 0
    if signal.play_count <= 1:
        return 5
    return 2


def flashcard_quality(signal: FlashcardSignal) -> int:
    if not signal.is_correct:
        return 0
    if signal.attempts > 1:
        return 1
    if signal.seconds <= 3:
        return 5
    if signal.seconds <= 6:
        return 4
    if signal.seconds <= 10:
        return 3
    return 2


def quiz_quality(signal: TimedSignal) -> int:
    if not signal.is_correct:
        return 0
    if signal.seconds < 3:
        return 5
    if signal.seconds < 6:
        return 4
    if signal.seconds < 10:
        return 3
    return 2


def vocab_blinder_quality(signal: TimedSignal) -> int:
    if not signal.is_correct:
        return 0
    if signal.seconds < 2.5:
        return 5
    if signal.seconds < 5:
        return 4
    if signal.seconds < 8:
        return 3
    return 2


def matching_quality(signal: AttemptSignal) -> int:
    if not signal.is_correct:
        return 0
    return 4 if signal.attempts <= 1 else 1


def word_search_quality(signal: WordSearchSignal) -> int:
    if not signal.found:
        return 0
    if signal.seconds < 10:
        return 3
    if signal.seconds <= 30:
        return 2
    return 1


def scramble_quality(signal: ScrambleSignal) -> int:
    if not signal.completed:
        return 0
    if signal.hints_used == 0:
        return 3
    if signal.hints_used <= 2:
        return 2
    return 1


def ninja_quality(signal: AttemptSignal) -> int:
    if not signal.is_correct:
        return 0
    return 3 if signal.attempts <= 1 else 1


def honeycomb_quality(signal: AttemptSignal) -> int:
    if not signal.is_correct:
        return 0
    if signal.attempts <= 1:
        return 3
    if signal.attempts <= 3:
        return 2
    return 1


QUALITY_FUNCTIONS = {
    HANGMAN: (HangmanSignal, hangman_quality),
    LISTEN_CHOOSE: (ListenChooseSignal, listen_choose_quality),
    FLASHCARD: (FlashcardSignal, flashcard_quality),
    QUIZ: (TimedSignal, quiz_quality),
    VOCAB_BLINDER: (TimedSignal, vocab_blinder_quality),
    MATCHING: (AttemptSignal, matching_quality),
    WORD_SEARCH: (WordSearchSignal, word_search_quality),
    SCRAMBLE: (ScrambleSignal, scramble_quality),
    NINJA: (AttemptSignal, ninja_quality),
    HONEYCOMB: (AttemptSignal, honeycomb_quality),
}


def outcome_to_quality(game_type: str, signal) -> int:
    """Map a finished round's signal to a 0-5 quality for the update policy."""
    try:
        signal_type, quality_fn = QUALITY_FUNCTIONS[game_type]
    except KeyError:
        raise ValueError(f"Unknown game type: {game_type}") from None
    if not isinstance(signal, signal_type):
        raise TypeError(
            f"{game_type} expects {signal_type.__name__}, got {type(signal).__name__}"
        )
    return quality_fn(signal)


def get_game_score_cap(game_type: str) -> int:
    return GAME_TIERS.get(game_type, {}).get("cap", MAX_SRS_SCORE)
