# tests/test_games.py
import pytest

from thaivocab.config import PASSING_QUALITY

from thaivocab.games import (
    FLASHCARD, HANGMAN, LISTEN_CHOOSE, MATCHING, QUIZ, SCRAMBLE, WORD_SEARCH,
    AttemptSignal, FlashcardSignal, HangmanSignal, ListenChooseSignal,
    ScrambleSignal, TimedSignal, WordSearchSignal,
    get_game_score_cap, outcome_to_quality,
)


@pytest.mark.parametrize("wrong, expected", [
    (0, 5), (1, 2), (3, 2), (4, 2), (5, 2),
])
def test_hangman_won(wrong, expected):
    assert outcome_to_quality(HANGMAN, HangmanSignal(completed=True, wrong_guesses=wrong)) == expected


def test_hangman_lost():
    assert outcome_to_quality(HANGMAN, HangmanSignal(completed=False, wrong_guesses=6)) == 0
    assert outcome_to_quality(HANGMAN, HangmanSignal(completed=True, wrong_guesses=6)) == 0


def test_listen_choose():
    assert outcome_to_quality(LISTEN_CHOOSE, ListenChooseSignal(True, play_count=1)) == 5
    assert outcome_to_quality(LISTEN_CHOOSE, ListenChooseSignal(True, play_count=3)) == 2
    assert outcome_to_quality(LISTEN_CHOOSE, ListenChooseSignal(False, play_count=1)) == 0


def test_quiz_speed_bands():
    assert outcome_to_quality(QUIZ, TimedSignal(True, 1.0)) == 5
    assert outcome_to_quality(QUIZ, TimedSignal(True, 4.0)) == 4
    assert outcome_to_quality(QUIZ, TimedSignal(True, 8.0)) == 3
    assert outcome_to_quality(QUIZ, TimedSignal(True, 20.0)) == 2
    assert outcome_to_quality(QUIZ, TimedSignal(False, 1.0)) == 0


def test_flashcard_retry_is_weak_pass():
    assert outcome_to_quality(FLASHCARD, FlashcardSignal(True, attempts=1, seconds=2)) == 5
    assert outcome_to_quality(FLASHCARD, FlashcardSignal(True, attempts=2, seconds=2)) == 1
    assert outcome_to_quality(FLASHCARD, FlashcardSignal(False)) == 0


def test_recognition_games_top_out_lower():
    assert outcome_to_quality(MATCHING, AttemptSignal(True, 1)) == 4
    assert outcome_to_quality(WORD_SEARCH, WordSearchSignal(found=True, seconds=5)) == 3
    assert outcome_to_quality(SCRAMBLE, ScrambleSignal(completed=True)) == 3


def test_unknown_game_rejected():
    with pytest.raises(ValueError, match="Unknown game type"):
        outcome_to_quality("pinball", TimedSignal(True, 1.0))


def test_wrong_signal_type_rejected():
    with pytest.raises(TypeError):
        outcome_to_quality(HANGMAN, TimedSignal(True, 1.0))


def test_signals_report_correctness():
    assert HangmanSignal(completed=True, wrong_guesses=2).is_correct
    assert not HangmanSignal(completed=False, wrong_guesses=6).is_correct
    assert ScrambleSignal(completed=True).is_correct
    assert not WordSearchSignal(found=False, seconds=3).is_correct


def test_score_caps():
    assert get_game_score_cap(QUIZ) == 10
    assert get_game_score_cap(LISTEN_CHOOSE) == 10
    assert get_game_score_cap(HANGMAN) == 15
    assert get_game_score_cap(FLASHCARD) == 15
    assert get_game_score_cap("unknown") == 15


def test_any_hangman_win_is_a_pass():
    for wrong in range(6):
        assert outcome_to_quality(HANGMAN, HangmanSignal(completed=True, wrong_guesses=wrong)) >= PASSING_QUALITY
