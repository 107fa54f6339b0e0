# tests/test_hangman.py
import pytest

from thaivocab.games import HANGMAN, outcome_to_quality
from thaivocab.hangman import HangmanRound


def test_masked_word():
    game = HangmanRound("ice cream")
    assert game.masked == "_ _ _   _ _ _ _ _"
    game.guess("e")
    assert game.masked == "_ _ e   _ _ e _ _"


def test_perfect_game():
    game = HangmanRound("cat")
    for letter in "cat":
        assert game.guess(letter)
    assert game.won
    assert game.finished
    assert outcome_to_quality(HANGMAN, game.signal) == 5


def test_wrong_guesses_counted():
    game = HangmanRound("cat")
    assert not game.guess("x")
    assert not game.guess("y")
    for letter in "cat":
        game.guess(letter)
    assert game.wrong_guesses == 2
    assert outcome_to_quality(HANGMAN, game.signal) == 2


def test_repeated_guess_is_free():
    game = HangmanRound("cat")
    game.guess("x")
    game.guess("x")
    game.guess("C")
    game.guess("c")
    assert game.wrong_guesses == 1


def test_lost_game():
    game = HangmanRound("cat")
    for letter in "bdefgh":
        game.guess(letter)
    assert game.lost
    assert not game.won
    assert not game.signal.is_correct
    assert outcome_to_quality(HANGMAN, game.signal) == 0


def test_invalid_guess():
    game = HangmanRound("cat")
    with pytest.raises(ValueError):
        game.guess("ab")
    with pytest.raises(ValueError):
        game.guess("1")


def test_no_guesses_after_finish():
    game = HangmanRound("a")
    game.guess("a")
    with pytest.raises(ValueError):
        game.guess("b")
