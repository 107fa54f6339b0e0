"""Hangman round state."""
from thaivocab.games import HANGMAN_MAX_WRONG, HangmanSignal


class HangmanRound:
    def __init__(self, word: str, max_wrong: int = HANGMAN_MAX_WRONG):
        self.word = word
        self.max_wrong = max_wrong
        self.guessed = set()
        self.wrong_guesses = 0

    @property
    def masked(self) -> str:
        return " ".join(
            ch if not ch.isalpha() or ch.lower() in self.guessed else "_"
            for ch in self.word
        )

    @property
    def won(self) -> bool:
        return all(not ch.isalpha() or ch.lower() in self.guessed for ch in self.word)

    @property
    def lost(self) -> bool:
        return self.wrong_guesses >= self.max_wrong

    @property
    def finished(self) -> bool:
        return self.won or self.lost

    def guess(self, letter: str) -> bool:
        """Returns True if the letter is in the word. Repeated guesses are free."""
        letter = letter.lower()
        if len(letter) != 1 or not letter.isalpha():
            raise ValueError(f"Guess a single letter, got {letter!r}")
        if self.finished:
            raise ValueError("Round is already over")
        if letter in self.guessed:
            return letter in self.word.lower()
        self.guessed.add(letter)
        if letter in self.word.lower():
            return True
        self.wrong_guesses += 1
        return False

    @property
    def signal(self) -> HangmanSignal:
        return HangmanSignal(completed=self.won, wrong_guesses=self.wrong_guesses)
