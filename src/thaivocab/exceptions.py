"""
Custom exceptions for thaivocab.
"""


class ThaiVocabError(Exception):
    """Base exception for all thaivocab errors."""
    pass


class ProgressStoreError(ThaiVocabError):
    """Raised when reading or writing review progress fails."""
    pass


class NotFoundError(ThaiVocabError):
    """Raised when a requested flashcard does not exist."""
    pass


class SessionStateError(ThaiVocabError):
    """Raised on an illegal test-session transition."""
    pass
