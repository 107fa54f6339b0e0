"""Tuning constants for scheduling, classification and tests."""
import os
from pathlib import Path

DEFAULT_DB_PATH = os.environ.get(
    "THAIVOCAB_DB", str(Path.home() / ".thaivocab" / "vocab.db")
)
DEFAULT_USER = "local"

# Card state bounds
DEFAULT_EASINESS = 2.5
MIN_EASINESS = 1.3
MAX_SRS_SCORE = 15
MAX_SRS_LEVEL = 10

# A review at or above this quality counts as a pass
PASSING_QUALITY = 2
# Passes at or above this quality advance the level
LEVEL_UP_QUALITY = 3
# Failures demote the level once the score falls to this value or lower
DEMOTE_SCORE_THRESHOLD = 5

# Quality (0-5) -> srs_score delta
SCORE_DELTAS = {5: 2, 4: 2, 3: 1, 2: 1, 1: 0, 0: -3}

# Deadlines shorter than this compress intervals
DEADLINE_COMPRESSION_DAYS = 7

# Weak/mastered thresholds
WEAK_SCORE_THRESHOLD = 5
WEAK_LEVEL_THRESHOLD = 3

# Interim test
INTERIM_MAX_QUESTIONS = 40
INTERIM_WEAK_RATIO = 0.6
INTERIM_TIME_LIMIT = 5
INTERIM_BONUS_SCORE = 2
INTERIM_BONUS_LEVEL = 1

# Post test
POST_TEST_MAX_QUESTIONS = 60
POST_TEST_TIME_LIMIT = 10
POST_TEST_RETEST_MIN_LEVEL = 3

# Question construction
QUESTION_BLOCK_SIZE = 20
DISTRACTOR_COUNT = 3
DISTRACTOR_MAX_ATTEMPTS = 20

# Weak-word ranking
WEAK_WORD_MIN_DIFFICULTY = 0.3
