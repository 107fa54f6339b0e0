"""Question-set construction for interim and post tests."""
import logging
import random
from typing import Optional

from thaivocab.config import (
    DISTRACTOR_COUNT, DISTRACTOR_MAX_ATTEMPTS, INTERIM_MAX_QUESTIONS,
    INTERIM_WEAK_RATIO, POST_TEST_MAX_QUESTIONS, POST_TEST_RETEST_MIN_LEVEL,
)
from thaivocab.models import PoolCard, TestQuestion
from thaivocab.review import is_weak, partition

logger = logging.getLogger(__name__)

POST_TEST_MODES = ("all", "retest")


def generate_distractors(
    card: PoolCard,
    pool: list[PoolCard],
    rng: random.Random,
    count: int = DISTRACTOR_COUNT,
    max_attempts: int = DISTRACTOR_MAX_ATTEMPTS,
) -> list[str]:
    """Pick up to ``count`` distinct wrong answers from the pool.

    Random draws come first; if they run out of attempts the rest of the
    pool is scanned in order. A small pool yields fewer distractors.
    """
    correct = card.flashcard.back_text
    distractors = []

    def usable(other: PoolCard) -> bool:
        back = other.flashcard.back_text
        return other.id != card.id and back != correct and back not in distractors

    attempts = 0
    while pool and len(distractors) < count and attempts < max_attempts:
        other = pool[rng.randrange(len(pool))]
        if usable(other):
            distractors.append(other.flashcard.back_text)
        attempts += 1

    if len(distractors) < count:
        for other in pool:
            if len(distractors) >= count:
                break
            if usable(other):
                distractors.append(other.flashcard.back_text)

    if len(distractors) < count:
        logger.warning(
            "Only %d distractor(s) available for card %s", len(distractors), card.id
        )
    return distractors


def build_question(card: PoolCard, pool: list[PoolCard], rng: random.Random) -> TestQuestion:
    options = [card.flashcard.back_text] + generate_distractors(card, pool, rng)
    rng.shuffle(options)
    return TestQuestion(
        id=card.id,
        front_text=card.flashcard.front_text,
        back_text=card.flashcard.back_text,
        options=options,
        correct_answer=card.flashcard.back_text,
        is_weak=is_weak(card.progress),
        part_of_speech=card.flashcard.part_of_speech,
    )


def interim_targets(question_count: int, pool_size: int) -> tuple[int, int]:
    """(weak, mastered) question targets before availability caps."""
    total = max(0, min(question_count, INTERIM_MAX_QUESTIONS, pool_size))
    weak_target = round(total * INTERIM_WEAK_RATIO)
    return weak_target, total - weak_target


def build_interim_test(
    pool: list[PoolCard],
    question_count: int = INTERIM_MAX_QUESTIONS,
    rng: Optional[random.Random] = None,
) -> list[TestQuestion]:
    """Build an interim test mixing weak and mastered cards 60/40.

    A bucket short of its target is not topped up from the other one, so
    the test may be shorter than requested. Weakest cards are taken first;
    mastered cards are sampled at random.
    """
    rng = rng or random.Random()
    weak, mastered = partition(pool)
    weak_target, mastered_target = interim_targets(question_count, len(pool))

    weak.sort(key=lambda c: (c.progress.srs_score, c.progress.srs_level))
    selected = weak[:weak_target] + rng.sample(mastered, min(mastered_target, len(mastered)))

    questions = [build_question(card, pool, rng) for card in selected]
    rng.shuffle(questions)
    logger.info(
        "Built interim test: %d weak + %d mastered from a pool of %d",
        min(weak_target, len(weak)), len(selected) - min(weak_target, len(weak)), len(pool),
    )
    return questions


def build_post_test(
    pool: list[PoolCard],
    mode: str = "retest",
    rng: Optional[random.Random] = None,
    max_questions: int = POST_TEST_MAX_QUESTIONS,
) -> list[TestQuestion]:
    """Build the final exam.

    ``retest`` (the default) only covers cards the learner already knew
    well; ``all`` covers the whole pool. Large pools are sampled down to ``max_questions``.
    Distractors are drawn from the selected cards before sampling.
    """
    if mode not in POST_TEST_MODES:
        raise ValueError(f"Unknown post-test mode: {mode}")
    rng = rng or random.Random()
    if mode == "retest":
        pool = [c for c in pool if c.progress.srs_level >= POST_TEST_RETEST_MIN_LEVEL]
    selected = list(pool)
    if len(selected) > max_questions:
        selected = rng.sample(selected, max_questions)
    return [build_question(card, pool, rng) for card in selected]
