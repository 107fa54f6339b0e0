"""Grading for interim and post tests, and the consequences of each."""
import logging
from datetime import date, datetime
from typing import Optional

from thaivocab.db import get_connection
from thaivocab.models import (
    AnswerRecord, FlashcardProgress, InterimResult, PostTestResult, WrongWord,
)
from thaivocab.progress import bulk_upsert_progress, read_progress
from thaivocab.srs import apply_bonus, hard_reset
from thaivocab.study import record_practice_session

logger = logging.getLogger(__name__)


def grade_interim(answers: list[AnswerRecord]) -> InterimResult:
    return InterimResult(
        correct=sum(1 for a in answers if a.is_correct),
        total=len(answers),
        leech_ids=[a.question_id for a in answers if not a.is_correct],
        bonus_ids=[a.question_id for a in answers if a.is_correct],
    )


def grade_post_test(questions: list, answers: list[AnswerRecord]) -> PostTestResult:
    by_id = {q.id: q for q in questions}
    correct = sum(1 for a in answers if a.is_correct)
    wrong_words = []
    for a in answers:
        if a.is_correct:
            continue
        q = by_id.get(a.question_id)
        wrong_words.append(WrongWord(
            front=q.front_text if q else "",
            back=a.user_answer or "No answer",
            correct=q.back_text if q else "",
        ))
    score = round(correct / len(answers) * 100) if answers else 0
    return PostTestResult(
        correct=correct,
        total=len(answers),
        wrong_words=wrong_words,
        score=score,
        answers=list(answers),
    )


def apply_interim_result(
    db_path: str,
    user_id: str,
    result: InterimResult,
    today: Optional[date] = None,
) -> list[int]:
    """Hard-reset every missed card and reinforce every correct one.

    Failed rows are logged and skipped. Returns the ids that could not be
    saved.
    """
    ids = result.leech_ids + result.bonus_ids
    current = {p.flashcard_id: p for p in read_progress(db_path, user_id, ids)}

    def progress_for(card_id: int) -> FlashcardProgress:
        return current.get(card_id) or FlashcardProgress(user_id=user_id, flashcard_id=card_id)

    leeches = [hard_reset(progress_for(card_id), today) for card_id in result.leech_ids]
    bonuses = [apply_bonus(progress_for(card_id)) for card_id in result.bonus_ids]

    failed = bulk_upsert_progress(db_path, leeches)
    failed += bulk_upsert_progress(db_path, bonuses)
    logger.info(
        "Interim test for %s: %d/%d correct, %d leech(es) reset, %d bonus(es), %d failed",
        user_id, result.correct, result.total, len(leeches), len(bonuses), len(failed),
    )
    record_practice_session(
        db_path, user_id, "assessment", "interim",
        words_learned=result.correct, words_reviewed=result.total,
    )
    return failed


def record_post_test(
    db_path: str,
    user_id: str,
    result: PostTestResult,
    goal_id: Optional[str] = None,
) -> None:
    """Log the final exam. Card progress is left untouched."""
    record_practice_session(
        db_path, user_id, "assessment", "posttest",
        words_learned=result.correct, words_reviewed=result.total,
    )
    conn = get_connection(db_path)
    conn.execute(
        """INSERT INTO goal_assessments
        (user_id, goal_id, assessment_type, total_questions, correct_answers, wrong_answers, completed_at)
        VALUES (?, ?, 'posttest', ?, ?, ?, ?)""",
        (user_id, goal_id, result.total, result.correct,
         result.total - result.correct, datetime.now().isoformat()),
    )
    conn.commit()
    conn.close()
    logger.info("Post test for %s: %d%% (%d/%d)", user_id, result.score, result.correct, result.total)
