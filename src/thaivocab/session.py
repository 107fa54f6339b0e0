"""Timed test-taking sessions split into blocks with breaks in between."""
import logging
from typing import Callable, Optional

from thaivocab.assessment import grade_interim, grade_post_test
from thaivocab.config import INTERIM_TIME_LIMIT, POST_TEST_TIME_LIMIT, QUESTION_BLOCK_SIZE
from thaivocab.exceptions import SessionStateError
from thaivocab.models import AnswerRecord, TestQuestion

logger = logging.getLogger(__name__)

NOT_STARTED = "not_started"
IN_SET = "in_set"
BREAK = "break"
COMPLETED = "completed"
CANCELLED = "cancelled"


class TestSession:
    """Drives one sitting of a test.

    Answers are collected in a plain list; once its length matches the
    number of questions the session grades itself and calls
    ``on_complete`` exactly once. A cancelled session never grades.
    """

    __test__ = False
    time_limit = INTERIM_TIME_LIMIT

    def __init__(
        self,
        questions: list[TestQuestion],
        on_complete: Optional[Callable] = None,
        time_limit: Optional[float] = None,
        block_size: int = QUESTION_BLOCK_SIZE,
    ):
        if block_size < 1:
            raise ValueError("block_size must be at least 1")
        self.questions = list(questions)
        self.on_complete = on_complete
        if time_limit is not None:
            self.time_limit = time_limit
        self.block_size = block_size
        self.state = NOT_STARTED
        self.set_index = 0
        self.question_index = 0
        self.answers: list[AnswerRecord] = []
        self.result = None
        self._finalized = False

    @property
    def total_sets(self) -> int:
        return -(-len(self.questions) // self.block_size)

    @property
    def global_index(self) -> int:
        return self.set_index * self.block_size + self.question_index

    @property
    def current_question(self) -> Optional[TestQuestion]:
        if self.state != IN_SET:
            return None
        return self.questions[self.global_index]

    @property
    def questions_in_current_set(self) -> int:
        start = self.set_index * self.block_size
        return len(self.questions[start:start + self.block_size])

    def start(self) -> None:
        if self.state != NOT_STARTED:
            raise SessionStateError(f"Cannot start a session that is {self.state}")
        self.state = IN_SET
        logger.debug("Session started with %d question(s)", len(self.questions))
        if not self.questions:
            self._finalize()

    def answer(self, option: Optional[str], elapsed: Optional[float] = None) -> AnswerRecord:
        """Record the learner's choice for the current question.

        ``None`` means the timer ran out; so does an ``elapsed`` time over
        the limit. Both count as a wrong answer.
        """
        question = self.current_question
        if question is None:
            raise SessionStateError(f"No question to answer while {self.state}")
        if elapsed is not None and elapsed > self.time_limit:
            option = None
        record = AnswerRecord(
            question_id=question.id,
            is_correct=option is not None and option == question.correct_answer,
            user_answer=option,
            is_weak=question.is_weak,
        )
        self.answers.append(record)
        self._advance()
        return record

    def time_out(self) -> AnswerRecord:
        return self.answer(None)

    def continue_after_break(self) -> None:
        if self.state != BREAK:
            raise SessionStateError(f"No break to continue from while {self.state}")
        self.set_index += 1
        self.question_index = 0
        self.state = IN_SET

    def cancel(self) -> None:
        """Abandon the session; nothing answered so far is graded."""
        if self.state == COMPLETED:
            raise SessionStateError("Session already completed")
        self.state = CANCELLED
        self.answers = []
        logger.info("Session cancelled before completion")

    def _advance(self) -> None:
        if len(self.answers) == len(self.questions):
            self._finalize()
        elif self.question_index + 1 >= self.questions_in_current_set:
            self.state = BREAK
        else:
            self.question_index += 1

    def _finalize(self) -> None:
        if self._finalized:
            return
        self._finalized = True
        self.state = COMPLETED
        self.result = self.grade()
        if self.on_complete is not None:
            self.on_complete(self.result)

    def grade(self):
        raise NotImplementedError


class InterimTestSession(TestSession):
    time_limit = INTERIM_TIME_LIMIT

    def grade(self):
        return grade_interim(self.answers)


class PostTestSession(TestSession):
    time_limit = POST_TEST_TIME_LIMIT

    def grade(self):
        return grade_post_test(self.questions, self.answers)
