"""
QuizController - Per-section quiz attempts and scoring.

Provides:
- Answer selection while an attempt is open
- One-way submission that awards XP exactly once
- Explicit retry that never claws back awarded XP
"""

import logging
from dataclasses import dataclass

from philoreader.config import XP_PER_CORRECT_ANSWER
from philoreader.schemas import QuizAttempt, Section

from .score import ScoreAccumulator

logger = logging.getLogger(__name__)


@dataclass
class QuizResult:
    """Outcome of submitting a section's quiz."""
    section_id: str
    correct_count: int
    total: int
    score: int
    xp_awarded: int

    @property
    def percent(self) -> int:
        if self.total == 0:
            return 100
        return round(self.correct_count / self.total * 100)


class QuizController:
    """
    Track quiz attempts keyed by section ID.

    Attempts are created lazily on first interaction, so each section's quiz
    is independent of the others.
    """

    def __init__(self, score: ScoreAccumulator, attempts: dict[str, QuizAttempt] | None = None):
        self.score = score
        self.attempts: dict[str, QuizAttempt] = attempts if attempts is not None else {}

    def attempt_for(self, section_id: str) -> QuizAttempt:
        """Get (or create) the attempt for a section."""
        if section_id not in self.attempts:
            self.attempts[section_id] = QuizAttempt(section_id=section_id)
        return self.attempts[section_id]

    def is_submitted(self, section_id: str) -> bool:
        attempt = self.attempts.get(section_id)
        return attempt is not None and attempt.submitted

    # -------------------------------------------------------------------------
    # Answering
    # -------------------------------------------------------------------------

    def select_answer(self, section: Section, question_id: str, option_index: int) -> bool:
        """
        Record the reader's choice for a question.

        Returns False without changing anything once the attempt is submitted.

        Raises:
            ValueError: If the question is not in the section's quiz or the
                option index is out of range
        """
        attempt = self.attempt_for(section.id)
        if attempt.submitted:
            logger.debug(f"Ignoring answer for {question_id}: quiz {section.id} already submitted")
            return False

        question = section.get_question(question_id)
        if question is None:
            raise ValueError(f"Question {question_id!r} is not part of section {section.id!r}")
        if not 0 <= option_index < len(question.options):
            raise ValueError(
                f"Option {option_index} out of range for question {question_id!r} "
                f"({len(question.options)} options)"
            )

        attempt.answers[question_id] = option_index
        return True

    # -------------------------------------------------------------------------
    # Submission
    # -------------------------------------------------------------------------

    def submit(self, section: Section) -> QuizResult:
        """
        Grade the section's quiz and award XP.

        Unanswered questions count as incorrect. Submitting an already
        submitted attempt returns the stored result and awards nothing.
        """
        previous = self.result_for(section)
        if previous is not None:
            return previous

        attempt = self.attempt_for(section.id)
        total = len(section.quiz)
        correct = sum(
            1 for question in section.quiz
            if question.is_correct(attempt.answers.get(question.id))
        )
        score = XP_PER_CORRECT_ANSWER * correct

        # Only improvements over the best earlier attempt are paid out
        awarded = max(0, score - attempt.best_score)
        self.score.add_xp(awarded)

        attempt.submitted = True
        attempt.score = score
        attempt.correct_count = correct
        attempt.attempts += 1
        attempt.best_score = max(attempt.best_score, score)

        logger.info(f"Quiz {section.id}: {correct}/{total} correct, +{awarded} XP")
        return QuizResult(
            section_id=section.id,
            correct_count=correct,
            total=total,
            score=score,
            xp_awarded=awarded,
        )

    def result_for(self, section: Section) -> QuizResult | None:
        """Stored result of a submitted attempt (xp_awarded=0), None if open."""
        attempt = self.attempts.get(section.id)
        if attempt is None or not attempt.submitted:
            return None
        return QuizResult(
            section_id=section.id,
            correct_count=attempt.correct_count or 0,
            total=len(section.quiz),
            score=attempt.score or 0,
            xp_awarded=0,
        )

    def reset(self, section_id: str):
        """Reopen a section's quiz for another attempt. Awarded XP is kept."""
        attempt = self.attempt_for(section_id)
        attempt.answers = {}
        attempt.submitted = False
        attempt.score = None
        attempt.correct_count = None

    # -------------------------------------------------------------------------
    # Feedback
    # -------------------------------------------------------------------------

    def is_correct(self, section: Section, question_id: str) -> bool | None:
        """Per-question correctness after submission, None before it."""
        attempt = self.attempts.get(section.id)
        if attempt is None or not attempt.submitted:
            return None
        question = section.get_question(question_id)
        if question is None:
            raise ValueError(f"Question {question_id!r} is not part of section {section.id!r}")
        return question.is_correct(attempt.answers.get(question_id))
