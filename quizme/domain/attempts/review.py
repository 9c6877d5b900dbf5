"""
Review Reconstruction Module

Rebuilds a stored attempt for display: the live quiz for structure and
options, plus the attempt's own answer snapshot for what the user actually
answered. Correctness shown in a review is always recomputed with the current
answer normalizer; the flag recorded at submission is kept alongside it.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from quizme.common.exceptions import NotFoundError, ReferencedEntityMissing
from quizme.common.logger import log_execution_time
from quizme.domain.quizzes.model import Question, Quiz
from quizme.domain.quizzes.normalizer import answers_match
from quizme.domain.quizzes.repository import QuizRepository
from .model import AttemptAnswer, StoredAttempt
from .repository import AttemptRepository
from .scoring import percentage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReviewItem:
    """One question of a review."""
    index: int
    question_number: int
    question_string: str
    user_answer: str
    correct_answer: str
    is_correct: bool
    recorded_is_correct: bool
    options: Optional[Tuple[str, ...]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'index': self.index,
            'questionNumber': self.question_number,
            'questionString': self.question_string,
            'userAnswer': self.user_answer,
            'correctAnswer': self.correct_answer,
            'isCorrect': self.is_correct,
            'recordedIsCorrect': self.recorded_is_correct,
            'options': list(self.options) if self.options is not None else None,
        }


@dataclass(frozen=True)
class Review:
    """
    A reconstructed attempt.

    ``quiz`` is None only in the degraded form carried by
    ``ReferencedEntityMissing``.
    """
    attempt: StoredAttempt
    quiz: Optional[Quiz]
    items: Tuple[ReviewItem, ...]

    @property
    def correct_count(self) -> int:
        return sum(1 for item in self.items if item.is_correct)

    @property
    def recomputed_percentage(self) -> int:
        return percentage(self.correct_count, len(self.items)) if self.items else 0

    @property
    def has_drift(self) -> bool:
        """True when today's normalizer disagrees with the stored score."""
        return self.recomputed_percentage != self.attempt.result_percentage

    def to_dict(self) -> Dict[str, Any]:
        return {
            'attempt': self.attempt.to_dict(),
            'quiz': self.quiz.to_dict() if self.quiz is not None else None,
            'quizMissing': self.quiz is None,
            'answers': [item.to_dict() for item in self.items],
            'correctCount': self.correct_count,
            'total': len(self.items),
            'resultPercentage': self.attempt.result_percentage,
            'recomputedPercentage': self.recomputed_percentage,
            'hasDrift': self.has_drift,
        }


def build_items(answers: Tuple[AttemptAnswer, ...], quiz: Optional[Quiz]) -> Tuple[ReviewItem, ...]:
    """
    Pair each answer snapshot with its question's options, when known.

    Questions are matched by question number, falling back to position.
    """
    by_number: Dict[int, Question] = {}
    if quiz is not None:
        for question in quiz.questions:
            by_number.setdefault(question.question_number, question)

    items: List[ReviewItem] = []
    for index, answer in enumerate(answers):
        question = by_number.get(answer.question_number)
        if question is None and quiz is not None and index < len(quiz.questions):
            question = quiz.questions[index]
        items.append(ReviewItem(
            index=index,
            question_number=answer.question_number,
            question_string=answer.question_string,
            user_answer=answer.user_answer,
            correct_answer=answer.correct_answer,
            is_correct=answers_match(answer.user_answer, answer.correct_answer),
            recorded_is_correct=answer.is_correct,
            options=tuple(question.options) if question is not None else None,
        ))
    return tuple(items)


class ReviewReconstructor:
    """Loads attempts and their quizzes for review."""

    def __init__(self, attempts: AttemptRepository, quizzes: QuizRepository):
        self.attempts = attempts
        self.quizzes = quizzes

    @log_execution_time(logger)
    async def build_review(self, attempt_id: str) -> Review:
        """
        Reconstruct an attempt for review.

        Raises:
            NotFoundError: If the attempt does not exist
            ReferencedEntityMissing: If the attempt exists but its quiz was
                deleted. ``partial`` holds a quiz-less ``Review`` built from
                the snapshot alone.
        """
        attempt = await self.attempts.get_by_id(attempt_id)
        if attempt is None:
            raise NotFoundError("Attempt", attempt_id)

        quiz = await self.quizzes.get_by_id(attempt.quiz_id)
        if quiz is None:
            logger.warning(f"Attempt {attempt_id} references deleted quiz {attempt.quiz_id}")
            raise ReferencedEntityMissing(
                "Quiz",
                attempt.quiz_id,
                referenced_by=attempt_id,
                partial=Review(attempt=attempt, quiz=None, items=build_items(attempt.answers, None)),
            )

        review = Review(attempt=attempt, quiz=quiz, items=build_items(attempt.answers, quiz))
        if review.has_drift:
            logger.warning(
                f"Attempt {attempt_id} stored {attempt.result_percentage}% "
                f"but rescoring gives {review.recomputed_percentage}%"
            )
        return review
