"""
Attempt submission service.

Ties the lifecycle together for a stored quiz: load it, score the user's
answers, persist the attempt.
"""

import logging
from typing import Optional, Sequence

from quizme.common.exceptions import NotFoundError, ValidationError
from quizme.domain.quizzes.repository import QuizRepository
from .model import StoredAttempt
from .repository import AttemptRepository
from .scoring import score

logger = logging.getLogger(__name__)


class AttemptService:
    """Submits answers for stored quizzes."""

    def __init__(self, quizzes: QuizRepository, attempts: AttemptRepository):
        self.quizzes = quizzes
        self.attempts = attempts

    async def submit(self, quiz_id: str, user_answers: Sequence[Optional[str]]) -> StoredAttempt:
        """
        Score and save one pass through a quiz.

        Returns only after the attempt is durable, so a review can be built
        from the returned ID straight away.

        Raises:
            NotFoundError: If the quiz does not exist
            ValidationError: If the answer count is wrong or any is missing
            PersistenceError: If the attempt cannot be saved
        """
        quiz = await self.quizzes.get_by_id(quiz_id)
        if quiz is None:
            raise NotFoundError("Quiz", quiz_id)

        if len(user_answers) != len(quiz.questions):
            raise ValidationError(
                f"Expected {len(quiz.questions)} answers, got {len(user_answers)}",
                {"answers": "One answer per question is required."}
            )
        missing = [i for i, answer in enumerate(user_answers) if answer is None]
        if missing:
            raise ValidationError(
                "Please answer all questions before submitting.",
                {f"answers.{i}": "Not answered." for i in missing}
            )

        attempt = score(quiz, list(user_answers))
        return await self.attempts.save(attempt)
