"""
Attempt Repository Module

Persists and retrieves immutable attempt records. Attempts are only ever
inserted; there is no update or delete path.
"""

import logging
import uuid
from dataclasses import replace
from datetime import datetime
from typing import Callable, Dict, List, Optional

from quizme.common.exceptions import PersistenceError, ValidationError
from quizme.common.logger import log_execution_time
from quizme.domain.quizzes.model import utcnow
from quizme.storage.document_store import ATTEMPT_COLLECTION, QUIZ_COLLECTION, DocumentStore
from .model import DELETED_QUIZ_LABEL, Attempt, StoredAttempt
from .scoring import percentage

logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = "Missing required attempt data (quizId, resultPercentage, or answers)."


class AttemptRepository:
    """Repository for attempt documents."""

    def __init__(self, store: DocumentStore, clock: Callable[[], datetime] = utcnow):
        """
        Initialize the repository.

        Args:
            store: Document store holding the attempts and quizzes collections
            clock: Source of creation timestamps
        """
        self.store = store
        self.clock = clock

    @staticmethod
    def validate(attempt: Attempt) -> None:
        """
        Check an attempt before it is written.

        Raises:
            ValidationError: If a required field is missing or the stored
                percentage disagrees with the answers
        """
        missing = {
            name: f"{name} is required."
            for name, value in (
                ('quizId', attempt.quiz_id),
                ('resultPercentage', attempt.result_percentage),
                ('answers', attempt.answers),
            )
            if value is None or value == ""
        }
        if missing:
            raise ValidationError(MISSING_FIELDS_MESSAGE, missing)

        errors: Dict[str, str] = {}
        value = attempt.result_percentage
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not 0 <= value <= 100:
            errors['resultPercentage'] = "resultPercentage must be a number between 0 and 100."
        if not attempt.answers:
            errors['answers'] = "An attempt must contain at least one answer."
        if errors:
            raise ValidationError(f"Invalid attempt: {next(iter(errors.values()))}", errors)

        for index, answer in enumerate(attempt.answers):
            if answer.question_string is None or answer.user_answer is None \
                    or answer.correct_answer is None or not isinstance(answer.is_correct, bool):
                errors[f"answers.{index}"] = "Answer snapshot is incomplete."
        if errors:
            raise ValidationError("Invalid attempt: answer snapshot is incomplete.", errors)

        expected = percentage(attempt.correct_count, len(attempt.answers))
        if value != expected:
            raise ValidationError(
                f"resultPercentage {value} does not match the answers ({expected})",
                {'resultPercentage': f"Expected {expected}."}
            )

    @log_execution_time(logger)
    async def save(self, attempt: Attempt) -> StoredAttempt:
        """
        Persist an attempt.

        Assigns the identity and creation timestamp, then writes the whole
        document, embedded answers included, in one store insert.

        Raises:
            ValidationError: If the attempt is incomplete or inconsistent
            PersistenceError: If the store write fails
        """
        self.validate(attempt)

        stored = StoredAttempt(
            attempt_id=uuid.uuid4().hex,
            quiz_id=attempt.quiz_id,
            result_percentage=int(attempt.result_percentage),
            answers=tuple(attempt.answers),
            created_at=self.clock(),
        )
        await self.store.insert(ATTEMPT_COLLECTION, stored.to_dict())
        logger.info(
            f"Saved attempt {stored.attempt_id} for quiz {stored.quiz_id}: "
            f"{stored.result_percentage}%"
        )
        return stored

    async def get_by_id(self, attempt_id: str) -> Optional[StoredAttempt]:
        """
        Get an attempt by its ID.

        Returns:
            The StoredAttempt if found, None otherwise
        """
        document = await self.store.find_by_id(ATTEMPT_COLLECTION, attempt_id)
        return StoredAttempt.from_dict(document) if document is not None else None

    @log_execution_time(logger)
    async def list_all(self) -> List[StoredAttempt]:
        """
        List every attempt, newest first, labelled with its quiz's category.

        A quiz that has been deleted, or whose lookup fails, is labelled
        ``DELETED_QUIZ_LABEL``; listing itself never fails on enrichment.
        """
        documents = await self.store.find(ATTEMPT_COLLECTION)
        attempts = [StoredAttempt.from_dict(document) for document in documents]
        # Stable sort keeps insertion order for equal timestamps, so reverse that first
        attempts.reverse()
        attempts.sort(key=lambda attempt: attempt.created_at, reverse=True)

        labels: Dict[str, str] = {}
        for quiz_id in {attempt.quiz_id for attempt in attempts}:
            labels[quiz_id] = await self._quiz_label(quiz_id)

        return [replace(attempt, quiz_label=labels[attempt.quiz_id]) for attempt in attempts]

    async def _quiz_label(self, quiz_id: str) -> str:
        try:
            quiz = await self.store.find_by_id(QUIZ_COLLECTION, quiz_id)
        except PersistenceError as e:
            logger.warning(f"Could not look up quiz {quiz_id} for attempt listing: {e}")
            return DELETED_QUIZ_LABEL
        if quiz is None or not (quiz.get('category') or '').strip():
            return DELETED_QUIZ_LABEL
        return quiz['category']
