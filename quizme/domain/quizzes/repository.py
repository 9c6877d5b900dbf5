"""
Quiz Repository Module

CRUD access to quizzes on top of a DocumentStore. Every quiz that reaches the
store has passed ``Quiz.validate``.
"""

import logging
import uuid
from typing import Any, Dict, List, Optional

from quizme.common.exceptions import NotFoundError
from quizme.storage.document_store import DocumentStore, QUIZ_COLLECTION
from .model import Quiz, format_timestamp, utcnow

logger = logging.getLogger(__name__)

_MUTABLE_FIELDS = ('category', 'questions')


class QuizRepository:
    """Repository for quiz documents."""

    def __init__(self, store: DocumentStore):
        self.store = store

    async def create(self, data: Dict[str, Any]) -> Quiz:
        """
        Validate and store a new quiz.

        Args:
            data: Quiz document (``category`` and ``questions``)

        Returns:
            The stored quiz with its generated ID and timestamps

        Raises:
            ValidationError: If the quiz is invalid
            PersistenceError: If the write fails
        """
        quiz = Quiz.from_dict({key: data.get(key) for key in _MUTABLE_FIELDS})
        quiz.validate()

        now = utcnow()
        quiz.quiz_id = uuid.uuid4().hex
        quiz.created_at = now
        quiz.updated_at = now

        await self.store.insert(QUIZ_COLLECTION, quiz.to_dict())
        logger.info(f"Created quiz {quiz.quiz_id} ({quiz.category}, {len(quiz.questions)} questions)")
        return quiz

    async def list_all(self) -> List[Quiz]:
        """Return every stored quiz in creation order."""
        documents = await self.store.find(QUIZ_COLLECTION)
        return [Quiz.from_dict(document) for document in documents]

    async def get_by_id(self, quiz_id: str) -> Optional[Quiz]:
        """
        Get a quiz by its ID.

        Returns:
            The Quiz if found, None otherwise
        """
        document = await self.store.find_by_id(QUIZ_COLLECTION, quiz_id)
        return Quiz.from_dict(document) if document is not None else None

    async def update(self, quiz_id: str, changes: Dict[str, Any]) -> Quiz:
        """
        Apply a partial update and re-validate the result.

        Raises:
            NotFoundError: If the quiz does not exist
            ValidationError: If the updated quiz would be invalid
        """
        current = await self.store.find_by_id(QUIZ_COLLECTION, quiz_id)
        if current is None:
            raise NotFoundError("Quiz", quiz_id)

        patch = {key: changes[key] for key in _MUTABLE_FIELDS if key in changes}
        candidate = Quiz.from_dict({**current, **patch})
        candidate.validate()

        patch = {key: value for key, value in candidate.to_dict().items() if key in patch}
        patch['updatedAt'] = format_timestamp(utcnow())
        updated = await self.store.update(QUIZ_COLLECTION, quiz_id, patch)
        if updated is None:
            raise NotFoundError("Quiz", quiz_id)

        logger.info(f"Updated quiz {quiz_id}")
        return Quiz.from_dict(updated)

    async def delete(self, quiz_id: str) -> bool:
        """
        Delete a quiz. Attempts that reference it are left untouched.

        Returns:
            True if the quiz was deleted, False if it did not exist
        """
        deleted = await self.store.delete(QUIZ_COLLECTION, quiz_id)
        if deleted:
            logger.info(f"Deleted quiz {quiz_id}")
        return deleted
