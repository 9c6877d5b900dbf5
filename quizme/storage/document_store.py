"""
Document Store Interface

The quiz and attempt repositories persist plain JSON-compatible documents
through this interface. Documents are keyed by an opaque ``id`` field within a
named collection; there is no referential integrity between collections.
"""

import abc
from typing import Any, Dict, List, Optional

QUIZ_COLLECTION = "quizzes"
ATTEMPT_COLLECTION = "attempts"

Document = Dict[str, Any]


class DocumentStore(abc.ABC):
    """
    Abstract base class for document stores.

    Implementations must make each ``insert``, ``update`` and ``delete`` call
    atomic: a document is either written whole or not at all. Returned
    documents are copies; mutating them never affects stored data.
    """

    @abc.abstractmethod
    async def find(self, collection: str, filters: Optional[Dict[str, Any]] = None) -> List[Document]:
        """
        Find documents in a collection.

        Args:
            collection: Collection name
            filters: Optional top-level field equality filters

        Returns:
            Matching documents in insertion order
        """
        pass

    @abc.abstractmethod
    async def find_by_id(self, collection: str, doc_id: str) -> Optional[Document]:
        """
        Get a document by its ID.

        Returns:
            The document if found, None otherwise
        """
        pass

    @abc.abstractmethod
    async def insert(self, collection: str, document: Document) -> Document:
        """
        Insert a new document. The document must carry its ``id``.

        Raises:
            PersistenceError: If the write fails or the ID is already taken
        """
        pass

    @abc.abstractmethod
    async def update(self, collection: str, doc_id: str, changes: Document) -> Optional[Document]:
        """
        Merge ``changes`` into an existing document.

        Returns:
            The updated document, or None if no document has that ID
        """
        pass

    @abc.abstractmethod
    async def delete(self, collection: str, doc_id: str) -> bool:
        """
        Delete a document by its ID.

        Returns:
            True if the document was deleted, False otherwise
        """
        pass

    async def close(self) -> None:
        """Release any resources held by the store."""
        return None


def matches(document: Document, filters: Optional[Dict[str, Any]]) -> bool:
    """Return True when every filter field equals the document's field."""
    if not filters:
        return True
    return all(document.get(key) == value for key, value in filters.items())
