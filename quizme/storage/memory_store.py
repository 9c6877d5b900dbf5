"""
Memory Document Store Module

This module provides an in-memory implementation of the DocumentStore
interface for development and testing purposes.
"""

import asyncio
import copy
import logging
from typing import Any, Dict, List, Optional

from quizme.common.exceptions import PersistenceError
from .document_store import Document, DocumentStore, matches

logger = logging.getLogger(__name__)


class MemoryDocumentStore(DocumentStore):
    """
    In-memory implementation of the DocumentStore.

    Writes are serialized with an asyncio lock, and documents are deep-copied
    on the way in and out so callers never share state with the store.
    """

    def __init__(self, initial_data: Optional[Dict[str, List[Document]]] = None):
        """
        Initialize the store with optional initial data.

        Args:
            initial_data: Optional mapping of collection name to documents
        """
        self._collections: Dict[str, Dict[str, Document]] = {}
        self._lock = asyncio.Lock()

        if initial_data:
            for collection, documents in initial_data.items():
                bucket = self._collections.setdefault(collection, {})
                for document in documents:
                    bucket[document['id']] = copy.deepcopy(document)

    async def find(self, collection: str, filters: Optional[Dict[str, Any]] = None) -> List[Document]:
        bucket = self._collections.get(collection, {})
        return [copy.deepcopy(doc) for doc in bucket.values() if matches(doc, filters)]

    async def find_by_id(self, collection: str, doc_id: str) -> Optional[Document]:
        document = self._collections.get(collection, {}).get(doc_id)
        return copy.deepcopy(document) if document is not None else None

    async def insert(self, collection: str, document: Document) -> Document:
        doc_id = document.get('id')
        if not doc_id:
            raise PersistenceError(f"Document for '{collection}' has no id")

        # Copy before taking the lock so a failing copy never leaves a partial write
        stored = copy.deepcopy(document)
        async with self._lock:
            bucket = self._collections.setdefault(collection, {})
            if doc_id in bucket:
                raise PersistenceError(f"Duplicate id {doc_id} in '{collection}'")
            bucket[doc_id] = stored
        logger.debug(f"Inserted {collection}/{doc_id}")
        return copy.deepcopy(stored)

    async def update(self, collection: str, doc_id: str, changes: Document) -> Optional[Document]:
        changes = copy.deepcopy(changes)
        changes.pop('id', None)
        async with self._lock:
            bucket = self._collections.get(collection, {})
            current = bucket.get(doc_id)
            if current is None:
                return None
            updated = {**current, **changes}
            bucket[doc_id] = updated
        return copy.deepcopy(updated)

    async def delete(self, collection: str, doc_id: str) -> bool:
        async with self._lock:
            bucket = self._collections.get(collection, {})
            if doc_id in bucket:
                del bucket[doc_id]
                return True
        return False

    def clear(self) -> None:
        """
        Clear all collections.

        This method is specific to the memory implementation and not part of
        the DocumentStore interface.
        """
        self._collections.clear()
