"""
SQL Document Store Module

DocumentStore implementation on top of SQLAlchemy's async ORM. Each write
runs in its own transaction, so a document is either stored whole or not at
all.
"""

import copy
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from quizme.common.exceptions import PersistenceError
from quizme.database.models import DocumentRecord
from .document_store import Document, DocumentStore, matches

logger = logging.getLogger(__name__)


class SqlDocumentStore(DocumentStore):
    """
    SQLAlchemy-backed implementation of the DocumentStore.

    Filtering happens in Python after loading a collection, since JSON
    querying is dialect specific.
    """

    INSERT_ATTEMPTS = 3

    def __init__(self, session_factory: async_sessionmaker):
        """
        Initialize the store.

        Args:
            session_factory: Factory producing ``AsyncSession`` objects
        """
        self.session_factory = session_factory

    async def find(self, collection: str, filters: Optional[Dict[str, Any]] = None) -> List[Document]:
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    select(DocumentRecord)
                    .where(DocumentRecord.collection == collection)
                    .order_by(DocumentRecord.seq)
                )
                documents = [copy.deepcopy(record.body) for record in result.scalars()]
        except SQLAlchemyError as e:
            logger.error(f"Failed to read '{collection}': {e}", exc_info=True)
            raise PersistenceError(f"Could not read collection '{collection}'", e)
        return [doc for doc in documents if matches(doc, filters)]

    async def find_by_id(self, collection: str, doc_id: str) -> Optional[Document]:
        try:
            async with self.session_factory() as session:
                record = await session.get(DocumentRecord, (collection, doc_id))
                return copy.deepcopy(record.body) if record is not None else None
        except SQLAlchemyError as e:
            logger.error(f"Failed to read {collection}/{doc_id}: {e}", exc_info=True)
            raise PersistenceError(f"Could not read {collection}/{doc_id}", e)

    async def insert(self, collection: str, document: Document) -> Document:
        doc_id = document.get('id')
        if not doc_id:
            raise PersistenceError(f"Document for '{collection}' has no id")

        body = copy.deepcopy(document)
        last_error: Optional[Exception] = None
        for attempt in range(self.INSERT_ATTEMPTS):
            try:
                async with self.session_factory() as session:
                    async with session.begin():
                        session.add(DocumentRecord(
                            collection=collection,
                            id=doc_id,
                            seq=await self._next_seq(session, collection),
                            body=body,
                        ))
                break
            except IntegrityError as e:
                if await self.find_by_id(collection, doc_id) is not None:
                    raise PersistenceError(f"Duplicate id {doc_id} in '{collection}'", e)
                # Another writer took the same seq
                logger.warning(
                    f"Sequence collision inserting {collection}/{doc_id}, "
                    f"attempt {attempt + 1}/{self.INSERT_ATTEMPTS}"
                )
                last_error = e
            except SQLAlchemyError as e:
                logger.error(f"Failed to insert {collection}/{doc_id}: {e}", exc_info=True)
                raise PersistenceError(f"Could not insert {collection}/{doc_id}", e)
        else:
            raise PersistenceError(f"Could not allocate a sequence number for {collection}/{doc_id}", last_error)

        logger.debug(f"Inserted {collection}/{doc_id}")
        return copy.deepcopy(body)

    async def _next_seq(self, session: AsyncSession, collection: str) -> int:
        return await session.scalar(
            select(func.coalesce(func.max(DocumentRecord.seq), 0) + 1)
            .where(DocumentRecord.collection == collection)
        )

    async def update(self, collection: str, doc_id: str, changes: Document) -> Optional[Document]:
        changes = copy.deepcopy(changes)
        changes.pop('id', None)
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    record = await session.get(DocumentRecord, (collection, doc_id))
                    if record is None:
                        return None
                    # Assign a new dict so the JSON column is flagged dirty
                    record.body = {**record.body, **changes}
                    updated = copy.deepcopy(record.body)
        except SQLAlchemyError as e:
            logger.error(f"Failed to update {collection}/{doc_id}: {e}", exc_info=True)
            raise PersistenceError(f"Could not update {collection}/{doc_id}", e)
        return updated

    async def delete(self, collection: str, doc_id: str) -> bool:
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    record = await session.get(DocumentRecord, (collection, doc_id))
                    if record is None:
                        return False
                    await session.delete(record)
        except SQLAlchemyError as e:
            logger.error(f"Failed to delete {collection}/{doc_id}: {e}", exc_info=True)
            raise PersistenceError(f"Could not delete {collection}/{doc_id}", e)
        return True
