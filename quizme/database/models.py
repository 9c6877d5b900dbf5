"""
Database models.

Quizzes and attempts are stored as JSON documents in a single table, keyed by
collection name and document id. Attempts reference quizzes only through a
field inside their body, so deleting a quiz never touches its attempts.
"""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, JSON, String, UniqueConstraint

from quizme.database.base import ModelBase


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DocumentRecord(ModelBase):
    """One stored document."""

    __tablename__ = "documents"
    __table_args__ = (
        UniqueConstraint("collection", "seq", name="uq_documents_collection_seq"),
    )

    collection = Column(String(64), primary_key=True)
    id = Column(String(64), primary_key=True)
    # Insertion order within a collection
    seq = Column(Integer, nullable=False, index=True)
    body = Column(JSON, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)
