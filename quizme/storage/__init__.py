"""
Storage module: the document store interface and its implementations.
"""

from .document_store import DocumentStore, QUIZ_COLLECTION, ATTEMPT_COLLECTION
from .memory_store import MemoryDocumentStore
from .sql_store import SqlDocumentStore

__all__ = [
    'DocumentStore',
    'MemoryDocumentStore',
    'SqlDocumentStore',
    'QUIZ_COLLECTION',
    'ATTEMPT_COLLECTION',
]
