"""
Shared infrastructure for the QuizMe backend: logging and the error taxonomy.
"""

from quizme.common.exceptions import (
    BaseError,
    ValidationError,
    NotFoundError,
    ReferencedEntityMissing,
    PersistenceError,
    ServiceError,
)
from quizme.common.logger import app_logger, log_execution_time

__all__ = [
    'BaseError',
    'ValidationError',
    'NotFoundError',
    'ReferencedEntityMissing',
    'PersistenceError',
    'ServiceError',
    'app_logger',
    'log_execution_time',
]
