"""
Attempt domain module.

This module contains the attempt model, the scoring engine, the attempt
repository, review reconstruction and the submission service.
"""

from .model import Attempt, AttemptAnswer, StoredAttempt, DELETED_QUIZ_LABEL
from .scoring import score, percentage
from .repository import AttemptRepository
from .review import Review, ReviewItem, ReviewReconstructor
from .service import AttemptService

__all__ = [
    'Attempt',
    'AttemptAnswer',
    'StoredAttempt',
    'DELETED_QUIZ_LABEL',
    'score',
    'percentage',
    'AttemptRepository',
    'Review',
    'ReviewItem',
    'ReviewReconstructor',
    'AttemptService',
]
