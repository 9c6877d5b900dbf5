"""
Attempt controller.

Records attempts scored by the client, lists them for the results tab and
serves reviews.
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, status

from quizme.common.exceptions import NotFoundError, ReferencedEntityMissing
from quizme.dependencies import get_attempt_repository, get_review_reconstructor
from quizme.domain.attempts import Attempt, AttemptRepository, ReviewReconstructor
from quizme.schemas import AttemptCreateRequest

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_attempt(
    request: AttemptCreateRequest,
    attempts: AttemptRepository = Depends(get_attempt_repository)
) -> Dict[str, Any]:
    """Store an attempt; a missing quizId, resultPercentage or answers is a 400."""
    attempt = Attempt.from_dict(request.model_dump())
    stored = await attempts.save(attempt)
    return stored.to_dict()


@router.get("")
async def list_attempts(attempts: AttemptRepository = Depends(get_attempt_repository)) -> List[Dict[str, Any]]:
    return [attempt.to_dict() for attempt in await attempts.list_all()]


@router.get("/{attempt_id}")
async def get_attempt(
    attempt_id: str,
    attempts: AttemptRepository = Depends(get_attempt_repository)
) -> Dict[str, Any]:
    attempt = await attempts.get_by_id(attempt_id)
    if attempt is None:
        raise NotFoundError("Attempt", attempt_id)
    return attempt.to_dict()


@router.get("/{attempt_id}/review")
async def review_attempt(
    attempt_id: str,
    reviews: ReviewReconstructor = Depends(get_review_reconstructor)
) -> Dict[str, Any]:
    """
    Review an attempt.

    When the quiz has been deleted the review falls back to the attempt's own
    snapshot, with ``quiz`` null and ``quizMissing`` true.
    """
    try:
        review = await reviews.build_review(attempt_id)
    except ReferencedEntityMissing as e:
        logger.info(f"Serving snapshot-only review for attempt {attempt_id}")
        review = e.partial
    return review.to_dict()
