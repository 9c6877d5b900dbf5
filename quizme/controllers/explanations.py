"""
Explanation controller.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends

from quizme.common.exceptions import ValidationError
from quizme.dependencies import get_explanation_service
from quizme.domain.explanations import ExplanationService
from quizme.schemas import ExplanationRequestIn

logger = logging.getLogger(__name__)

router = APIRouter()

MISSING_DETAILS_MESSAGE = "Missing question details: questionText, correctAnswer, or userAnswer."


@router.post("/explain")
async def explain(
    request: ExplanationRequestIn,
    service: ExplanationService = Depends(get_explanation_service)
) -> Dict[str, Any]:
    """Generate an explanation for one answered question."""
    missing = {
        name: f"{name} is required."
        for name in ("questionText", "correctAnswer", "userAnswer")
        if not getattr(request, name)
    }
    if missing:
        raise ValidationError(MISSING_DETAILS_MESSAGE, missing)

    explanation = await service.generate(
        request.questionText,
        request.correctAnswer,
        request.userAnswer,
        request.options,
    )
    return {"explanation": explanation}
