"""
Explanation domain module: the explanation text service client and the
per-review-session explanation cache.
"""

from .service import (
    ExplanationService,
    ExplanationServiceConfig,
    OpenAIExplanationService,
    build_prompt,
)
from .cache import (
    ExplanationCache,
    ExplanationEntry,
    ExplanationRequest,
    ExplanationState,
    ToggleResult,
    FAILED_EXPLANATION_MESSAGE,
)

__all__ = [
    'ExplanationService',
    'ExplanationServiceConfig',
    'OpenAIExplanationService',
    'build_prompt',
    'ExplanationCache',
    'ExplanationEntry',
    'ExplanationRequest',
    'ExplanationState',
    'ToggleResult',
    'FAILED_EXPLANATION_MESSAGE',
]
