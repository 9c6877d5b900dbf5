"""
FastAPI dependencies.

The store, repositories and explanation service live on ``app.state``; they
are created by ``create_app`` or its lifespan hook.
"""

from fastapi import Request

from quizme.domain.attempts import AttemptRepository, AttemptService, ReviewReconstructor
from quizme.domain.explanations import ExplanationService
from quizme.domain.quizzes import QuizRepository
from quizme.storage import DocumentStore


def get_store(request: Request) -> DocumentStore:
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise RuntimeError("Document store not initialized")
    return store


def get_quiz_repository(request: Request) -> QuizRepository:
    return QuizRepository(get_store(request))


def get_attempt_repository(request: Request) -> AttemptRepository:
    return AttemptRepository(get_store(request))


def get_attempt_service(request: Request) -> AttemptService:
    return AttemptService(get_quiz_repository(request), get_attempt_repository(request))


def get_review_reconstructor(request: Request) -> ReviewReconstructor:
    return ReviewReconstructor(get_attempt_repository(request), get_quiz_repository(request))


def get_explanation_service(request: Request) -> ExplanationService:
    return request.app.state.explanation_service
