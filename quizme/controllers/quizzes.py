"""
Quiz controller.

CRUD over quizzes plus the two quiz-taking views: the answer screen
presentation (options shuffled per question) and flashcards (questions
shuffled). Submitting raw answers scores and stores an attempt.
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Response, status

from quizme.common.exceptions import NotFoundError
from quizme.dependencies import get_attempt_service, get_quiz_repository
from quizme.domain.attempts import AttemptService
from quizme.domain.quizzes import AnswerSheet, FlashcardDeck, Quiz, QuizRepository
from quizme.schemas import QuizCreateRequest, QuizUpdateRequest, SubmitAnswersRequest

logger = logging.getLogger(__name__)

router = APIRouter()


async def _load(quiz_id: str, quizzes: QuizRepository) -> Quiz:
    quiz = await quizzes.get_by_id(quiz_id)
    if quiz is None:
        raise NotFoundError("Quiz", quiz_id)
    return quiz


@router.get("")
async def list_quizzes(quizzes: QuizRepository = Depends(get_quiz_repository)) -> List[Dict[str, Any]]:
    return [quiz.to_dict() for quiz in await quizzes.list_all()]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_quiz(
    request: QuizCreateRequest,
    quizzes: QuizRepository = Depends(get_quiz_repository)
) -> Dict[str, Any]:
    """Create a quiz; invalid quizzes are rejected with 400."""
    quiz = await quizzes.create(request.model_dump())
    return quiz.to_dict()


@router.get("/{quiz_id}")
async def get_quiz(quiz_id: str, quizzes: QuizRepository = Depends(get_quiz_repository)) -> Dict[str, Any]:
    return (await _load(quiz_id, quizzes)).to_dict()


@router.patch("/{quiz_id}")
async def update_quiz(
    quiz_id: str,
    request: QuizUpdateRequest,
    quizzes: QuizRepository = Depends(get_quiz_repository)
) -> Dict[str, Any]:
    quiz = await quizzes.update(quiz_id, request.model_dump(exclude_unset=True))
    return quiz.to_dict()


@router.delete("/{quiz_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_quiz(quiz_id: str, quizzes: QuizRepository = Depends(get_quiz_repository)) -> Response:
    """Delete a quiz. Attempts that reference it are kept."""
    if not await quizzes.delete(quiz_id):
        raise NotFoundError("Quiz", quiz_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{quiz_id}/presentation")
async def present_quiz(quiz_id: str, quizzes: QuizRepository = Depends(get_quiz_repository)) -> Dict[str, Any]:
    """The quiz as shown on the answer screen, options freshly shuffled."""
    quiz = await _load(quiz_id, quizzes)
    sheet = AnswerSheet(quiz)
    return {
        'id': quiz.quiz_id,
        'category': quiz.category,
        'questions': [
            {
                'index': index,
                'questionNumber': question.question_number,
                'questionString': question.question_string,
                'options': sheet.options[index],
            }
            for index, question in enumerate(quiz.questions)
        ],
    }


@router.get("/{quiz_id}/flashcards")
async def quiz_flashcards(quiz_id: str, quizzes: QuizRepository = Depends(get_quiz_repository)) -> Dict[str, Any]:
    """The quiz's questions in a fresh random order."""
    quiz = await _load(quiz_id, quizzes)
    deck = FlashcardDeck(quiz)
    return {
        'id': quiz.quiz_id,
        'category': quiz.category,
        'cards': [card.to_dict() for card in deck.cards],
    }


@router.post("/{quiz_id}/submit", status_code=status.HTTP_201_CREATED)
async def submit_answers(
    quiz_id: str,
    request: SubmitAnswersRequest,
    attempts: AttemptService = Depends(get_attempt_service)
) -> Dict[str, Any]:
    """Score the answers server-side and store the attempt."""
    stored = await attempts.submit(quiz_id, request.answers)
    return stored.to_dict()
