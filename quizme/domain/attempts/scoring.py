"""
Scoring Engine

Turns a quiz and the user's answers into an unsaved ``Attempt``. Scoring is a
pure function of its inputs; persisting the result is the repository's job.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Sequence

from quizme.domain.quizzes.model import Quiz
from quizme.domain.quizzes.normalizer import answers_match
from .model import Attempt, AttemptAnswer


def percentage(correct: int, total: int) -> int:
    """
    Percentage of correct answers, rounded half up to an integer.

    Raises:
        ValueError: If ``total`` is not positive
    """
    if total <= 0:
        raise ValueError("Cannot compute a percentage over zero questions")
    ratio = Decimal(100 * correct) / Decimal(total)
    return int(ratio.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def score(quiz: Quiz, user_answers: Sequence[Optional[str]]) -> Attempt:
    """
    Score a completed quiz.

    Args:
        quiz: The quiz that was taken; must have at least one question
        user_answers: One answer per question, in quiz order, none missing

    Returns:
        The scored attempt, carrying a snapshot of every question

    Raises:
        ValueError: If the preconditions on ``quiz`` or ``user_answers`` are
            violated. The caller is expected to enforce them.
    """
    questions = quiz.questions
    if not questions:
        raise ValueError("Cannot score a quiz without questions")
    if len(user_answers) != len(questions):
        raise ValueError(
            f"Expected {len(questions)} answers, got {len(user_answers)}"
        )
    if any(answer is None for answer in user_answers):
        raise ValueError("Every question must be answered before scoring")

    answers = tuple(
        AttemptAnswer(
            question_number=question.question_number,
            question_string=question.question_string,
            user_answer=user_answer,
            correct_answer=question.correct_answer,
            is_correct=answers_match(user_answer, question.correct_answer),
        )
        for question, user_answer in zip(questions, user_answers)
    )
    correct = sum(1 for answer in answers if answer.is_correct)

    return Attempt(
        quiz_id=quiz.quiz_id,
        result_percentage=percentage(correct, len(questions)),
        answers=answers,
    )
