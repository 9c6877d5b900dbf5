"""Shared builders for the test suite."""

from typing import Any, Dict, List

from quizme.domain.quizzes import Question, Quiz


def geo_quiz_data() -> Dict[str, Any]:
    """The one-question geography quiz used across the suite."""
    return {
        "category": "Geo",
        "questions": [{
            "questionNumber": 1,
            "questionString": "Capital of Vietnam?",
            "correctAnswer": "Hanoi",
            "incorrectAnswers": ["Da Nang", "Hue"],
        }],
    }


def make_quiz(count: int = 1, quiz_id: str = "quiz-1", category: str = "Geo") -> Quiz:
    """A valid quiz with ``count`` questions whose answers are 'Answer N'."""
    questions: List[Question] = [
        Question(
            question_number=n,
            question_string=f"Question {n}?",
            correct_answer=f"Answer {n}",
            incorrect_answers=[f"Wrong {n}a", f"Wrong {n}b"],
        )
        for n in range(1, count + 1)
    ]
    return Quiz(quiz_id=quiz_id, category=category, questions=questions)
