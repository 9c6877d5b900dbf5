"""
Quiz Domain Model Module

This module defines the quiz and question entities and the validation rules
a quiz must satisfy before the attempt lifecycle will accept it.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from quizme.common.exceptions import ValidationError
from .normalizer import normalize

INCORRECT_ANSWER_COUNT = 2


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp from a stored document."""
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    """Format a timestamp for storage."""
    return value.isoformat() if value is not None else None


@dataclass
class Question:
    """
    A single multiple-choice question.

    Attributes:
        question_number: Position label shown to the user (1-based)
        question_string: The question text
        correct_answer: The correct option
        incorrect_answers: The two distractor options
    """
    question_number: int
    question_string: str
    correct_answer: str
    incorrect_answers: List[str] = field(default_factory=list)

    @property
    def options(self) -> List[str]:
        """All answer options, correct answer first."""
        return [self.correct_answer, *self.incorrect_answers]

    def validate(self, prefix: str = "") -> Dict[str, str]:
        """
        Check the question's invariants.

        Args:
            prefix: Field path prefix used in the returned error keys

        Returns:
            A dictionary of field errors, empty when the question is valid
        """
        errors: Dict[str, str] = {}
        if not isinstance(self.question_number, int) or isinstance(self.question_number, bool):
            errors[f"{prefix}questionNumber"] = "questionNumber must be an integer."
        if not (self.question_string or "").strip():
            errors[f"{prefix}questionString"] = "questionString is required."
        if not (self.correct_answer or "").strip():
            errors[f"{prefix}correctAnswer"] = "correctAnswer is required."

        if len(self.incorrect_answers) != INCORRECT_ANSWER_COUNT:
            errors[f"{prefix}incorrectAnswers"] = (
                f"{len(self.incorrect_answers)} incorrect answers provided. "
                f"Must be {INCORRECT_ANSWER_COUNT}."
            )
        elif any(not (answer or "").strip() for answer in self.incorrect_answers):
            errors[f"{prefix}incorrectAnswers"] = "Incorrect answers must not be empty."

        if not errors:
            normalized = {normalize(option) for option in self.options}
            if len(normalized) != len(self.options) or "" in normalized:
                errors[f"{prefix}options"] = "All answer options must be distinct."
        return errors

    def to_dict(self) -> Dict[str, Any]:
        return {
            'questionNumber': self.question_number,
            'questionString': self.question_string,
            'correctAnswer': self.correct_answer,
            'incorrectAnswers': list(self.incorrect_answers),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Question':
        return cls(
            question_number=data.get('questionNumber'),
            question_string=data.get('questionString', ''),
            correct_answer=data.get('correctAnswer', ''),
            incorrect_answers=list(data.get('incorrectAnswers') or []),
        )


@dataclass
class Quiz:
    """
    A quiz: a category label and an ordered list of questions.

    Attributes:
        quiz_id: Opaque identifier assigned by the repository
        category: Display label of the quiz
        questions: Ordered questions
        created_at: When the quiz was created
        updated_at: When the quiz was last updated
    """
    quiz_id: Optional[str]
    category: str
    questions: List[Question] = field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def validate(self) -> None:
        """
        Validate the quiz.

        Raises:
            ValidationError: If the quiz has no category, no questions, or any
                question violates its invariants
        """
        errors: Dict[str, str] = {}
        if not (self.category or "").strip():
            errors["category"] = "category is required."
        if not self.questions:
            errors["questions"] = "A quiz must contain at least one question."
        for index, question in enumerate(self.questions):
            errors.update(question.validate(prefix=f"questions.{index}."))

        if errors:
            first = next(iter(errors.values()))
            raise ValidationError(f"Invalid quiz: {first}", errors)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.quiz_id,
            'category': self.category,
            'questions': [question.to_dict() for question in self.questions],
            'createdAt': format_timestamp(self.created_at),
            'updatedAt': format_timestamp(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Quiz':
        questions = data.get('questions')
        if questions is not None and not isinstance(questions, list):
            raise ValidationError("questions must be a list", {"questions": "questions must be a list."})
        if any(not isinstance(item, dict) for item in questions or []):
            raise ValidationError("questions must be objects", {"questions": "questions must be objects."})
        return cls(
            quiz_id=data.get('id'),
            category=data.get('category', ''),
            questions=[Question.from_dict(item) for item in (questions or [])],
            created_at=parse_timestamp(data.get('createdAt')),
            updated_at=parse_timestamp(data.get('updatedAt')),
        )
