"""
Attempt Domain Model Module

An attempt is the immutable record of one quiz-taking session. It embeds a
snapshot of every answered question so the record stays meaningful after the
quiz it references is edited or deleted.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from quizme.domain.quizzes.model import format_timestamp, parse_timestamp

DELETED_QUIZ_LABEL = "Unknown/deleted quiz"


@dataclass(frozen=True)
class AttemptAnswer:
    """Snapshot of a single question's result within an attempt."""
    question_number: int
    question_string: str
    user_answer: str
    correct_answer: str
    is_correct: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            'questionNumber': self.question_number,
            'questionString': self.question_string,
            'userAnswer': self.user_answer,
            'correctAnswer': self.correct_answer,
            'isCorrect': self.is_correct,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AttemptAnswer':
        return cls(
            question_number=data.get('questionNumber'),
            question_string=data.get('questionString'),
            user_answer=data.get('userAnswer'),
            correct_answer=data.get('correctAnswer'),
            is_correct=data.get('isCorrect'),
        )


@dataclass(frozen=True)
class Attempt:
    """
    A scored attempt that has not been persisted yet.

    Attributes:
        quiz_id: Identifier of the quiz that was taken (lookup only)
        result_percentage: Rounded share of correct answers, 0-100
        answers: Per-question snapshot, in quiz order
    """
    quiz_id: Optional[str]
    result_percentage: Optional[int]
    answers: Optional[Tuple[AttemptAnswer, ...]]

    @property
    def correct_count(self) -> int:
        return sum(1 for answer in self.answers or () if answer.is_correct)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'quizId': self.quiz_id,
            'resultPercentage': self.result_percentage,
            'answers': None if self.answers is None else [a.to_dict() for a in self.answers],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Attempt':
        answers = data.get('answers')
        return cls(
            quiz_id=data.get('quizId'),
            result_percentage=data.get('resultPercentage'),
            answers=None if answers is None else tuple(AttemptAnswer.from_dict(a) for a in answers),
        )


@dataclass(frozen=True)
class StoredAttempt:
    """
    A persisted attempt.

    ``quiz_label`` is only filled in by listing, from the referenced quiz's
    category, or ``DELETED_QUIZ_LABEL`` when that quiz no longer exists.
    """
    attempt_id: str
    quiz_id: str
    result_percentage: int
    answers: Tuple[AttemptAnswer, ...]
    created_at: datetime
    quiz_label: Optional[str] = field(default=None, compare=False)

    @property
    def correct_count(self) -> int:
        return sum(1 for answer in self.answers if answer.is_correct)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'id': self.attempt_id,
            'quizId': self.quiz_id,
            'resultPercentage': self.result_percentage,
            'answers': [answer.to_dict() for answer in self.answers],
            'createdAt': format_timestamp(self.created_at),
        }
        if self.quiz_label is not None:
            data['quizLabel'] = self.quiz_label
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'StoredAttempt':
        return cls(
            attempt_id=data['id'],
            quiz_id=data['quizId'],
            result_percentage=data['resultPercentage'],
            answers=tuple(AttemptAnswer.from_dict(a) for a in data.get('answers') or []),
            created_at=parse_timestamp(data['createdAt']),
            quiz_label=data.get('quizLabel'),
        )
