"""
Request models for the HTTP surface.

Field names follow the camelCase wire format of the stored documents. Fields
whose absence is a domain rule (for example the three required attempt fields)
are optional here so the domain layer reports them with its own message.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class QuestionIn(BaseModel):
    """A question as submitted by the quiz editor."""
    questionNumber: int
    questionString: str
    correctAnswer: str
    incorrectAnswers: List[str]


class QuizCreateRequest(BaseModel):
    """Request model for creating a quiz."""
    category: Optional[str] = None
    questions: Optional[List[QuestionIn]] = None

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "category": "Geo",
            "questions": [{
                "questionNumber": 1,
                "questionString": "Capital of Vietnam?",
                "correctAnswer": "Hanoi",
                "incorrectAnswers": ["Da Nang", "Hue"],
            }],
        }
    })


class QuizUpdateRequest(BaseModel):
    """Request model for partially updating a quiz."""
    category: Optional[str] = None
    questions: Optional[List[QuestionIn]] = None


class SubmitAnswersRequest(BaseModel):
    """Raw answers for one pass through a quiz, in question order."""
    answers: List[Optional[str]] = Field(..., description="One answer per question; null means unanswered")


class AttemptAnswerIn(BaseModel):
    questionNumber: int
    questionString: str
    userAnswer: str
    correctAnswer: str
    isCorrect: bool


class AttemptCreateRequest(BaseModel):
    """Request model for recording an attempt scored by the client."""
    quizId: Optional[str] = None
    resultPercentage: Optional[float] = None
    answers: Optional[List[AttemptAnswerIn]] = None


class ExplanationRequestIn(BaseModel):
    """Request model for generating an explanation."""
    questionText: Optional[str] = None
    correctAnswer: Optional[str] = None
    userAnswer: Optional[str] = None
    options: List[str] = Field(default_factory=list)
