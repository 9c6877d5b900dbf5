"""
Quiz-taking sessions.

``AnswerSheet`` backs the answer screen: options are shuffled once when the
sheet is created and stay put while the user picks answers. ``FlashcardDeck``
backs flashcard mode: a shuffled stack of cards that can be flipped,
reshuffled and reset.
"""

import random
from typing import Dict, List, Optional

from quizme.common.exceptions import ValidationError
from .model import Question, Quiz
from .shuffle import shuffle_options, shuffle_questions


class AnswerSheet:
    """Answers being collected for one pass through a quiz."""

    def __init__(self, quiz: Quiz, rng: Optional[random.Random] = None):
        self.quiz = quiz
        self.options: List[List[str]] = [shuffle_options(q, rng) for q in quiz.questions]
        self.selected: List[Optional[str]] = [None] * len(quiz.questions)

    def select(self, index: int, option: str) -> None:
        """
        Record the user's choice for question ``index``.

        Raises:
            ValidationError: If the index is out of range or the option was
                not presented for that question
        """
        if not 0 <= index < len(self.options):
            raise ValidationError(f"No question at position {index}")
        if option not in self.options[index]:
            raise ValidationError(
                f"'{option}' is not an option for question {index + 1}",
                {f"answers.{index}": "Unknown option."}
            )
        self.selected[index] = option

    def unanswered(self) -> List[int]:
        """Indexes of questions without a selection."""
        return [i for i, answer in enumerate(self.selected) if answer is None]

    @property
    def is_complete(self) -> bool:
        return not self.unanswered()

    def submit(self):
        """
        Score the sheet.

        Returns:
            The unsaved ``Attempt``

        Raises:
            ValidationError: If any question is still unanswered
        """
        # Local import: attempts depends on quizzes, not the other way round
        from quizme.domain.attempts.scoring import score

        missing = self.unanswered()
        if missing:
            raise ValidationError(
                "Please answer all questions before submitting.",
                {f"answers.{i}": "Not answered." for i in missing}
            )
        return score(self.quiz, list(self.selected))


class FlashcardDeck:
    """Flashcards for a quiz: the question on the front, the answer on the back."""

    def __init__(self, quiz: Quiz, rng: Optional[random.Random] = None):
        self.quiz = quiz
        self.rng = rng
        self.cards: List[Question] = shuffle_questions(quiz, rng)
        self.revealed: Dict[int, bool] = {}

    def toggle_reveal(self, index: int) -> bool:
        """Flip card ``index`` and return whether it now shows the answer."""
        if not 0 <= index < len(self.cards):
            raise ValidationError(f"No card at position {index}")
        self.revealed[index] = not self.revealed.get(index, False)
        return self.revealed[index]

    def face(self, index: int) -> str:
        """Text currently visible on card ``index``."""
        if not 0 <= index < len(self.cards):
            raise ValidationError(f"No card at position {index}")
        card = self.cards[index]
        return card.correct_answer if self.revealed.get(index) else card.question_string

    def shuffle(self) -> List[Question]:
        """Draw a fresh order and turn every card face down."""
        self.cards = shuffle_questions(self.quiz, self.rng)
        self.revealed = {}
        return self.cards

    def reset(self) -> None:
        """Turn every card face down, keeping the current order."""
        self.revealed = {}
