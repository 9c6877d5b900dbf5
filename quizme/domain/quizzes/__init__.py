"""
Quiz domain module.

This module contains the quiz model, answer normalization, shuffling, the
quiz-taking sessions and the quiz repository.
"""

from .model import Question, Quiz
from .normalizer import normalize, answers_match
from .shuffle import shuffled, shuffle_options, shuffle_questions
from .sessions import AnswerSheet, FlashcardDeck
from .repository import QuizRepository

__all__ = [
    'Question',
    'Quiz',
    'normalize',
    'answers_match',
    'shuffled',
    'shuffle_options',
    'shuffle_questions',
    'AnswerSheet',
    'FlashcardDeck',
    'QuizRepository',
]
