"""
Shuffle Engine

Produces randomized orderings of answer options and questions. Source
collections are never mutated; every call returns a new list drawn
independently of previous calls.
"""

import random
from typing import List, Optional, Sequence, TypeVar

from .model import Question, Quiz

T = TypeVar('T')


def shuffled(items: Sequence[T], rng: Optional[random.Random] = None) -> List[T]:
    """
    Return a uniformly random permutation of ``items`` as a new list.

    Uses the inside-out variant of Fisher-Yates, so each of the n! orderings
    is equally likely and the input sequence is only read.

    Args:
        items: Items to permute
        rng: Random generator to draw from, defaults to the ``random`` module
    """
    rng = rng or random
    result: List[T] = []
    for i, item in enumerate(items):
        j = rng.randint(0, i)
        if j == i:
            result.append(item)
        else:
            result.append(result[j])
            result[j] = item
    return result


def shuffle_options(question: Question, rng: Optional[random.Random] = None) -> List[str]:
    """Return the question's three options in random order."""
    return shuffled(question.options, rng)


def shuffle_questions(quiz: Quiz, rng: Optional[random.Random] = None) -> List[Question]:
    """Return the quiz's questions in random order, for flashcard mode."""
    return shuffled(quiz.questions, rng)
