import random
import unittest

from quizme.common.exceptions import ValidationError
from quizme.domain.quizzes import AnswerSheet, FlashcardDeck
from quizme.tests.helpers import make_quiz


class TestAnswerSheet(unittest.TestCase):
    """Test collecting answers on the answer screen."""

    def setUp(self):
        self.quiz = make_quiz(3)
        self.sheet = AnswerSheet(self.quiz, random.Random(5))

    def test_options_are_shuffled_per_question(self):
        for question, options in zip(self.quiz.questions, self.sheet.options):
            self.assertEqual(sorted(options), sorted(question.options))

    def test_options_stay_put_while_answering(self):
        before = [list(options) for options in self.sheet.options]
        self.sheet.select(0, "Answer 1")
        self.sheet.select(1, "Wrong 2a")
        self.assertEqual(self.sheet.options, before)

    def test_select_and_change(self):
        self.sheet.select(0, "Wrong 1a")
        self.sheet.select(0, "Answer 1")
        self.assertEqual(self.sheet.selected, ["Answer 1", None, None])
        self.assertEqual(self.sheet.unanswered(), [1, 2])
        self.assertFalse(self.sheet.is_complete)

    def test_select_unknown_option(self):
        with self.assertRaises(ValidationError):
            self.sheet.select(0, "Answer 2")
        with self.assertRaises(ValidationError):
            self.sheet.select(3, "Answer 1")

    def test_submit_incomplete(self):
        self.sheet.select(0, "Answer 1")
        with self.assertRaises(ValidationError) as ctx:
            self.sheet.submit()
        self.assertEqual(ctx.exception.message, "Please answer all questions before submitting.")
        self.assertEqual(set(ctx.exception.errors), {"answers.1", "answers.2"})

    def test_submit_scores(self):
        self.sheet.select(0, "Answer 1")
        self.sheet.select(1, "Answer 2")
        self.sheet.select(2, "Wrong 3b")
        attempt = self.sheet.submit()
        self.assertEqual(attempt.result_percentage, 67)
        self.assertEqual([a.user_answer for a in attempt.answers], ["Answer 1", "Answer 2", "Wrong 3b"])


class TestFlashcardDeck(unittest.TestCase):
    """Test flashcard mode."""

    def setUp(self):
        self.quiz = make_quiz(6)
        self.deck = FlashcardDeck(self.quiz, random.Random(11))

    def test_cards_are_the_quiz_questions(self):
        self.assertEqual(
            sorted(card.question_number for card in self.deck.cards),
            [1, 2, 3, 4, 5, 6]
        )

    def test_toggle_reveal(self):
        card = self.deck.cards[0]
        self.assertEqual(self.deck.face(0), card.question_string)
        self.assertTrue(self.deck.toggle_reveal(0))
        self.assertEqual(self.deck.face(0), card.correct_answer)
        self.assertFalse(self.deck.toggle_reveal(0))
        self.assertEqual(self.deck.face(0), card.question_string)

    def test_toggle_out_of_range(self):
        with self.assertRaises(ValidationError):
            self.deck.toggle_reveal(6)

    def test_face_out_of_range(self):
        with self.assertRaises(ValidationError):
            self.deck.face(6)
        with self.assertRaises(ValidationError):
            self.deck.face(-1)

    def test_shuffle_turns_cards_face_down(self):
        self.deck.toggle_reveal(2)
        cards = self.deck.shuffle()
        self.assertEqual(self.deck.revealed, {})
        self.assertEqual(sorted(c.question_number for c in cards), [1, 2, 3, 4, 5, 6])

    def test_reset_keeps_order(self):
        order = [c.question_number for c in self.deck.cards]
        self.deck.toggle_reveal(0)
        self.deck.toggle_reveal(1)
        self.deck.reset()
        self.assertEqual(self.deck.revealed, {})
        self.assertEqual([c.question_number for c in self.deck.cards], order)
