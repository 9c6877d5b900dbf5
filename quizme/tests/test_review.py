import asyncio
import unittest

from quizme.common.exceptions import NotFoundError, ReferencedEntityMissing
from quizme.domain.attempts import (
    Attempt,
    AttemptAnswer,
    AttemptRepository,
    ReviewReconstructor,
    score,
)
from quizme.domain.quizzes import QuizRepository
from quizme.storage import MemoryDocumentStore
from quizme.tests.helpers import geo_quiz_data


class TestReviewReconstructor(unittest.TestCase):
    """Test rebuilding attempts for review."""

    def setUp(self):
        self.loop = asyncio.new_event_loop()
        asyncio.set_event_loop(self.loop)
        self.store = MemoryDocumentStore()
        self.quizzes = QuizRepository(self.store)
        self.attempts = AttemptRepository(self.store)
        self.reviews = ReviewReconstructor(self.attempts, self.quizzes)

        data = geo_quiz_data()
        data["questions"].append({
            "questionNumber": 2,
            "questionString": "Capital of France?",
            "correctAnswer": "Paris",
            "incorrectAnswers": ["Lyon", "Nice"],
        })
        self.quiz = self.run_async(self.quizzes.create(data))

    def tearDown(self):
        self.loop.close()

    def run_async(self, coro):
        return self.loop.run_until_complete(coro)

    def test_review_pairs_answers_with_options(self):
        stored = self.run_async(self.attempts.save(score(self.quiz, ["hanoi", "Lyon"])))
        review = self.run_async(self.reviews.build_review(stored.attempt_id))

        self.assertEqual(review.quiz, self.quiz)
        self.assertEqual(len(review.items), 2)
        first, second = review.items
        self.assertEqual(first.options, ("Hanoi", "Da Nang", "Hue"))
        self.assertTrue(first.is_correct)
        self.assertEqual(first.user_answer, "hanoi")
        self.assertEqual(second.options, ("Paris", "Lyon", "Nice"))
        self.assertFalse(second.is_correct)
        self.assertEqual(review.correct_count, 1)
        self.assertFalse(review.has_drift)

        data = review.to_dict()
        self.assertFalse(data["quizMissing"])
        self.assertEqual(data["total"], 2)
        self.assertEqual(data["resultPercentage"], 50)
        self.assertEqual(data["answers"][1]["options"], ["Paris", "Lyon", "Nice"])

    def test_unknown_attempt(self):
        with self.assertRaises(NotFoundError) as ctx:
            self.run_async(self.reviews.build_review("missing"))
        self.assertEqual(ctx.exception.resource_type, "Attempt")

    def test_deleted_quiz_degrades_to_snapshot(self):
        stored = self.run_async(self.attempts.save(score(self.quiz, ["Hanoi", "Paris"])))
        self.run_async(self.quizzes.delete(self.quiz.quiz_id))

        with self.assertRaises(ReferencedEntityMissing) as ctx:
            self.run_async(self.reviews.build_review(stored.attempt_id))

        error = ctx.exception
        self.assertEqual(error.resource_type, "Quiz")
        self.assertEqual(error.resource_id, self.quiz.quiz_id)
        self.assertEqual(error.referenced_by, stored.attempt_id)

        partial = error.partial
        self.assertIsNone(partial.quiz)
        self.assertEqual([item.user_answer for item in partial.items], ["Hanoi", "Paris"])
        self.assertTrue(all(item.options is None for item in partial.items))
        self.assertTrue(partial.to_dict()["quizMissing"])
        self.assertEqual(partial.to_dict()["resultPercentage"], 100)

    def test_correctness_is_recomputed(self):
        # Recorded as wrong by an older, stricter comparison
        answer = AttemptAnswer(1, "Capital of Vietnam?", "  HANOI!", "Hanoi", False)
        other = AttemptAnswer(2, "Capital of France?", "Paris", "Paris", True)
        stored = self.run_async(self.attempts.save(
            Attempt(quiz_id=self.quiz.quiz_id, result_percentage=50, answers=(answer, other))
        ))

        review = self.run_async(self.reviews.build_review(stored.attempt_id))
        self.assertTrue(review.items[0].is_correct)
        self.assertFalse(review.items[0].recorded_is_correct)
        self.assertEqual(review.recomputed_percentage, 100)
        self.assertTrue(review.has_drift)
        self.assertEqual(review.attempt.result_percentage, 50)

    def test_edited_quiz_uses_snapshot_answers(self):
        stored = self.run_async(self.attempts.save(score(self.quiz, ["Hanoi", "Paris"])))
        self.run_async(self.quizzes.update(self.quiz.quiz_id, {"questions": [{
            "questionNumber": 1,
            "questionString": "Largest city of Vietnam?",
            "correctAnswer": "Ho Chi Minh City",
            "incorrectAnswers": ["Hanoi", "Hai Phong"],
        }]}))

        review = self.run_async(self.reviews.build_review(stored.attempt_id))
        first, second = review.items
        self.assertEqual(first.question_string, "Capital of Vietnam?")
        self.assertEqual(first.correct_answer, "Hanoi")
        self.assertTrue(first.is_correct)
        self.assertEqual(first.options, ("Ho Chi Minh City", "Hanoi", "Hai Phong"))
        self.assertIsNone(second.options)
        self.assertEqual(review.recomputed_percentage, 100)
