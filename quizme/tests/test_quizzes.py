import asyncio
import unittest

from quizme.common.exceptions import NotFoundError, ValidationError
from quizme.domain.quizzes import Question, Quiz, QuizRepository
from quizme.storage import QUIZ_COLLECTION, MemoryDocumentStore
from quizme.tests.helpers import geo_quiz_data


class TestQuizValidation(unittest.TestCase):
    """Test quiz and question invariants."""

    def test_valid_quiz(self):
        Quiz.from_dict(geo_quiz_data()).validate()

    def test_options_put_correct_answer_first(self):
        question = Question(1, "Q?", "Right", ["Wrong a", "Wrong b"])
        self.assertEqual(question.options, ["Right", "Wrong a", "Wrong b"])

    def test_wrong_incorrect_answer_count(self):
        data = geo_quiz_data()
        data["questions"][0]["incorrectAnswers"] = ["Da Nang"]
        with self.assertRaises(ValidationError) as ctx:
            Quiz.from_dict(data).validate()
        self.assertIn("1 incorrect answers provided. Must be 2.", ctx.exception.message)
        self.assertIn("questions.0.incorrectAnswers", ctx.exception.errors)

    def test_options_must_be_distinct_after_normalization(self):
        data = geo_quiz_data()
        data["questions"][0]["incorrectAnswers"] = ["hanoi!", "Hue"]
        with self.assertRaises(ValidationError) as ctx:
            Quiz.from_dict(data).validate()
        self.assertEqual(ctx.exception.errors, {"questions.0.options": "All answer options must be distinct."})

    def test_requires_questions(self):
        with self.assertRaises(ValidationError) as ctx:
            Quiz.from_dict({"category": "Empty", "questions": []}).validate()
        self.assertIn("questions", ctx.exception.errors)

    def test_requires_category(self):
        data = geo_quiz_data()
        data["category"] = "  "
        with self.assertRaises(ValidationError) as ctx:
            Quiz.from_dict(data).validate()
        self.assertIn("category", ctx.exception.errors)

    def test_requires_question_text_and_answer(self):
        data = geo_quiz_data()
        data["questions"][0]["questionString"] = ""
        data["questions"][0]["correctAnswer"] = None
        with self.assertRaises(ValidationError) as ctx:
            Quiz.from_dict(data).validate()
        self.assertIn("questions.0.questionString", ctx.exception.errors)
        self.assertIn("questions.0.correctAnswer", ctx.exception.errors)

    def test_questions_must_be_a_list_of_objects(self):
        with self.assertRaises(ValidationError):
            Quiz.from_dict({"category": "Geo", "questions": "nope"})
        with self.assertRaises(ValidationError):
            Quiz.from_dict({"category": "Geo", "questions": ["nope"]})

    def test_dict_round_trip(self):
        quiz = Quiz.from_dict({**geo_quiz_data(), "id": "q1"})
        self.assertEqual(Quiz.from_dict(quiz.to_dict()), quiz)


class TestQuizRepository(unittest.TestCase):
    """Test the quiz repository over the memory store."""

    def setUp(self):
        self.store = MemoryDocumentStore()
        self.repository = QuizRepository(self.store)
        self.loop = asyncio.new_event_loop()
        asyncio.set_event_loop(self.loop)

    def tearDown(self):
        self.loop.close()

    def run_async(self, coro):
        return self.loop.run_until_complete(coro)

    def test_create_assigns_id_and_timestamps(self):
        quiz = self.run_async(self.repository.create(geo_quiz_data()))
        self.assertTrue(quiz.quiz_id)
        self.assertIsNotNone(quiz.created_at)
        self.assertEqual(quiz.created_at, quiz.updated_at)

        stored = self.run_async(self.store.find_by_id(QUIZ_COLLECTION, quiz.quiz_id))
        self.assertEqual(stored["category"], "Geo")
        self.assertEqual(stored["questions"][0]["correctAnswer"], "Hanoi")

    def test_create_ignores_client_id(self):
        quiz = self.run_async(self.repository.create({**geo_quiz_data(), "id": "mine"}))
        self.assertNotEqual(quiz.quiz_id, "mine")

    def test_create_rejects_invalid_quiz(self):
        data = geo_quiz_data()
        data["questions"][0]["incorrectAnswers"] = ["a", "b", "c"]
        with self.assertRaises(ValidationError):
            self.run_async(self.repository.create(data))
        self.assertEqual(self.run_async(self.repository.list_all()), [])

    def test_get_and_list(self):
        first = self.run_async(self.repository.create(geo_quiz_data()))
        second = self.run_async(self.repository.create({**geo_quiz_data(), "category": "History"}))

        self.assertEqual(self.run_async(self.repository.get_by_id(first.quiz_id)), first)
        self.assertIsNone(self.run_async(self.repository.get_by_id("missing")))
        listed = self.run_async(self.repository.list_all())
        self.assertEqual([q.quiz_id for q in listed], [first.quiz_id, second.quiz_id])

    def test_update_merges_and_validates(self):
        quiz = self.run_async(self.repository.create(geo_quiz_data()))
        updated = self.run_async(self.repository.update(quiz.quiz_id, {"category": "Asia"}))
        self.assertEqual(updated.category, "Asia")
        self.assertEqual(updated.questions, quiz.questions)
        self.assertEqual(updated.created_at, quiz.created_at)
        self.assertGreaterEqual(updated.updated_at, quiz.updated_at)

        with self.assertRaises(ValidationError):
            self.run_async(self.repository.update(quiz.quiz_id, {"questions": []}))
        self.assertEqual(self.run_async(self.repository.get_by_id(quiz.quiz_id)).category, "Asia")

    def test_update_missing_quiz(self):
        with self.assertRaises(NotFoundError):
            self.run_async(self.repository.update("missing", {"category": "X"}))

    def test_delete(self):
        quiz = self.run_async(self.repository.create(geo_quiz_data()))
        self.assertTrue(self.run_async(self.repository.delete(quiz.quiz_id)))
        self.assertFalse(self.run_async(self.repository.delete(quiz.quiz_id)))
        self.assertIsNone(self.run_async(self.repository.get_by_id(quiz.quiz_id)))
