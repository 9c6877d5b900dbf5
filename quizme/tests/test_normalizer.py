import unittest

import pytest

from quizme.domain.quizzes import answers_match, normalize


class TestNormalize(unittest.TestCase):
    """Test answer normalization."""

    def test_accents_are_removed(self):
        self.assertEqual(normalize("Café"), normalize("cafe"))
        self.assertEqual(normalize("naïve"), "naive")

    def test_surrounding_whitespace_is_ignored(self):
        self.assertEqual(normalize(" Hanoi "), normalize("hanoi"))
        self.assertEqual(normalize("\tHanoi\n"), "hanoi")

    def test_punctuation_is_removed(self):
        self.assertEqual(normalize("Hello, World!"), "hello world")
        self.assertEqual(normalize("C++"), "c")
        self.assertNotEqual(normalize("C++"), normalize("C plus plus"))

    def test_whitespace_runs_collapse(self):
        self.assertEqual(normalize("New    York  City"), "new york city")
        self.assertEqual(normalize("a \t\n b"), "a b")

    def test_digits_are_kept(self):
        self.assertEqual(normalize("Route 66"), "route 66")

    def test_empty_and_none(self):
        self.assertEqual(normalize(""), "")
        self.assertEqual(normalize(None), "")
        self.assertEqual(normalize("   "), "")
        self.assertEqual(normalize("?!"), "")

    def test_casefold(self):
        self.assertEqual(normalize("STRASSE"), normalize("straße"))


@pytest.mark.parametrize("raw", [
    "Café au lait",
    "  Hanoi  ",
    "Hello,   World!",
    "Ñandú",
    "x - y",
    "",
])
def test_normalize_is_idempotent(raw):
    once = normalize(raw)
    assert normalize(once) == once


def test_answers_match():
    assert answers_match("hanoi ", "Hanoi")
    assert answers_match("HUE", "Huế")
    assert not answers_match("Da Nang", "Hanoi")
    assert answers_match(None, "")
