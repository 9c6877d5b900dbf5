"""
Answer Normalization Module

Canonicalizes answer strings so that comparisons ignore case, accents,
punctuation and whitespace. Scoring, review and quiz validation all compare
answers through ``normalize``; nothing else may define answer equality.
"""

import re
import unicodedata
from typing import Optional

_DISALLOWED_CHARS = re.compile(r"[^a-z0-9\s]")
_WHITESPACE_RUN = re.compile(r"\s+")


def normalize(raw: Optional[str]) -> str:
    """
    Normalize an answer string for comparison.

    The steps are: trim, case-fold, NFD-decompose and drop combining marks,
    strip everything that is not ``[a-z0-9]`` or whitespace, then collapse
    whitespace runs to a single space.

    Args:
        raw: The answer as typed or selected; ``None`` is treated as empty

    Returns:
        The canonical form. ``normalize(normalize(s)) == normalize(s)``.
    """
    if not raw:
        return ""

    text = raw.strip().casefold()
    decomposed = unicodedata.normalize("NFD", text)
    text = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    text = _DISALLOWED_CHARS.sub("", text)
    return _WHITESPACE_RUN.sub(" ", text).strip()


def answers_match(first: Optional[str], second: Optional[str]) -> bool:
    """Return True when two answers are equal after normalization."""
    return normalize(first) == normalize(second)
