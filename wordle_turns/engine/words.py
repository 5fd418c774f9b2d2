"""
Word shape checks.

A word is exactly WORD_LENGTH lowercase ASCII letters (a-z). These checks run
once at ingestion (word-list loading, interactive input); the engine never
re-checks words it has already accepted.
"""

from __future__ import annotations

from typing import Iterable, Set

from .errors import InvalidWord

# Single source of truth for word length.
WORD_LENGTH = 5

_ALPHABET = frozenset("abcdefghijklmnopqrstuvwxyz")


def is_valid_word(word: object) -> bool:
    """True iff `word` is a string of WORD_LENGTH characters from a-z."""
    if not isinstance(word, str):
        return False
    return len(word) == WORD_LENGTH and all(ch in _ALPHABET for ch in word)


def validate_word(word: object) -> str:
    """Return `word` unchanged, or raise InvalidWord."""
    if not is_valid_word(word):
        raise InvalidWord(f"Invalid word {word!r}: expected {WORD_LENGTH} lowercase letters a-z")
    return word  # type: ignore[return-value]


def validate_guess(word: str, allowed: Iterable[str]) -> str:
    """
    Normalize interactive input and check it against the guess vocabulary.

    Surrounding whitespace is stripped and case folded before the shape
    check; the result must also be a member of `allowed`.

    Raises:
      InvalidWord if the shape is wrong or the word is not allowed.
    """
    w = validate_word(word.strip().lower())

    allowed_set: Set[str] = allowed if isinstance(allowed, (set, frozenset)) else set(allowed)
    if w not in allowed_set:
        raise InvalidWord(f"{w!r} is not in the guess list")
    return w
