"""
Wordle-style scoring (feedback) for a single (guess, answer) pair.

Conventions:
  - LetterRule.CORRECT (2, 'G') : letter in the correct position
  - LetterRule.PRESENT (1, 'Y') : letter in the answer, different position
  - LetterRule.ABSENT  (0, '-') : letter not in the answer (or present fewer
                                  times than guessed)

A Pattern is a 5-tuple of LetterRule, one per guess position. For enumeration
it is also a base-3 integer in [0, 242], position 0 most significant.

Algorithm (two-pass, canonical for Wordle):
  1) First pass marks all greens and counts the answer letters sitting at
     non-green positions.
  2) Second pass walks left to right and marks yellows only while the letter
     still has a remaining count.
"""

from __future__ import annotations

from collections import Counter
from enum import IntEnum
from typing import Iterator, List, Tuple

from .errors import InvalidPattern
from .words import WORD_LENGTH


class LetterRule(IntEnum):
    ABSENT = 0
    PRESENT = 1
    CORRECT = 2


Pattern = Tuple[LetterRule, ...]

N_PATTERNS = 3 ** WORD_LENGTH  # 243
ALL_CORRECT = N_PATTERNS - 1  # 242

_RULE_CHARS = {LetterRule.ABSENT: "-", LetterRule.PRESENT: "Y", LetterRule.CORRECT: "G"}
_DIGIT_RULES = {"0": LetterRule.ABSENT, "1": LetterRule.PRESENT, "2": LetterRule.CORRECT}


def feedback(guess: str, answer: str) -> Pattern:
    """
    Compute the feedback pattern for `guess` against `answer`.

    Both words are assumed valid (checked at ingestion); this is a pure
    function of the two strings.

    Examples:
      pattern_to_string(feedback("belle", "level")) -> "-GYYY"
      pattern_to_string(feedback("lemon", "level")) -> "GG---"
    """
    rules: List[LetterRule] = [LetterRule.ABSENT] * WORD_LENGTH

    # Pass 1: greens, and the leftover answer letters yellows may claim.
    remaining: Counter = Counter()
    for i, (g, a) in enumerate(zip(guess, answer)):
        if g == a:
            rules[i] = LetterRule.CORRECT
        else:
            remaining[a] += 1

    # Pass 2: yellows, capped by the true multiplicity left in the answer.
    for i, g in enumerate(guess):
        if rules[i] == LetterRule.CORRECT:
            continue
        if remaining[g] > 0:
            rules[i] = LetterRule.PRESENT
            remaining[g] -= 1

    return tuple(rules)


def parse_pattern(text: str) -> Pattern:
    """
    Parse a user-entered result such as "01102" ('0' absent, '1' present,
    '2' correct).

    Raises:
      InvalidPattern on wrong length or any other character.
    """
    if len(text) != WORD_LENGTH:
        raise InvalidPattern(f"Invalid response length: expected {WORD_LENGTH}, got {len(text)}")
    rules: List[LetterRule] = []
    for ch in text:
        rule = _DIGIT_RULES.get(ch)
        if rule is None:
            raise InvalidPattern(f'Invalid rule character "{ch}"')
        rules.append(rule)
    return tuple(rules)


def pattern_to_int(pattern: Pattern) -> int:
    """Encode a pattern as base 3, position 0 most significant."""
    value = 0
    for rule in pattern:
        value = value * 3 + int(rule)
    return value


def int_to_pattern(value: int) -> Pattern:
    """Inverse of pattern_to_int."""
    if not 0 <= value < N_PATTERNS:
        raise InvalidPattern(f"Pattern code out of range: {value}")
    rules = [LetterRule.ABSENT] * WORD_LENGTH
    for i in reversed(range(WORD_LENGTH)):
        value, digit = divmod(value, 3)
        rules[i] = LetterRule(digit)
    return tuple(rules)


def all_patterns() -> Iterator[Pattern]:
    """All 243 patterns in integer order (some are not producible by any answer)."""
    for code in range(N_PATTERNS):
        yield int_to_pattern(code)


def pattern_to_string(pattern: Pattern) -> str:
    """Console form, e.g. "-GYYY"."""
    return "".join(_RULE_CHARS[LetterRule(r)] for r in pattern)


def pattern_to_digits(pattern: Pattern) -> str:
    """The "0/1/2" form accepted by parse_pattern."""
    return "".join(str(int(r)) for r in pattern)


def is_solved(pattern: Pattern) -> bool:
    return all(r == LetterRule.CORRECT for r in pattern)
