"""
Error taxonomy for the solver engine.

- InvalidWord / InvalidPattern: bad input. Recoverable; interactive callers
  report the message and ask again.
- UnknownAnswer: a requested target answer is not part of the answer pool.
- InternalInconsistency: a reduction that must be non-empty came back empty.
  Always a bug, never caught by library code.
"""

from __future__ import annotations


class WordleError(Exception):
    """Base class for every error raised by wordle_turns."""


class InvalidWord(WordleError, ValueError):
    """Input is not exactly five lowercase ASCII letters."""


class InvalidPattern(WordleError, ValueError):
    """Feedback pattern is malformed or self-inconsistent for its guess."""


class UnknownAnswer(WordleError, ValueError):
    """Target answer is not a member of the answer pool."""


class InternalInconsistency(WordleError, RuntimeError):
    """A reduction driven by a real answer produced an empty pool."""

    def __init__(self, guess: str, answer: str, detail: str = "empty reduced pool"):
        self.guess = guess
        self.answer = answer
        super().__init__(f"{detail} for guess {guess!r}, answer {answer!r}")
