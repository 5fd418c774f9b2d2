"""
Candidate filtering given feedback.

Given:
  - a pool of words (CandidatePool, built once from the answers list)
  - a (guess, pattern) pair

Return:
  - a new, smaller pool holding the words consistent with that feedback.

This is the core step that turns feedback into a shrinking candidate set.
Chaining reductions (each on the previous pool) applies a whole game history.

The indexed reduction works from per-letter (min, max) occurrence bounds
instead of replaying `feedback` for every word:
  - min = number of PRESENT + CORRECT marks on the letter
  - max = min if the letter also has an ABSENT mark, else WORD_LENGTH
reduce_brute_force() is the simple replay version and must agree with it
exactly; the tests hold the two against each other.
"""

from __future__ import annotations

from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Tuple

from .errors import InvalidPattern
from .scoring import LetterRule, Pattern, feedback
from .words import WORD_LENGTH

_ORD_A = ord("a")

# History is a sequence of (guess, pattern) tuples, oldest first.
History = Iterable[Tuple[str, Pattern]]


def _letter_index(ch: str) -> int:
    return ord(ch) - _ORD_A


class CandidatePool:
    """
    Immutable set of words plus a by-letter index.

    The index is a 26-entry tuple: slot i holds the words containing letter
    chr(ord('a') + i) at least once. It is built in __init__ and never
    mutated, so a pool is safe to share between threads.
    """

    __slots__ = ("_words", "_ordered", "_by_letter")

    def __init__(self, words: Iterable[str]):
        self._words: FrozenSet[str] = frozenset(words)
        self._ordered: Tuple[str, ...] = tuple(sorted(self._words))

        buckets: List[set] = [set() for _ in range(26)]
        for word in self._words:
            for ch in word:
                buckets[_letter_index(ch)].add(word)
        self._by_letter: Tuple[FrozenSet[str], ...] = tuple(frozenset(b) for b in buckets)

    # ---- container protocol ----
    def __len__(self) -> int:
        return len(self._words)

    def __contains__(self, word: object) -> bool:
        return word in self._words

    def __iter__(self) -> Iterator[str]:
        return iter(self._ordered)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CandidatePool):
            return self._words == other._words
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._words)

    def __repr__(self) -> str:
        preview = ", ".join(self._ordered[:5])
        more = ", ..." if len(self._ordered) > 5 else ""
        return f"CandidatePool({len(self)} words: {preview}{more})"

    # Pickling support (needed by the process-pool scorer; __slots__ has no __dict__).
    def __reduce__(self):
        return (CandidatePool, (self._ordered,))

    @property
    def words(self) -> FrozenSet[str]:
        return self._words

    def as_list(self) -> List[str]:
        """Words in sorted order."""
        return list(self._ordered)

    def words_with(self, ch: str) -> FrozenSet[str]:
        """Words that contain letter `ch` at least once."""
        return self._by_letter[_letter_index(ch)]

    def reduce(self, guess: str, pattern: Pattern) -> "CandidatePool":
        return reduce(self, guess, pattern)


def load_pool(words: Iterable[str]) -> CandidatePool:
    """Build a pool. Callers have already validated each word."""
    return CandidatePool(words)


def letter_bounds(guess: str, pattern: Pattern) -> Dict[str, Tuple[int, int]]:
    """
    Per-letter (min, max) occurrence bounds implied by one guess + pattern.

    Raises:
      InvalidPattern if a letter is marked ABSENT and then PRESENT later in the
      same guess. Feedback assigns PRESENT left to right, so a real game can
      never produce that ordering.
    """
    if len(guess) != WORD_LENGTH or len(pattern) != WORD_LENGTH:
        raise InvalidPattern(f"guess and pattern must both have length {WORD_LENGTH}")

    marked: Dict[str, int] = {}
    absent: Dict[str, bool] = {}
    for ch, rule in zip(guess, pattern):
        if rule == LetterRule.ABSENT:
            absent[ch] = True
            marked.setdefault(ch, 0)
        elif rule == LetterRule.PRESENT:
            if absent.get(ch):
                raise InvalidPattern(f'letter "{ch}" was marked absent before present, which is invalid')
            marked[ch] = marked.get(ch, 0) + 1
        else:
            marked[ch] = marked.get(ch, 0) + 1

    bounds: Dict[str, Tuple[int, int]] = {}
    for ch, lo in marked.items():
        hi = lo if absent.get(ch) else WORD_LENGTH
        bounds[ch] = (lo, hi)
    return bounds


def _count_in_range(word: str, ch: str, lo: int, hi: int) -> bool:
    n = 0
    for c in word:
        if c == ch:
            n += 1
            if n > hi:
                return False
    return n >= lo


def reduce(pool: CandidatePool, guess: str, pattern: Pattern) -> CandidatePool:
    """
    Keep only the words of `pool` consistent with `guess` scoring `pattern`.

    Steps:
      1) Letter membership through the by-letter index: drop words with an
         excluded letter (max == 0), keep only words with every required
         letter (min >= 1).
      2) Positions: CORRECT requires the guessed letter there; PRESENT and
         ABSENT both forbid it there.
      3) Occurrence counts inside every non-trivial (min, max) bound.

    Raises:
      InvalidPattern for a self-inconsistent pattern (see letter_bounds).
    """
    bounds = letter_bounds(guess, pattern)

    current = pool.words
    for ch, (lo, hi) in bounds.items():
        if hi == 0:
            current = current - pool.words_with(ch)
        elif lo >= 1:
            current = current & pool.words_with(ch)
        if not current:
            return CandidatePool(())

    required: List[Optional[str]] = [None] * WORD_LENGTH
    forbidden: List[Optional[str]] = [None] * WORD_LENGTH
    for i, (ch, rule) in enumerate(zip(guess, pattern)):
        if rule == LetterRule.CORRECT:
            required[i] = ch
        else:
            forbidden[i] = ch

    ranged = [(ch, lo, hi) for ch, (lo, hi) in bounds.items() if lo > 0 or hi < WORD_LENGTH]

    kept: List[str] = []
    for word in current:
        ok = True
        for i, c in enumerate(word):
            want = required[i]
            if (want is not None and c != want) or c == forbidden[i]:
                ok = False
                break
        if not ok:
            continue
        if all(_count_in_range(word, ch, lo, hi) for ch, lo, hi in ranged):
            kept.append(word)

    return CandidatePool(kept)


def reduce_brute_force(pool: CandidatePool, guess: str, pattern: Pattern) -> CandidatePool:
    """
    Reference reduction: keep words w with feedback(guess, w) == pattern.

    O(pool x 5), no index. Used to validate reduce().
    """
    letter_bounds(guess, pattern)  # same InvalidPattern contract as reduce()
    target = tuple(LetterRule(r) for r in pattern)
    return CandidatePool(w for w in pool if feedback(guess, w) == target)


def filter_candidates(pool: CandidatePool, history: History) -> CandidatePool:
    """
    Apply a whole game history by chaining reductions, oldest first.
    Stops early once the pool is empty.
    """
    current = pool
    for guess, pattern in history:
        if not len(current):
            break
        current = reduce(current, guess, pattern)
    return current
