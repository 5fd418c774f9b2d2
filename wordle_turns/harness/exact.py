"""
Exact expected turns by branch and bound.

expected_turns(pool, bound) returns the best guess for `pool` and its true
expected number of turns, provided that value is below `bound`; otherwise the
returned value is only known to be >= bound and the caller discards it.

  - bound <= 1        -> no strategy can beat the known best: (guess "", |pool|)
  - |pool| <= 1       -> 1 turn
  - |pool| == 2       -> 1.5 turns (guess one; half the time it is wrong)
  - otherwise         -> try the scorer's favourite first for a tight bound,
                         then every other guess against the best so far

expected_turns_for_guess(guess, pool, bound) averages, over every answer in
the pool, one turn for this guess plus the expected turns of the reduced pool
(zero extra turns when the guess is the answer). Every answer costs at least
one more turn, so the partial sum proves early when a guess cannot beat
`bound`.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from wordle_turns.engine import CandidatePool, InternalInconsistency, Pattern, feedback, reduce
from wordle_turns.scorer import GuessScorer

log = logging.getLogger(__name__)


class ExpectedTurnSearch:
    def __init__(self, valid_guesses: Iterable[str], scorer: Optional[GuessScorer] = None):
        self.valid_guesses: List[str] = sorted(set(valid_guesses))
        self.scorer = scorer or GuessScorer()
        self.nodes = 0
        self.pruned = 0

    def expected_turns(self, pool: CandidatePool, bound: float) -> Tuple[str, float]:
        self.nodes += 1
        n = len(pool)
        if bound <= 1.0:
            return "", float(n)
        if n <= 1:
            return (pool.as_list()[0] if n else ""), 1.0
        if n == 2:
            return pool.as_list()[0], 1.5

        scores = self.scorer.score(pool, self.valid_guesses)
        # first guess with the highest score
        recommendation = max(self.valid_guesses, key=lambda g: scores[g])

        best_value = bound
        best_guess = ""
        value = self.expected_turns_for_guess(recommendation, pool, best_value)
        if value < best_value:
            best_value, best_guess = value, recommendation

        for guess in self.valid_guesses:
            if guess == recommendation:
                continue
            value = self.expected_turns_for_guess(guess, pool, best_value)
            if value < best_value:
                best_value, best_guess = value, guess

        return best_guess, best_value

    def expected_turns_for_guess(self, guess: str, pool: CandidatePool, bound: float) -> float:
        n = len(pool)

        # answers with the same pattern share one reduced pool and one sub-search
        buckets: Dict[Pattern, int] = {}
        first_answer: Dict[Pattern, str] = {}
        for answer in pool:
            if answer == guess:
                continue
            patt = feedback(guess, answer)
            buckets[patt] = buckets.get(patt, 0) + 1
            first_answer.setdefault(patt, answer)

        remaining = sum(buckets.values())
        total = 0.0
        for patt, count in buckets.items():
            reduced = reduce(pool, guess, patt)
            if not len(reduced):
                log.error("Unexpected empty reduced set for guess %r, answer %r", guess, first_answer[patt])
                raise InternalInconsistency(guess, first_answer[patt])
            _, below = self.expected_turns(reduced, bound - 1.0)
            total += below * count
            remaining -= count
            if 1.0 + (total + remaining) / n >= bound:
                self.pruned += 1
                return bound

        return min(total / n + 1.0, bound)


def exact_expected_turns(first_guess: str, valid_guesses: Iterable[str], pool: Iterable[str],
                         scorer: Optional[GuessScorer] = None) -> float:
    """
    True expected turns when opening with `first_guess` and playing optimally
    afterwards.

    Raises:
      ValueError if `first_guess` is not a valid guess or the pool is empty.
    """
    guesses = set(valid_guesses)
    if first_guess not in guesses:
        raise ValueError(f"Guess {first_guess!r} is not in valid list")
    pool = pool if isinstance(pool, CandidatePool) else CandidatePool(pool)
    if not len(pool):
        raise ValueError("Word list is too small")
    if len(pool) == 1:
        return 1.0
    if len(pool) == 2:
        return 1.5

    search = ExpectedTurnSearch(guesses, scorer)
    with search.scorer:
        value = search.expected_turns_for_guess(first_guess, pool, float(len(pool)))
    log.debug("exact search for %r: %d nodes, %d pruned", first_guess, search.nodes, search.pruned)
    return value
