"""
Playout simulator: expected turns to solve, per answer and on average.

For each target answer the simulator plays out every equally-good line of
play from a fixed opening word:
  - a GuessItem is one pending guess on one branch, carrying the pool that
    was valid when the guess was chosen and the probability of that branch
  - the guess is the answer -> the branch is solved and contributes
    (turns + 1) * weight to the answer's expected turns
  - otherwise the pool is reduced by the feedback; with <= 2 words left every
    remaining word is tried, else the scorer's tied best guesses are
  - the branch weight is split evenly between the children

Items are drained from a FIFO queue by one driver loop (breadth first). The
scorer call is the only place the loop blocks.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Deque, Dict, Iterable, List, Optional, Sequence

import numpy as np

from wordle_turns.engine import CandidatePool, InternalInconsistency, UnknownAnswer, feedback, reduce
from wordle_turns.scorer import GuessScorer, TIE_EPSILON, top_guesses

log = logging.getLogger(__name__)

# Pools at or below this size are branched over directly instead of scored.
ENDGAME_POOL_SIZE = 2

# Path lengths >= this are bucketed together in the statistics.
MAX_TRACKED_TURNS = 7


@dataclass(frozen=True)
class GuessItem:
    """One pending guess on one branch of the playout tree."""
    word: str
    answer: str
    turns: int            # guesses already made on this branch
    weight: float         # probability of reaching this branch
    pool: CandidatePool   # answers still possible when `word` was chosen


# observer(queue, settled_weight): called after each processed item.
QueueObserver = Callable[[Sequence[GuessItem], float], None]


@dataclass
class SimulationReport:
    expected_turns_by_answer: Dict[str, float]
    path_length_counts: np.ndarray = field(default_factory=lambda: np.zeros(MAX_TRACKED_TURNS + 1, dtype=np.int64))
    path_length_odds: np.ndarray = field(default_factory=lambda: np.zeros(MAX_TRACKED_TURNS + 1, dtype=float))

    @property
    def average_turns(self) -> float:
        if not self.expected_turns_by_answer:
            return 0.0
        return float(np.mean(list(self.expected_turns_by_answer.values())))

    @property
    def total_paths(self) -> int:
        return int(self.path_length_counts.sum())

    def summary_lines(self) -> List[str]:
        """Per-answer lines, the average, then the path-length table."""
        lines = [f"{ans}: {turns}" for ans, turns in self.expected_turns_by_answer.items()]
        lines.append(f"Average turns: {self.average_turns}")
        for n in range(1, MAX_TRACKED_TURNS + 1):
            label = f"{n}+ turns:" if n == MAX_TRACKED_TURNS else f"{n} turn{'s' if n > 1 else ''}:"
            lines.append(f"{label:<9} {int(self.path_length_counts[n])} ({float(self.path_length_odds[n])})")
        lines.append(f"Total paths explored: {self.total_paths}")
        return lines


class PlayoutSimulator:
    """
    Args:
      opening_word : first guess on every playout
      answers      : the answer pool (a CandidatePool or iterable of words)
      guesses      : guess vocabulary; answers are always added to it
      scorer       : GuessScorer to use (a default 4-shard scorer if None)
      epsilon      : tie tolerance for best guesses
    """

    def __init__(self, opening_word: str, answers: Iterable[str], guesses: Iterable[str],
                 scorer: Optional[GuessScorer] = None, epsilon: float = TIE_EPSILON):
        self.opening_word = opening_word
        self.pool = answers if isinstance(answers, CandidatePool) else CandidatePool(answers)
        vocab = set(guesses) | set(self.pool.words)
        self.guesses: List[str] = sorted(vocab)
        self.scorer = scorer or GuessScorer()
        self.epsilon = epsilon

    def _targets(self, target_answers: Optional[Iterable[str]]) -> List[str]:
        if target_answers is None:
            return self.pool.as_list()
        targets = list(target_answers)
        for ans in targets:
            if ans not in self.pool:
                raise UnknownAnswer(f'Target answer "{ans}" is not in the set of possible answers')
        return targets

    def _next_words(self, item: GuessItem, reduced: CandidatePool) -> List[str]:
        if len(reduced) <= ENDGAME_POOL_SIZE:
            return reduced.as_list()
        scores = self.scorer.score(reduced, self.guesses)
        best = top_guesses(scores, self.epsilon, self.guesses)
        if scores[best[0]] > len(reduced) + self.epsilon:
            raise InternalInconsistency(item.word, item.answer, detail=f"top score {scores[best[0]]} is too high")
        return best

    def play_answer(self, answer: str, report: SimulationReport,
                    observer: Optional[QueueObserver] = None) -> float:
        """
        Drain the playout queue for one answer; returns its expected turns
        and folds its paths into `report`.
        """
        queue: Deque[GuessItem] = deque([GuessItem(self.opening_word, answer, 0, 1.0, self.pool)])
        expected = 0.0
        settled = 0.0

        while queue:
            item = queue.popleft()
            if item.word == item.answer:
                total = item.turns + 1
                bucket = min(MAX_TRACKED_TURNS, total)
                report.path_length_counts[bucket] += 1
                report.path_length_odds[bucket] += item.weight
                expected += total * item.weight
                settled += item.weight
            else:
                reduced = reduce(item.pool, item.word, feedback(item.word, item.answer))
                if not len(reduced):
                    log.error("Unexpected empty result for guess %r, answer %r", item.word, item.answer)
                    raise InternalInconsistency(item.word, item.answer)

                words = self._next_words(item, reduced)
                share = item.weight / len(words)
                for w in words:
                    queue.append(GuessItem(w, item.answer, item.turns + 1, share, reduced))

            if observer is not None:
                observer(queue, settled)

        report.expected_turns_by_answer[answer] = expected
        return expected

    def run(self, target_answers: Optional[Iterable[str]] = None,
            progress: Optional[Callable[[int, int], None]] = None,
            observer: Optional[QueueObserver] = None) -> SimulationReport:
        """
        Play out every target answer (all answers by default).

        `progress(done, total)` is called after each answer.

        Raises:
          UnknownAnswer if a target is not in the answer pool.
        """
        targets = self._targets(target_answers)
        report = SimulationReport(expected_turns_by_answer={})
        with self.scorer:
            for idx, answer in enumerate(targets, start=1):
                turns = self.play_answer(answer, report, observer)
                log.debug("%s: %.6f expected turns", answer, turns)
                if progress is not None:
                    progress(idx, len(targets))
        return report


def simulate(opening_word: str, target_answers: Optional[Iterable[str]], answers: Iterable[str],
             guesses: Iterable[str], scorer: Optional[GuessScorer] = None) -> SimulationReport:
    """Convenience wrapper: build a PlayoutSimulator and run it."""
    return PlayoutSimulator(opening_word, answers, guesses, scorer=scorer).run(target_answers)
