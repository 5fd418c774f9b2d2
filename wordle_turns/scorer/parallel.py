"""
Expected-reduction guess scorer, sharded across workers.

For guess g over a pool where every answer a has prior weight w(a)
(uniform by default):

    score(g) = sum_a w(a) * reduction(g, a) / sum_a w(a)
    reduction(g, a) = |pool| - |reduce(pool, g, feedback(g, a))|   if g != a
                    = |pool|                                       if g == a

Guessing the answer outright ends the game, so it is credited with the whole
pool rather than the literal reduced size of 1.

Concurrency:
  - The guess list is cut into contiguous, near-equal shards (remainder to
    the first shards).
  - Each shard is a pure function call returning its own dict; shards never
    share guesses, so merging is a plain update on the calling thread.
  - Progress callbacks run on the calling thread as shards finish.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor, as_completed
from contextlib import contextmanager
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Sequence, Union

from wordle_turns.engine import CandidatePool, InternalInconsistency, Pattern, feedback, reduce
from .weights import BaseWeighting, UniformWeighting, create_weighting

log = logging.getLogger(__name__)

DEFAULT_SHARDS = 4

# Scores within this distance of the best are treated as ties.
TIE_EPSILON = 1e-6

ScoreMap = Dict[str, float]
ProgressFn = Callable[[int], None]
WeightingArg = Union[BaseWeighting, str, None]

EXECUTOR_KINDS = ("thread", "process")


def partition_shards(guesses: Sequence[str], shards: int) -> List[List[str]]:
    """
    Split `guesses` into `shards` contiguous pieces whose sizes differ by at
    most one; the first len(guesses) % shards pieces get the extra guess.
    """
    if shards < 1:
        raise ValueError(f"shards must be >= 1; got {shards}")
    base, extra = divmod(len(guesses), shards)
    out: List[List[str]] = []
    pos = 0
    for i in range(shards):
        size = base + (1 if i < extra else 0)
        out.append(list(guesses[pos:pos + size]))
        pos += size
    return out


def _score_shard(pool: CandidatePool, guesses: List[str], weighting: BaseWeighting) -> ScoreMap:
    """Score one shard. Pure: reads the pool, returns a fresh dict."""
    answers = pool.as_list()
    weights = [weighting.weight(a) for a in answers]
    total_weight = sum(weights)
    n = len(answers)

    out: ScoreMap = {}
    for g in guesses:
        # answers giving the same pattern share one reduced pool
        bucket_weight: Dict[Pattern, float] = defaultdict(float)
        bucket_answer: Dict[Pattern, str] = {}
        total = 0.0
        for a, w in zip(answers, weights):
            if a == g:
                total += w * n
                continue
            patt = feedback(g, a)
            bucket_weight[patt] += w
            bucket_answer.setdefault(patt, a)

        for patt, w in bucket_weight.items():
            remaining = len(reduce(pool, g, patt))
            if remaining == 0:
                log.error("Unexpected empty result for guess %r, answer %r", g, bucket_answer[patt])
                raise InternalInconsistency(g, bucket_answer[patt])
            total += w * (n - remaining)

        out[g] = total / total_weight
    return out


def _resolve_weighting(weighting: WeightingArg) -> BaseWeighting:
    if weighting is None:
        return UniformWeighting()
    if isinstance(weighting, str):
        return create_weighting(weighting)
    return weighting


class GuessScorer:
    """
    Parallel evaluator of expected reduction.

    Args:
      shards    : number of contiguous guess shards (and workers)
      executor  : "thread", "process", or an existing Executor to reuse.
                  Shard scoring is CPU-bound Python, so only "process" runs
                  shards truly in parallel; "thread" avoids pickling and
                  start-up cost for small pools and tests. A passed-in
                  executor is never shut down here.
      weighting : default answer weighting (uniform when None)

    Using the scorer as a context manager keeps one worker pool alive across
    many score() calls; otherwise each call starts and stops its own.
    """

    def __init__(self, shards: int = DEFAULT_SHARDS, executor: Union[str, Executor] = "thread",
                 weighting: WeightingArg = None):
        if shards < 1:
            raise ValueError(f"shards must be >= 1; got {shards}")
        if isinstance(executor, str) and executor not in EXECUTOR_KINDS:
            raise ValueError(f"executor must be one of {EXECUTOR_KINDS} or an Executor; got {executor!r}")
        self.shards = int(shards)
        self.executor = executor
        self.weighting = _resolve_weighting(weighting)
        self._owned: Optional[Executor] = None
        self._depth = 0

    def _new_executor(self) -> Executor:
        if self.executor == "process":
            return ProcessPoolExecutor(max_workers=self.shards)
        return ThreadPoolExecutor(max_workers=self.shards, thread_name_prefix="GuessWorker")

    def __enter__(self) -> "GuessScorer":
        # nested `with` blocks share the outermost worker pool
        self._depth += 1
        if self._owned is None and isinstance(self.executor, str) and self.shards > 1:
            self._owned = self._new_executor()
        return self

    def __exit__(self, *exc) -> None:
        self._depth -= 1
        if self._depth <= 0:
            self._depth = 0
            self.close()

    def close(self) -> None:
        if self._owned is not None:
            self._owned.shutdown(wait=True)
            self._owned = None

    @contextmanager
    def _workers(self) -> Iterator[Executor]:
        if not isinstance(self.executor, str):
            yield self.executor
        elif self._owned is not None:
            yield self._owned
        else:
            ex = self._new_executor()
            try:
                yield ex
            finally:
                ex.shutdown(wait=True)

    def score(self, pool: CandidatePool, guesses: Iterable[str],
              on_progress: Optional[ProgressFn] = None,
              weighting: WeightingArg = None) -> ScoreMap:
        """
        Score every guess against `pool`; blocks until all shards finish.

        Returns a dict with exactly one entry per distinct guess, in input
        order. `on_progress` receives the cumulative count of scored guesses.

        Raises:
          ValueError if the pool is empty.
          InternalInconsistency (from a worker) on an impossible empty reduction.
        """
        if not len(pool):
            raise ValueError("cannot score guesses against an empty pool")
        guesses = list(guesses)
        w = self.weighting if weighting is None else _resolve_weighting(weighting)

        parts = [p for p in partition_shards(guesses, self.shards) if p]
        log.debug("scoring %d guesses against %d answers in %d shard(s)",
                  len(guesses), len(pool), len(parts))

        merged: ScoreMap = {}
        done = 0
        if len(parts) <= 1:
            for part in parts:
                merged.update(_score_shard(pool, part, w))
                done += len(part)
                if on_progress is not None:
                    on_progress(done)
        else:
            with self._workers() as ex:
                futures = {ex.submit(_score_shard, pool, part, w): len(part) for part in parts}
                for fut in as_completed(futures):
                    merged.update(fut.result())
                    done += futures[fut]
                    if on_progress is not None:
                        on_progress(done)

        return {g: merged[g] for g in guesses}


def score(pool: CandidatePool, guesses: Iterable[str], on_progress: Optional[ProgressFn] = None,
          *, shards: int = DEFAULT_SHARDS, weighting: WeightingArg = None) -> ScoreMap:
    """One-shot convenience wrapper around GuessScorer.score()."""
    return GuessScorer(shards=shards, weighting=weighting).score(pool, guesses, on_progress)


def rank_guesses(score_map: ScoreMap, guesses: Optional[Iterable[str]] = None,
                 limit: Optional[int] = None) -> List[str]:
    """
    Guesses by descending score; equal scores keep their input order.
    Guesses missing from `score_map` rank last.
    """
    order = list(score_map.keys()) if guesses is None else list(guesses)
    ranked = sorted(order, key=lambda g: -score_map.get(g, float("-inf")))
    return ranked if limit is None else ranked[:limit]


def top_guesses(score_map: ScoreMap, epsilon: float = TIE_EPSILON,
                guesses: Optional[Iterable[str]] = None) -> List[str]:
    """
    Every guess scoring at least (best - epsilon), best first. Ties are all
    kept; callers that branch on them treat each as equally likely.
    """
    ranked = rank_guesses(score_map, guesses)
    if not ranked or ranked[0] not in score_map:
        return []
    best = score_map[ranked[0]]
    return [g for g in ranked if score_map.get(g, float("-inf")) + epsilon >= best]
