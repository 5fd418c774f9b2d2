import pytest
from wordle_turns.engine import CandidatePool, InternalInconsistency, load_pool
from wordle_turns.scorer import (
    GuessScorer,
    ReasonableWeighting,
    UniformWeighting,
    create_weighting,
    get_weighting_ids,
    partition_shards,
    rank_guesses,
    score,
    top_guesses,
)
from wordle_turns.scorer import parallel

TRIO = ["crane", "slate", "trace"]

WORDS = [
    "sassy", "grass", "crane", "slate", "trace", "level", "belle", "lemon",
    "scoop", "cools", "allot", "total", "stoal", "atoll", "eerie", "geese",
    "mamma", "llama", "speed", "spree", "tally", "alloy", "abbey", "cabin",
]


@pytest.mark.parametrize("n,shards,sizes", [
    (10, 4, [3, 3, 2, 2]),
    (8, 4, [2, 2, 2, 2]),
    (3, 4, [1, 1, 1, 0]),
    (0, 4, [0, 0, 0, 0]),
    (7, 1, [7]),
])
def test_partition_shards(n, shards, sizes):
    guesses = [f"w{i}" for i in range(n)]
    parts = partition_shards(guesses, shards)
    assert [len(p) for p in parts] == sizes
    # contiguous, in order, nothing lost
    assert [g for p in parts for g in p] == guesses


def test_partition_shards_rejects_zero():
    with pytest.raises(ValueError):
        partition_shards(["crane"], 0)


def test_score_trio_by_hand():
    # crane: exact match credits all 3; slate and trace each reduce to 1 word
    scores = score(load_pool(TRIO), TRIO + ["dumpy"], shards=1)
    assert scores["crane"] == pytest.approx(7 / 3)
    assert scores["slate"] == pytest.approx(7 / 3)
    assert scores["trace"] == pytest.approx(7 / 3)
    assert scores["dumpy"] == 0.0  # shares no letter with any answer


def test_score_map_complete_and_non_negative():
    guesses = WORDS + ["dumpy", "zzzzz"]
    scores = score(load_pool(WORDS), guesses)
    assert list(scores.keys()) == guesses
    assert all(v >= 0 for v in scores.values())
    assert all(v <= len(WORDS) for v in scores.values())


def test_parallel_matches_serial():
    pool = load_pool(WORDS)
    guesses = WORDS + ["dumpy", "raise", "roate"]
    serial = GuessScorer(shards=1).score(pool, guesses)
    sharded = GuessScorer(shards=4).score(pool, guesses)
    assert serial.keys() == sharded.keys()
    for g in guesses:
        assert sharded[g] == pytest.approx(serial[g], abs=1e-9)


def test_process_executor_matches_thread():
    pool = load_pool(WORDS)
    guesses = WORDS[:10]
    threaded = GuessScorer(shards=2).score(pool, guesses)
    with GuessScorer(shards=2, executor="process") as scorer:
        procs = scorer.score(pool, guesses)
    assert procs == pytest.approx(threaded, abs=1e-9)


def test_reused_scorer_context():
    pool = load_pool(WORDS)
    with GuessScorer(shards=3) as scorer:
        first = scorer.score(pool, WORDS)
        with scorer:
            second = scorer.score(pool, WORDS)
        third = scorer.score(pool, WORDS)
    assert first == second == third


def test_progress_reports_cumulative_counts():
    seen = []
    guesses = WORDS + ["dumpy"]
    GuessScorer(shards=4).score(load_pool(WORDS), guesses, on_progress=seen.append)
    assert seen == sorted(seen)
    assert seen[-1] == len(guesses)


def test_empty_pool_rejected():
    with pytest.raises(ValueError):
        score(CandidatePool([]), ["crane"])


def test_empty_reduction_is_internal_inconsistency(monkeypatch):
    monkeypatch.setattr(parallel, "reduce", lambda pool, guess, patt: CandidatePool(()))
    with pytest.raises(InternalInconsistency) as exc:
        score(load_pool(TRIO), ["dumpy"], shards=1)
    assert exc.value.guess == "dumpy"
    assert exc.value.answer in TRIO


def test_uniform_weighting_is_default():
    pool = load_pool(WORDS)
    assert score(pool, WORDS, weighting="uniform") == score(pool, WORDS)
    assert score(pool, WORDS, weighting=UniformWeighting()) == score(pool, WORDS)


def test_reasonable_weighting_by_hand():
    # weights crane 1, slate 3, trace 1 (total 5);
    # guessing crane: 1*3 (exact) + 3*2 (slate) + 1*2 (trace) = 11
    w = ReasonableWeighting({"slate"}, factor=3.0)
    scores = score(load_pool(TRIO), ["crane"], weighting=w)
    assert scores["crane"] == pytest.approx(11 / 5)


def test_reasonable_weighting_with_empty_set_is_uniform():
    pool = load_pool(WORDS)
    plain = score(pool, WORDS)
    weighted = score(pool, WORDS, weighting=create_weighting("reasonable"))
    assert weighted == pytest.approx(plain)


def test_weighting_registry():
    assert get_weighting_ids() == ["reasonable", "uniform"]
    with pytest.raises(ValueError):
        create_weighting("nope")
    with pytest.raises(ValueError):
        ReasonableWeighting({"crane"}, factor=0)


def test_top_guesses_keeps_ties_within_epsilon():
    scores = {"a": 1.0, "b": 1.0 + 1e-9, "c": 0.5, "d": 1.0}
    assert top_guesses(scores) == ["b", "a", "d"]
    assert top_guesses(scores, epsilon=0.0) == ["b"]
    assert top_guesses(scores, epsilon=0.6) == ["b", "a", "d", "c"]
    assert top_guesses({}) == []


def test_rank_guesses_is_stable():
    scores = {"x": 2.0, "y": 3.0, "z": 2.0}
    assert rank_guesses(scores) == ["y", "x", "z"]
    assert rank_guesses(scores, ["z", "x", "y"]) == ["y", "z", "x"]
    assert rank_guesses(scores, limit=1) == ["y"]


def test_invalid_scorer_settings():
    with pytest.raises(ValueError):
        GuessScorer(shards=0)
    with pytest.raises(ValueError):
        GuessScorer(executor="fiber")
