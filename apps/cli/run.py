# apps/cli/run.py
"""
CLI entry point for wordle_turns.

Modes:
  (default)                 interactive: enter each guess and its 0/1/2 result,
                            see the reduced pool and, under --cutoff, recommendations
  --optimize                score every guess against the answer pool, print the ranking
  --expected-turns WORD     playout simulation from opening WORD (fast estimate)
  --true-expected-turns WORD  exact branch-and-bound expected turns (slow)

Word lists hold one lowercase five-letter word per line; other lines are
skipped (and reported by the validator summary).
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Set

from tqdm import tqdm

from wordle_turns.datasets import validate_wordlists, pretty_summary, load_wordlists
from wordle_turns.engine import (
    CandidatePool,
    InvalidPattern,
    InvalidWord,
    UnknownAnswer,
    is_valid_word,
    parse_pattern,
    validate_guess,
)
from wordle_turns.harness import PlayoutSimulator, exact_expected_turns, report_summary, write_csv, write_manifest
from wordle_turns.harness.io import timestamp_id, git_commit_or_unknown
from wordle_turns.scorer import DEFAULT_SHARDS, GuessScorer, rank_guesses

RECOMMENDATIONS = 5  # guesses shown per interactive recommendation
LIST_REMAINING_UP_TO = 10  # print the remaining words when at most this many


def _progress_bar(total: int, desc: str) -> tqdm:
    return tqdm(total=total, ncols=80, desc=desc, unit="guess", file=sys.stderr, leave=False)


def _score_with_bar(scorer: GuessScorer, pool: CandidatePool, guesses: List[str], desc: str):
    with _progress_bar(len(guesses), desc) as bar:
        def on_progress(done: int) -> None:
            bar.update(done - bar.n)
        return scorer.score(pool, guesses, on_progress)


def run_optimize(all_words: Set[str], answers: Set[str], scorer: GuessScorer) -> None:
    pool = CandidatePool(answers)
    guesses = sorted(all_words)
    print(f"Running with {len(pool)} possible words and {len(guesses)} valid guesses")
    scores = _score_with_bar(scorer, pool, guesses, "Scoring")
    for idx, word in enumerate(rank_guesses(scores, guesses), 1):
        print(f"{idx}. {word}: {scores[word]}")


def run_expected_turns(all_words: Set[str], answers: Set[str], scorer: GuessScorer,
                       first_guess: str, known_answer: str | None, outdir: str | None,
                       config: dict, wordlists: dict) -> int:
    targets = [known_answer] if known_answer else None
    sim = PlayoutSimulator(first_guess, answers, all_words, scorer=scorer)
    total = 1 if targets else len(sim.pool)
    try:
        with tqdm(total=total, ncols=80, desc="Answers", unit="answer", file=sys.stderr) as bar:
            report = sim.run(targets, progress=lambda done, _total: bar.update(1))
    except UnknownAnswer as e:
        print(f"Error: {e}")
        return 1

    for line in report.summary_lines():
        print(line)

    if outdir:
        run_id = timestamp_id()
        out = Path(outdir)
        csv_path = out / f"turns_{first_guess}_{run_id}.csv"
        manifest_path = out / f"turns_{first_guess}_{run_id}_manifest.json"
        write_csv(report, str(csv_path), opening_word=first_guess)
        write_manifest({
            "run_id": run_id,
            "git_commit": git_commit_or_unknown(),
            "config": config,
            "wordlists": wordlists,
            "summary": report_summary(report),
        }, str(manifest_path))
        print(f"Wrote: {csv_path}")
        print(f"Wrote: {manifest_path}")
    return 0


def run_true_expected_turns(all_words: Set[str], answers: Set[str], scorer: GuessScorer, first_guess: str) -> int:
    if first_guess not in all_words:
        print(f'Error: "{first_guess}" is not in the wordlist')
        return 1
    if len(answers) <= 2:
        print("Error: answer list is too small")
        return 1
    expectation = exact_expected_turns(first_guess, all_words, answers, scorer=scorer)
    print(f'Expected turns for "{first_guess}": {expectation}')
    return 0


def run_interactive(all_words: Set[str], answers: Set[str], scorer: GuessScorer, cutoff: int | None) -> int:
    pool = CandidatePool(answers)
    guesses = sorted(all_words)
    print(f"Running with {len(pool)} possible words and {len(guesses)} valid guesses")

    with scorer:
        while True:
            try:
                guess = validate_guess(input("Next guess: "), all_words)
                result = parse_pattern(input("Result: ").strip())
                reduced = pool.reduce(guess, result)
            except (InvalidWord, InvalidPattern) as e:
                print(f"Error: {e}")
                continue
            except EOFError:
                print("Error: expected input")
                return 1

            pool = reduced
            remaining = len(pool)
            print(f"Reduced to {remaining} remaining words")
            if remaining <= LIST_REMAINING_UP_TO:
                print("Remaining word(s):")
                for word in pool:
                    print(word)

            if remaining <= 1:
                return 0
            if cutoff is not None and 2 < remaining <= cutoff:
                print("Computing recommendation...")
                scores = _score_with_bar(scorer, pool, guesses, "Scoring")
                best = rank_guesses(scores, guesses, limit=RECOMMENDATIONS)
                print("Recommended guesses: ")
                print(", ".join(f"{b}:{scores[b]}" for b in best))


def main(argv: List[str] | None = None) -> int:
    """
    Parse CLI args, load and validate word lists, then dispatch to a mode.
    """
    ap = argparse.ArgumentParser(description="wordle_turns: guess scoring and expected-turn analysis")
    ap.add_argument("-w", "--wordlist", required=True,
                    help="wordlist. One word per line. Lowercase letters")
    ap.add_argument("-a", "--answers",
                    help="subset of the wordlist that can be answers (default: whole wordlist)")
    ap.add_argument("-c", "--cutoff", type=int,
                    help="suggest best guesses once the pool is reduced to this many words")
    ap.add_argument("--optimize", action="store_true",
                    help="rank every guess against the answer pool to find the best opening")
    ap.add_argument("--expected-turns", metavar="WORD",
                    help="play out from WORD with computed best follow-ups; report expected turns")
    ap.add_argument("--known-answer", metavar="WORD",
                    help="restrict --expected-turns to this answer")
    ap.add_argument("--true-expected-turns", metavar="WORD",
                    help="exact (branch and bound) expected turns for opening WORD")
    ap.add_argument("--shards", type=int, default=DEFAULT_SHARDS, help="parallel scorer shards")
    ap.add_argument("--executor", choices=["thread", "process"], default="process",
                    help="worker pool type for the scorer")
    ap.add_argument("--outdir", help="write --expected-turns results (CSV + manifest) here")
    ap.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    args = ap.parse_args(argv)

    if args.cutoff is not None and args.cutoff <= 0:
        ap.error("Cutoff must be a positive integer")
    if args.shards < 1:
        ap.error("--shards must be >= 1")
    for flag in ("expected_turns", "true_expected_turns", "known_answer"):
        value = getattr(args, flag)
        if value is not None and not is_valid_word(value):
            ap.error(f'Invalid word for --{flag.replace("_", "-")}: "{value}"')

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # 1) Validate wordlists and print a one-liner summary (counts, SHAs, subset check)
    rep = validate_wordlists(args.wordlist, args.answers)
    print(pretty_summary(rep))

    # 2) Load lists into memory (invalid lines dropped, answers unioned into the wordlist)
    all_words, answers = load_wordlists(args.wordlist, args.answers)
    if not answers:
        print("Error: no valid answers loaded")
        return 1

    scorer = GuessScorer(shards=args.shards, executor=args.executor)

    if args.optimize:
        run_optimize(all_words, answers, scorer)
        return 0
    if args.expected_turns:
        return run_expected_turns(all_words, answers, scorer, args.expected_turns, args.known_answer,
                                  args.outdir, vars(args), rep)
    if args.true_expected_turns:
        return run_true_expected_turns(all_words, answers, scorer, args.true_expected_turns)
    return run_interactive(all_words, answers, scorer, args.cutoff)


if __name__ == "__main__":
    sys.exit(main())
