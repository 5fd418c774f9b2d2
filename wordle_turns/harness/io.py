"""
I/O utilities for simulation runs.

Responsibilities:
- write_csv:      one row per target answer (expected turns), then path stats.
- write_manifest: dump a JSON manifest with config, hashes, and metadata.
- timestamp_id:   stable UTC run ID string.
- git_commit_or_unknown: best-effort short commit hash for reproducibility.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict
import csv
import json
import subprocess
import datetime as dt

from .simulator import MAX_TRACKED_TURNS, SimulationReport


def write_csv(report: SimulationReport, path: str, opening_word: str) -> str:
    """
    Serialize a simulation report to CSV.

    Schema (columns):
      opening, answer, expected_turns

    Returns:
      The path written (string).
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    with p.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=["opening", "answer", "expected_turns"])
        w.writeheader()
        for answer, turns in report.expected_turns_by_answer.items():
            w.writerow({
                "opening": opening_word,
                "answer": answer,
                "expected_turns": repr(float(turns)),
            })

    return str(p)


def report_summary(report: SimulationReport) -> Dict:
    """JSON-friendly aggregate of a report (numpy arrays become lists)."""
    return {
        "num_answers": len(report.expected_turns_by_answer),
        "average_turns": report.average_turns,
        "total_paths": report.total_paths,
        # index n = solved in n turns; the last index means MAX_TRACKED_TURNS or more
        "path_length_counts": report.path_length_counts[1:MAX_TRACKED_TURNS + 1].tolist(),
        "path_length_odds": report.path_length_odds[1:MAX_TRACKED_TURNS + 1].tolist(),
    }


def write_manifest(manifest: Dict, path: str) -> str:
    """
    Write a JSON manifest with run configuration and dataset validation summary.

    Typical keys:
      - run_id, git_commit
      - config: CLI args (opening word, paths, shards, outdir)
      - wordlists: output of datasets.validate_wordlists(...)
      - summary: output of report_summary(...)
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as f:
        json.dump(manifest, f, indent=2)
    return str(p)


def timestamp_id() -> str:
    """
    Return a compact UTC timestamp suitable for filenames, e.g. 20250820T024121Z.
    """
    return dt.datetime.now(dt.timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def git_commit_or_unknown() -> str:
    """
    Best-effort short git hash of the current repo state.
    Returns 'unknown' if git is not available or the call fails.
    """
    try:
        return (
            subprocess.check_output(
                ["git", "rev-parse", "--short", "HEAD"],
                stderr=subprocess.DEVNULL,
            )
            .decode()
            .strip()
        )
    except (OSError, subprocess.CalledProcessError):
        return "unknown"
