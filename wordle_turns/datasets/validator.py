"""
Dataset validator for the word lists.

What this module does:
- Validate a guess vocabulary (one word per line) and an optional answers list.
- Enforce formatting rules (lowercase, a–z only, exact length 5, one per line).
- Detect duplicates and invalid lines; compute SHA-256 of the raw files.
- Check that answers ⊆ wordlist.
- Return a machine-readable dict (for manifests) and provide a pretty one-line summary.

Typical use:
    from wordle_turns.datasets import validate_wordlists, pretty_summary
    rep = validate_wordlists("words/allowed.txt", "words/answers.txt")
    print(pretty_summary(rep))
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Dict, List, Optional, Tuple
import hashlib

from wordle_turns.engine import WORD_LENGTH, is_valid_word


# -----------------------------
# Dataclasses for structured reports
# -----------------------------

@dataclass
class FileReport:
    """Per-file diagnostics and metadata."""
    path: str            # file path (as given)
    exists: bool         # did the file exist on disk?
    count: int           # number of VALID words after cleaning
    sha256: str          # SHA-256 of raw file bytes (empty string if missing)
    unique_count: int    # unique valid words (after dedupe)
    invalid_lines: int   # number of invalid lines encountered


@dataclass
class ValidationReport:
    """Top-level validation result for the (wordlist, answers) pair."""
    N: int
    wordlist: FileReport
    answers: FileReport
    answers_subset_wordlist: bool
    passed: bool
    issues: List[str]    # human-friendly list of problems (if any)


# -----------------------------
# Helpers
# -----------------------------

def _sha256_file(path: Path) -> str:
    """Compute SHA-256 of a file's raw bytes."""
    h = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            h.update(chunk)
    return h.hexdigest()


def _load_and_check(path: Path) -> Tuple[List[str], int]:
    """
    Load words from a text file and validate them.

    Rules:
      - one token per line (a trailing newline is fine)
      - must be exactly WORD_LENGTH lowercase a–z letters
      - empty/whitespace-only lines are INVALID

    Returns:
      (valid_words, invalid_count)
    """
    valid: List[str] = []
    invalid = 0

    with path.open("r", encoding="utf-8") as f:
        for raw in f:
            w = raw.rstrip("\r\n")
            if is_valid_word(w):
                valid.append(w)
            else:
                invalid += 1

    return valid, invalid


def _file_report(path: Path, words: List[str], invalid: int) -> FileReport:
    return FileReport(
        path=str(path),
        exists=True,
        count=len(words),
        sha256=_sha256_file(path),
        unique_count=len(set(words)),
        invalid_lines=invalid,
    )


# -----------------------------
# Public API
# -----------------------------

def validate_wordlists(wordlist_path: str, answers_path: Optional[str] = None) -> Dict:
    """
    Validate the guess vocabulary and (optionally) the answers list.

    When `answers_path` is None the wordlist doubles as the answer pool.

    Returns
    -------
    Dict
        A JSON-serializable dictionary (see ValidationReport schema) with:
          - counts, SHA-256, duplicate/invalid flags
          - answers ⊆ wordlist check
          - `passed` boolean (strict: requires non-empty, no invalids, subset OK)
          - `issues` (list of strings) to surface any problems
    """
    issues: List[str] = []

    word_p = Path(wordlist_path)
    ans_p = Path(answers_path) if answers_path is not None else word_p

    missing = [p for p in (word_p, ans_p) if not p.exists()]
    if missing:
        for p in dict.fromkeys(missing):
            issues.append(f"file not found: {p}")
        rep = ValidationReport(
            N=WORD_LENGTH,
            wordlist=FileReport(str(word_p), word_p.exists(), 0, "", 0, 0),
            answers=FileReport(str(ans_p), ans_p.exists(), 0, "", 0, 0),
            answers_subset_wordlist=False,
            passed=False,
            issues=issues,
        )
        return asdict(rep)

    words, word_invalid = _load_and_check(word_p)
    answers, ans_invalid = _load_and_check(ans_p)
    word_report = _file_report(word_p, words, word_invalid)
    ans_report = _file_report(ans_p, answers, ans_invalid)

    subset_ok = set(answers).issubset(words)
    if not subset_ok:
        # Surface a few examples to debug quickly (limit to 5 for brevity)
        sample = sorted(set(answers) - set(words))[:5]
        issues.append(f"answers not subset of wordlist (e.g., {sample})")

    for label, rep_, bad in (("wordlist", word_report, word_invalid), ("answers", ans_report, ans_invalid)):
        if rep_.count == 0:
            issues.append(f"{label} file contains 0 valid words")
        if bad:
            issues.append(f"{label} has {bad} invalid line(s)")
        if rep_.count != rep_.unique_count:
            issues.append(f"{label} contains duplicate lines")

    passed = (
            subset_ok
            and word_invalid == 0
            and ans_invalid == 0
            and word_report.count > 0
            and ans_report.count > 0
    )

    rep = ValidationReport(
        N=WORD_LENGTH,
        wordlist=word_report,
        answers=ans_report,
        answers_subset_wordlist=subset_ok,
        passed=passed,
        issues=issues,
    )
    return asdict(rep)


def pretty_summary(report: Dict) -> str:
    """
    Produce a compact, human-friendly one-liner for console/docs.

    Example:
        N=5 | wordlist=12972 (uniq=12972, sha=abc123...) | answers=2315 (uniq=2315, sha=def456...) | answers⊆wordlist=True | OK
    """
    a = report["wordlist"]
    b = report["answers"]
    status = "OK" if report["passed"] else "FAIL"
    a_sha = (a.get("sha256") or "")[:12]
    b_sha = (b.get("sha256") or "")[:12]
    return (
        f"N={report['N']} | wordlist={a['count']} (uniq={a['unique_count']}, sha={a_sha}) "
        f"| answers={b['count']} (uniq={b['unique_count']}, sha={b_sha}) "
        f"| answers⊆wordlist={report['answers_subset_wordlist']} | {status}"
    )
