from __future__ import annotations
import logging
from pathlib import Path
from typing import List, Optional, Set, Tuple

from wordle_turns.engine import is_valid_word

log = logging.getLogger(__name__)


def read_lines(p: Path | str) -> List[str]:
    """
    Read a UTF-8 text file into a list of lines, stripping trailing CR/LF.
    Raises FileNotFoundError if the path doesn't exist.
    """
    p = Path(p)
    if not p.exists():
        raise FileNotFoundError(p)
    return [ln.rstrip("\r\n") for ln in p.read_text(encoding="utf-8").splitlines()]


def load_wordlist(p: Path | str) -> Set[str]:
    """
    Read a one-word-per-line list, keeping only valid words (five lowercase
    a-z letters). Anything else is skipped silently; validate_wordlists()
    reports it.
    """
    return {ln for ln in read_lines(p) if is_valid_word(ln)}


def load_wordlists(wordlist: Path | str, answers: Optional[Path | str] = None) -> Tuple[Set[str], Set[str]]:
    """
    Load the guess vocabulary and the answer pool.

    The answer pool defaults to the whole vocabulary. Answers missing from the
    vocabulary are added to it, with a warning.

    Returns:
      (all_words, answer_words)
    """
    all_words = load_wordlist(wordlist)
    answer_words = load_wordlist(answers) if answers is not None else set(all_words)

    missing = answer_words - all_words
    if missing:
        # it won't affect anything, but the data should be looked at
        log.warning("%d word(s) in answer wordlist not in wordlist", len(missing))
        all_words |= missing
    return all_words, answer_words
