import logging
from pathlib import Path
from wordle_turns.datasets import validate_wordlists, pretty_summary, load_wordlist, load_wordlists


def _write(p: Path, lines):
    p.write_text("\n".join(lines) + "\n", encoding="utf-8")


def test_validate_wordlists_happy_path(tmp_path: Path):
    # all lowercase alpha; answers subset of wordlist
    ans = tmp_path / "answers.txt"
    allw = tmp_path / "wordlist.txt"
    _write(ans, ["crane", "raise", "stare"])
    _write(allw, ["crane", "raise", "stare", "trace", "cared"])

    rep = validate_wordlists(str(allw), str(ans))
    assert rep["passed"] is True
    assert rep["answers_subset_wordlist"] is True
    assert rep["answers"]["count"] == 3
    s = pretty_summary(rep)
    assert "N=5" in s and "answers⊆wordlist=True" in s and s.endswith("OK")


def test_validate_wordlists_without_answers(tmp_path: Path):
    allw = tmp_path / "wordlist.txt"
    _write(allw, ["crane", "raise"])
    rep = validate_wordlists(str(allw))
    assert rep["passed"] is True
    assert rep["answers"]["sha256"] == rep["wordlist"]["sha256"]


def test_validate_wordlists_flags_errors(tmp_path: Path):
    # wrong length, uppercase, and invalid chars should be flagged
    ans = tmp_path / "answers.txt"
    allw = tmp_path / "wordlist.txt"
    ans.write_text("crane\ncranes\n???\nSTARE\n", encoding="utf-8")
    allw.write_text("crane\nplane\nplane\n", encoding="utf-8")

    rep = validate_wordlists(str(allw), str(ans))
    assert rep["passed"] is False
    assert rep["answers"]["invalid_lines"] == 3
    assert any("invalid" in msg for msg in rep["issues"])
    assert any("duplicate" in msg for msg in rep["issues"])


def test_validate_wordlists_subset_violation(tmp_path: Path):
    ans = tmp_path / "answers.txt"
    allw = tmp_path / "wordlist.txt"
    _write(ans, ["crane", "raise", "stare"])
    _write(allw, ["crane", "stare"])  # missing 'raise'

    rep = validate_wordlists(str(allw), str(ans))
    assert rep["passed"] is False
    assert rep["answers_subset_wordlist"] is False
    assert any("subset" in msg for msg in rep["issues"])


def test_validate_wordlists_missing_file(tmp_path: Path):
    rep = validate_wordlists(str(tmp_path / "nope.txt"))
    assert rep["passed"] is False
    assert rep["wordlist"]["exists"] is False
    assert any("not found" in msg for msg in rep["issues"])


def test_load_wordlist_skips_invalid_lines(tmp_path: Path):
    p = tmp_path / "words.txt"
    p.write_text("crane\n\nCRANE\nslate\ncranes\nslate\n", encoding="utf-8")
    assert load_wordlist(p) == {"crane", "slate"}


def test_load_wordlists_unions_answers(tmp_path: Path, caplog):
    ans = tmp_path / "answers.txt"
    allw = tmp_path / "wordlist.txt"
    _write(ans, ["crane", "zesty"])
    _write(allw, ["crane", "slate"])

    with caplog.at_level(logging.WARNING):
        all_words, answers = load_wordlists(allw, ans)
    assert answers == {"crane", "zesty"}
    assert all_words == {"crane", "slate", "zesty"}
    assert "not in wordlist" in caplog.text


def test_load_wordlists_defaults_answers_to_wordlist(tmp_path: Path):
    allw = tmp_path / "wordlist.txt"
    _write(allw, ["crane", "slate"])
    all_words, answers = load_wordlists(allw)
    assert all_words == answers == {"crane", "slate"}
