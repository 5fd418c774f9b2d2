from pathlib import Path

import pytest
from apps.cli import run as cli
from wordle_turns.scorer import GuessScorer

TRIO = ["crane", "slate", "trace"]


def _feed(monkeypatch, lines):
    it = iter(lines)

    def fake_input(prompt=""):
        try:
            return next(it)
        except StopIteration:
            raise EOFError

    monkeypatch.setattr("builtins.input", fake_input)


def _write(p: Path, lines):
    p.write_text("\n".join(lines) + "\n", encoding="utf-8")


def test_interactive_reprompts_after_bad_input(monkeypatch, capsys):
    _feed(monkeypatch, [
        "crane", "22x",    # pattern too short
        "crane", "00a02",  # bad rule character
        "zzzzz",           # not a valid guess
        "crane", "00202",  # slate is all that is left
    ])
    code = cli.run_interactive(set(TRIO), set(TRIO), GuessScorer(shards=1), cutoff=None)
    out = capsys.readouterr().out
    assert code == 0
    assert out.count("Error:") == 3
    assert "Reduced to 1 remaining words" in out
    assert out.rstrip().endswith("slate")


def test_interactive_end_of_input(monkeypatch, capsys):
    _feed(monkeypatch, ["crane"])
    code = cli.run_interactive(set(TRIO), set(TRIO), GuessScorer(shards=1), cutoff=None)
    assert code == 1
    assert "Error: expected input" in capsys.readouterr().out


def test_interactive_recommends_under_cutoff(monkeypatch, capsys):
    words = TRIO + ["dumpy"]
    _feed(monkeypatch, ["dumpy", "00000"])
    code = cli.run_interactive(set(words), set(TRIO), GuessScorer(shards=1), cutoff=5)
    out = capsys.readouterr().out
    assert code == 1  # input runs out after the recommendation
    assert "Recommended guesses: " in out
    assert "crane:" in out and "dumpy:" in out


def test_main_optimize_uses_process_pool_by_default(tmp_path: Path, monkeypatch, capsys):
    created = []

    class RecordingScorer(GuessScorer):
        def __init__(self, *args, **kwargs):
            super().__init__(*args, **kwargs)
            created.append(self)

    monkeypatch.setattr(cli, "GuessScorer", RecordingScorer)
    wl = tmp_path / "wordlist.txt"
    _write(wl, TRIO)

    assert cli.main(["-w", str(wl), "--optimize", "--shards", "1"]) == 0
    out = capsys.readouterr().out
    assert "1. crane:" in out
    assert "3. trace:" in out
    assert [s.executor for s in created] == ["process"]


def test_main_rejects_bad_cutoff(tmp_path: Path):
    wl = tmp_path / "wordlist.txt"
    _write(wl, TRIO)
    with pytest.raises(SystemExit):
        cli.main(["-w", str(wl), "-c", "0"])
