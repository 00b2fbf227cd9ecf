import json
import logging
import os
import subprocess
import sys
from pathlib import Path

import pytest

from tictactoe_search.cli import main

SRC = Path(__file__).resolve().parents[1] / "src"


def test_choose_reports_one_indexed_move(caplog: pytest.LogCaptureFixture):
    caplog.set_level(logging.INFO)
    assert main(["choose", "--board", "110220000"]) == 0
    assert "to_move=x move=(1,3) score=1" in caplog.text


def test_choose_with_depth_limited_override(caplog: pytest.LogCaptureFixture):
    caplog.set_level(logging.INFO)
    rc = main(["choose", "--board", "000000000", "--mode", "depth-limited", "--max-depth", "0",
               "--weights", "reference"])
    assert rc == 0
    assert "move=(2,2) score=28" in caplog.text


def test_evaluate_prints_line_counts(caplog: pytest.LogCaptureFixture):
    caplog.set_level(logging.INFO)
    assert main(["evaluate", "--board", "100010002"]) == 0
    assert "c3=0 n2=0 c2=0 n1=2 c1=5 score=5" in caplog.text


@pytest.mark.parametrize("board", ["12", "1x0000000", "111222000", "220000000"])
def test_choose_rejects_bad_boards(board, caplog: pytest.LogCaptureFixture):
    assert main(["choose", "--board", board]) == 2
    assert any(r.levelno == logging.ERROR for r in caplog.records)


def test_choose_on_finished_game():
    assert main(["choose", "--board", "111220000"]) == 2


def test_bad_env_mode_is_reported(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("TTT_SEARCH_MODE", "random")
    assert main(["choose", "--board", "100020000"]) == 2


def test_audit_subcommand(tmp_path: Path):
    out = tmp_path / "audit"
    assert main(["audit", "--out", str(out), "--min-marks", "7"]) == 0
    manifest = json.loads((out / "manifest.json").read_text())
    assert manifest["args"]["min_marks"] == 7
    assert manifest["cli_argv"][0] == "audit"
    assert (out / "search_audit.csv").exists()


def test_audit_rejects_negative_depth(tmp_path: Path):
    assert main(["audit", "--out", str(tmp_path), "--max-depth", "-1"]) == 2


def test_module_help_smoke(tmp_path: Path):
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(p for p in [str(SRC), env.get("PYTHONPATH", "")] if p)
    r = subprocess.run(
        [sys.executable, "-m", "tictactoe_search.cli", "--help"],
        cwd=tmp_path, capture_output=True, text=True, env=env,
    )
    assert r.returncode == 0
    for cmd in ["play", "choose", "evaluate", "audit"]:
        assert cmd in r.stdout


def test_flags_win_over_environment(monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture):
    monkeypatch.setenv("TTT_SEARCH_MODE", "exhaustive")
    monkeypatch.setenv("TTT_SEARCH_MAX_DEPTH", "5")
    caplog.set_level(logging.INFO)
    rc = main(["choose", "--board", "000000000", "--mode", "depth-limited", "--max-depth", "0"])
    assert rc == 0
    assert "move=(2,2) score=28" in caplog.text


def test_environment_still_applies_without_flags(monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture):
    monkeypatch.setenv("TTT_SEARCH_MODE", "depth-limited")
    monkeypatch.setenv("TTT_SEARCH_MAX_DEPTH", "0")
    caplog.set_level(logging.INFO)
    assert main(["choose", "--board", "000000000"]) == 0
    assert "move=(2,2) score=28" in caplog.text


def test_weights_rejected_outside_depth_limited(caplog: pytest.LogCaptureFixture):
    assert main(["choose", "--board", "100020000", "--weights", "unit"]) == 2
    assert "depth-limited" in caplog.text


def test_play_exits_cleanly_on_closed_input(monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture):
    def closed(prompt: str) -> str:
        raise EOFError

    monkeypatch.setattr("builtins.input", closed)
    # the human opens under this preset, so input is read before any search
    assert main(["play", "--preset", "exhaustive"]) == 1
    assert "Input closed" in caplog.text
