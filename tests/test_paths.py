from pathlib import Path

from tictactoe_search.paths import get_git_commit, get_git_is_dirty, repo_root, reports_dir


def test_repo_root_prefers_cwd_when_no_git_and_no_env(tmp_path: Path, monkeypatch):
    monkeypatch.delenv("TTT_SEARCH_REPO_ROOT", raising=False)
    monkeypatch.delenv("TTT_SEARCH_REPORTS", raising=False)

    monkeypatch.chdir(tmp_path)
    import tictactoe_search.paths as P

    monkeypatch.setattr(P, "_find_git_root", lambda start: None)

    assert repo_root() == tmp_path
    assert reports_dir() == tmp_path / "reports"


def test_env_overrides_paths(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("TTT_SEARCH_REPO_ROOT", str(tmp_path / "root"))
    assert repo_root() == tmp_path / "root"
    assert reports_dir() == tmp_path / "root" / "reports"
    monkeypatch.setenv("TTT_SEARCH_REPORTS", str(tmp_path / "elsewhere"))
    assert reports_dir() == tmp_path / "elsewhere"


def test_git_helpers_without_git(monkeypatch):
    import tictactoe_search.paths as P

    monkeypatch.setattr(P, "_git", lambda *args: None)
    assert get_git_commit() is None
    assert get_git_is_dirty() is None
    monkeypatch.setattr(P, "_git", lambda *args: "")
    assert get_git_is_dirty() is False
