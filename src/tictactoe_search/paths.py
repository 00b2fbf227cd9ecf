"""Path helpers for report locations and provenance metadata.

Environment-first, with fallbacks that still work when installed as a
package or executed from an arbitrary working directory.
"""

from __future__ import annotations

import os
import subprocess
from pathlib import Path


def _find_git_root(start: Path) -> Path | None:
    cur = start
    for _ in range(5):
        if (cur / ".git").exists():
            return cur
        if cur.parent == cur:
            break
        cur = cur.parent
    return None


def repo_root() -> Path:
    """Best-effort repository root.

    Order: env var TTT_SEARCH_REPO_ROOT -> nearest parent containing .git -> CWD.
    """
    env = os.getenv("TTT_SEARCH_REPO_ROOT")
    if env:
        return Path(env)
    git_root = _find_git_root(Path(__file__).resolve())
    if git_root is not None:
        return git_root
    return Path.cwd()


def reports_dir() -> Path:
    p = os.getenv("TTT_SEARCH_REPORTS")
    return Path(p) if p else repo_root() / "reports"


def _git(*args: str) -> str | None:
    try:
        out = subprocess.check_output(
            ["git", "-C", str(repo_root()), *args],
            stderr=subprocess.DEVNULL,
            text=True,
            timeout=2.0,
        )
    except (OSError, subprocess.SubprocessError):
        return None
    return out


def get_git_commit() -> str | None:
    """Current commit hash, or None outside a git checkout."""
    out = _git("rev-parse", "HEAD")
    return out.strip() if out else None


def get_git_is_dirty() -> bool | None:
    """True with uncommitted changes, False when clean, None when unknown."""
    out = _git("status", "--porcelain")
    if out is None:
        return None
    return len(out.strip()) > 0
