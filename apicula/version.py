"""Version string built from the package version, git revision and date."""

from __future__ import annotations

import os
import subprocess
from datetime import datetime, timezone

VERSION = "0.1.0"

_UNKNOWN_COMMIT = "unknown commit"


def _run_git(args: list[str], cwd: str | os.PathLike | None):
    try:
        return subprocess.run(["git", *args], cwd=cwd, capture_output=True)
    except OSError:
        return None


def git_revision(cwd: str | os.PathLike | None = None) -> str:
    """Return the short git hash, prefixed with "WIP " if the tree is dirty."""
    commit_hash = _run_git(["rev-parse", "--short", "HEAD"], cwd)
    changes = _run_git(["status", "--porcelain"], cwd)
    if (
        commit_hash is None
        or changes is None
        or commit_hash.returncode != 0
        or changes.returncode != 0
    ):
        return _UNKNOWN_COMMIT

    raw = commit_hash.stdout or b""
    # Drop the trailing newline.
    rev = raw[:-1].decode("utf-8", errors="replace") if raw else ""
    if changes.stdout:
        return f"WIP {rev}"
    return rev


def compile_date() -> str:
    """Return today's date in UTC as YYYY-MM-DD."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%d")


def version_string(cwd: str | os.PathLike | None = None) -> str:
    """Return the full version string, e.g. "0.1.0 (abc1234 2024-01-01)"."""
    return f"{VERSION} ({git_revision(cwd)} {compile_date()})"