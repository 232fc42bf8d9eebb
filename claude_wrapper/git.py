"""Thin wrappers around git CLI commands."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from .exceptions import GitCommandError, RepoDetectionError, RetentionError

FALLBACK_DEFAULT_BRANCH = "main"
_ORIGIN_HEAD_PREFIX = "refs/remotes/origin/"


def run_git(
    args: Sequence[str],
    *,
    cwd: Path | None = None,
    check: bool = True,
) -> subprocess.CompletedProcess[str]:
    command = ["git", *args]
    try:
        result = subprocess.run(
            command,
            cwd=str(cwd) if cwd else None,
            text=True,
            capture_output=True,
        )
    except FileNotFoundError as exc:
        raise RepoDetectionError("git executable not found") from exc
    if check and result.returncode != 0:
        raise GitCommandError(
            command,
            result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
        )
    return result


def repo_root(cwd: Path | None = None) -> Path:
    proc = run_git(["rev-parse", "--show-toplevel"], cwd=cwd)
    return Path(proc.stdout.strip())


def current_branch(cwd: Path | None = None) -> str:
    proc = run_git(["branch", "--show-current"], cwd=cwd)
    branch = proc.stdout.strip()
    if not branch:
        raise RepoDetectionError("not on a branch")
    return branch


def default_branch(cwd: Path | None = None) -> str:
    proc = run_git(["symbolic-ref", _ORIGIN_HEAD_PREFIX + "HEAD"], cwd=cwd, check=False)
    if proc.returncode != 0:
        return FALLBACK_DEFAULT_BRANCH
    ref = proc.stdout.strip()
    return ref.removeprefix(_ORIGIN_HEAD_PREFIX) or FALLBACK_DEFAULT_BRANCH


def list_branches(cwd: Path | None = None) -> set[str]:
    proc = run_git(["branch", "--format=%(refname:short)"], cwd=cwd)
    branches: set[str] = set()
    for raw in proc.stdout.splitlines():
        line = raw.strip()
        if line:
            branches.add(line)
    return branches


@dataclass(frozen=True)
class GitBranchLister:
    """Lists local branches of the repository at ``repo_path``."""

    repo_path: Path

    def live_branches(self) -> set[str]:
        try:
            return list_branches(self.repo_path)
        except GitCommandError as exc:
            raise RetentionError(f"could not list branches: {exc}") from exc


__all__ = [
    "FALLBACK_DEFAULT_BRANCH",
    "run_git",
    "repo_root",
    "current_branch",
    "default_branch",
    "list_branches",
    "GitBranchLister",
]
