"""Shared fixtures for filesystem-backed tests."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from claude_wrapper.models import SessionContext
from claude_wrapper.storage import resolve_location


class FakeBranchLister:
    def __init__(self, branches: set[str] | None = None):
        self.branches = set(branches or ())
        self.calls = 0

    def live_branches(self) -> set[str]:
        self.calls += 1
        return set(self.branches)


class WorkspaceTestCase(unittest.TestCase):
    """Provides a fake repository root and a storage base in a temp dir."""

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.tmp = Path(self._tmp.name)
        self.repo = self.tmp / "repo"
        (self.repo / ".git" / "info").mkdir(parents=True)
        self.store_base = self.tmp / "store" / "repo"

    def context(self, branch: str = "main", default: str = "main") -> SessionContext:
        return SessionContext(
            repo_root=self.repo,
            current_branch=branch,
            default_branch=default,
            store_base=self.store_base,
            store_location=resolve_location(self.store_base, branch, default),
        )

    def write(self, path: Path, content: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path

    def exclude_lines(self) -> list[str]:
        path = self.repo / ".git" / "info" / "exclude"
        if not path.exists():
            return []
        return path.read_text().splitlines()
