"""Reclaim storage for branches that no longer exist.

A branch missing from git first gets a ``.deleted_at`` marker holding the
Unix time it was noticed. The marker is dropped if the branch comes back;
once it is older than the grace period the whole branch directory goes.
"""

from __future__ import annotations

import logging
import shutil
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Protocol

from .fs import unsanitize_branch_name
from .models import BRANCHES_DIR, DELETION_GRACE_SECONDS, DELETION_MARKER, RetentionReport

logger = logging.getLogger(__name__)


class BranchLister(Protocol):
    """Source of the branch names that currently exist."""

    def live_branches(self) -> set[str]:
        ...


class MalformedMarkerError(ValueError):
    """Raised when a deletion marker does not hold an integer timestamp."""


def read_marker(path: Path) -> int | None:
    """Return the marker timestamp, or None when no marker exists."""

    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except UnicodeDecodeError as exc:
        raise MalformedMarkerError(f"{path} is not text") from exc
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise MalformedMarkerError(f"{path} holds {raw.strip()!r}") from exc


def write_marker(path: Path, timestamp: int) -> None:
    path.write_text(str(timestamp), encoding="utf-8")


@dataclass
class RetentionManager:
    store_base: Path
    lister: BranchLister
    clock: Callable[[], float] = time.time
    grace_seconds: int = DELETION_GRACE_SECONDS
    report: RetentionReport = field(default_factory=RetentionReport, init=False)

    @property
    def branches_root(self) -> Path:
        return self.store_base / BRANCHES_DIR

    def run(self, current_branch: str) -> RetentionReport:
        """Mark, revive, or expire every stored feature branch."""

        self.report = RetentionReport()
        if not self.branches_root.is_dir():
            return self.report

        live = self.lister.live_branches()
        now = int(self.clock())
        for branch_dir in sorted(self.branches_root.iterdir()):
            if not branch_dir.is_dir():
                continue
            branch = unsanitize_branch_name(branch_dir.name)
            if branch == current_branch:
                self.report.skipped.append(branch)
                continue
            if branch in live:
                self._revive(branch, branch_dir)
            else:
                self._expire(branch, branch_dir, now)
        return self.report

    def _revive(self, branch: str, branch_dir: Path) -> None:
        marker = branch_dir / DELETION_MARKER
        try:
            marker.unlink()
        except FileNotFoundError:
            return
        except OSError as exc:
            logger.warning("Failed to clear deletion marker for %s: %s", branch, exc)
            self.report.failed.append(branch)
            return
        logger.info("Branch %s is back; cancelled pending deletion", branch)
        self.report.revived.append(branch)

    def _expire(self, branch: str, branch_dir: Path, now: int) -> None:
        marker = branch_dir / DELETION_MARKER
        try:
            deleted_at = read_marker(marker)
        except MalformedMarkerError as exc:
            logger.warning("Ignoring unreadable deletion marker: %s", exc)
            self.report.skipped.append(branch)
            return
        except OSError as exc:
            logger.warning("Failed to read deletion marker for %s: %s", branch, exc)
            self.report.failed.append(branch)
            return

        if deleted_at is None:
            try:
                write_marker(marker, now)
            except OSError as exc:
                logger.warning("Failed to create deletion marker for %s: %s", branch, exc)
                self.report.failed.append(branch)
                return
            logger.info("Branch %s no longer exists; storage kept for %d days", branch, self.grace_days)
            self.report.marked.append(branch)
            return

        if now - deleted_at <= self.grace_seconds:
            self.report.retained.append(branch)
            return

        try:
            shutil.rmtree(branch_dir)
        except OSError as exc:
            logger.warning("Failed to delete old branch %s: %s", branch, exc)
            self.report.failed.append(branch)
            return
        logger.info("Deleted storage for %s", branch)
        self.report.expired.append(branch)

    @property
    def grace_days(self) -> int:
        return self.grace_seconds // (24 * 60 * 60)


__all__ = [
    "BranchLister",
    "MalformedMarkerError",
    "RetentionManager",
    "read_marker",
    "write_marker",
]
