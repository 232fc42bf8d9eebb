"""Dataclasses and layout constants shared across modules."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

EXCLUDE_FILE = Path(".git") / "info" / "exclude"
DELETION_MARKER = ".deleted_at"
BRANCHES_DIR = "branches"
DELETION_GRACE_DAYS = 7
DELETION_GRACE_SECONDS = DELETION_GRACE_DAYS * 24 * 60 * 60

# Storage entries that hold bookkeeping state rather than user files.
RESERVED_ENTRIES = frozenset({BRANCHES_DIR, DELETION_MARKER})

DEFAULT_STORE_ROOT = Path("~/.workspaces")
DEFAULT_PROGRAM = "claude"
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(slots=True)
class Settings:
    """Runtime configuration resolved from the environment."""

    store_root: Path
    program: str = DEFAULT_PROGRAM
    log_level: str = DEFAULT_LOG_LEVEL
    cleanup: bool = True


@dataclass(frozen=True)
class SessionContext:
    """Everything one invocation needs to know about the repository."""

    repo_root: Path
    current_branch: str
    default_branch: str
    store_base: Path
    store_location: Path

    @property
    def on_default_branch(self) -> bool:
        return self.current_branch == self.default_branch

    @property
    def branches_root(self) -> Path:
        return self.store_base / BRANCHES_DIR


@dataclass(slots=True)
class RetentionReport:
    """Outcome of one retention pass, keyed by decoded branch name."""

    marked: list[str] = field(default_factory=list)
    revived: list[str] = field(default_factory=list)
    retained: list[str] = field(default_factory=list)
    expired: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.marked or self.revived or self.expired)
