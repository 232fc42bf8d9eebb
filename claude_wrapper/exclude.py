"""Read and update the repository's `.git/info/exclude` list."""

from __future__ import annotations

import logging
from pathlib import Path

from .fs import ensure_directory
from .models import EXCLUDE_FILE

logger = logging.getLogger(__name__)

_GLOB_CHARS = frozenset("*?[]")


def exclude_path(repo_root: Path) -> Path:
    return repo_root / EXCLUDE_FILE


def parse_entry(line: str) -> str | None:
    """Return the literal path a line names, or None for comments and patterns."""

    entry = line.strip()
    if not entry or entry.startswith(("#", "!")):
        return None
    if _GLOB_CHARS.intersection(entry):
        return None
    # a leading slash only anchors the pattern to the repository root
    entry = entry.removesuffix("/").lstrip("/")
    return entry or None


def read_exclude(repo_root: Path) -> list[str]:
    """Return the managed entries that currently exist under ``repo_root``."""

    path = exclude_path(repo_root)
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except FileNotFoundError:
        return []
    entries: list[str] = []
    for line in lines:
        entry = parse_entry(line)
        if entry is None:
            continue
        if (repo_root / entry).exists():
            entries.append(entry)
    return entries


def add_to_exclude(repo_root: Path, entry: str) -> bool:
    """Append ``entry`` unless an identical line is already present.

    Returns True when the file was modified.
    """

    path = exclude_path(repo_root)
    ensure_directory(path.parent)
    existing = ""
    if path.exists():
        existing = path.read_text(encoding="utf-8")
        if any(line.strip() == entry for line in existing.splitlines()):
            return False
    with path.open("a", encoding="utf-8") as handle:
        if existing and not existing.endswith("\n"):
            handle.write("\n")
        handle.write(f"{entry}\n")
    logger.debug("Added %s to %s", entry, path)
    return True


__all__ = ["exclude_path", "parse_entry", "read_exclude", "add_to_exclude"]
