"""Resolve and seed per-branch storage directories."""

from __future__ import annotations

import logging
from pathlib import Path

from .fs import copy_path, ensure_directory, list_entries, sanitize_branch_name
from .models import BRANCHES_DIR, RESERVED_ENTRIES, SessionContext

logger = logging.getLogger(__name__)


def resolve_location(store_base: Path, current_branch: str, default_branch: str) -> Path:
    """Return the storage directory for ``current_branch``.

    The default branch uses ``store_base`` itself; every other branch gets a
    sanitized directory under ``branches/``.
    """

    if current_branch == default_branch:
        return store_base
    return store_base / BRANCHES_DIR / sanitize_branch_name(current_branch)


def initialize_branch_storage(context: SessionContext) -> bool:
    """Create feature-branch storage, seeded from the default branch's files.

    Runs at most once per branch: existing storage is never touched again.
    Returns True when storage was created.
    """

    if context.on_default_branch:
        return False
    location = context.store_location
    if location.exists():
        return False
    ensure_directory(location)
    logger.debug("Created storage for %s at %s", context.current_branch, location)
    if not context.store_base.is_dir():
        return True
    for name in list_entries(context.store_base):
        if name in RESERVED_ENTRIES:
            continue
        copy_path(context.store_base / name, location / name)
        logger.debug("Seeded %s from %s storage", name, context.default_branch)
    return True


__all__ = ["resolve_location", "initialize_branch_storage"]
