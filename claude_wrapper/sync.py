"""Copy personal files between branch storage and the working tree."""

from __future__ import annotations

import logging

from .exceptions import SyncError
from .exclude import add_to_exclude, read_exclude
from .fs import copy_path, ensure_directory, list_entries, remove_path
from .models import RESERVED_ENTRIES, SessionContext
from .storage import initialize_branch_storage

logger = logging.getLogger(__name__)


def sync_in(context: SessionContext) -> list[str]:
    """Materialize branch storage into the working tree.

    Every copied entry is registered in the exclude list. The first failure
    aborts the phase; entries already copied stay in place.
    """

    try:
        initialize_branch_storage(context)
    except OSError as exc:
        raise SyncError("in", None, exc) from exc

    try:
        names = list_entries(context.store_location)
    except OSError as exc:
        raise SyncError("in", None, exc) from exc

    copied: list[str] = []
    for name in names:
        if name in RESERVED_ENTRIES:
            continue
        try:
            copy_path(context.store_location / name, context.repo_root / name)
            add_to_exclude(context.repo_root, name)
        except OSError as exc:
            raise SyncError("in", name, exc) from exc
        copied.append(name)
    logger.debug("Synced %d entries into %s", len(copied), context.repo_root)
    return copied


def sync_out(context: SessionContext) -> list[str]:
    """Capture managed working-tree entries back into branch storage.

    Storage entries no longer named by the exclude list are pruned.
    """

    try:
        entries = read_exclude(context.repo_root)
        ensure_directory(context.store_location)
    except OSError as exc:
        raise SyncError("out", None, exc) from exc

    saved: list[str] = []
    for entry in entries:
        src = context.repo_root / entry
        if not src.exists():
            continue
        try:
            copy_path(src, context.store_location / entry)
        except OSError as exc:
            raise SyncError("out", entry, exc) from exc
        saved.append(entry)

    keep = set(entries)
    try:
        stored = list_entries(context.store_location)
    except OSError as exc:
        raise SyncError("out", None, exc) from exc
    for name in stored:
        if name in RESERVED_ENTRIES or name in keep:
            continue
        try:
            remove_path(context.store_location / name)
        except OSError as exc:
            raise SyncError("out", name, exc) from exc
        logger.debug("Pruned %s from storage", name)
    logger.debug("Synced %d entries out to %s", len(saved), context.store_location)
    return saved


__all__ = ["sync_in", "sync_out"]
