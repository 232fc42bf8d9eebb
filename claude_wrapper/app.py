"""Main application orchestration."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Sequence

from . import runner
from .config import build_session, load_settings
from .exceptions import GitCommandError, RepoDetectionError, WrapperError
from .git import GitBranchLister
from .models import RetentionReport, SessionContext, Settings
from .retention import BranchLister, RetentionManager
from .sync import sync_in, sync_out

logger = logging.getLogger(__name__)


def run(
    args: Sequence[str],
    *,
    settings: Settings | None = None,
    cwd: Path | None = None,
    lister: BranchLister | None = None,
    clock: Callable[[], float] | None = None,
) -> int:
    """Run the wrapped program with branch-specific personal files in place.

    Outside a git repository (or on a detached HEAD) the program replaces
    this process and nothing is synced.
    """

    settings = settings or load_settings()
    try:
        context = build_session(settings, cwd)
    except (GitCommandError, RepoDetectionError) as exc:
        logger.debug("No branch to sync (%s); running %s directly", exc, settings.program)
        return runner.exec_program(settings.program, args)

    logger.debug(
        "Branch %s (default %s) uses storage %s",
        context.current_branch,
        context.default_branch,
        context.store_location,
    )
    sync_in(context)
    try:
        exit_code = runner.run_program(settings.program, args)
    finally:
        sync_out(context)

    if settings.cleanup:
        cleanup(context, lister or GitBranchLister(context.repo_root), clock)
    return exit_code


def cleanup(
    context: SessionContext,
    lister: BranchLister,
    clock: Callable[[], float] | None = None,
) -> RetentionReport | None:
    """Run the retention pass; failures are logged and never raised."""

    manager = RetentionManager(context.store_base, lister)
    if clock is not None:
        manager.clock = clock
    try:
        return manager.run(context.current_branch)
    except (WrapperError, OSError) as exc:
        logger.warning("cleanup failed: %s", exc)
        return None


__all__ = ["run", "cleanup"]
