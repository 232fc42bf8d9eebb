"""Launch the wrapped program."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from typing import NoReturn, Sequence

from .exceptions import ProgramNotFoundError

logger = logging.getLogger(__name__)


def exec_program(program: str, args: Sequence[str]) -> NoReturn:
    """Replace the current process with ``program``.

    Used when there is nothing to sync, so no work remains after it exits.
    """

    path = shutil.which(program)
    if path is None:
        raise ProgramNotFoundError(program)
    logger.debug("Exec %s %s", path, " ".join(args))
    os.execv(path, [program, *args])


def run_program(program: str, args: Sequence[str]) -> int:
    """Run ``program`` attached to our stdio and return its exit code.

    A child killed by signal N reports ``128 + N``.
    """

    command = [program, *args]
    logger.debug("Running %s", " ".join(command))
    try:
        result = subprocess.run(command, check=False)
    except FileNotFoundError as exc:
        raise ProgramNotFoundError(program) from exc
    if result.returncode < 0:
        return 128 - result.returncode
    return result.returncode


__all__ = ["exec_program", "run_program"]
