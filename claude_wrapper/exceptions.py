"""Custom error hierarchy for claude-wrapper."""

from __future__ import annotations


class WrapperError(RuntimeError):
    """Base error for the wrapper."""


class ConfigError(WrapperError):
    """Raised when environment configuration is invalid."""


class RepoDetectionError(WrapperError):
    """Raised when we cannot resolve repository or branch metadata."""


class GitCommandError(WrapperError):
    """Raised when an underlying git command fails."""

    def __init__(
        self,
        command: list[str],
        returncode: int,
        *,
        stdout: str | None = None,
        stderr: str | None = None,
    ):
        self.command = command
        self.returncode = returncode
        self.stdout = stdout or ""
        self.stderr = stderr or ""
        message = f"git command failed (exit {returncode}): {' '.join(command)}"
        details = "\n".join(
            section
            for section in (self.stdout.strip(), self.stderr.strip())
            if section
        )
        if details:
            message = f"{message}\n{details}"
        super().__init__(message)


class SyncError(WrapperError):
    """Raised when copying personal files into or out of storage fails."""

    def __init__(self, phase: str, entry: str | None, cause: Exception):
        self.phase = phase
        self.entry = entry
        self.cause = cause
        if entry:
            message = f"sync {phase} failed for {entry}: {cause}"
        else:
            message = f"sync {phase} failed: {cause}"
        super().__init__(message)


class RetentionError(WrapperError):
    """Raised when stale branch storage cannot be scanned."""


class ProgramNotFoundError(WrapperError):
    """Raised when the wrapped program is not on PATH."""

    def __init__(self, program: str):
        self.program = program
        super().__init__(f"{program} not found on PATH")


__all__ = [
    "WrapperError",
    "ConfigError",
    "RepoDetectionError",
    "GitCommandError",
    "SyncError",
    "RetentionError",
    "ProgramNotFoundError",
]
