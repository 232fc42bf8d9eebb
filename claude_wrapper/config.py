"""Environment configuration and session construction."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping

from . import git
from .exceptions import ConfigError
from .models import DEFAULT_LOG_LEVEL, DEFAULT_PROGRAM, DEFAULT_STORE_ROOT, SessionContext, Settings
from .storage import resolve_location


_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"", "0", "false", "no", "off"}


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    env = os.environ if environ is None else environ
    return Settings(
        store_root=_store_root(env),
        program=_program(env),
        log_level=_log_level(env),
        cleanup=not _flag(env, "CLAUDE_WRAPPER_DISABLE_CLEANUP"),
    )


def _store_root(env: Mapping[str, str]) -> Path:
    raw = env.get("CLAUDE_WRAPPER_STORE_ROOT")
    path = Path(raw).expanduser() if raw else DEFAULT_STORE_ROOT.expanduser()
    if path.exists() and not path.is_dir():
        raise ConfigError(
            f"Path from CLAUDE_WRAPPER_STORE_ROOT is not a directory: {path}. Pick another location."
        )
    return path


def _program(env: Mapping[str, str]) -> str:
    raw = env.get("CLAUDE_WRAPPER_PROGRAM")
    if raw is None:
        return DEFAULT_PROGRAM
    program = raw.strip()
    if not program:
        raise ConfigError("CLAUDE_WRAPPER_PROGRAM is set but empty. Unset it or name a program.")
    return program


def _log_level(env: Mapping[str, str]) -> str:
    level = env.get("CLAUDE_WRAPPER_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper() or DEFAULT_LOG_LEVEL
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(f"Unknown log level in CLAUDE_WRAPPER_LOG_LEVEL: {level}")
    return level


def _flag(env: Mapping[str, str], var: str) -> bool:
    value = env.get(var, "").strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ConfigError(f"{var} must be one of: {', '.join(sorted((_TRUTHY | _FALSY) - {''}))}")


def build_session(settings: Settings, cwd: Path | None = None) -> SessionContext:
    """Query git and work out where this branch's files are stored."""

    root = git.repo_root(cwd)
    branch = git.current_branch(cwd)
    default = git.default_branch(cwd)
    store_base = settings.store_root / root.name
    return SessionContext(
        repo_root=root,
        current_branch=branch,
        default_branch=default,
        store_base=store_base,
        store_location=resolve_location(store_base, branch, default),
    )


__all__ = ["load_settings", "build_session"]
