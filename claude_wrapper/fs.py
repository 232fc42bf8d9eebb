"""Filesystem helpers: branch-name encoding and tree copying."""

from __future__ import annotations

import shutil
from pathlib import Path


def sanitize_branch_name(name: str) -> str:
    """Encode a branch name as a single directory segment.

    ``%`` is encoded before ``/`` so the escape introduced for slashes is
    never itself re-encoded.
    """

    return name.replace("%", "%25").replace("/", "%2F")


def unsanitize_branch_name(segment: str) -> str:
    """Reverse :func:`sanitize_branch_name`."""

    return segment.replace("%2F", "/").replace("%25", "%")


def ensure_directory(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def list_entries(path: Path) -> list[str]:
    """Return the names directly under ``path``; a missing directory is empty."""

    try:
        return sorted(child.name for child in path.iterdir())
    except FileNotFoundError:
        return []


def remove_path(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


def copy_file(src: Path | str, dst: Path | str) -> None:
    """Replace ``dst`` with the bytes of ``src`` and copy its permission bits.

    An existing destination file is unlinked first so read-only copies can
    still be replaced.
    """

    dst = Path(dst)
    if dst.is_symlink() or dst.is_file():
        remove_path(dst)
    shutil.copyfile(src, dst)
    shutil.copymode(src, dst)


def copy_path(src: Path, dst: Path) -> None:
    """Copy a file or a whole directory tree from ``src`` to ``dst``.

    Existing destination files are overwritten whole; files only present at
    the destination are left in place.
    """

    if not src.exists():
        raise FileNotFoundError(f"No such file or directory: '{src}'")
    ensure_directory(dst.parent)
    if src.is_dir():
        shutil.copytree(src, dst, copy_function=copy_file, dirs_exist_ok=True)
    else:
        copy_file(src, dst)


__all__ = [
    "sanitize_branch_name",
    "unsanitize_branch_name",
    "ensure_directory",
    "list_entries",
    "remove_path",
    "copy_file",
    "copy_path",
]
