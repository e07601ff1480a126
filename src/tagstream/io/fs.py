"""
Filesystem helpers for tagstream.io (file protocol baseline).

Responsibilities
- Provide a minimal stdlib-only abstraction for the filesystem operations the writer needs:
  directory checks, exclusive file creation, and Parquet file discovery.
- Map OS failures onto tagstream.io.errors so the writer surfaces one error family.

Notes
- Files are created with O_EXCL semantics ("xb" mode); an existing file is never overwritten.
- There is no tmp-file/fsync/rename discipline: a file being written is visible under its
  final name and is only readable once its footer is written on close.
- All helpers are synchronous; the writer is the single consumer of its output directory.
"""

from __future__ import annotations

import os
from typing import BinaryIO

from .errors import IoConfigError, IoNamingCollisionError, IoWriteError


def is_dir(path: str | os.PathLike[str]) -> bool:
    """Return True if path exists and is a directory."""
    return os.path.isdir(path)


def require_dir(path: str | os.PathLike[str]) -> str:
    """
    Ensure an output directory exists before anything is written into it.

    Args:
        path (str | PathLike): Candidate output directory.

    Returns:
        str: The path as a string.

    Raises:
        IoConfigError: If the path is missing or is not a directory.
    """
    spath = os.fspath(path)
    if not is_dir(spath):
        raise IoConfigError(f"requested output path {spath} is not a directory", path=spath)
    return spath


def create_new(path: str) -> BinaryIO:
    """
    Create and open a new file for binary write, failing if it already exists.

    Args:
        path (str): Destination path.

    Returns:
        BinaryIO: Writable handle; the caller owns closing it.

    Raises:
        IoNamingCollisionError: If a file with this exact name already exists.
        IoWriteError: On any other OS failure (permissions, missing parent, device error).
    """
    try:
        return open(path, "xb")
    except FileExistsError as exc:
        raise IoNamingCollisionError(f"refusing to overwrite existing file {path}", path=path) from exc
    except OSError as exc:
        raise IoWriteError(f"failed to create {path}: {exc}", path=path) from exc


def walk_parquet_files(root: str) -> list[str]:
    """
    Collect *.parquet directly under a directory, sorted by name.

    Args:
        root (str): Directory to list.

    Returns:
        list[str]: Full paths; [] if the directory does not exist.

    Notes:
        Names begin with the run timestamp and end with the zero-padded sequence, so
        lexical order is write order within one label.
    """
    try:
        names = os.listdir(root)
    except FileNotFoundError:
        return []
    return sorted(os.path.join(root, name) for name in names if name.endswith(".parquet"))
