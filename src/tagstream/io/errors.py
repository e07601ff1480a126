"""
Custom exceptions for the tagstream.io module.

Purpose
- Provide IO-layer specific error types that map cleanly to responsibilities in tagstream.io.
- Every error is fatal to the current write: none are retried, none are downgraded.

Boundaries
- IoConfigError: invalid settings, missing/non-directory output path, unusable label.
  Raised before any file is created.
- IoNamingCollisionError: the target file name already exists at open time.
- IoWriteError: create/write/close of a Parquet file failed (disk full, permissions,
  invalidated handle). The underlying exception is chained as __cause__.
- IoSchemaError: a record value does not fit its column's unsigned range.
- IoStateError: an operation was attempted on a closed session or finished writer.

Notes
- These exceptions do not perform any IO and are stdlib-only.
- A file open when an error surfaces may lack a valid footer; readers must treat it as corrupt.
"""

from __future__ import annotations


class IoError(Exception):
    """
    Base class for IO-related errors in tagstream.io.

    Attributes:
        path (str | None): File or directory involved in the failure, when known.
    """

    def __init__(self, message: str, *, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class IoConfigError(IoError):
    """
    Raised when writer configuration is invalid or the output location is unusable.

    Examples:
        - max_chunk_rows < 1, or max_file_rows < max_chunk_rows
        - Output path missing or not a directory
        - Empty label, or a label containing a path separator
    """


class IoNamingCollisionError(IoError):
    """Raised when a file with the exact target name already exists (no silent overwrite)."""


class IoWriteError(IoError):
    """
    Raised when creating, appending to, or closing a Parquet file fails.

    Notes:
        No partial recovery is attempted; the row group that failed is not salvaged.
    """


class IoSchemaError(IoError):
    """Raised when a record value is outside the unsigned range of its column."""


class IoStateError(IoError):
    """Raised when a closed session or finished writer is asked to do more work."""
