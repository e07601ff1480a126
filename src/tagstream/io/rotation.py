"""
File rotation policy.

Rotation is decided by counting flushed chunks, not summing rows, which keeps the check
O(1) per flush. The counter is compared after it is incremented, with strict
greater-than: a file rotates only once it holds max_chunks_per_file + 1 row groups, so it
may receive up to (max_chunks_per_file + 1) * max_chunk_rows rows rather than exactly
max_file_rows.
"""

from __future__ import annotations

from dataclasses import dataclass

from .session import FileSession


@dataclass(frozen=True)
class RotationPolicy:
    """
    Decides after each flush whether the open file must be replaced.

    Examples:
        >>> from tagstream.io.session import FileSession
        >>> policy = RotationPolicy(max_chunks_per_file=2)
        >>> s = FileSession("x.parquet", 1, schema=None)
        >>> s.chunk_count = 2
        >>> policy.should_rotate(s)
        False
        >>> s.chunk_count = 3
        >>> policy.should_rotate(s)
        True
    """

    max_chunks_per_file: int

    def should_rotate(self, session: FileSession) -> bool:
        return session.chunk_count > self.max_chunks_per_file
