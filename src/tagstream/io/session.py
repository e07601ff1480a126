"""
File session: bookkeeping and lifecycle for the one Parquet file currently being written.

A session moves through an explicit state value rather than an optional handle:

    PENDING --open()--> OPEN --close()/abort()--> CLOSED

Only an OPEN session hands out its Parquet writer. A CLOSED session is never reopened; the
driver creates a new session with the next sequence number instead.

Notes
- Files are created exclusively; an existing name raises IoNamingCollisionError.
- close() writes the Parquet footer so the file is independently readable.
- abort() only releases the handle; the file is left without a footer.
"""

from __future__ import annotations

import enum
from typing import BinaryIO

import pyarrow as pa
import pyarrow.parquet as pq

from tagstream.core.constants import COMPRESSION
from tagstream.core.schema import WrittenFile

from .errors import IoStateError, IoWriteError
from .fs import create_new
from .paths import file_path


class SessionState(enum.Enum):
    PENDING = "pending"
    OPEN = "open"
    CLOSED = "closed"


class FileSession:
    """
    One output file: handle, Parquet writer, chunk counter and sequence number.

    Attributes:
        path (str): Full file path.
        sequence (int): 1-based sequence number used in the file name.
        chunk_count (int): Row groups flushed into this file.
        rows (int): Rows flushed into this file.
        state (SessionState): Lifecycle state.
    """

    def __init__(self, path: str, sequence: int, schema: pa.Schema) -> None:
        self.path = path
        self.sequence = sequence
        self.schema = schema
        self.chunk_count = 0
        self.rows = 0
        self.state = SessionState.PENDING
        self._fh: BinaryIO | None = None
        self._writer: pq.ParquetWriter | None = None

    def __repr__(self) -> str:
        return (
            f"FileSession(path={self.path!r}, sequence={self.sequence}, "
            f"chunk_count={self.chunk_count}, state={self.state.value})"
        )

    @classmethod
    def open(
        cls,
        output_dir: str,
        timestamp: str,
        label: str,
        sequence: int,
        schema: pa.Schema,
    ) -> FileSession:
        """
        Create the file for `sequence` and open a Parquet writer on it.

        Raises:
            IoNamingCollisionError: If the file already exists.
            IoWriteError: If the file or the Parquet writer cannot be created.
        """
        session = cls(file_path(output_dir, timestamp, label, sequence), sequence, schema)
        session._open()
        return session

    def _open(self) -> None:
        if self.state is not SessionState.PENDING:
            raise IoStateError(f"session for {self.path} was already opened", path=self.path)
        fh = create_new(self.path)
        try:
            writer = pq.ParquetWriter(fh, self.schema, compression=COMPRESSION)
        except (OSError, pa.ArrowException) as exc:
            fh.close()
            raise IoWriteError(f"failed to open parquet writer on {self.path}: {exc}", path=self.path) from exc
        self._fh = fh
        self._writer = writer
        self.state = SessionState.OPEN

    @property
    def writer(self) -> pq.ParquetWriter:
        """The Parquet writer of an OPEN session."""
        if self.state is not SessionState.OPEN or self._writer is None:
            raise IoStateError(
                f"session for {self.path} is {self.state.value}, not open", path=self.path
            )
        return self._writer

    def record_chunk(self, rows: int) -> None:
        """Account for one flushed row group of `rows` rows."""
        self.chunk_count += 1
        self.rows += rows

    def close(self) -> None:
        """
        Finalize the Parquet footer and release the file handle.

        Closing an already closed session is a no-op.

        Raises:
            IoWriteError: If the footer or the handle cannot be written/closed.
        """
        if self.state is SessionState.CLOSED:
            return
        writer, fh = self._writer, self._fh
        self._writer = None
        self._fh = None
        self.state = SessionState.CLOSED
        try:
            if writer is not None:
                writer.close()
        except (OSError, pa.ArrowException) as exc:
            raise IoWriteError(f"failed to finalize {self.path}: {exc}", path=self.path) from exc
        finally:
            if fh is not None:
                try:
                    fh.close()
                except OSError as exc:
                    raise IoWriteError(f"failed to close {self.path}: {exc}", path=self.path) from exc

    def abort(self) -> None:
        """
        Release the file handle without writing the Parquet footer.

        The file keeps whatever row groups reached it and is not independently readable.
        Aborting a closed session is a no-op.
        """
        if self.state is SessionState.CLOSED:
            return
        writer, fh = self._writer, self._fh
        self._writer = None
        self._fh = None
        self.state = SessionState.CLOSED
        if writer is not None:
            # pyarrow's ParquetWriter.__del__ would otherwise finalize it on collection.
            writer.is_open = False
        if fh is not None:
            try:
                fh.close()
            except OSError as exc:
                raise IoWriteError(f"failed to close {self.path}: {exc}", path=self.path) from exc

    def summary(self) -> WrittenFile:
        return WrittenFile(
            path=self.path, sequence=self.sequence, rows=self.rows, row_groups=self.chunk_count
        )
