"""
Writer driver: streams time tags into a rotating series of Parquet files.

Overview
- Pulls records from any iterable (materialized list, generator, queue adapter).
- Buffers them column-wise up to max_chunk_rows, flushes each full chunk as one row group,
  and rotates to a new file once the open file holds more than max_chunks_per_file chunks.
- At input exhaustion, flushes the partial chunk (never rotating on it) and closes the file.

State machine (WriterState)
    IDLE -> OPEN -> BUFFERING <-> FLUSHING -> ROTATING -> BUFFERING ... -> CLOSED

Guarantees
- Memory: at most max_chunk_rows rows are buffered at any instant.
- Exactly one file is open for writing at a time.
- Input order is preserved into columns and row groups; nothing is sorted.
- Zero records still produce one valid file with zero row groups.
- File names share one run timestamp and carry contiguous sequence numbers from 1.

Errors
- IoConfigError before any file exists (settings, output directory, label). Settings fail
  at construction; output directory and label fail in write() and close the writer.
- IoNamingCollisionError, IoWriteError, IoSchemaError while writing.
- Every error raised inside write() is fatal: the writer moves to CLOSED and the file open
  at that moment is aborted (handle released, no footer written) and is not readable. There is no tmp-file/rename or fsync discipline.
"""

from __future__ import annotations

import enum
import os
from collections.abc import Callable, Iterable
from datetime import datetime

import pyarrow as pa
from structlog.typing import FilteringBoundLogger

from tagstream.core.schema import WriteSummary, WrittenFile
from tagstream.logger import get_logger

from .arrow import arrow_schema
from .buffer import RowBuffer
from .config import WriterSettings
from .errors import IoStateError
from .flush import flush_chunk
from .fs import require_dir
from .paths import run_timestamp, validate_label
from .rotation import RotationPolicy
from .session import FileSession

logger = get_logger(__name__)


class WriterState(enum.Enum):
    IDLE = "idle"
    OPEN = "open"
    BUFFERING = "buffering"
    FLUSHING = "flushing"
    ROTATING = "rotating"
    CLOSED = "closed"


class TimeTagWriter:
    """
    Single-use writer for one stream of time tags.

    Args:
        settings (WriterSettings | None): Chunk/file thresholds; defaults from
            tagstream.core.constants.
        clock (Callable[[], datetime] | None): Source of the run timestamp; defaults to UTC now.

    Raises:
        IoConfigError: If settings are invalid.

    Examples:
        >>> from tagstream.io import TimeTagWriter, WriterSettings
        >>> w = TimeTagWriter(WriterSettings(max_chunk_rows=2, max_file_rows=100))
        >>> w.write([(0, 100), (1, 200), (0, 181)], "out", "sim")  # doctest: +SKIP
        WriteSummary(...)
    """

    def __init__(
        self,
        settings: WriterSettings | None = None,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.settings = (settings or WriterSettings()).validate()
        self.state = WriterState.IDLE
        self.session: FileSession | None = None
        self._clock = clock
        self._files: list[WrittenFile] = []
        self._buffer = RowBuffer(self.settings.max_chunk_rows)
        self._policy = RotationPolicy(self.settings.max_chunks_per_file)

    @property
    def buffered_rows(self) -> int:
        """Rows currently held in memory (never more than max_chunk_rows)."""
        return len(self._buffer)

    def write(
        self,
        records: Iterable[tuple[int, int]],
        output_dir: str | os.PathLike[str],
        label: str,
    ) -> WriteSummary:
        """
        Write every record into Parquet files under output_dir.

        Args:
            records: TimeTag records or (channel_id, time_tag_ps) pairs, in output order.
            output_dir: Existing directory that receives the files.
            label: Label embedded in every file name.

        Returns:
            WriteSummary: Files written, in sequence order, with row and row group counts.

        Raises:
            IoConfigError: output_dir is not an existing directory, or label is unusable.
            IoNamingCollisionError: A target file name already exists.
            IoWriteError: Creating, appending to, or closing a file failed.
            IoSchemaError: A record value does not fit its column.
            IoStateError: The writer has already been used, successfully or not.
        """
        if self.state is not WriterState.IDLE:
            raise IoStateError(f"writer is {self.state.value}; create a new writer per stream")

        log = logger.bind(output_dir=os.fspath(output_dir), label=label)
        try:
            out = require_dir(output_dir)
            validate_label(label)
            timestamp = run_timestamp(self._clock)
            schema = arrow_schema(label=label)
            log = log.bind(timestamp=timestamp)

            session = self._open(out, timestamp, label, 1, schema, log)
            session = self._consume(session, records, out, timestamp, label, schema, log)
            self._finish(session, schema, log)
        except Exception as exc:
            self.state = WriterState.CLOSED
            log.error(
                "write_failed",
                error=str(exc),
                error_type=type(exc).__name__,
                path=getattr(exc, "path", None),
                files=len(self._files),
            )
            if self.session is not None:
                self.session.abort()
            raise

        summary = WriteSummary(
            label=label,
            timestamp=timestamp,
            rows=sum(f.rows for f in self._files),
            files=list(self._files),
        )
        log.info("write_complete", files=len(summary.files), rows=summary.rows)
        return summary

    def _open(
        self,
        output_dir: str,
        timestamp: str,
        label: str,
        sequence: int,
        schema: pa.Schema,
        log: FilteringBoundLogger,
    ) -> FileSession:
        self.session = FileSession.open(output_dir, timestamp, label, sequence, schema)
        self.state = WriterState.OPEN
        log.info("file_opened", path=self.session.path, sequence=sequence)
        return self.session

    def _close(self, session: FileSession, log: FilteringBoundLogger) -> None:
        session.close()
        self._files.append(session.summary())
        log.info(
            "file_closed",
            path=session.path,
            sequence=session.sequence,
            rows=session.rows,
            row_groups=session.chunk_count,
        )

    def _flush(self, session: FileSession, schema: pa.Schema, log: FilteringBoundLogger) -> None:
        self.state = WriterState.FLUSHING
        rows = flush_chunk(session, schema, *self._buffer.drain())
        log.debug(
            "row_group_flushed", path=session.path, rows=rows, chunk_count=session.chunk_count
        )

    def _consume(
        self,
        session: FileSession,
        records: Iterable[tuple[int, int]],
        output_dir: str,
        timestamp: str,
        label: str,
        schema: pa.Schema,
        log: FilteringBoundLogger,
    ) -> FileSession:
        self.state = WriterState.BUFFERING
        for record in records:
            self._buffer.append(record)
            if not self._buffer.is_full():
                continue
            self._flush(session, schema, log)
            if self._policy.should_rotate(session):
                self.state = WriterState.ROTATING
                self._close(session, log)
                session = self._open(output_dir, timestamp, label, session.sequence + 1, schema, log)
                log.info("file_rotated", sequence=session.sequence)
            self.state = WriterState.BUFFERING
        return session

    def _finish(self, session: FileSession, schema: pa.Schema, log: FilteringBoundLogger) -> None:
        # The final partial chunk never triggers rotation.
        if len(self._buffer):
            self._flush(session, schema, log)
        self._close(session, log)
        self.state = WriterState.CLOSED


def write_time_tags(
    records: Iterable[tuple[int, int]],
    output_dir: str | os.PathLike[str],
    label: str,
    *,
    settings: WriterSettings | None = None,
    clock: Callable[[], datetime] | None = None,
) -> WriteSummary:
    """
    Write a stream of time tags to a rotating series of Parquet files.

    Args:
        records: TimeTag records or (channel_id, time_tag_ps) pairs.
        output_dir: Existing directory that receives the files.
        label: Label embedded in every file name.
        settings: Chunk/file thresholds (defaults: 20M rows per chunk, 200M rows per file).
        clock: Optional run timestamp source.

    Returns:
        WriteSummary: See TimeTagWriter.write.
    """
    return TimeTagWriter(settings, clock=clock).write(records, output_dir, label)
