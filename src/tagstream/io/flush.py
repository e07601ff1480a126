"""
Row-group flusher: turns drained column arrays into one Parquet row group.

Overview
- columns_to_batch() wraps the drained array buffers as Arrow arrays (no per-value copy)
  and binds them to the fixed schema.
- flush_chunk() appends the batch to the open session as exactly one row group and bumps
  the session's chunk counter.

Notes
- Append-only: earlier row groups are never rewritten.
- Write failures are not retried; they surface as IoWriteError and end the write.
"""

from __future__ import annotations

import sys
from array import array

import pyarrow as pa

from .errors import IoSchemaError, IoWriteError
from .session import FileSession


def _as_arrow(col: array, atype: pa.DataType, length: int) -> pa.Array:
    if sys.byteorder != "little":
        # Arrow buffers are little-endian.
        col = array(col.typecode, col)
        col.byteswap()
    return pa.Array.from_buffers(atype, length, [None, pa.py_buffer(col)])


def columns_to_batch(schema: pa.Schema, channels: array, time_tags: array) -> pa.RecordBatch:
    """
    Build a record batch from the two drained columns.

    Args:
        schema (pa.Schema): The writer's fixed schema (channel, time_tag).
        channels (array): uint16 channel column.
        time_tags (array): uint64 time tag column.

    Raises:
        IoSchemaError: If the columns differ in length.
    """
    n = len(channels)
    if len(time_tags) != n:
        raise IoSchemaError(
            f"column length mismatch: channel has {n} rows, time_tag has {len(time_tags)}"
        )
    arrays = [
        _as_arrow(channels, schema.field(0).type, n),
        _as_arrow(time_tags, schema.field(1).type, n),
    ]
    return pa.RecordBatch.from_arrays(arrays, schema=schema)


def flush_chunk(session: FileSession, schema: pa.Schema, channels: array, time_tags: array) -> int:
    """
    Append one chunk to the session's file as a single row group.

    Args:
        session (FileSession): The open output file.
        schema (pa.Schema): The writer's fixed schema.
        channels (array): Drained channel column.
        time_tags (array): Drained time tag column.

    Returns:
        int: Rows written.

    Raises:
        IoStateError: If the session is not open.
        IoWriteError: If the storage rejects the write.
    """
    batch = columns_to_batch(schema, channels, time_tags)
    writer = session.writer
    try:
        # One chunk, one row group: never let the writer split it.
        writer.write_batch(batch, row_group_size=max(batch.num_rows, 1))
    except (OSError, pa.ArrowException) as exc:
        raise IoWriteError(
            f"failed to write row group {session.chunk_count + 1} to {session.path}: {exc}",
            path=session.path,
        ) from exc
    session.record_chunk(batch.num_rows)
    return batch.num_rows
