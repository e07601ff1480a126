"""
Row buffer: column-oriented accumulation of time tags up to one chunk.

The buffer holds two parallel typed arrays (uint16 channels, uint64 time tags) and a row
counter. Both arrays always have the same length as the counter. drain() hands the filled
arrays to the caller and starts over with fresh empty arrays, so the flusher can wrap the
drained memory without it being mutated afterwards.
"""

from __future__ import annotations

from array import array
from collections.abc import Iterable

from .errors import IoSchemaError

# Native typecodes for the channel (unsigned 16-bit) and time_tag (unsigned 64-bit) columns.
CHANNEL_TYPECODE = "H"
TIME_TAG_TYPECODE = "Q"


class RowBuffer:
    """
    Accumulates (channel_id, time_tag_ps) records into column arrays.

    Args:
        max_chunk_rows (int): Row threshold at which is_full() turns true.

    Examples:
        >>> buf = RowBuffer(max_chunk_rows=2)
        >>> buf.append((0, 100))
        >>> buf.is_full()
        False
        >>> buf.append((1, 200))
        >>> buf.is_full()
        True
        >>> channels, tags = buf.drain()
        >>> (list(channels), list(tags), len(buf))
        ([0, 1], [100, 200], 0)
    """

    def __init__(self, max_chunk_rows: int) -> None:
        if max_chunk_rows < 1:
            raise ValueError("max_chunk_rows must be >= 1")
        self.max_chunk_rows = max_chunk_rows
        self._channels = array(CHANNEL_TYPECODE)
        self._time_tags = array(TIME_TAG_TYPECODE)
        self._rows = 0

    def __len__(self) -> int:
        return self._rows

    def append(self, record: Iterable[int]) -> None:
        """
        Copy one record's fields onto the column tails.

        Args:
            record: A TimeTag or any (channel_id, time_tag_ps) pair.

        Raises:
            IoSchemaError: If a value does not fit its unsigned column type.
        """
        channel_id, time_tag_ps = record
        try:
            self._channels.append(channel_id)
        except (OverflowError, TypeError) as exc:
            raise IoSchemaError(f"channel_id {channel_id!r} is not an unsigned 16-bit integer") from exc
        try:
            self._time_tags.append(time_tag_ps)
        except (OverflowError, TypeError) as exc:
            # Keep both columns aligned with the counter.
            self._channels.pop()
            raise IoSchemaError(f"time_tag_ps {time_tag_ps!r} is not an unsigned 64-bit integer") from exc
        self._rows += 1

    def is_full(self) -> bool:
        return self._rows >= self.max_chunk_rows

    def drain(self) -> tuple[array, array]:
        """
        Return the filled column arrays and reset the buffer to empty.

        Notes:
            May be called with zero rows, yielding empty columns; the writer skips its
            final flush when the buffer is empty.
        """
        channels, time_tags = self._channels, self._time_tags
        self._channels = array(CHANNEL_TYPECODE)
        self._time_tags = array(TIME_TAG_TYPECODE)
        self._rows = 0
        return channels, time_tags
