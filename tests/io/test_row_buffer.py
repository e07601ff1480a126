import pytest

from tagstream.core.schema import TimeTag
from tagstream.io.buffer import RowBuffer
from tagstream.io.errors import IoSchemaError


def test_append_keeps_columns_aligned_and_ordered():
    buf = RowBuffer(max_chunk_rows=3)
    buf.append(TimeTag(0, 100))
    buf.append((1, 200))
    assert len(buf) == 2
    assert not buf.is_full()

    buf.append((0, 181))
    assert buf.is_full()

    channels, tags = buf.drain()
    assert list(channels) == [0, 1, 0]
    assert list(tags) == [100, 200, 181]
    assert len(channels) == len(tags) == 3


def test_drain_resets_and_hands_out_fresh_arrays():
    buf = RowBuffer(max_chunk_rows=2)
    buf.append((0, 1))
    first_channels, first_tags = buf.drain()
    assert len(buf) == 0
    assert not buf.is_full()

    buf.append((1, 2))
    # Drained arrays are not reused by the buffer.
    assert list(first_channels) == [0]
    assert list(first_tags) == [1]


def test_drain_empty_buffer():
    channels, tags = RowBuffer(max_chunk_rows=5).drain()
    assert len(channels) == 0
    assert len(tags) == 0


def test_full_unsigned_ranges_accepted():
    buf = RowBuffer(max_chunk_rows=10)
    buf.append((0xFFFF, 2**64 - 1))
    buf.append((0, 0))
    channels, tags = buf.drain()
    assert list(channels) == [0xFFFF, 0]
    assert list(tags) == [2**64 - 1, 0]


@pytest.mark.parametrize("record", [(-1, 0), (0x10000, 0), (0, -1), (0, 2**64), (0, 1.5)])
def test_out_of_range_values_raise_and_keep_alignment(record):
    buf = RowBuffer(max_chunk_rows=10)
    buf.append((3, 30))
    with pytest.raises(IoSchemaError):
        buf.append(record)
    assert len(buf) == 1
    channels, tags = buf.drain()
    assert list(channels) == [3]
    assert list(tags) == [30]


def test_rejects_non_positive_threshold():
    with pytest.raises(ValueError):
        RowBuffer(max_chunk_rows=0)
