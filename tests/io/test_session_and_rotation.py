import os

import pyarrow.parquet as pq
import pytest

from tagstream.io.arrow import META_LABEL, META_SCHEMA_VERSION, arrow_schema
from tagstream.io.buffer import RowBuffer
from tagstream.io.errors import IoNamingCollisionError, IoStateError, IoWriteError
from tagstream.io.flush import columns_to_batch, flush_chunk
from tagstream.io.rotation import RotationPolicy
from tagstream.io.session import FileSession, SessionState
from tagstream.core.versioning import SCHEMA_V

TS = "20261018T093012Z"


def _drained(rows):
    buf = RowBuffer(max_chunk_rows=max(len(rows), 1))
    for r in rows:
        buf.append(r)
    return buf.drain()


def test_arrow_schema_is_fixed_and_non_nullable():
    schema = arrow_schema(label="sim")
    assert schema.names == ["channel", "time_tag"]
    assert str(schema.field("channel").type) == "uint16"
    assert str(schema.field("time_tag").type) == "uint64"
    assert not schema.field("channel").nullable
    assert not schema.field("time_tag").nullable
    assert schema.metadata[META_SCHEMA_VERSION] == str(SCHEMA_V).encode()
    assert schema.metadata[META_LABEL] == b"sim"
    assert arrow_schema(label="sim").equals(schema, check_metadata=True)


def test_columns_to_batch_preserves_values_and_order():
    schema = arrow_schema()
    batch = columns_to_batch(schema, *_drained([(0, 100), (1, 200), (0, 2**64 - 1)]))
    assert batch.num_rows == 3
    assert batch.column(0).to_pylist() == [0, 1, 0]
    assert batch.column(1).to_pylist() == [100, 200, 2**64 - 1]
    assert batch.schema.equals(schema)


def test_session_lifecycle_and_flush(tmp_path):
    schema = arrow_schema(label="run")
    session = FileSession.open(str(tmp_path), TS, "run", 1, schema)
    assert session.state is SessionState.OPEN
    assert os.path.basename(session.path) == f"{TS}_run_0001.parquet"

    assert flush_chunk(session, schema, *_drained([(0, 1), (1, 2)])) == 2
    assert flush_chunk(session, schema, *_drained([(0, 3)])) == 1
    assert session.chunk_count == 2
    assert session.rows == 3

    session.close()
    assert session.state is SessionState.CLOSED
    session.close()  # idempotent

    pf = pq.ParquetFile(session.path)
    assert pf.metadata.num_row_groups == 2
    assert pf.metadata.num_rows == 3
    assert session.summary().row_groups == 2


def test_closed_session_refuses_writes(tmp_path):
    schema = arrow_schema()
    session = FileSession.open(str(tmp_path), TS, "run", 1, schema)
    session.close()
    with pytest.raises(IoStateError):
        flush_chunk(session, schema, *_drained([(0, 1)]))
    assert session.chunk_count == 0


def test_open_refuses_existing_file(tmp_path):
    existing = tmp_path / f"{TS}_run_0001.parquet"
    existing.write_bytes(b"keep me")
    with pytest.raises(IoNamingCollisionError) as ei:
        FileSession.open(str(tmp_path), TS, "run", 1, arrow_schema())
    assert ei.value.path == str(existing)
    assert existing.read_bytes() == b"keep me"


def test_open_in_missing_directory_is_write_error(tmp_path):
    with pytest.raises(IoWriteError):
        FileSession.open(str(tmp_path / "missing"), TS, "run", 1, arrow_schema())


def test_empty_session_closes_to_readable_file(tmp_path):
    session = FileSession.open(str(tmp_path), TS, "run", 1, arrow_schema())
    session.close()
    pf = pq.ParquetFile(session.path)
    assert pf.metadata.num_rows == 0
    assert pf.schema_arrow.names == ["channel", "time_tag"]


def test_rotation_fires_only_after_budget_exceeded():
    policy = RotationPolicy(max_chunks_per_file=2)
    session = FileSession("unused.parquet", 1, arrow_schema())
    decisions = []
    for _ in range(3):
        session.record_chunk(2)
        decisions.append(policy.should_rotate(session))
    assert decisions == [False, False, True]
