from pathlib import Path

import pyarrow as pa
import pyarrow.parquet as pq
import pytest

from tagstream.core.versioning import SCHEMA_V
from tagstream.io import read_time_tags, write_time_tags
from tagstream.io.arrow import META_SCHEMA_VERSION, arrow_schema
from tagstream.io.errors import IoError, IoSchemaError
from tagstream.io.read import check_schema_version


def _write_with_metadata(path: Path, metadata: dict[bytes, bytes] | None) -> str:
    schema = arrow_schema().with_metadata(metadata or {})
    table = pa.Table.from_arrays(
        [pa.array([0, 1], pa.uint16()), pa.array([10, 20], pa.uint64())], schema=schema
    )
    pq.write_table(table, path)
    return str(path)


def test_written_files_carry_the_current_version(tmp_path: Path):
    summary = write_time_tags([(0, 1), (1, 2)], tmp_path, "run")
    assert check_schema_version(summary.paths[0]) == SCHEMA_V


@pytest.mark.parametrize(
    "stamp",
    [
        f"{SCHEMA_V.major + 1}.0@2030-01-01",
        f"{SCHEMA_V.major}.{SCHEMA_V.minor + 1}@{SCHEMA_V.date}",
        "one.two@2026-01-01",
    ],
)
def test_incompatible_or_malformed_version_is_rejected(tmp_path: Path, stamp: str):
    path = _write_with_metadata(tmp_path / "foreign.parquet", {META_SCHEMA_VERSION: stamp.encode()})
    with pytest.raises(IoSchemaError) as ei:
        read_time_tags(path)
    assert ei.value.path == path


def test_same_layout_with_a_later_date_is_accepted(tmp_path: Path):
    stamp = f"{SCHEMA_V.major}.{SCHEMA_V.minor}@2099-12-31"
    path = _write_with_metadata(tmp_path / "later.parquet", {META_SCHEMA_VERSION: stamp.encode()})
    df = read_time_tags(path)
    assert df["time_tag"].to_list() == [10, 20]


def test_file_without_version_stamp_is_rejected(tmp_path: Path):
    path = _write_with_metadata(tmp_path / "plain.parquet", None)
    with pytest.raises(IoSchemaError, match="no tagstream schema version"):
        read_time_tags(path)


def test_unreadable_file_is_io_error(tmp_path: Path):
    path = tmp_path / "junk.parquet"
    path.write_bytes(b"not parquet")
    with pytest.raises(IoError) as ei:
        check_schema_version(path)
    assert not isinstance(ei.value, IoSchemaError)
