import os
from datetime import UTC, datetime, timedelta, timezone

import pytest

from tagstream.io.errors import IoConfigError
from tagstream.io.paths import (
    file_path,
    format_file_name,
    parse_file_name,
    run_timestamp,
    validate_label,
)


def test_run_timestamp_is_compact_utc():
    assert run_timestamp(lambda: datetime(2026, 10, 18, 9, 30, 12, tzinfo=UTC)) == "20261018T093012Z"


def test_run_timestamp_converts_aware_times_to_utc():
    cest = timezone(timedelta(hours=2))
    assert run_timestamp(lambda: datetime(2026, 10, 18, 11, 30, 12, tzinfo=cest)) == "20261018T093012Z"


def test_run_timestamp_default_clock_shape():
    ts = run_timestamp()
    assert len(ts) == 16
    assert ts[8] == "T"
    assert ts.endswith("Z")


def test_format_file_name():
    assert format_file_name("20261018T093012Z", "simulation-1", 1) == (
        "20261018T093012Z_simulation-1_0001.parquet"
    )
    assert format_file_name("20261018T093012Z", "x", 12345).endswith("_12345.parquet")
    with pytest.raises(ValueError):
        format_file_name("20261018T093012Z", "x", 0)


def test_file_path_joins_output_dir(tmp_path):
    p = file_path(str(tmp_path), "20261018T093012Z", "run", 2)
    assert p == os.path.join(str(tmp_path), "20261018T093012Z_run_0002.parquet")


def test_parse_file_name_roundtrip_with_underscored_label():
    parsed = parse_file_name("/data/20261018T093012Z_run_a_0007.parquet")
    assert parsed is not None
    assert parsed.timestamp == "20261018T093012Z"
    assert parsed.label == "run_a"
    assert parsed.sequence == 7


@pytest.mark.parametrize("name", ["notes.parquet", "20261018T093012Z_run_1.parquet", "x.csv"])
def test_parse_file_name_rejects_foreign_names(name):
    assert parse_file_name(name) is None


@pytest.mark.parametrize("label", ["", "a/b", os.sep + "x"])
def test_validate_label_rejects_unusable(label):
    with pytest.raises(IoConfigError):
        validate_label(label)


def test_validate_label_accepts_plain():
    assert validate_label("simulation-1") == "simulation-1"
