"""
Read utilities for tagstream output.

Overview
- list_files(): the Parquet files of an output directory, optionally for one label, in
  write order.
- read_time_tags(): one Polars DataFrame with every row of the given files, in file order.
- check_schema_version(): the stamped schema version of one file, rejecting foreign or
  incompatible files.
- row_group_sizes() / read_file_metadata(): footer-level inspection via pyarrow.

Notes
- Readers never modify files; output is immutable once its writer closed it.
"""

from __future__ import annotations

import os
from collections.abc import Sequence

import polars as pl
import pyarrow as pa
import pyarrow.parquet as pq

from tagstream.core.versioning import SCHEMA_V, SchemaVersion, is_compatible, parse_version

from .arrow import META_SCHEMA_VERSION
from .errors import IoError, IoSchemaError
from .fs import is_dir, walk_parquet_files
from .paths import parse_file_name


def list_files(output_dir: str | os.PathLike[str], label: str | None = None) -> list[str]:
    """
    List output files in write order (timestamp, then sequence).

    Args:
        output_dir: Directory written by the writer.
        label: If given, keep only files whose name carries this label.

    Returns:
        list[str]: Full paths; files not following the naming layout are skipped.
    """
    found = []
    for path in walk_parquet_files(os.fspath(output_dir)):
        parsed = parse_file_name(path)
        if parsed is None:
            continue
        if label is not None and parsed.label != label:
            continue
        found.append((parsed.timestamp, parsed.sequence, path))
    return [path for _, _, path in sorted(found)]


def _resolve(source: str | os.PathLike[str] | Sequence[str | os.PathLike[str]]) -> list[str]:
    if isinstance(source, (str, os.PathLike)):
        spath = os.fspath(source)
        return list_files(spath) if is_dir(spath) else [spath]
    return [os.fspath(p) for p in source]


def read_time_tags(source: str | os.PathLike[str] | Sequence[str | os.PathLike[str]]) -> pl.DataFrame:
    """
    Read every row of one or more output files.

    Args:
        source: An output directory, a single file, or an explicit list of files.

    Returns:
        pl.DataFrame: Columns channel (UInt16) and time_tag (UInt64), rows in file order
        and, within a file, in row group order.

    Raises:
        IoSchemaError: If a file carries no schema version or an incompatible one.
        IoError: If any file cannot be read.
    """
    paths = _resolve(source)
    if not paths:
        return pl.DataFrame(schema={"channel": pl.UInt16, "time_tag": pl.UInt64})
    frames = []
    for p in paths:
        check_schema_version(p)
        try:
            frames.append(pl.read_parquet(p))
        except (OSError, pl.exceptions.PolarsError) as exc:
            raise IoError(f"failed to read parquet output: {exc}", path=p) from exc
    return pl.concat(frames, how="vertical")


def check_schema_version(path: str | os.PathLike[str]) -> SchemaVersion:
    """
    Return the schema version stamped into one file.

    Raises:
        IoSchemaError: If the stamp is missing, malformed, or not compatible with SCHEMA_V.
        IoError: If the file footer cannot be read.
    """
    spath = os.fspath(path)
    try:
        meta = read_file_metadata(spath)
    except (OSError, pa.ArrowException) as exc:
        raise IoError(f"failed to read parquet footer: {exc}", path=spath) from exc
    text = meta.get(META_SCHEMA_VERSION.decode("utf-8"))
    if text is None:
        raise IoSchemaError(f"{spath} carries no tagstream schema version", path=spath)
    try:
        ver = parse_version(text)
    except ValueError as exc:
        raise IoSchemaError(f"{spath}: {exc}", path=spath) from exc
    if not is_compatible(ver):
        raise IoSchemaError(
            f"{spath} has schema version {ver}, expected {SCHEMA_V.major}.{SCHEMA_V.minor}",
            path=spath,
        )
    return ver


def row_group_sizes(path: str | os.PathLike[str]) -> list[int]:
    """Row count of every row group in one file, in file order."""
    meta = pq.ParquetFile(os.fspath(path)).metadata
    return [meta.row_group(i).num_rows for i in range(meta.num_row_groups)]


def read_file_metadata(path: str | os.PathLike[str]) -> dict[str, str]:
    """Decoded key-value metadata of the Arrow schema stored in one file."""
    schema = pq.read_schema(os.fspath(path))
    return {k.decode("utf-8"): v.decode("utf-8") for k, v in (schema.metadata or {}).items()}
