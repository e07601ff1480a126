"""
Arrow schema materialization for tagstream tables.

Maps a tagstream.core.tables.TableDescriptor onto a pyarrow.Schema. The schema is built
once per writer invocation and shared by every row group and file; it is never inferred
from data.

Notes
- Key-value metadata (bytes -> bytes) embeds the schema version, table name and run label
  so a file can be traced back to the writer that produced it.
"""

from __future__ import annotations

import pyarrow as pa

from tagstream.core.tables import TIME_TAGS_DESC, TableDescriptor

from .errors import IoSchemaError

_ARROW_TYPES: dict[str, pa.DataType] = {
    "u16": pa.uint16(),
    "u64": pa.uint64(),
}

# Keys stamped into Parquet key-value metadata.
META_SCHEMA_VERSION = b"tagstream_schema_version"
META_TABLE_NAME = b"tagstream_table_name"
META_LABEL = b"tagstream_label"


def arrow_schema(desc: TableDescriptor = TIME_TAGS_DESC, *, label: str | None = None) -> pa.Schema:
    """
    Build the Arrow schema for a table descriptor.

    Args:
        desc (TableDescriptor): Table descriptor (defaults to time_tags).
        label (str | None): Optional run label added to the schema metadata.

    Returns:
        pa.Schema: Ordered fields with nullability from desc.nullable.

    Raises:
        IoSchemaError: If desc declares a dtype with no Arrow mapping.
    """
    fields = []
    for name, dtype in desc.columns.items():
        try:
            atype = _ARROW_TYPES[dtype]
        except KeyError as exc:
            raise IoSchemaError(f"unsupported dtype {dtype!r} for column {name!r}") from exc
        fields.append(pa.field(name, atype, nullable=name in desc.nullable))

    meta = {
        META_SCHEMA_VERSION: str(desc.version).encode(),
        META_TABLE_NAME: desc.name.encode("utf-8"),
    }
    if label is not None:
        meta[META_LABEL] = label.encode("utf-8")
    return pa.schema(fields, metadata=meta)
