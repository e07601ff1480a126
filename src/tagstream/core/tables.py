"""
Frozen table descriptor for the tagstream time_tags dataset (Parquet/Arrow-like).

Notes:
    - The descriptor declares column names/dtypes, nullable columns and the pinned
      schema version; it is the only place the on-disk shape is defined.
    - Column order is significant: channel first, time_tag second.
    - Core is zero-IO (stdlib only); tagstream.io.arrow materializes the Arrow schema.
"""

from __future__ import annotations

from dataclasses import dataclass

from .versioning import SCHEMA_V, SchemaVersion

__all__ = [
    "TableDescriptor",
    "TIME_TAGS_DESC",
]


@dataclass(frozen=True)
class TableDescriptor:
    """
    Frozen descriptor for a tagstream table.

    Attributes:
        name (str): Table identifier (lower_snake).
        columns (dict[str, str]): Ordered mapping of column_name -> dtype
            where dtype ∈ {"u16","u64"}.
        nullable (list[str]): Columns permitted to contain nulls.
        version (SchemaVersion): Schema version pinned to tagstream.core.versioning.SCHEMA_V.

    Examples:
        >>> from tagstream.core.tables import TIME_TAGS_DESC
        >>> list(TIME_TAGS_DESC.columns.items())
        [('channel', 'u16'), ('time_tag', 'u64')]
    """

    name: str
    columns: dict[str, str]
    nullable: list[str]
    version: SchemaVersion


# One detected occurrence per row: channel id and picoseconds since the measurement epoch.
TIME_TAGS_DESC = TableDescriptor(
    name="time_tags",
    columns={
        "channel": "u16",
        "time_tag": "u64",
    },
    nullable=[],
    version=SCHEMA_V,
)
