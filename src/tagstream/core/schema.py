"""
Event record and pydantic result models for tagstream.

Responsibilities
- Define the TimeTag event record consumed by the writer.
- Define the pydantic models describing a completed write (files, row groups, rows).

Style
- Zero-IO (stdlib + pydantic only).
- TimeTag is a plain named tuple: it is built once per event on hot paths, so it carries
  no validation. Range checks happen when values enter the typed column buffers.

References
- tables: src/tagstream/core/tables.py (column names and dtypes)
- writer: src/tagstream/io/write.py (produces WriteSummary)
"""

from __future__ import annotations

from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "TimeTag",
    "WrittenFile",
    "WriteSummary",
]


class TimeTag(NamedTuple):
    """
    One detected occurrence on a channel.

    Attributes:
        channel_id (int): Detector channel, unsigned 16-bit.
        time_tag_ps (int): Picoseconds counted up from the start of the measurement,
            unsigned 64-bit.

    Notes:
        Any (channel_id, time_tag_ps) 2-tuple is accepted wherever a TimeTag is.

    Examples:
        >>> from tagstream.core.schema import TimeTag
        >>> channel, ps = TimeTag(channel_id=1, time_tag_ps=200)
        >>> (channel, ps)
        (1, 200)
    """

    channel_id: int
    time_tag_ps: int


class WrittenFile(BaseModel):
    """
    A closed output file.

    Attributes:
        path (str): Full path of the Parquet file.
        sequence (int): 1-based sequence number used in the file name.
        rows (int): Rows written into the file.
        row_groups (int): Row groups (flushed chunks) written into the file.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    path: str
    sequence: int = Field(..., ge=1)
    rows: int = Field(..., ge=0)
    row_groups: int = Field(..., ge=0)


class WriteSummary(BaseModel):
    """
    Outcome of one successful writer invocation.

    Attributes:
        label (str): Caller-supplied label used in every file name.
        timestamp (str): Run timestamp shared by every file name.
        rows (int): Total rows written across all files.
        files (list[WrittenFile]): Files in sequence order.

    Examples:
        >>> from tagstream.core.schema import WriteSummary, WrittenFile
        >>> s = WriteSummary(label="sim", timestamp="20260101T000000Z", rows=0,
        ...                  files=[WrittenFile(path="x.parquet", sequence=1, rows=0, row_groups=0)])
        >>> s.paths
        ['x.parquet']
    """

    model_config = ConfigDict(extra="forbid")

    label: str
    timestamp: str
    rows: int = Field(default=0, ge=0)
    files: list[WrittenFile] = Field(default_factory=list)

    @property
    def paths(self) -> list[str]:
        return [f.path for f in self.files]
