"""
tagstream core IO-facing defaults.

Defines the two nested thresholds (rows per chunk, rows per file), the Parquet codec and
the on-disk naming format consumed by tagstream.io. This module is zero-IO and uses only
the Python standard library.

Notes:
    - A chunk is one row buffer's worth of rows and becomes exactly one Parquet row group.
    - Rows are roughly 80 bits each; 20M-row chunks land near 200 MiB uncompressed and
      200M-row files near 2 GiB.
    - Derived: max_chunks_per_file = MAX_FILE_ROWS // MAX_CHUNK_ROWS (10 by default).
"""

from __future__ import annotations

__all__ = [
    "MAX_CHUNK_ROWS",
    "MAX_FILE_ROWS",
    "MAX_ROW_GROUP_ROWS",
    "COMPRESSION",
    "TIMESTAMP_FORMAT",
    "FILE_SUFFIX",
    "SEQUENCE_WIDTH",
]

# Rows buffered in memory before a chunk is flushed as one row group.
MAX_CHUNK_ROWS: int = 20_000_000

# Target rows per output file before rotating to a new one.
MAX_FILE_ROWS: int = 200_000_000

# Largest row group the Parquet writer will emit as a single group (64Mi rows).
MAX_ROW_GROUP_ROWS: int = 64 * 1024 * 1024

# Parquet compression codec; fixed, not a tunable.
COMPRESSION: str = "zstd"

# Run timestamp captured once per writer invocation (UTC, second resolution, sortable).
TIMESTAMP_FORMAT: str = "%Y%m%dT%H%M%SZ"

FILE_SUFFIX: str = ".parquet"

# Zero-padded width of the per-run file sequence number.
SEQUENCE_WIDTH: int = 4
