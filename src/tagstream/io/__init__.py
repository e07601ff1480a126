"""
tagstream.io — Parquet writer layer for time tag streams.

## Responsibilities
- Buffer an unbounded, ordered stream of (channel, time_tag) events column-wise, flush each
  full buffer as one Parquet row group, and rotate files by chunk count.
- Keep memory bounded to one chunk (max_chunk_rows rows) regardless of input size.
- Name files deterministically: <UTC timestamp>_<label>_<sequence:04d>.parquet.

## Public API
- WriterSettings — chunk/file thresholds (defaults sourced from tagstream.core.constants).
- TimeTagWriter / write_time_tags — the writer driver.
- read_time_tags / list_files — read written output back.
- iter_queue — adapt a producer queue of batches into a record iterator.

## Import DAG discipline
- Depends on stdlib, pyarrow/polars, structlog, and tagstream.core.*.
- MUST NOT import tagstream.sim or tagstream.cli.

## Examples
```python
from tagstream.io import WriterSettings, write_time_tags

settings = WriterSettings(max_chunk_rows=2, max_file_rows=100)
summary = write_time_tags(  # doctest: +SKIP
    [(0, 100), (1, 200), (0, 181), (1, 201), (0, 210)],
    "out",
    "simulation-1",
    settings=settings,
)
```

## Notes
- Single writer per output directory; no locking.
- No crash safety: a file being written when the process dies has no footer.
"""

from __future__ import annotations

from .config import WriterSettings
from .read import list_files, read_time_tags
from .stream import iter_queue
from .write import TimeTagWriter, write_time_tags

__all__ = [
    "WriterSettings",
    "TimeTagWriter",
    "write_time_tags",
    "read_time_tags",
    "list_files",
    "iter_queue",
]
