"""
tagstream — persist picosecond time tag streams as rotating Parquet files.

## Layers
- tagstream.core: event record, table descriptor, constants, versioning (zero-IO).
- tagstream.io: the bounded-memory Parquet writer and readers.
- tagstream.sim: synthetic coincidence stream for demos and tests.
- tagstream.cli: command-line front end.

## Examples
```python
from tagstream import TimeTag, write_time_tags

write_time_tags([TimeTag(0, 100), TimeTag(1, 200)], "out", "run-1")  # doctest: +SKIP
```
"""

from __future__ import annotations

from .core.schema import TimeTag, WriteSummary, WrittenFile
from .io import TimeTagWriter, WriterSettings, read_time_tags, write_time_tags

__version__ = "0.1.0"

__all__ = [
    "TimeTag",
    "WriteSummary",
    "WrittenFile",
    "TimeTagWriter",
    "WriterSettings",
    "write_time_tags",
    "read_time_tags",
]
