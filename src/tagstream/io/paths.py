"""
File naming helpers for tagstream.io.

Layout (one flat directory per output location)
- <output_dir>/<timestamp>_<label>_<sequence:04d>.parquet
- e.g. 20261018T093012Z_simulation-1_0001.parquet

Rules
- The timestamp is captured once per writer invocation (UTC, second resolution) and reused
  by every file of that invocation; rotation does not re-timestamp.
- Sequence numbers start at 1, increase by one per rotation and are never reused.
- Labels are non-empty and carry no path separator.

Import DAG discipline
- stdlib + tagstream.core.constants + tagstream.io.errors only.
"""

from __future__ import annotations

import os
import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Final

from tagstream.core.constants import FILE_SUFFIX, SEQUENCE_WIDTH, TIMESTAMP_FORMAT

from .errors import IoConfigError

_NAME_RE: Final = re.compile(
    r"^(?P<timestamp>\d{8}T\d{6}Z)_(?P<label>.+)_(?P<sequence>\d{%d,})%s$"
    % (SEQUENCE_WIDTH, re.escape(FILE_SUFFIX))
)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def run_timestamp(now: Callable[[], datetime] | None = None) -> str:
    """
    Format the run timestamp used in every file name of one writer invocation.

    Args:
        now (Callable[[], datetime] | None): Clock returning an aware datetime; defaults to UTC now.

    Returns:
        str: Compact sortable UTC timestamp, e.g. "20261018T093012Z".
    """
    moment = (now or _utcnow)()
    if moment.tzinfo is not None:
        moment = moment.astimezone(UTC)
    return moment.strftime(TIMESTAMP_FORMAT)


def validate_label(label: str) -> str:
    """
    Check that a label can be embedded in a file name.

    Raises:
        IoConfigError: If label is empty or contains a path separator.
    """
    if not label:
        raise IoConfigError("label must be a non-empty string")
    seps = {os.sep, "/"} | ({os.altsep} if os.altsep else set())
    if any(sep in label for sep in seps):
        raise IoConfigError(f"label must not contain a path separator, got {label!r}")
    return label


def format_file_name(timestamp: str, label: str, sequence: int) -> str:
    """
    Format an output file name.

    Args:
        timestamp (str): Run timestamp from run_timestamp().
        label (str): Caller-supplied label.
        sequence (int): 1-based file sequence number.

    Returns:
        str: "<timestamp>_<label>_<sequence:04d>.parquet".

    Raises:
        ValueError: If sequence < 1.
    """
    if sequence < 1:
        raise ValueError("sequence must be >= 1")
    return f"{timestamp}_{label}_{sequence:0{SEQUENCE_WIDTH}d}{FILE_SUFFIX}"


@dataclass(frozen=True)
class FileName:
    """Parsed components of an output file name."""

    timestamp: str
    label: str
    sequence: int


def parse_file_name(name: str) -> FileName | None:
    """
    Split an output file name (basename or full path) into its components.

    Returns:
        FileName | None: Components, or None if the name does not follow the layout.
    """
    m = _NAME_RE.match(os.path.basename(name))
    if m is None:
        return None
    return FileName(m.group("timestamp"), m.group("label"), int(m.group("sequence")))


def file_path(output_dir: str, timestamp: str, label: str, sequence: int) -> str:
    """Full path of the output file for a given sequence number."""
    return os.path.join(output_dir, format_file_name(timestamp, label, sequence))
