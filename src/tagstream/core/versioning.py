"""
Schema version stamped into every tagstream Parquet file.

Writers store SCHEMA_V in the Arrow key-value metadata as "major.minor@date"; the readers in
tagstream.io.read parse it back and refuse files whose major or minor number differs. This
module is zero-IO.
"""

import datetime
from dataclasses import dataclass

SCHEMA_MAJOR_VERSION = 0
SCHEMA_MINOR_VERSION = 1
SCHEMA_DATE = "2026-10-18"


@dataclass(frozen=True)
class SchemaVersion:
    """
    Layout version of the time tag table.

    Attributes:
        major (int): Bumped when columns are renamed, retyped or removed.
        minor (int): Bumped when the layout gains optional content.
        date (str): ISO YYYY-MM-DD date the layout was fixed.

    Raises:
        ValueError: On a negative number or a non-ISO date.
    """

    major: int
    minor: int
    date: str

    def __post_init__(self) -> None:
        for part in ("major", "minor"):
            if getattr(self, part) < 0:
                raise ValueError(f"schema {part} version must be >= 0, got {getattr(self, part)}")
        try:
            datetime.date.fromisoformat(self.date)
        except ValueError as exc:
            raise ValueError(f"schema version date {self.date!r} is not YYYY-MM-DD") from exc

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}@{self.date}"


SCHEMA_V = SchemaVersion(SCHEMA_MAJOR_VERSION, SCHEMA_MINOR_VERSION, SCHEMA_DATE)


def parse_version(text: str) -> SchemaVersion:
    """
    Parse the "major.minor@date" form written into file metadata.

    Raises:
        ValueError: If the text is not in that form.

    Examples:
        >>> from tagstream.core.versioning import parse_version, SCHEMA_V
        >>> parse_version(str(SCHEMA_V)) == SCHEMA_V
        True
    """
    numbers, sep, when = text.partition("@")
    major, dot, minor = numbers.partition(".")
    if not sep or not dot:
        raise ValueError(f"malformed schema version {text!r}")
    try:
        return SchemaVersion(int(major), int(minor), when)
    except ValueError as exc:
        raise ValueError(f"malformed schema version {text!r}") from exc


def is_compatible(ver: SchemaVersion) -> bool:
    """True when ver has the major and minor numbers of SCHEMA_V; the date is informational."""
    return (ver.major, ver.minor) == (SCHEMA_V.major, SCHEMA_V.minor)
