"""
Configuration for the tagstream.io module.

Defines WriterSettings, a frozen dataclass carrying the two nested thresholds that bound
in-memory buffering (rows per chunk) and per-file size (rows per file). Defaults are sourced
from tagstream.core.constants (the single source of truth).

Source of truth
- tagstream.core.constants.MAX_CHUNK_ROWS, MAX_FILE_ROWS, MAX_ROW_GROUP_ROWS

Import DAG discipline
- Depends only on stdlib, tagstream.core.constants and tagstream.io.errors.

Notes
- The writer core takes a WriterSettings explicitly and never reads the environment;
  from_env/from_toml/load exist for front ends such as tagstream.cli.
- Output directory and label are per-call arguments of the writer, not settings.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from tagstream.core.constants import MAX_CHUNK_ROWS as CORE_MAX_CHUNK_ROWS
from tagstream.core.constants import MAX_FILE_ROWS as CORE_MAX_FILE_ROWS
from tagstream.core.constants import MAX_ROW_GROUP_ROWS

from .errors import IoConfigError


@dataclass(frozen=True)
class WriterSettings:
    """
    Runtime settings for the tagstream writer.

    Attributes:
        max_chunk_rows (int): Rows buffered before a flush; each flush is one row group.
        max_file_rows (int): Target rows per file. Only approximate, see max_chunks_per_file.

    Notes:
        - Rotation counts chunks, not rows: a file rotates once it holds more than
          max_chunks_per_file row groups, so it may receive up to
          (max_chunks_per_file + 1) * max_chunk_rows rows.
        - Changing defaults should be done in tagstream.core.constants.

    Examples:
        >>> from tagstream.io import WriterSettings
        >>> WriterSettings(max_chunk_rows=2, max_file_rows=4).max_chunks_per_file
        2
    """

    max_chunk_rows: int = CORE_MAX_CHUNK_ROWS
    max_file_rows: int = CORE_MAX_FILE_ROWS

    @property
    def max_chunks_per_file(self) -> int:
        """Chunk budget per file (integer division of the two thresholds)."""
        return self.max_file_rows // self.max_chunk_rows

    def validate(self) -> WriterSettings:
        """
        Check threshold invariants and return self.

        Raises:
            IoConfigError: If max_chunk_rows < 1, max_chunk_rows exceeds the largest
                single Parquet row group, or max_file_rows < max_chunk_rows.
        """
        if self.max_chunk_rows < 1:
            raise IoConfigError(f"max_chunk_rows must be >= 1, got {self.max_chunk_rows}")
        if self.max_chunk_rows > MAX_ROW_GROUP_ROWS:
            raise IoConfigError(
                f"max_chunk_rows must be <= {MAX_ROW_GROUP_ROWS} to fit one row group, "
                f"got {self.max_chunk_rows}"
            )
        if self.max_file_rows < self.max_chunk_rows:
            raise IoConfigError(
                f"max_file_rows ({self.max_file_rows}) must be >= "
                f"max_chunk_rows ({self.max_chunk_rows})"
            )
        return self

    # Configuration loaders (env/TOML) with precedence: env > TOML > defaults.

    @classmethod
    def _apply_mapping(cls, base: WriterSettings, cfg: dict[str, Any] | None) -> WriterSettings:
        """Apply a loose config mapping onto WriterSettings, returning a new instance."""
        if not isinstance(cfg, dict):
            return base

        s = base
        for key in ("max_chunk_rows", "max_file_rows"):
            if key not in cfg:
                continue
            try:
                s = replace(s, **{key: int(cfg[key])})
            except (TypeError, ValueError) as exc:
                raise IoConfigError(f"{key} must be an integer, got {cfg[key]!r}") from exc
        return s

    @classmethod
    def from_env(
        cls, base: WriterSettings | None = None, prefix: str = "TAGSTREAM_"
    ) -> WriterSettings:
        """
        Build WriterSettings from environment variables. Precedence is env > base > defaults.

        Recognized variables:
            - TAGSTREAM_MAX_CHUNK_ROWS
            - TAGSTREAM_MAX_FILE_ROWS
        """
        s = base or cls()
        mapping: dict[str, Any] = {}
        v = os.getenv(prefix + "MAX_CHUNK_ROWS")
        if v:
            mapping["max_chunk_rows"] = v
        v = os.getenv(prefix + "MAX_FILE_ROWS")
        if v:
            mapping["max_file_rows"] = v
        return cls._apply_mapping(s, mapping)

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str] | None = None) -> WriterSettings:
        """
        Build WriterSettings from a TOML file.

        Search order when `path` is None:
            1) ./tagstream.toml (with either a [writer] table or top-level keys)
            2) ./pyproject.toml under [tool.tagstream.writer]

        Returns defaults if no file is present.
        """
        s = cls()

        cand: list[Path] = []
        if path is not None:
            cand.append(Path(path))
        else:
            cand.append(Path.cwd() / "tagstream.toml")
            cand.append(Path.cwd() / "pyproject.toml")

        cfg: dict[str, Any] | None = None
        for p in cand:
            if not p.exists():
                continue
            try:
                with p.open("rb") as fh:
                    data = tomllib.load(fh)
            except tomllib.TOMLDecodeError as exc:
                raise IoConfigError(f"invalid TOML in {p}: {exc}", path=str(p)) from exc
            if p.name == "pyproject.toml":
                tool = data.get("tool", {})
                cfg = tool.get("tagstream", {}).get("writer") if isinstance(tool, dict) else None
            elif isinstance(data.get("writer"), dict):
                cfg = data["writer"]
            else:
                cfg = data
            if cfg:
                break

        return cls._apply_mapping(s, cfg)

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> WriterSettings:
        """
        Load WriterSettings applying precedence: environment > TOML > defaults.

        Args:
            path: Optional explicit TOML path. If None, search defaults
                (tagstream.toml, pyproject.toml).
        """
        s = cls.from_toml(path)
        s = cls.from_env(base=s)
        return s
