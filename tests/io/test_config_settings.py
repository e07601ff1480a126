from __future__ import annotations

from pathlib import Path

import pytest

from tagstream.core.constants import MAX_ROW_GROUP_ROWS
from tagstream.io.config import WriterSettings
from tagstream.io.errors import IoConfigError

_ENV_KEYS = ["TAGSTREAM_MAX_CHUNK_ROWS", "TAGSTREAM_MAX_FILE_ROWS"]


def _clear_env(monkeypatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults_and_derived_chunk_budget() -> None:
    s = WriterSettings()
    assert s.max_chunk_rows == 20_000_000
    assert s.max_file_rows == 200_000_000
    assert s.max_chunks_per_file == 10
    assert WriterSettings(max_chunk_rows=3, max_file_rows=10).max_chunks_per_file == 3


@pytest.mark.parametrize(
    "chunk,file",
    [(0, 10), (-1, 10), (10, 5), (MAX_ROW_GROUP_ROWS + 1, 10 * MAX_ROW_GROUP_ROWS)],
)
def test_validate_rejects_bad_thresholds(chunk: int, file: int) -> None:
    with pytest.raises(IoConfigError):
        WriterSettings(max_chunk_rows=chunk, max_file_rows=file).validate()


def test_validate_returns_self() -> None:
    s = WriterSettings(max_chunk_rows=2, max_file_rows=4)
    assert s.validate() is s


def test_settings_precedence_env_over_toml(tmp_path: Path, monkeypatch) -> None:
    (tmp_path / "tagstream.toml").write_text(
        """
        [writer]
        max_chunk_rows = 1000
        max_file_rows = 5000
        """.strip()
    )
    monkeypatch.chdir(tmp_path)
    _clear_env(monkeypatch)
    monkeypatch.setenv("TAGSTREAM_MAX_FILE_ROWS", "9000")

    s = WriterSettings.load()

    assert s.max_chunk_rows == 1000  # TOML
    assert s.max_file_rows == 9000  # env override


def test_settings_from_pyproject_tool_table(tmp_path: Path, monkeypatch) -> None:
    (tmp_path / "pyproject.toml").write_text(
        """
        [tool.tagstream.writer]
        max_chunk_rows = 10
        max_file_rows = 100
        """.strip()
    )
    monkeypatch.chdir(tmp_path)
    _clear_env(monkeypatch)

    s = WriterSettings.load()
    assert (s.max_chunk_rows, s.max_file_rows) == (10, 100)


def test_settings_from_explicit_toml_top_level_keys(tmp_path: Path, monkeypatch) -> None:
    p = tmp_path / "custom.toml"
    p.write_text("max_chunk_rows = 7\n")
    _clear_env(monkeypatch)

    s = WriterSettings.load(p)
    assert s.max_chunk_rows == 7
    assert s.max_file_rows == 200_000_000


def test_settings_defaults_without_files(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    _clear_env(monkeypatch)
    assert WriterSettings.load() == WriterSettings()


def test_non_integer_values_raise(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    _clear_env(monkeypatch)
    monkeypatch.setenv("TAGSTREAM_MAX_CHUNK_ROWS", "lots")
    with pytest.raises(IoConfigError):
        WriterSettings.load()


def test_malformed_toml_raises(tmp_path: Path, monkeypatch) -> None:
    p = tmp_path / "tagstream.toml"
    p.write_text("max_chunk_rows = = 3\n")
    _clear_env(monkeypatch)
    with pytest.raises(IoConfigError):
        WriterSettings.from_toml(p)
