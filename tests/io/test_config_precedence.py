from __future__ import annotations

from pathlib import Path

import pytest

from dynrec.io.config import IoSettings
from dynrec.io.errors import IoConfigError

_ENV_KEYS = [
    "DYNREC_IO_ROOT_DIR",
    "DYNREC_IO_CANONICAL",
    "DYNREC_IO_ENCODING",
    "DYNREC_IO_FSYNC",
    "DYNREC_IO_SKIP_BLANK_LINES",
]


def _clear_env(monkeypatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def _write_dynrec_toml(tmp: Path, content: str) -> Path:
    p = tmp / "dynrec.toml"
    p.write_text(content)
    return p


def test_io_settings_precedence_env_over_toml(tmp_path: Path, monkeypatch) -> None:
    # Arrange TOML
    _write_dynrec_toml(
        tmp_path,
        """
        [io]
        root_dir = "tmp_out_toml"
        canonical = false
        fsync = false
        """.strip(),
    )
    # Ensure cwd for IoSettings.from_toml() search
    monkeypatch.chdir(tmp_path)
    _clear_env(monkeypatch)
    # Arrange ENV that should override TOML
    monkeypatch.setenv("DYNREC_IO_ROOT_DIR", "tmp_out_env")
    monkeypatch.setenv("DYNREC_IO_CANONICAL", "yes")

    # Act
    s = IoSettings.load()

    # Assert precedence: env > TOML
    assert s.root_dir == "tmp_out_env"
    assert s.canonical is True  # env override
    assert s.fsync is False  # TOML only


def test_io_settings_from_toml_top_level_keys(tmp_path: Path, monkeypatch) -> None:
    _write_dynrec_toml(tmp_path, 'root_dir = "flat"\nskip_blank_lines = false\n')
    monkeypatch.chdir(tmp_path)
    _clear_env(monkeypatch)

    s = IoSettings.load()

    assert s.root_dir == "flat"
    assert s.skip_blank_lines is False


def test_io_settings_from_pyproject_tool_table(tmp_path: Path, monkeypatch) -> None:
    (tmp_path / "pyproject.toml").write_text(
        """
        [tool.dynrec.io]
        root_dir = "from_pyproject"
        encoding = "latin-1"
        """.strip()
    )
    monkeypatch.chdir(tmp_path)
    _clear_env(monkeypatch)

    s = IoSettings.load()

    assert s.root_dir == "from_pyproject"
    assert s.encoding == "latin-1"


def test_io_settings_defaults_when_no_config(tmp_path: Path, monkeypatch) -> None:
    # No TOML, no env
    monkeypatch.chdir(tmp_path)
    _clear_env(monkeypatch)

    s = IoSettings.load()

    assert s == IoSettings()
    assert s.root_dir == "."
    assert s.canonical is False
    assert s.fsync is True


def test_io_settings_rejects_unknown_encoding() -> None:
    with pytest.raises(IoConfigError, match="encoding"):
        IoSettings(encoding="no-such-codec")


def test_io_settings_resolve_relative_and_absolute(tmp_path: Path) -> None:
    s = IoSettings(root_dir=str(tmp_path))

    assert s.resolve("a/b.jsonl") == tmp_path / "a" / "b.jsonl"
    assert s.resolve(tmp_path / "abs.jsonl") == tmp_path / "abs.jsonl"
