"""
Configuration for the dynrec.io module.

Defines IoSettings, a frozen dataclass carrying runtime configuration for reading
and writing record batches. Defaults are sourced from dynrec.core.constants.

Source of truth
- dynrec.core.constants.DEFAULT_ROOT_DIR, DEFAULT_ENCODING

Import DAG discipline
- Depends only on stdlib and dynrec.core.constants.

Notes
- Precedence for IoSettings.load(): environment > TOML > defaults.
- Environment variables use the DYNREC_IO_ prefix; TOML is read from ./dynrec.toml
  ([io] table or top-level keys) or ./pyproject.toml under [tool.dynrec.io].
"""

from __future__ import annotations

import codecs
import logging
import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from dynrec.core.constants import DEFAULT_ENCODING, DEFAULT_ROOT_DIR

from .errors import IoConfigError

logger = logging.getLogger(__name__)

_TRUE_STRINGS = {"1", "true", "t", "yes", "y", "on"}


def _bool(v: Any) -> bool:
    if isinstance(v, bool):
        return v
    if isinstance(v, (int, float)):
        return bool(v)
    if isinstance(v, str):
        return v.strip().lower() in _TRUE_STRINGS
    return False


@dataclass(frozen=True)
class IoSettings:
    """
    Runtime settings for the dynrec.io layer.

    Attributes:
        root_dir (str): Base directory against which relative record file paths resolve.
        canonical (bool): Write lines with sorted keys (canonical JSON) instead of
            declaration order.
        encoding (str): Text encoding of record files.
        fsync (bool): fsync the temporary file before the atomic rename.
        skip_blank_lines (bool): Ignore empty lines when reading.

    Raises:
        IoConfigError: If ``encoding`` is not a known codec.

    Examples:
        >>> from dynrec.io import IoSettings
        >>> IoSettings(root_dir="out", canonical=True)  # doctest: +ELLIPSIS
        IoSettings(...)
    """

    root_dir: str = DEFAULT_ROOT_DIR
    canonical: bool = False
    encoding: str = DEFAULT_ENCODING
    fsync: bool = True
    skip_blank_lines: bool = True

    def __post_init__(self) -> None:
        try:
            codecs.lookup(self.encoding)
        except LookupError as exc:
            raise IoConfigError(f"unknown encoding {self.encoding!r}") from exc

    def resolve(self, path: str | os.PathLike[str]) -> Path:
        """Resolve a record file path against ``root_dir`` (absolute paths pass through)."""
        p = Path(path)
        if p.is_absolute():
            return p
        return Path(self.root_dir) / p

    # Configuration loaders (env/TOML) with precedence: env > TOML > defaults.

    @classmethod
    def _apply_mapping(cls, base: IoSettings, cfg: dict[str, Any] | None) -> IoSettings:
        """Apply a loose config mapping onto IoSettings, returning a new instance."""
        if not isinstance(cfg, dict):
            return base

        s = base

        if "root_dir" in cfg and isinstance(cfg["root_dir"], str):
            s = replace(s, root_dir=cfg["root_dir"])

        if "canonical" in cfg:
            s = replace(s, canonical=_bool(cfg["canonical"]))

        if "encoding" in cfg and isinstance(cfg["encoding"], str):
            s = replace(s, encoding=cfg["encoding"].strip())

        if "fsync" in cfg:
            s = replace(s, fsync=_bool(cfg["fsync"]))

        if "skip_blank_lines" in cfg:
            s = replace(s, skip_blank_lines=_bool(cfg["skip_blank_lines"]))

        return s

    @classmethod
    def from_env(cls, base: IoSettings | None = None, prefix: str = "DYNREC_IO_") -> IoSettings:
        """
        Build IoSettings from environment variables. Precedence is env > base (if provided) > defaults.

        Recognized variables:
            - DYNREC_IO_ROOT_DIR
            - DYNREC_IO_CANONICAL (1/0/true/false/yes/no/on/off)
            - DYNREC_IO_ENCODING
            - DYNREC_IO_FSYNC
            - DYNREC_IO_SKIP_BLANK_LINES
        """
        s = base or cls()

        mapping: dict[str, Any] = {}
        for key in ("root_dir", "canonical", "encoding", "fsync", "skip_blank_lines"):
            v = os.getenv(prefix + key.upper())
            if v:
                mapping[key] = v

        return cls._apply_mapping(s, mapping)

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str] | None = None) -> IoSettings:
        """
        Build IoSettings from a TOML file.

        Search order when `path` is None:
            1) ./dynrec.toml (with either top-level [io] or direct keys)
            2) ./pyproject.toml under [tool.dynrec.io]

        Returns defaults if no file is present or no file parses.
        """
        s = cls()

        def _load_toml(p: Path) -> dict[str, Any] | None:
            try:
                with p.open("rb") as fh:
                    return tomllib.load(fh)
            except (OSError, tomllib.TOMLDecodeError) as exc:
                logger.warning("ignoring unreadable config %s: %s", p, exc)
                return None

        cfg: dict[str, Any] | None = None

        cand: list[Path] = []
        if path is not None:
            cand.append(Path(path))
        else:
            cand.append(Path.cwd() / "dynrec.toml")
            cand.append(Path.cwd() / "pyproject.toml")

        for p in cand:
            if not p.exists():
                continue
            data = _load_toml(p)
            if not isinstance(data, dict):
                continue
            if p.name == "pyproject.toml":
                tool = data.get("tool", {})
                cfg = tool.get("dynrec", {}).get("io", {}) if isinstance(tool, dict) else None
            else:
                # dynrec.toml - accept either [io] table or top-level keys
                if "io" in data and isinstance(data["io"], dict):
                    cfg = data["io"]
                else:
                    cfg = data
            if cfg:
                logger.debug("loaded io settings from %s", p)
                break

        return cls._apply_mapping(s, cfg)

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> IoSettings:
        """
        Load IoSettings applying precedence: environment > TOML > defaults.

        Args:
            path: Optional explicit TOML path. If None, search defaults (dynrec.toml, pyproject.toml).

        Returns:
            IoSettings
        """
        s = cls.from_toml(path)
        s = cls.from_env(base=s)
        return s
