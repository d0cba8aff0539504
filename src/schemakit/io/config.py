"""
Configuration for schemakit.

Defines Settings, a frozen dataclass carrying runtime configuration for the CLI
and catalog loader.

Precedence
- environment (SCHEMAKIT_*) > TOML > defaults.
- TOML search when no explicit path is given: ./schemakit.toml (top-level keys or a
  [schemakit] table), then ./pyproject.toml under [tool.schemakit].

Notes
- The CLI loads a ``.env`` file (python-dotenv) before calling Settings.load(), so
  SCHEMAKIT_* keys placed there participate as environment values.
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from .errors import IoConfigError

__all__ = [
    "DEFAULT_SCHEMA_DIR",
    "Settings",
]

logger = logging.getLogger(__name__)

DEFAULT_SCHEMA_DIR = ".sample/schema"

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class Settings:
    """
    Runtime settings for schemakit.

    Attributes:
        schema_dir (str): Directory holding ``*.toml`` table schemas for the catalog.
        log_level (str): Logging level name for the CLI handler.

    Examples:
        >>> from schemakit.io.config import Settings
        >>> Settings(schema_dir="schemas").schema_dir
        'schemas'
    """

    schema_dir: str = DEFAULT_SCHEMA_DIR
    log_level: str = "INFO"

    @property
    def schema_path(self) -> Path:
        return Path(self.schema_dir)

    @classmethod
    def _apply_mapping(cls, base: Settings, cfg: dict[str, Any] | None) -> Settings:
        """Apply a loose config mapping onto Settings, returning a new instance."""
        if not isinstance(cfg, dict):
            return base

        s = base

        if "schema_dir" in cfg and isinstance(cfg["schema_dir"], str) and cfg["schema_dir"]:
            s = replace(s, schema_dir=cfg["schema_dir"])

        if "log_level" in cfg and isinstance(cfg["log_level"], str):
            level = cfg["log_level"].strip().upper()
            if level in _LOG_LEVELS:
                s = replace(s, log_level=level)
            else:
                logger.warning("ignoring unknown log_level %r", cfg["log_level"])

        return s

    @classmethod
    def from_env(cls, base: Settings | None = None, prefix: str = "SCHEMAKIT_") -> Settings:
        """
        Build Settings from environment variables. Precedence is env > base (if provided) > defaults.

        Recognized variables:
            - SCHEMAKIT_SCHEMA_DIR
            - SCHEMAKIT_LOG_LEVEL
        """
        s = base or cls()

        mapping: dict[str, Any] = {}
        v = os.getenv(prefix + "SCHEMA_DIR")
        if v:
            mapping["schema_dir"] = v
        v = os.getenv(prefix + "LOG_LEVEL")
        if v:
            mapping["log_level"] = v

        return cls._apply_mapping(s, mapping)

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str] | None = None) -> Settings:
        """
        Build Settings from a TOML file.

        Search order when ``path`` is None:
            1) ./schemakit.toml (with either a [schemakit] table or direct keys)
            2) ./pyproject.toml under [tool.schemakit]

        Raises:
            IoConfigError: If an explicit ``path`` is missing or not valid TOML.
        """
        s = cls()

        if path is not None:
            p = Path(path)
            if not p.is_file():
                raise IoConfigError(f"config file not found: {p}")
            return cls._apply_mapping(s, _section(p, _load_toml(p)))

        for p in (Path.cwd() / "schemakit.toml", Path.cwd() / "pyproject.toml"):
            if not p.exists():
                continue
            try:
                data = _load_toml(p)
            except IoConfigError as exc:
                logger.warning("skipping %s: %s", p, exc)
                continue
            cfg = _section(p, data)
            if cfg:
                logger.debug("loaded settings from %s", p)
                return cls._apply_mapping(s, cfg)

        return s

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> Settings:
        """
        Load Settings applying precedence: environment > TOML > defaults.

        Args:
            path: Optional explicit TOML path. If None, search defaults (schemakit.toml, pyproject.toml).
        """
        s = cls.from_toml(path)
        s = cls.from_env(base=s)
        return s


def _load_toml(p: Path) -> dict[str, Any]:
    try:
        with p.open("rb") as fh:
            return tomllib.load(fh)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise IoConfigError(f"cannot read config {p}: {exc}") from exc


def _section(p: Path, data: dict[str, Any]) -> dict[str, Any] | None:
    if p.name == "pyproject.toml":
        tool = data.get("tool", {})
        if not isinstance(tool, dict):
            return None
        cfg = tool.get("schemakit")
        return cfg if isinstance(cfg, dict) else None
    if "schemakit" in data and isinstance(data["schemakit"], dict):
        return data["schemakit"]
    return data
