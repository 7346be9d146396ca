"""Locate and read ``zonepulse.toml``.

Lookup order: ``--config`` (handled by the caller), then the
``ZONEPULSE_CONFIG`` env var, then a walk up from the working directory
the way git looks for ``.git/``.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

CONFIG_FILENAME = "zonepulse.toml"
CONFIG_ENV_VAR = "ZONEPULSE_CONFIG"


class ConfigError(ValueError):
    """A config file was named but is missing, or exists but cannot be parsed."""


def find_config(start: Path | None = None) -> Path | None:
    """The config file governing *start* (default: cwd), or None.

    A ``ZONEPULSE_CONFIG`` pointing at a missing file disables discovery
    rather than falling through to the walk-up.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        path = Path(env_path)
        return path if path.is_file() else None

    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def read_toml(path: Path) -> dict[str, Any]:
    """Parse *path* into a dict of sections.

    Raises:
        ConfigError: the file is not valid TOML.
    """
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise ConfigError(msg) from exc
