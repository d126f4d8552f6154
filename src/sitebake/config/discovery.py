"""Project config discovery and store loading.

Walk-up finder locates sitebake.toml, similar to how git finds .git/.
Supports SITEBAKE_CONFIG env var and --config CLI flag overrides.
"""

from __future__ import annotations

import logging
import os
import tomllib
from importlib import resources
from pathlib import Path
from typing import Any

import click

from sitebake.config.store import LayeredStore

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "sitebake.toml"
CONFIG_ENV_VAR = "SITEBAKE_CONFIG"
DEFAULTS_RESOURCE = "defaults.toml"


class ConfigFileError(click.ClickException):
    """A project config file exists but cannot be parsed."""


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for sitebake.toml.

    Returns the path to the config file, or None if not found.
    Checks SITEBAKE_CONFIG env var first.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        if p.is_file():
            return p
        return None

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def read_toml(path: Path) -> dict[str, Any]:
    """Parse a TOML file, raising :class:`ConfigFileError` when it cannot be read."""
    try:
        raw = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        msg = f"Config file {path} is not valid UTF-8: {exc}"
        raise ConfigFileError(msg) from exc
    except OSError as exc:
        msg = f"Cannot read config file {path}: {exc.strerror or exc}"
        raise ConfigFileError(msg) from exc
    try:
        return tomllib.loads(raw)
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise ConfigFileError(msg) from exc


def load_defaults() -> dict[str, Any]:
    """Parse the packaged default layer."""
    text = resources.files("sitebake.config").joinpath(DEFAULTS_RESOURCE).read_text(encoding="utf-8")
    return tomllib.loads(text)


def load_store(
    path: Path | None = None,
    cwd: Path | None = None,
    *,
    discover: bool = True,
) -> LayeredStore:
    """Build the layered store for a project.

    If *path* is None and *discover* is set, uses find_config(*cwd*) to
    discover the file. Without a project file the store holds only the
    packaged defaults.
    """
    if path is None and discover:
        path = find_config(cwd)

    layers: list[tuple[str, dict[str, Any]]] = []
    if path is not None:
        logger.debug("Loading project config from %s", path)
        layers.append(("project", read_toml(path)))
    layers.append(("defaults", load_defaults()))
    return LayeredStore.from_mappings(*layers)
