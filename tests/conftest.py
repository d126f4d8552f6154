"""Shared pytest fixtures for sitebake tests."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog
from click.testing import CliRunner

from sitebake.config.configuration import BakeConfiguration
from sitebake.config.discovery import CONFIG_FILENAME, load_defaults, load_store
from sitebake.config.store import LayeredStore

PROJECT_TOML = """\
destination.folder = "build/site"
template.folder = "layouts"
template.post.file = "post.html"
template.post.extension = ".htm"
template.page.file = "page.html"
asciidoctor.option.safe = "UNSAFE"
asciidoctor.option.doctype = ""
"""


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's SITEBAKE_* environment out of every test."""
    for var in ("SITEBAKE_CONFIG", "SITEBAKE_SOURCE_ROOT", "SITEBAKE_VERBOSE", "SITEBAKE_JSON_OUTPUT", "SITEBAKE_LOG_JSON"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """Undo configure_logging() calls made by CLI invocations."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("sitebake").setLevel(logging.NOTSET)
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Temporary site project with a sitebake.toml and the usual folders."""
    (tmp_path / CONFIG_FILENAME).write_text(PROJECT_TOML)
    for name in ("assets", "content", "layouts"):
        (tmp_path / name).mkdir()
    return tmp_path


@pytest.fixture
def defaults_store() -> LayeredStore:
    """Store holding only the packaged defaults."""
    return LayeredStore.from_mappings(("defaults", load_defaults()))


@pytest.fixture
def project_config(project_root: Path) -> BakeConfiguration:
    """Configuration resolved for :func:`project_root`."""
    return BakeConfiguration(project_root, load_store(project_root / CONFIG_FILENAME))


def make_config(values: dict[str, object], root: Path | str | None = "/site") -> BakeConfiguration:
    """Configuration over a single in-memory layer of dotted *values*."""
    store = LayeredStore.from_mappings(("project", dict(values)))
    return BakeConfiguration(root, store)
