"""structlog setup for the sitebake CLI.

All records, structlog and stdlib alike, go to stderr so stdout stays
reserved for command output. Human mode renders with the console
renderer; ``--log-json`` emits one JSON object per line.

Every record carries the project ``source_root`` once
:func:`configure_logging` has been told about it, and ``Path`` values are
rendered as plain strings so JSON lines hold ``"/site/layouts"`` rather
than ``"PosixPath('/site/layouts')"``.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import MutableMapping
from pathlib import PurePath
from typing import Any

import structlog

PACKAGE_LOGGER = "sitebake"


def stringify_paths(
    _logger: Any, _method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Render path values (including inside lists) as plain strings."""
    for key, value in event_dict.items():
        if isinstance(value, PurePath):
            event_dict[key] = str(value)
        elif isinstance(value, (list, tuple)) and any(isinstance(item, PurePath) for item in value):
            event_dict[key] = [str(item) if isinstance(item, PurePath) else item for item in value]
    return event_dict


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        stringify_paths,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    source_root: PurePath | None = None,
) -> None:
    """Route structlog and stdlib logging to one stderr handler.

    Safe to call repeatedly; each call replaces the previous handler and
    context.

    Args:
        verbose: Show DEBUG records from ``sitebake.*``; otherwise WARNING+.
        log_json: Use the JSON renderer instead of the console renderer.
        source_root: Project root bound to every record, when known.
    """
    shared = _shared_processors()

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    structlog.contextvars.clear_contextvars()
    if source_root is not None:
        structlog.contextvars.bind_contextvars(source_root=str(source_root))

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, _renderer(log_json)],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)
    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)
