"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  The configuration is built lazily and frozen
before any command reads it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from sitebake.config.logging import configure_logging
from sitebake.output.formatters import format_result

if TYPE_CHECKING:
    from sitebake.config.configuration import BakeConfiguration
    from sitebake.config.settings import BakeSettings
    from sitebake.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    ``--help`` and ``--version`` never touch the project files because
    the configuration is only loaded on first access.
    """

    def __init__(self, settings: BakeSettings) -> None:
        self.settings = settings
        self._config: BakeConfiguration | None = None
        configure_logging(
            verbose=settings.verbose,
            log_json=settings.log_json,
            source_root=settings.source_root,
        )

    @property
    def config(self) -> BakeConfiguration:
        """The resolved, frozen configuration (built on first access)."""
        if self._config is None:
            config = self.settings.build_configuration()
            config.freeze()
            self._config = config
        return self._config

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings go to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        output = format_result(result, json_output=self.settings.json_output)
        if result.ok:
            click.echo(output)
            if not self.settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
