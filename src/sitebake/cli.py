"""Root CLI group for sitebake with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from sitebake import __version__
from sitebake.commands import register_commands
from sitebake.commands._context import AppContext
from sitebake.config.settings import BakeSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="sitebake")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "-s",
    "--source",
    "source_root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Project source folder (default: location of sitebake.toml).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    source_root: Path | None,
) -> None:
    """sitebake — inspect a static site's resolved configuration."""
    ctx.ensure_object(dict)
    settings = BakeSettings.from_cli(
        config_path=config_path,
        source_root=source_root,
        json_output=json_output,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
