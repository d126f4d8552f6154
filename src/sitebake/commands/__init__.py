"""Subcommand modules for sitebake.

Provides register_commands() which uses deferred imports to keep
``sitebake --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register every inspection command on the root CLI group."""
    from sitebake.commands.inspect import doctypes, get, keys, options, paths

    cli.add_command(paths)
    cli.add_command(doctypes)
    cli.add_command(options)
    cli.add_command(get)
    cli.add_command(keys)
