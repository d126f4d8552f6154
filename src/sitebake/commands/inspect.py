"""Commands: inspect the resolved configuration of a project."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from sitebake.commands._base import BakeCommand
from sitebake.services.inspect import InspectService

if TYPE_CHECKING:
    from sitebake.commands._context import AppContext


@click.command(
    cls=BakeCommand,
    examples=(
        "sitebake paths",
        "sitebake --source ./site paths",
        "sitebake --json paths",
    ),
)
@click.pass_obj
def paths(app: AppContext) -> None:
    """Show the resolved source, destination, asset, template and content folders."""
    app.emit(InspectService(app.config).paths())


@click.command(
    cls=BakeCommand,
    examples=(
        "sitebake doctypes",
        "sitebake doctypes post",
        "sitebake --json doctypes",
    ),
)
@click.argument("doc_type", required=False)
@click.pass_obj
def doctypes(app: AppContext, doc_type: str | None) -> None:
    """List document types, or resolve one type's template and extension."""
    svc = InspectService(app.config)
    if doc_type:
        app.emit(svc.document_type(doc_type))
    else:
        app.emit(svc.document_types())


@click.command(
    cls=BakeCommand,
    examples=(
        "sitebake options",
        "sitebake options safe",
        "sitebake --json options",
    ),
)
@click.argument("option_key", required=False)
@click.pass_obj
def options(app: AppContext, option_key: str | None) -> None:
    """List asciidoctor options, or show a single one."""
    svc = InspectService(app.config)
    if option_key:
        app.emit(svc.option(option_key))
    else:
        app.emit(svc.options())


@click.command(
    cls=BakeCommand,
    examples=(
        "sitebake get output.extension",
        "sitebake get template.post.file",
    ),
)
@click.argument("key")
@click.pass_obj
def get(app: AppContext, key: str) -> None:
    """Print the effective value of one configuration key."""
    app.emit(InspectService(app.config).get(key))


@click.command(
    cls=BakeCommand,
    examples=(
        "sitebake keys",
        "sitebake keys --prefix render",
        "sitebake --json keys --prefix template",
    ),
)
@click.option("--prefix", default=None, help="Only keys under this dotted prefix.")
@click.pass_obj
def keys(app: AppContext, prefix: str | None) -> None:
    """List every effective key with its value."""
    app.emit(InspectService(app.config).keys(prefix))
