"""BakeCommand: a click command that carries its own usage examples.

Examples stay out of ``--help``, which only points at them; passing
``--examples`` prints them as shell lines and exits.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import click

EXAMPLES_HINT = "Run with --examples to see usage examples."


class BakeCommand(click.Command):
    """Click Command with an eager ``--examples`` flag.

    Args:
        examples: Command lines shown by ``--examples``, one invocation each.
    """

    def __init__(self, *args: Any, examples: Sequence[str] = (), **kwargs: Any) -> None:
        self.examples = tuple(examples)
        if self.examples and not kwargs.get("epilog"):
            kwargs["epilog"] = EXAMPLES_HINT
        super().__init__(*args, **kwargs)
        if self.examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._show_examples,
                    help="Show usage examples.",
                )
            )

    def _show_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        for line in self.examples:
            click.echo(f"  $ {line}")
        ctx.exit(0)
