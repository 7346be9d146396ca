"""Click base classes and shared parameter helpers.

``PulseCommand`` and ``PulseGroup`` take an ``examples=`` string. It is shown
by an eager ``--examples`` flag instead of in ``--help``, which stays short.
The ``complete_*`` callbacks feed shell completion for layer ids and
region names straight from the catalog and zone tables.
"""

from __future__ import annotations

from typing import Any

import click
from click.shell_completion import CompletionItem


def _attach_examples(cmd: click.Command, examples: str) -> None:
    def show(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if value:
            click.echo(f"Examples for '{ctx.command_path}':\n")
            click.echo(examples)
            ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show,
            help="Show usage examples.",
        )
    )


class PulseCommand(click.Command):
    """Command accepting ``examples=``."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _attach_examples(self, examples)


class PulseGroup(click.Group):
    """Group accepting ``examples=``; its subcommands are PulseCommands."""

    command_class = PulseCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _attach_examples(self, examples)


def complete_layer_id(
    _ctx: click.Context, _param: click.Parameter, incomplete: str
) -> list[CompletionItem]:
    from zonepulse.domain.catalog import iter_layers

    return [
        CompletionItem(layer.id, help=layer.label)
        for layer in iter_layers()
        if layer.id.startswith(incomplete)
    ]


def complete_region(
    _ctx: click.Context, _param: click.Parameter, incomplete: str
) -> list[CompletionItem]:
    from zonepulse.domain.zones import region_names

    prefix = incomplete.lower()
    return [CompletionItem(name) for name in region_names() if name.startswith(prefix)]
