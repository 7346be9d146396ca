"""Subcommand modules for zonepulse.

Provides register_commands() which uses deferred imports to keep
``zonepulse --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group.

    4 groups (have subcommands) + 1 standalone command.
    """
    # --- Groups ---
    from zonepulse.commands.db import db
    from zonepulse.commands.export import export
    from zonepulse.commands.layers import layers
    from zonepulse.commands.zone import zone

    cli.add_command(layers)
    cli.add_command(zone)
    cli.add_command(export)
    cli.add_command(db)

    # --- Standalone commands ---
    from zonepulse.commands.serve import serve

    cli.add_command(serve)
