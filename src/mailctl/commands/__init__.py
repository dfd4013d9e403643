"""Subcommand modules for mailctl.

Provides register_commands() which uses deferred imports to keep
``mailctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the standalone commands on the root CLI group."""
    from mailctl.commands.parse import parse
    from mailctl.commands.shell import shell

    cli.add_command(shell)
    cli.add_command(parse)
