"""Command: parse one prompt line without running it."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from mailctl.commands._base import Example, MailCommand

if TYPE_CHECKING:
    from mailctl.commands._context import AppContext

_PARSE_EXAMPLES: tuple[Example, ...] = (
    ('mailctl parse "list"', "same as list unread"),
    ('mailctl parse "read 42"', ""),
    ('mailctl --json parse "help write"', ""),
    ('mailctl parse "logout now"', "trailing token error, exit 1"),
)


@click.command("parse", cls=MailCommand, examples=_PARSE_EXAMPLES)
@click.argument("line")
@click.pass_obj
def parse(app: AppContext, line: str) -> None:
    """Parse LINE as a shell command and show the result."""
    from mailctl.services.parse import ParseService

    app.emit(ParseService.parse(line))
