"""Click base classes for mailctl commands.

``MailCommand`` and ``MailGroup`` take an ``examples`` sequence of
``(invocation, note)`` pairs. ``--examples`` prints them as an aligned
list and exits; ``--help`` ends with a pointer to ``--examples``.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import click

Example = tuple[str, str]

_EXAMPLES_HINT = "Run with --examples to see sample invocations."


def format_examples(examples: Sequence[Example]) -> str:
    """Lay out examples one per line, notes aligned after a ``#``.

    Examples:
        >>> print(format_examples([("mailctl", "start the shell"), ("mailctl -v", "")]))
          mailctl     # start the shell
          mailctl -v
    """
    width = max((len(invocation) for invocation, _ in examples), default=0)
    lines = []
    for invocation, note in examples:
        if note:
            lines.append(f"  {invocation.ljust(width)}  # {note}")
        else:
            lines.append(f"  {invocation}")
    return "\n".join(lines)


def _add_examples_option(cmd: click.Command, examples: Sequence[Example]) -> None:
    """Attach an eager ``--examples`` flag to a Click command or group."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(format_examples(examples))
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )
    cmd.epilog = f"{cmd.epilog}\n\n{_EXAMPLES_HINT}" if cmd.epilog else _EXAMPLES_HINT


class MailCommand(click.Command):
    """Click Command subclass that supports an ``--examples`` flag."""

    def __init__(
        self, *args: Any, examples: Sequence[Example] | None = None, **kwargs: Any
    ) -> None:
        super().__init__(*args, **kwargs)
        self.examples = tuple(examples or ())
        if self.examples:
            _add_examples_option(self, self.examples)


class MailGroup(click.Group):
    """Click Group subclass that supports an ``--examples`` flag.

    Subcommands declared through the group get ``MailCommand``.
    """

    command_class = MailCommand

    def __init__(
        self, *args: Any, examples: Sequence[Example] | None = None, **kwargs: Any
    ) -> None:
        super().__init__(*args, **kwargs)
        self.examples = tuple(examples or ())
        if self.examples:
            _add_examples_option(self, self.examples)
