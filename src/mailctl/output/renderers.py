"""Rich renderers for ServiceResult, mail listings and help text.

Each renderer writes to a Rich Console (backed by StringIO) and returns
the rendered text. Nothing here touches the store: the shell fetches
the data and hands it over.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from mailctl.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from mailctl.services.result import ServiceResult


GENERAL_HELP: tuple[tuple[str, str], ...] = (
    ("logout", "logs user out of current session"),
    ("list (mails|unread)", "list all or unread mails"),
    ("read <mail id>", "read mail"),
    ("write", "write mail"),
    ("reply <mail id>", "reply to mail"),
    ("help <command>?", "prints this message or a command specific message"),
)

COMMAND_HELP: dict[str, tuple[tuple[str, str], ...]] = {
    "logout": (("logout", "logs user out of the current session"),),
    "list": (
        ("list", "same as list unread"),
        ("list mails", "list all mails"),
        ("list unread", "list all unread mails"),
    ),
    "read": (("read <mail id>", 'read mail, get mail id using "list"'),),
    "write": (("write", "start writing a new mail"),),
    "reply": (("reply <mail id>", 'reply to mail, get mail id using "list"'),),
    "help": (
        ("help", "prints this message"),
        ("help <command>", "prints a specific message for a command"),
    ),
}


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult as a status line plus indented fields.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        _status_line(console, result)
        for key, value in result.data.items():
            _field(console, key, value)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_mail_table(infos: list[dict[str, Any]]) -> str:
    """Render mail metadata (``id``, ``sender``, ``subject``) as a table."""
    console = create_console()
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("id", style="mail.id", no_wrap=True, justify="right")
    table.add_column("sender", style="mail.sender")
    table.add_column("subject", style="mail.subject")
    for info in infos:
        table.add_row(
            str(info.get("id", "")),
            Text(str(info.get("sender", ""))),
            Text(str(info.get("subject", ""))),
        )
    console.print(table)
    return get_output(console).rstrip("\n")


def render_mail(info: dict[str, Any], body: str) -> str:
    """Render one opened mail: header fields, a blank line, then the body.

    The body is appended as stored, without wrapping or tab expansion.
    """
    console = create_console()
    _field(console, "mail id", info.get("id", ""), indent="")
    _field(console, "sender", info.get("sender", ""), indent="")
    _field(console, "subject", info.get("subject", ""), indent="")
    header = get_output(console).rstrip("\n")
    return f"{header}\n\n{body}"


def render_help() -> str:
    """Render the list of all commands."""
    console = create_console()
    console.print("These are all available commands")
    console.print()
    _help_table(console, GENERAL_HELP)
    return get_output(console).rstrip("\n")


def render_command_help(name: str) -> str:
    """Render help for one command.

    Raises:
        KeyError: If *name* is not a command.
    """
    console = create_console()
    _help_table(console, COMMAND_HELP[name])
    return get_output(console).rstrip("\n")


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    console.print(Text.assemble(("OK", "mail.ok"), (f"  {result.op}", "mail.op")))


def _field(console: Console, key: str, value: Any, *, indent: str = "  ") -> None:
    """Print a single key-value field."""
    if key == "id" or key.endswith("_id") or key == "mail id":
        style = "mail.id"
    elif key == "sender":
        style = "mail.sender"
    elif key == "subject":
        style = "mail.subject"
    else:
        style = ""
    console.print(Text.assemble((f"{indent}{key}: ", "mail.key"), (str(value), style)))


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text.assemble(("ERROR", "mail.error"), (f"  {result.op}", "mail.op"), f" - {msg}")
    )

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


def _help_table(console: Console, rows: tuple[tuple[str, str], ...]) -> None:
    table = Table(show_header=False, box=None, pad_edge=False, padding=(0, 2, 0, 2))
    table.add_column("usage", style="mail.command", no_wrap=True)
    table.add_column("description")
    for usage, description in rows:
        table.add_row(usage, f"- {description}")
    console.print(table)
