"""Command: the interactive mail shell.

Login loop, optional registration with the onboarding questionnaire,
then a ``>`` prompt that parses each line and runs it against the store.
End of input at any prompt leaves the shell with exit status 0.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

import click

from mailctl.commands._base import Example, MailCommand
from mailctl.domain.commands import (
    Command,
    CommandHelp,
    CommandParseError,
    Help,
    ListMails,
    ListUnread,
    Logout,
    ReadMail,
    ReplyToMail,
    WriteMail,
    parse_command,
)
from mailctl.output.renderers import (
    render_command_help,
    render_help,
    render_mail,
    render_mail_table,
    render_result,
)
from mailctl.services.account import AccountService
from mailctl.services.mail import MailService

if TYPE_CHECKING:
    from mailctl.commands._context import AppContext
    from mailctl.config.models import ShellConfig
    from mailctl.infrastructure.store import MailStore
    from mailctl.services.result import ServiceResult

logger = logging.getLogger(__name__)

_SHELL_EXAMPLES: tuple[Example, ...] = (
    ("mailctl", "the shell is the default command"),
    ("mailctl shell", ""),
    ("mailctl -v --log-json shell 2>shell.log", "debug logs as JSON lines"),
    (r"printf 'user1\n1234\nlist mails\nlogout\n' | mailctl shell", "scripted session"),
)


def _read_line(text: str, *, hide_input: bool = False, suffix: str = ": ") -> str:
    """Prompt for one raw line and return it as typed.

    An empty line is a valid answer. Passwords are read without echo.

    Raises:
        click.Abort: At end of input.
    """
    line: str = click.prompt(
        text,
        default="",
        show_default=False,
        hide_input=hide_input,
        prompt_suffix=suffix,
    )
    return line


def _ask_yes_or_no(question: str) -> bool:
    """Ask until the answer is y or n (either case)."""
    while True:
        answer = _read_line(f"{question} [y/n]", suffix=" ")
        if answer in ("y", "Y"):
            return True
        if answer in ("n", "N"):
            return False
        click.echo(f'"{answer}" is not a valid answer to "{question} [y/n]", try again')


class MailShell:
    """Line-oriented front end over the account and mail services."""

    def __init__(self, store: MailStore, config: ShellConfig) -> None:
        self._accounts = AccountService(store)
        self._mail = MailService(store)
        self._config = config
        self._handlers: dict[type, Callable[[int, Command], bool]] = {
            Logout: self._logout,
            ListMails: self._list_mails,
            ListUnread: self._list_unread,
            ReadMail: self._read,
            WriteMail: self._write,
            ReplyToMail: self._reply,
            Help: self._help,
            CommandHelp: self._command_help,
        }

    def run(self) -> None:
        """Alternate between logging in and running a session until input ends."""
        click.echo(self._config.banner)
        try:
            while True:
                session_id = self.login()
                self.run_session(session_id)
        except click.Abort:
            click.echo()

    # ------------------------------------------------------------------
    # Login and registration
    # ------------------------------------------------------------------

    def login(self) -> int:
        """Prompt for credentials until a login succeeds; return the session id."""
        while True:
            click.echo()
            username = _read_line("Username")
            password = _read_line("Password", hide_input=True)
            result = self._accounts.login(username, password)
            if result.ok:
                return int(result.data["session_id"])

            assert result.error is not None
            click.echo(result.error.message)
            if result.error.code == "USER_DOESNT_EXIST" and _ask_yes_or_no(
                "Would you like to create one?"
            ):
                self.register()

    def register(self) -> None:
        """Create an account, offering a retry when the username is taken."""
        while True:
            click.echo()
            click.echo("Creating new user")
            username = _read_line("Username")
            password = _read_line("Password", hide_input=True)
            if self._config.onboarding:
                for question in self._config.onboarding_questions:
                    _read_line(question)

            result = self._accounts.register(username, password)
            if result.ok:
                click.echo(f'Created user with username "{username}"')
                return

            assert result.error is not None
            click.echo(f"{result.error.message}.")
            if not _ask_yes_or_no("Would you like to try again?"):
                return

    # ------------------------------------------------------------------
    # Session loop
    # ------------------------------------------------------------------

    def run_session(self, session_id: int) -> None:
        """Run prompt commands for one session until it logs out."""
        keep_going = True
        while keep_going:
            click.echo()
            click.echo('Type "help" for a list of commands')
            line = _read_line(">", suffix=" ")
            try:
                command = parse_command(line)
            except CommandParseError as exc:
                click.echo(f"parser error: {exc.message}")
                continue
            keep_going = self._handlers[type(command)](session_id, command)

    def _failed(self, result: ServiceResult) -> bool:
        """Show a failed result. A lost session ends the session loop."""
        click.echo(render_result(result))
        return result.error is None or result.error.code != "SESSION_NOT_FOUND"

    def _logout(self, session_id: int, _command: Command) -> bool:
        result = self._accounts.logout(session_id)
        if not result.ok:
            self._failed(result)
        return False

    def _show_list(self, result: ServiceResult) -> bool:
        if not result.ok:
            return self._failed(result)
        infos = []
        for mail_id in result.data["mail_ids"]:
            info = self._mail.mail_info(mail_id)
            if info.ok:
                infos.append(info.data)
        click.echo(render_mail_table(infos))
        return True

    def _list_mails(self, session_id: int, _command: Command) -> bool:
        return self._show_list(self._mail.list_mails(session_id))

    def _list_unread(self, session_id: int, _command: Command) -> bool:
        return self._show_list(self._mail.list_unread_mails(session_id))

    def _read(self, _session_id: int, command: Command) -> bool:
        assert isinstance(command, ReadMail)
        info = self._mail.mail_info(command.mail_id)
        if not info.ok:
            click.echo("mail not found")
            return True
        content = self._mail.read_mail(command.mail_id)
        click.echo()
        click.echo(render_mail(info.data, content.data["body"]))
        return True

    def _write(self, session_id: int, _command: Command) -> bool:
        end = self._config.end_marker
        subject = _read_line("subject")
        recipient = _read_line("recipient")
        click.echo(f'Write mail content, when done type "{end}" on a blank line')
        lines: list[str] = []
        while True:
            line = _read_line("", suffix="")
            if line == end:
                break
            lines.append(line)

        result = self._mail.write_mail(session_id, recipient, subject, "\n".join(lines))
        if not result.ok:
            return self._failed(result)
        for warning in result.warnings:
            click.echo(f"WARNING: {warning}", err=True)
        return True

    def _reply(self, _session_id: int, _command: Command) -> bool:
        click.echo("not implemented, sorry")
        return True

    def _help(self, _session_id: int, _command: Command) -> bool:
        click.echo(render_help())
        return True

    def _command_help(self, _session_id: int, command: Command) -> bool:
        assert isinstance(command, CommandHelp)
        click.echo(render_command_help(command.name))
        return True


@click.command("shell", cls=MailCommand, examples=_SHELL_EXAMPLES)
@click.pass_obj
def shell(app: AppContext) -> None:
    """Log in and read, write and list mail interactively."""
    logger.debug("Starting shell")
    try:
        MailShell(app.store, app.settings.shell).run()
    finally:
        app.close()
