"""Command interpreter for the mail prompt.

Turns one line of text into a command variant, or raises
:class:`CommandParseError`. Parsing is a pure function: no I/O, no state.

Grammar::

    command   := "logout"
               | "list" ("mails" | "unread")?
               | "read" <mail-id>
               | "write"
               | "reply" <mail-id>
               | "help" ("logout"|"list"|"read"|"write"|"reply"|"help")?

Tokens are separated by a single space. Runs of spaces are not collapsed,
so ``"read  5"`` carries an empty token where the id should be.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

from mailctl.domain.ids import parse_mail_id

COMMAND_NAMES: tuple[str, ...] = ("logout", "list", "read", "write", "reply", "help")

SEPARATOR = " "


class ParseErrorKind(StrEnum):
    """Category of a parse failure."""

    EMPTY_INPUT = "empty_input"
    UNRECOGNIZED_COMMAND = "unrecognized_command"
    INVALID_MAIL_ID = "invalid_mail_id"
    TRAILING_TOKEN = "trailing_token"
    MISSING_ARGUMENT = "missing_argument"


class CommandParseError(ValueError):
    """A line that does not match the command grammar.

    Attributes:
        kind: Which rule the line broke.
        message: Human-readable reason, suitable for re-prompting.
        token: The offending token, when there is one.
    """

    def __init__(self, kind: ParseErrorKind, message: str, *, token: str | None = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.token = token


# --- Command variants ---


@dataclass(frozen=True)
class Logout:
    """End the current session."""


@dataclass(frozen=True)
class ListMails:
    """List every mail addressed to the session's account."""


@dataclass(frozen=True)
class ListUnread:
    """List unread mail addressed to the session's account."""


@dataclass(frozen=True)
class ReadMail:
    mail_id: int


@dataclass(frozen=True)
class WriteMail:
    """Start composing a new mail."""


@dataclass(frozen=True)
class ReplyToMail:
    mail_id: int


@dataclass(frozen=True)
class Help:
    """General help."""


@dataclass(frozen=True)
class CommandHelp:
    name: str


Command = (
    Logout | ListMails | ListUnread | ReadMail | WriteMail | ReplyToMail | Help | CommandHelp
)


# --- Tokenizer ---


def tokenize(line: str) -> list[str]:
    """Split *line* on single spaces.

    Empty tokens between consecutive spaces are kept. One trailing space
    only terminates the last token. An empty line has no tokens.

    Examples:
        >>> tokenize("list mails")
        ['list', 'mails']
        >>> tokenize("read  5")
        ['read', '', '5']
        >>> tokenize("logout ")
        ['logout']
    """
    if line == "":
        return []
    tokens = line.split(SEPARATOR)
    if len(tokens) > 1 and tokens[-1] == "":
        tokens.pop()
    return tokens


class _Tokens:
    """Cursor over the tokens of one line."""

    def __init__(self, tokens: list[str]) -> None:
        self._tokens = tokens
        self._pos = 0

    def next(self) -> str | None:
        if self._pos >= len(self._tokens):
            return None
        token = self._tokens[self._pos]
        self._pos += 1
        return token


# --- Grammar ---


def _end(command: Command, tokens: _Tokens) -> Command:
    """Accept *command* only if no tokens remain."""
    extra = tokens.next()
    if extra is not None:
        raise CommandParseError(
            ParseErrorKind.TRAILING_TOKEN,
            f'expected nothing, got "{extra}"',
            token=extra,
        )
    return command


def _mail_id(tokens: _Tokens) -> int:
    value = tokens.next()
    if value is None:
        raise CommandParseError(ParseErrorKind.MISSING_ARGUMENT, "expected mail id, got nothing")
    try:
        return parse_mail_id(value)
    except ValueError as exc:
        raise CommandParseError(
            ParseErrorKind.INVALID_MAIL_ID,
            f'invalid mail id "{value}": {exc}',
            token=value,
        ) from exc


def _parse_logout(tokens: _Tokens) -> Command:
    return _end(Logout(), tokens)


def _parse_list(tokens: _Tokens) -> Command:
    which = tokens.next()
    if which is None:
        return ListUnread()
    if which == "mails":
        return _end(ListMails(), tokens)
    if which == "unread":
        return _end(ListUnread(), tokens)
    raise CommandParseError(
        ParseErrorKind.TRAILING_TOKEN,
        f'expected "mails", "unread" or nothing, got "{which}"',
        token=which,
    )


def _parse_read(tokens: _Tokens) -> Command:
    return _end(ReadMail(_mail_id(tokens)), tokens)


def _parse_write(tokens: _Tokens) -> Command:
    return _end(WriteMail(), tokens)


def _parse_reply(tokens: _Tokens) -> Command:
    return _end(ReplyToMail(_mail_id(tokens)), tokens)


def _parse_help(tokens: _Tokens) -> Command:
    name = tokens.next()
    if name is None:
        return Help()
    if name in COMMAND_NAMES:
        return _end(CommandHelp(name), tokens)
    raise CommandParseError(
        ParseErrorKind.UNRECOGNIZED_COMMAND,
        f'expected a command, got "{name}"',
        token=name,
    )


_PARSERS: dict[str, Callable[[_Tokens], Command]] = {
    "logout": _parse_logout,
    "list": _parse_list,
    "read": _parse_read,
    "write": _parse_write,
    "reply": _parse_reply,
    "help": _parse_help,
}


def parse_command(line: str) -> Command:
    """Parse one newline-stripped input line.

    Raises:
        CommandParseError: If the line does not match the grammar.
    """
    tokens = _Tokens(tokenize(line))
    head = tokens.next()
    if head is None:
        raise CommandParseError(ParseErrorKind.EMPTY_INPUT, "expected command, got nothing")

    parser = _PARSERS.get(head)
    if parser is None:
        raise CommandParseError(
            ParseErrorKind.UNRECOGNIZED_COMMAND,
            f'unrecognized command: "{head}"',
            token=head,
        )
    return parser(tokens)
