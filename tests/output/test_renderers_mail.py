"""Tests for the Rich renderers and the format_result dispatcher."""

from __future__ import annotations

import json

import pytest

from mailctl.output.formatters import format_result
from mailctl.output.renderers import (
    COMMAND_HELP,
    render_command_help,
    render_help,
    render_mail,
    render_mail_table,
    render_result,
)
from mailctl.services.result import ServiceError, ServiceResult


def _ok(op: str = "test", **data: object) -> ServiceResult:
    return ServiceResult(ok=True, op=op, data=dict(data))


def _err(op: str = "test", msg: str = "fail", **detail: object) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code="ERR", message=msg, detail=dict(detail)),
    )


class TestRenderResult:
    def test_success_fields(self) -> None:
        output = render_result(_ok("login", session_id=3, username="user1"))
        assert output.splitlines()[0] == "OK  login"
        assert "  session_id: 3" in output
        assert "  username: user1" in output

    def test_error_line(self) -> None:
        output = render_result(_err("read_mail", "mail not found"))
        assert output == "ERROR  read_mail - mail not found"

    def test_error_detail_only_when_verbose(self) -> None:
        result = _err("read_mail", "mail not found", mail_id=9)
        assert "mail_id" not in render_result(result)
        verbose = render_result(result, verbose=True)
        assert "detail:" in verbose
        assert "mail_id: 9" in verbose

    def test_markup_in_message_is_literal(self) -> None:
        output = render_result(_err("login", 'No user with username "[bold]x" exists'))
        assert "[bold]x" in output


class TestRenderMail:
    def test_table_lists_every_mail(self) -> None:
        output = render_mail_table(
            [
                {"id": 1, "sender": "user1", "subject": "Lunch"},
                {"id": 2, "sender": "user2", "subject": "[draft] notes"},
            ]
        )
        for text in ("id", "sender", "subject", "Lunch", "[draft] notes", "user2"):
            assert text in output

    def test_empty_table_has_header(self) -> None:
        assert "subject" in render_mail_table([])

    def test_single_mail_layout(self) -> None:
        output = render_mail({"id": 4, "sender": "user1", "subject": "Hi"}, "line 1\nline 2")
        assert output.splitlines() == [
            "mail id: 4",
            "sender: user1",
            "subject: Hi",
            "",
            "line 1",
            "line 2",
        ]


class TestRenderHelp:
    def test_general_help(self) -> None:
        output = render_help()
        assert output.startswith("These are all available commands")
        for usage in ("logout", "list (mails|unread)", "read <mail id>", "reply <mail id>"):
            assert usage in output

    @pytest.mark.parametrize("name", sorted(COMMAND_HELP))
    def test_command_help(self, name: str) -> None:
        assert name in render_command_help(name)

    def test_list_help_mentions_default(self) -> None:
        assert "same as list unread" in render_command_help("list")

    def test_unknown_command(self) -> None:
        with pytest.raises(KeyError):
            render_command_help("frobnicate")


class TestFormatResult:
    def test_json_mode(self) -> None:
        data = json.loads(format_result(_ok("parse", command="Help"), json_output=True))
        assert data["ok"] is True
        assert data["op"] == "parse"
        assert data["data"]["command"] == "Help"

    def test_json_error(self) -> None:
        data = json.loads(format_result(_err("parse", "Bad"), json_output=True))
        assert data["ok"] is False
        assert data["error"]["message"] == "Bad"

    def test_human_mode(self) -> None:
        assert format_result(_ok("parse", command="Help")).startswith("OK  parse")


class TestMailBody:
    def test_long_lines_are_not_wrapped(self) -> None:
        body = "x" * 150 + " end"
        output = render_mail({"id": 1, "sender": "user1", "subject": "s"}, body)
        assert output.splitlines()[-1] == body

    def test_tabs_and_markup_kept(self) -> None:
        body = "col1\tcol2\n[bold]not markup[/bold]"
        output = render_mail({"id": 1, "sender": "user1", "subject": "s"}, body)
        assert output.endswith("\n\n" + body)
