"""ParseService: the command interpreter exposed as a service operation.

Wraps :func:`mailctl.domain.commands.parse_command` so one-shot callers
get a ServiceResult like every other operation. The interactive shell
calls the interpreter directly.
"""

from __future__ import annotations

import dataclasses

from mailctl.domain.commands import CommandParseError, parse_command
from mailctl.services.result import ServiceError, ServiceResult


class ParseService:
    """Stateless: needs no store."""

    @staticmethod
    def parse(line: str) -> ServiceResult:
        """Parse *line*; ``data["command"]`` names the variant."""
        op = "parse"
        try:
            command = parse_command(line)
        except CommandParseError as exc:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code="PARSE_ERROR",
                    message=exc.message,
                    detail={"kind": exc.kind.value, "token": exc.token},
                ),
            )

        return ServiceResult(
            ok=True,
            op=op,
            data={"command": type(command).__name__, **dataclasses.asdict(command)},
        )
