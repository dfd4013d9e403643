"""Root CLI group for mailctl with global flags and command registration."""

from __future__ import annotations

import click

from mailctl import __version__
from mailctl.commands import register_commands
from mailctl.commands._base import Example, MailGroup
from mailctl.commands._context import AppContext
from mailctl.config.settings import MailSettings

_CLI_EXAMPLES: tuple[Example, ...] = (
    ("mailctl", 'same as "mailctl shell"'),
    ("mailctl -c ./demo.toml shell", "use a specific config file"),
    ('mailctl --json parse "read 7"', "machine-readable parse result"),
    ("MAILCTL_SHELL__ONBOARDING=false mailctl", "skip the signup questionnaire"),
)


@click.group(cls=MailGroup, invoke_without_command=True, examples=_CLI_EXAMPLES)
@click.version_option(version=__version__, prog_name="mailctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging and error detail.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """mailctl: in-memory mail store with a login shell.

    Runs the interactive shell when no command is given.
    """
    settings = MailSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        from mailctl.commands.shell import shell

        ctx.invoke(shell)


register_commands(cli)
