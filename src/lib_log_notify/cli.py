"""Click command line interface for :mod:`lib_log_notify`.

Contents
--------
* :func:`cli` - command group with ``--traceback`` and ``--use-dotenv`` switches.
* ``info`` / ``emit`` / ``demo`` / ``paginate`` subcommands.
* :func:`main` - entry point executed through ``lib_cli_exit_tools.run_cli``.
"""

from __future__ import annotations

import os
from collections.abc import Sequence

import click
import lib_cli_exit_tools

from . import __init__conf__
from . import config as config_module
from .adapters.notifiers.channel import ChannelNotifier
from .adapters.output import RichConsoleOutput, StreamOutput
from .domain.encoding import OutputEncoding
from .domain.levels import LogLevel
from .errors import ConfigurationError
from .logger import NotifyLogger
from .pagination import Pagination, normalize

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_LEVEL_CHOICE = click.Choice([level.name.lower() for level in LogLevel] + ["warn", "fatal"], case_sensitive=False)


def summary_info() -> str:
    """Return the metadata banner printed by ``info``."""

    lines: list[str] = []
    __init__conf__.print_info(writer=lines.append)
    return "".join(lines)


@click.group(help=__init__conf__.title, context_settings=CLICK_CONTEXT_SETTINGS, invoke_without_command=True)
@click.version_option(version=__init__conf__.version, prog_name=__init__conf__.shell_command)
@click.option(
    "--traceback/--no-traceback",
    default=False,
    help="Show full Python tracebacks on errors.",
)
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=False,
    help=f"Load environment variables from the nearest .env (overrides {config_module.DOTENV_ENV_VAR}).",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool, use_dotenv: bool) -> None:
    """Root command storing global flags."""

    explicit: bool | None = None
    if ctx.get_parameter_source("use_dotenv") is not click.core.ParameterSource.DEFAULT:
        explicit = use_dotenv
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback
    if config_module.should_use_dotenv(explicit=explicit, env_value=os.getenv(config_module.DOTENV_ENV_VAR)):
        config_module.enable_dotenv()
    if ctx.invoked_subcommand is None:
        click.echo(summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print package metadata."""

    click.echo(summary_info(), nl=False)


def _parse_fields(raw_fields: Sequence[str]) -> dict[str, str]:
    fields: dict[str, str] = {}
    for item in raw_fields:
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            raise click.BadParameter(f"expected KEY=VALUE, got {item!r}", param_hint="--field")
        fields[key.strip()] = value
    return fields


@cli.command("emit", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("level", type=_LEVEL_CHOICE)
@click.argument("message")
@click.option("--field", "-f", "raw_fields", multiple=True, metavar="KEY=VALUE", help="Attach a field (repeatable).")
@click.option("--service", default=None, help="Service name (overrides LOG_SERVICE).")
@click.option(
    "--encoding",
    type=click.Choice([encoding.value for encoding in OutputEncoding], case_sensitive=False),
    default=None,
    help="Primary output encoding (overrides LOG_ENCODING).",
)
def cli_emit(level: str, message: str, raw_fields: tuple[str, ...], service: str | None, encoding: str | None) -> None:
    """Emit one record; Slack receives it when SLACK_* variables are configured."""

    fields = _parse_fields(raw_fields)
    try:
        settings = config_module.load_settings(service=service, encoding=encoding)
        logger = config_module.build_logger(settings, output=StreamOutput())
    except ConfigurationError as exc:
        raise click.ClickException(str(exc)) from exc
    with logger:
        result = logger.new_record(LogLevel.from_name(level)).fields(fields).finalize(message)
        logger.wait_until_idle(timeout=10)
    for error in result["errors"]:
        click.echo(f"notification failed: {error}", err=True)
    if not result["ok"]:
        click.get_current_context().exit(1)


class _EchoClient:
    """Delivery client printing messages instead of calling a chat service."""

    def send(self, channel: str, text: str) -> None:
        click.echo(click.style(f"--> {channel}", bold=True))
        for line in text.splitlines():
            click.echo(f"    {line}")


@cli.command("demo", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--threshold", type=_LEVEL_CHOICE, default="warning", show_default=True, help="Notifier threshold.")
@click.option("--channel", default="#alerts", show_default=True, help="Channel label shown for notifications.")
@click.option("--service", default="demo", show_default=True)
def cli_demo(threshold: str, channel: str, service: str) -> None:
    """Emit one record per level and show which ones reach the channel."""

    try:
        notifier = ChannelNotifier(LogLevel.from_name(threshold), channel, _EchoClient(), name="echo")
        logger = NotifyLogger(service, OutputEncoding.TEXT, [notifier], output=RichConsoleOutput())
    except ConfigurationError as exc:
        raise click.ClickException(str(exc)) from exc
    notified = 0
    for level in LogLevel:
        result = logger.new_record(level).field("demo", True).field("level_value", level.value).finalize(f"{level.severity} message")
        notified += len(result["notified"])
    click.echo(f"emitted {len(LogLevel)} records, {notified} notified")


@cli.command("paginate", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("page", type=int)
@click.argument("page_size", type=int)
@click.option("--total", type=int, default=None, help="Total item count used to compute total pages.")
def cli_paginate(page: int, page_size: int, total: int | None) -> None:
    """Print the normalised page window (page, page_size, offset)."""

    page, page_size, offset = normalize(page, page_size)
    click.echo(f"page={page} page_size={page_size} offset={offset}")
    if total is not None:
        click.echo(f"total_pages={Pagination.build(page, page_size, total).total_pages}")


def main(argv: Sequence[str] | None = None, *, restore_traceback: bool = True) -> int:
    """Run the CLI and return its exit code.

    Traceback preferences set by ``--traceback`` are restored afterwards so
    embedding applications keep their own configuration.
    """

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        return lib_cli_exit_tools.run_cli(
            cli,
            argv=list(argv) if argv is not None else None,
            prog_name=__init__conf__.shell_command,
        )
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


__all__ = ["cli", "main", "summary_info"]
