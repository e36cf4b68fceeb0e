"""CLI behaviour coverage for the click command group."""

from __future__ import annotations

import json

import lib_cli_exit_tools
import pytest
from click.testing import CliRunner

from lib_log_notify import __init__conf__
from lib_log_notify import cli as cli_mod
from lib_log_notify import config as log_config


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("LOG_SERVICE", "LOG_ENCODING", "LOG_DISPATCH", "SLACK_TOKEN", "SLACK_CHANNEL", "SLACK_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv(log_config.DOTENV_ENV_VAR, raising=False)


def run_cli(args: list[str] | None = None, env: dict[str, str] | None = None):
    runner = CliRunner()
    return runner.invoke(cli_mod.cli, args or [], prog_name=__init__conf__.shell_command, env=env)


def test_cli_without_subcommand_prints_summary() -> None:
    result = run_cli()

    assert result.exit_code == 0
    assert result.output == cli_mod.summary_info()
    assert result.output.startswith(f"Info for {__init__conf__.name}:")


def test_cli_info_command_matches_summary() -> None:
    result = run_cli(["info"])

    assert result.exit_code == 0
    assert result.output == cli_mod.summary_info()


def test_cli_version_option() -> None:
    result = run_cli(["--version"])

    assert result.exit_code == 0
    assert __init__conf__.version in result.output


def test_emit_writes_json_line_to_stdout() -> None:
    result = run_cli(["emit", "warn", "disk almost full", "-f", "pct=93", "--field", "mount=/var"], env={"LOG_SERVICE": "ops"})

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output.strip().splitlines()[-1])
    assert payload["service"] == "ops"
    assert payload["level"] == "warning"
    assert payload["message"] == "disk almost full"
    assert (payload["pct"], payload["mount"]) == ("93", "/var")


def test_emit_service_option_and_text_encoding() -> None:
    result = run_cli(["emit", "info", "hello", "--service", "cli-svc", "--encoding", "text"])

    assert result.exit_code == 0, result.output
    assert " INFO     cli-svc: hello" in result.output


def test_emit_without_service_reports_configuration_error() -> None:
    result = run_cli(["emit", "info", "hello"])

    assert result.exit_code != 0
    assert "LOG_SERVICE" in result.output


def test_emit_rejects_malformed_field() -> None:
    result = run_cli(["emit", "info", "hello", "-f", "novalue"], env={"LOG_SERVICE": "svc"})

    assert result.exit_code == 2
    assert "KEY=VALUE" in result.output


def test_demo_notifies_records_at_or_above_threshold() -> None:
    result = run_cli(["demo", "--threshold", "error", "--channel", "#pager"])

    assert result.exit_code == 0, result.output
    assert result.output.count("--> #pager") == 2
    assert "emitted 5 records, 2 notified" in result.output


def test_demo_rejects_invalid_channel() -> None:
    result = run_cli(["demo", "--channel", "has space"])

    assert result.exit_code != 0
    assert "channel" in result.output


def test_paginate_prints_window_and_totals() -> None:
    result = run_cli(["paginate", "3", "1000", "--total", "250"])

    assert result.exit_code == 0
    assert result.output.splitlines() == ["page=3 page_size=100 offset=200", "total_pages=3"]


def test_paginate_normalises_non_positive_values() -> None:
    result = run_cli(["paginate", "--", "-1", "0"])

    assert result.exit_code == 0
    assert result.output.strip() == "page=1 page_size=100 offset=0"


def test_main_delegates_to_run_cli_and_restores_traceback(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: dict[str, object] = {}

    def fake_run_cli(command, argv=None, prog_name=None, **_: object) -> int:
        seen.update(command=command, argv=argv, prog_name=prog_name)
        lib_cli_exit_tools.config.traceback = True
        return 7

    monkeypatch.setattr(lib_cli_exit_tools, "run_cli", fake_run_cli)
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback", False, raising=False)
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback_force_color", False, raising=False)

    assert cli_mod.main(["info"]) == 7
    assert seen == {"command": cli_mod.cli, "argv": ["info"], "prog_name": __init__conf__.shell_command}
    assert lib_cli_exit_tools.config.traceback is False


def test_traceback_flag_sets_exit_tools_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback", False, raising=False)
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback_force_color", False, raising=False)

    result = run_cli(["--traceback", "info"])

    assert result.exit_code == 0
    assert lib_cli_exit_tools.config.traceback is True
    assert lib_cli_exit_tools.config.traceback_force_color is True
