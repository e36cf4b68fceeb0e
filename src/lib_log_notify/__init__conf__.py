"""Package metadata used by the CLI banner."""

from __future__ import annotations

from collections.abc import Callable
from importlib import metadata

name = "lib_log_notify"
title = "Structured logging with severity-gated chat notifications"
shell_command = "lib_log_notify"


def _resolve_version() -> str:
    try:
        return metadata.version(name)
    except metadata.PackageNotFoundError:
        return "0.0.0+local"


version = _resolve_version()


def print_info(writer: Callable[[str], None] | None = None) -> None:
    """Emit the metadata banner through ``writer`` (defaults to stdout)."""

    emit = writer or (lambda text: print(text, end=""))
    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    emit(f"Info for {name}:\n\n")
    for label, value in fields:
        emit(f"    {label:<{pad}} = {value}\n")
