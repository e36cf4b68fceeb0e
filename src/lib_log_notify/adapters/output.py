"""Primary output adapters implementing :class:`OutputPort`.

Purpose
-------
Provide the always-on sinks the logger core writes every record to.

Contents
--------
* :class:`StreamOutput` – newline-delimited writes to any text stream,
  serialised by a lock.
* :class:`RichConsoleOutput` – Rich-powered console with per-level styles.
* :class:`MemoryOutput` – in-process capture used by demos and tests.
"""

from __future__ import annotations

import sys
import threading
from typing import Mapping, MutableMapping, TextIO

from rich.console import Console

from lib_log_notify.application.ports.output import OutputPort
from lib_log_notify.domain.levels import LogLevel


class StreamOutput(OutputPort):
    """Write encoded records to a text stream, one line per record.

    ``stream`` defaults to the ``sys.stdout`` active at write time so test
    harnesses that swap the stream keep capturing output.

    Examples
    --------
    >>> from io import StringIO
    >>> buffer = StringIO()
    >>> StreamOutput(buffer).write('{"message": "hi"}', level=LogLevel.INFO)
    >>> buffer.getvalue()
    '{"message": "hi"}\\n'
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self._lock = threading.Lock()

    def write(self, payload: str, *, level: LogLevel) -> None:
        stream = self._stream if self._stream is not None else sys.stdout
        with self._lock:
            stream.write(payload + "\n")
            stream.flush()


_STYLE_MAP: Mapping[LogLevel, str] = {
    LogLevel.DEBUG: "dim",
    LogLevel.INFO: "cyan",
    LogLevel.WARNING: "yellow",
    LogLevel.ERROR: "red",
    LogLevel.CRITICAL: "bold red",
}

#: Default Rich styles keyed by :class:`LogLevel` severity.


class RichConsoleOutput(OutputPort):
    """Render encoded records with Rich, styled by level."""

    def __init__(
        self,
        *,
        console: Console | None = None,
        force_color: bool = False,
        no_color: bool = False,
        styles: MutableMapping[LogLevel | str, str] | None = None,
    ) -> None:
        """Configure the console adapter with colour and style overrides."""
        if console is not None:
            self._console = console
        else:
            self._console = Console(force_terminal=force_color, no_color=no_color, soft_wrap=True)
        self._no_color = no_color
        merged = dict(_STYLE_MAP)
        for key, value in (styles or {}).items():
            level = LogLevel.from_name(key) if isinstance(key, str) else key
            merged[level] = value
        self._style_map = merged

    def write(self, payload: str, *, level: LogLevel) -> None:
        """Print ``payload`` without markup interpretation.

        Examples
        --------
        >>> from io import StringIO
        >>> console = Console(file=StringIO(), record=True)
        >>> RichConsoleOutput(console=console).write('[svc] msg', level=LogLevel.ERROR)
        >>> '[svc] msg' in console.export_text()
        True
        """
        style = "" if self._no_color else self._style_map.get(level, "")
        self._console.print(payload, style=style, markup=False, highlight=False)


class MemoryOutput(OutputPort):
    """Collect encoded records in memory."""

    def __init__(self) -> None:
        self._lines: list[str] = []
        self._lock = threading.Lock()

    def write(self, payload: str, *, level: LogLevel) -> None:
        with self._lock:
            self._lines.append(payload)

    @property
    def lines(self) -> list[str]:
        """Return a copy of the captured payloads in write order."""

        with self._lock:
            return list(self._lines)


__all__ = ["MemoryOutput", "RichConsoleOutput", "StreamOutput"]
