"""Port for the always-on primary output stream."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from lib_log_notify.domain.levels import LogLevel


@runtime_checkable
class OutputPort(Protocol):
    """Write one encoded record to the primary sink.

    Each call must be atomic with respect to concurrent callers: two encoded
    records are never interleaved. ``level`` lets styled consoles colour the
    line; plain streams ignore it.
    """

    def write(self, payload: str, *, level: LogLevel) -> None:
        """Persist ``payload``; raise ``OSError`` (or any exception) on failure."""


__all__ = ["OutputPort"]
