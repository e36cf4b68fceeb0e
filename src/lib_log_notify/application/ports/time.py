"""Port providing timestamps for record finalization."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, runtime_checkable


@runtime_checkable
class ClockPort(Protocol):
    """Provide the current timezone-aware timestamp."""

    def now(self) -> datetime: ...


__all__ = ["ClockPort"]
