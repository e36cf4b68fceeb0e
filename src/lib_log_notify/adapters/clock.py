"""System clock adapter."""

from __future__ import annotations

from datetime import datetime, timezone

from lib_log_notify.application.ports.time import ClockPort


class SystemClock(ClockPort):
    """Concrete clock returning timezone-aware UTC timestamps."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


__all__ = ["SystemClock"]
