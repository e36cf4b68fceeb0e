"""Use cases orchestrating record finalization and notifier fan-out."""

from __future__ import annotations

from ._types import FanOutResult, FinalizeResult
from .fan_out import NotifierRegistration, build_diagnostic_emitter, build_fan_out, register_notifiers
from .finalize import create_finalize_record

__all__ = [
    "FanOutResult",
    "FinalizeResult",
    "NotifierRegistration",
    "build_diagnostic_emitter",
    "build_fan_out",
    "create_finalize_record",
    "register_notifiers",
]
