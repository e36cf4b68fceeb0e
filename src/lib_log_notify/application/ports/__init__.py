"""Protocols describing the collaborators of the logger core."""

from __future__ import annotations

from .delivery import DeliveryClientPort
from .notifier import NotifierPort
from .output import OutputPort
from .time import ClockPort

__all__ = ["ClockPort", "DeliveryClientPort", "NotifierPort", "OutputPort"]
