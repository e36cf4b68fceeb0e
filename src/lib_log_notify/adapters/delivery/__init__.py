"""Delivery clients implementing :class:`DeliveryClientPort`."""

from __future__ import annotations

from .slack import SlackClient

__all__ = ["SlackClient"]
