"""Port for delivery clients used by channel notifiers."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class DeliveryClientPort(Protocol):
    """Send a rendered text message to a named channel.

    Authentication, connection handling and timeouts are the client's own
    business. Instances are shared across threads and must tolerate
    concurrent ``send`` calls.
    """

    def send(self, channel: str, text: str) -> None:
        """Deliver ``text`` to ``channel``; raise ``ClientError`` on failure."""


__all__ = ["DeliveryClientPort"]
