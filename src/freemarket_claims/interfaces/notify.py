"""NotificationSink protocol - fire-and-forget user notifications."""

from __future__ import annotations

from typing import Protocol

from freemarket_claims.models.records import Notification


class NotificationSink(Protocol):
    """Presentation-layer toast surface."""

    def notify(self, notification: Notification) -> None:
        ...
