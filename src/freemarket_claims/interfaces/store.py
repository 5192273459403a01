"""NotificationStore protocol - push-token persistence for the webhook relay."""

from __future__ import annotations

from typing import Protocol

from freemarket_claims.models.records import NotificationDetails


class NotificationStore(Protocol):
    """Maps a Farcaster fid to its notification endpoint."""

    async def set_notification_details(self, fid: int, details: NotificationDetails) -> None:
        ...

    async def get_notification_details(self, fid: int) -> NotificationDetails | None:
        ...

    async def delete_notification_details(self, fid: int) -> None:
        ...
