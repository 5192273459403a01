"""Persistence for the webhook relay."""

from freemarket_claims.storage.sqlite import SQLiteNotificationStore

__all__ = ["SQLiteNotificationStore"]
