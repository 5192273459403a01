"""SQLite implementation of the NotificationStore protocol."""

from __future__ import annotations

from pathlib import Path

import aiosqlite

from freemarket_claims.models.records import NotificationDetails

MEMORY = ":memory:"

SCHEMA = """
-- Push-notification endpoints, one per Farcaster user
CREATE TABLE IF NOT EXISTS notification_details (
    fid INTEGER PRIMARY KEY,
    url TEXT NOT NULL,
    token TEXT NOT NULL,
    updated_at TEXT NOT NULL DEFAULT (datetime('now'))
);
"""

UPSERT = """
INSERT INTO notification_details (fid, url, token) VALUES (?, ?, ?)
ON CONFLICT(fid) DO UPDATE SET
    url = excluded.url,
    token = excluded.token,
    updated_at = datetime('now')
"""


class SQLiteNotificationStore:
    """Keeps one push endpoint per fid.

    Usable directly (``initialize()`` / ``close()``) or as an async
    context manager.
    """

    def __init__(self, db_path: str) -> None:
        self._path = db_path
        self._conn: aiosqlite.Connection | None = None

    async def __aenter__(self) -> SQLiteNotificationStore:
        await self.initialize()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def initialize(self) -> None:
        if self._path != MEMORY:
            Path(self._path).parent.mkdir(parents=True, exist_ok=True)
        conn = await aiosqlite.connect(self._path)
        conn.row_factory = aiosqlite.Row
        await conn.executescript(SCHEMA)
        await conn.commit()
        self._conn = conn

    async def close(self) -> None:
        conn, self._conn = self._conn, None
        if conn is not None:
            await conn.close()

    @property
    def conn(self) -> aiosqlite.Connection:
        if self._conn is None:
            raise RuntimeError("notification store is not open")
        return self._conn

    async def set_notification_details(self, fid: int, details: NotificationDetails) -> None:
        await self.conn.execute(UPSERT, (fid, details.url, details.token))
        await self.conn.commit()

    async def get_notification_details(self, fid: int) -> NotificationDetails | None:
        cur = await self.conn.execute(
            "SELECT url, token FROM notification_details WHERE fid = ?", (fid,),
        )
        row = await cur.fetchone()
        await cur.close()
        if row is None:
            return None
        return NotificationDetails(url=row["url"], token=row["token"])

    async def delete_notification_details(self, fid: int) -> None:
        await self.conn.execute("DELETE FROM notification_details WHERE fid = ?", (fid,))
        await self.conn.commit()

    async def count(self) -> int:
        cur = await self.conn.execute("SELECT COUNT(*) FROM notification_details")
        (n,) = await cur.fetchone()
        await cur.close()
        return n
