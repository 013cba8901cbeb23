"""
Repository for the banned_channels table.
"""

from __future__ import annotations

from typing import Set

import aiosqlite

from shut.datatypes.discord_datatypes import ChannelID


class BannedChannelsRepository:
    """CRUD for the banned_channels table."""

    async def get_all(self, conn: aiosqlite.Connection) -> Set[ChannelID]:
        """Return every persisted channel id; duplicate rows collapse."""
        async with conn.execute("SELECT channel_id FROM banned_channels") as cursor:
            rows = await cursor.fetchall()
        return {ChannelID.from_int(row[0]) for row in rows}

    async def insert(self, conn: aiosqlite.Connection, channel_id: ChannelID) -> None:
        await conn.execute(
            "INSERT INTO banned_channels (channel_id) VALUES (?)",
            (channel_id.to_int(),),
        )

    async def delete(self, conn: aiosqlite.Connection, channel_id: ChannelID) -> None:
        """Remove every row for the channel."""
        await conn.execute(
            "DELETE FROM banned_channels WHERE channel_id = ?",
            (channel_id.to_int(),),
        )
