"""
Persistent set of channels under media-only enforcement.

The store is the single owner of both the in-memory set and the SQLite
connection. One instance is created at startup with :meth:`load` and handed
to every component that needs it.

Concurrency
-----------
* ``is_enforced`` is synchronous and never awaits, so on the event loop it
  cannot interleave with a toggle and any number of handlers may call it.
* ``toggle`` holds ``_toggle_lock`` across the database transaction and the
  in-memory update. The set only changes after the transaction has
  committed, in one synchronous step, so readers see either the old state
  or the new one.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import FrozenSet, Set, Union

from shut.database.db_connection import ConnectionManager
from shut.database.db_schema import SchemaManager
from shut.datatypes.discord_datatypes import ChannelID
from shut.repositories.banned_channels_repo import BannedChannelsRepository
from shut.util.logger import get_logger

logger = get_logger("channel_policy_store")


class ChannelPolicyError(Exception):
    """A toggle could not be persisted; neither storage nor memory changed."""


class ChannelPolicyStore:
    """Set of enforced channels mirrored in the ``banned_channels`` table."""

    def __init__(self, connection: ConnectionManager, enforced_channels: Set[ChannelID]) -> None:
        self._connection = connection
        self._enforced_channels: Set[ChannelID] = set(enforced_channels)
        self._toggle_lock = asyncio.Lock()
        self._repo = BannedChannelsRepository()

    @classmethod
    async def load(cls, db_path: Path) -> "ChannelPolicyStore":
        """
        Open the database, create the schema if needed and read every row.

        Args:
            db_path: SQLite file to use; parent directories are created.

        Returns:
            A ready store owning the open connection.

        Raises:
            Exception: Any failure opening the file or creating the schema.
                The bot cannot run without its store, so callers treat this
                as fatal.
        """
        connection = ConnectionManager()
        await connection.open(db_path)
        try:
            async with connection.read() as conn:
                await SchemaManager.initialize_schema(conn)
                enforced = await BannedChannelsRepository().get_all(conn)
        except Exception:
            await connection.close()
            raise

        logger.info("[CHANNEL POLICY] Loaded %d enforced channel(s) from %s", len(enforced), db_path)
        return cls(connection, enforced)

    async def close(self) -> None:
        await self._connection.close()

    @property
    def enforced_channels(self) -> FrozenSet[ChannelID]:
        """Snapshot of the channels currently under enforcement."""
        return frozenset(self._enforced_channels)

    def is_enforced(self, channel_id: Union[ChannelID, int]) -> bool:
        return ChannelID(channel_id) in self._enforced_channels

    async def toggle(self, channel_id: Union[ChannelID, int]) -> bool:
        """
        Flip enforcement for a channel and persist the change.

        Returns:
            The previous state: True if the channel was enforced and is now
            disabled, False if it was not enforced and is now enabled.

        Raises:
            ChannelPolicyError: The database write failed. The transaction is
                rolled back and the in-memory set is left untouched.
        """
        cid = ChannelID(channel_id)

        async with self._toggle_lock:
            was_enforced = cid in self._enforced_channels
            try:
                async with self._connection.transaction() as conn:
                    if was_enforced:
                        await self._repo.delete(conn, cid)
                    else:
                        await self._repo.insert(conn, cid)
            except Exception as exc:
                logger.error("[CHANNEL POLICY] Failed to persist toggle for channel %s: %s", cid, exc)
                raise ChannelPolicyError(f"could not toggle enforcement for channel {cid}") from exc

            if was_enforced:
                self._enforced_channels.discard(cid)
            else:
                self._enforced_channels.add(cid)

        logger.info(
            "[CHANNEL POLICY] Channel %s enforcement %s",
            cid, "disabled" if was_enforced else "enabled",
        )
        return was_enforced
