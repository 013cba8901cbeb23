"""
Database schema initialization.

The bot persists a single table, one row per channel under enforcement::

    banned_channels(channel_id INTEGER NOT NULL)

The table has no uniqueness constraint; callers check membership before
inserting.
"""

import aiosqlite
from shut.util.logger import get_logger

logger = get_logger("database_schema")


class SchemaManager:
    """Creates the tables the bot needs if they are missing."""

    @staticmethod
    async def initialize_schema(db: aiosqlite.Connection) -> None:
        """
        Create all tables and commit.

        Args:
            db: Open database connection
        """
        await SchemaManager._create_tables(db)
        await db.commit()
        logger.info("[SCHEMA] Database schema initialized")

    @staticmethod
    async def _create_tables(db: aiosqlite.Connection) -> None:
        await db.execute(
            "CREATE TABLE IF NOT EXISTS banned_channels (channel_id INTEGER NOT NULL)"
        )
