import sqlite3

import pytest

from shut.database.db_connection import ConnectionManager
from shut.database.db_schema import SchemaManager


@pytest.mark.asyncio
async def test_connection_requires_open():
    manager = ConnectionManager()

    with pytest.raises(RuntimeError):
        _ = manager.connection


@pytest.mark.asyncio
async def test_transaction_commits(tmp_path):
    manager = ConnectionManager()
    await manager.open(tmp_path / "nested" / "app.db")
    async with manager.read() as conn:
        await SchemaManager.initialize_schema(conn)

    async with manager.transaction() as conn:
        await conn.execute("INSERT INTO banned_channels VALUES (?)", (1,))

    async with manager.read() as conn:
        async with conn.execute("SELECT channel_id FROM banned_channels") as cursor:
            rows = await cursor.fetchall()
    await manager.close()

    assert [row[0] for row in rows] == [1]


@pytest.mark.asyncio
async def test_transaction_rolls_back_on_error(tmp_path):
    db_file = tmp_path / "app.db"
    manager = ConnectionManager()
    await manager.open(db_file)
    async with manager.read() as conn:
        await SchemaManager.initialize_schema(conn)

    with pytest.raises(ValueError):
        async with manager.transaction() as conn:
            await conn.execute("INSERT INTO banned_channels VALUES (?)", (2,))
            raise ValueError("abort")

    await manager.close()

    conn = sqlite3.connect(db_file)
    count = conn.execute("SELECT COUNT(*) FROM banned_channels").fetchone()[0]
    conn.close()
    assert count == 0


@pytest.mark.asyncio
async def test_close_is_idempotent(tmp_path):
    manager = ConnectionManager()
    await manager.open(tmp_path / "app.db")

    await manager.close()
    await manager.close()

    with pytest.raises(RuntimeError):
        _ = manager.connection
