# durable key-value store, the local stand-in for a browser's localStorage
from typing import Optional

from db.database import connect


async def get_item(key: str) -> Optional[str]:
    """Return the stored string for key, or None if absent."""
    async with connect() as conn:
        cur = await conn.execute("SELECT value FROM kv WHERE key = ?;", (key,))
        row = await cur.fetchone()
        await cur.close()
    return row[0] if row else None


async def set_item(key: str, value: str) -> None:
    """Store value under key, replacing any previous value."""
    async with connect() as conn:
        await conn.execute(
            """
            INSERT INTO kv(key, value) VALUES (?, ?)
            ON CONFLICT(key) DO UPDATE SET value = excluded.value;
            """,
            (key, value),
        )
        await conn.commit()


async def remove_item(key: str) -> None:
    """Delete key. Removing a missing key is a no-op."""
    async with connect() as conn:
        await conn.execute("DELETE FROM kv WHERE key = ?;", (key,))
        await conn.commit()
