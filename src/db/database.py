# manages connection to the local store file, provides helpers internal to db package
import asyncio
import os
from contextlib import asynccontextmanager

import aiosqlite

from utils import config
from utils.logger import get_logger

_logger = get_logger(__name__)

DB_PATH = config.DB_PATH

_SCHEMA = """
CREATE TABLE IF NOT EXISTS kv (
    key   TEXT PRIMARY KEY,
    value TEXT NOT NULL
);
"""

_initialized = False
_init_lock = asyncio.Lock()


async def _init_db(conn: aiosqlite.Connection) -> None:
    _logger.info(f"Initializing local store at {DB_PATH}...")
    await conn.executescript(_SCHEMA)
    await conn.commit()


@asynccontextmanager
async def connect() -> aiosqlite.Connection:
    """Async context manager yielding an aiosqlite connection.

    Creates the parent directory and the kv table on first use.
    """
    global _initialized
    parent = os.path.dirname(DB_PATH)
    if parent and not os.path.isdir(parent):
        os.makedirs(parent, exist_ok=True)

    conn = await aiosqlite.connect(DB_PATH)

    if not _initialized:
        async with _init_lock:
            if not _initialized:
                await _init_db(conn)
                _initialized = True
    try:
        yield conn
    finally:
        await conn.close()
