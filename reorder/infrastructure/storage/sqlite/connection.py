"""
Pooled aiosqlite connections to the parts database.

Stores borrow a connection per operation; writes go through
get_transaction() so they commit or roll back as a unit. A caller that
waits longer than acquire_timeout for a free connection gets a
DatabaseError instead of hanging.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import aiosqlite

from reorder.config import get_logger, get_settings
from reorder.core.exceptions import DatabaseError

logger = get_logger(__name__)

PRAGMAS = (
    "PRAGMA journal_mode=WAL",
    "PRAGMA synchronous=NORMAL",
)


class ConnectionPool:
    """Fixed-size pool of aiosqlite connections to one database file."""

    def __init__(
        self,
        db_path: Path,
        pool_size: int = 5,
        busy_timeout: int = 30000,
        acquire_timeout: float = 30.0,
    ):
        self.db_path = db_path
        self.pool_size = pool_size
        self.busy_timeout = busy_timeout  # ms, handed to SQLite
        self.acquire_timeout = acquire_timeout  # s, waiting for a free connection

        self._idle: asyncio.Queue[aiosqlite.Connection] = asyncio.Queue(maxsize=pool_size)
        self._connections: list[aiosqlite.Connection] = []
        self._lock = asyncio.Lock()

    @property
    def is_open(self) -> bool:
        return bool(self._connections)

    @property
    def idle(self) -> int:
        """Connections not currently borrowed."""
        return self._idle.qsize()

    async def open(self) -> None:
        """Open pool_size connections; a no-op when already open."""
        async with self._lock:
            if self.is_open:
                return

            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            try:
                for _ in range(self.pool_size):
                    conn = await self._connect()
                    self._connections.append(conn)
                    self._idle.put_nowait(conn)
            except aiosqlite.Error as e:
                await self._close_all()
                raise DatabaseError("open_pool", str(e)) from e

            logger.info(
                "connection_pool_opened",
                db_path=str(self.db_path),
                pool_size=self.pool_size,
            )

    async def _connect(self) -> aiosqlite.Connection:
        conn = await aiosqlite.connect(self.db_path)
        for pragma in PRAGMAS:
            await conn.execute(pragma)
        await conn.execute(f"PRAGMA busy_timeout={self.busy_timeout}")
        conn.row_factory = aiosqlite.Row
        return conn

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[aiosqlite.Connection]:
        """
        Borrow a connection for the duration of the block.

        Usage:
            async with pool.acquire() as conn:
                await conn.execute(...)
        """
        if not self.is_open:
            await self.open()

        try:
            conn = await asyncio.wait_for(self._idle.get(), timeout=self.acquire_timeout)
        except TimeoutError as e:
            logger.warning("connection_acquire_timeout", pool_size=self.pool_size)
            raise DatabaseError(
                "acquire_connection",
                f"no connection free after {self.acquire_timeout}s",
            ) from e

        try:
            yield conn
        finally:
            # A close() while borrowed has already closed conn; drop it
            if conn in self._connections:
                self._idle.put_nowait(conn)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """Borrow a connection that commits on success and rolls back on error."""
        async with self.acquire() as conn:
            try:
                yield conn
                await conn.commit()
            except Exception:
                await conn.rollback()
                raise

    async def close(self) -> None:
        """Close every connection; the pool can be reopened afterwards."""
        async with self._lock:
            await self._close_all()
            logger.info("connection_pool_closed", db_path=str(self.db_path))

    async def _close_all(self) -> None:
        for conn in self._connections:
            await conn.close()
        self._connections.clear()
        self._idle = asyncio.Queue(maxsize=self.pool_size)


# Process-wide pool, built from StorageSettings on first use
_pool: ConnectionPool | None = None


async def get_pool() -> ConnectionPool:
    """Get or open the global connection pool from storage settings."""
    global _pool
    if _pool is None:
        storage = get_settings().storage
        _pool = ConnectionPool(
            db_path=storage.db_path,
            pool_size=storage.pool_size,
            busy_timeout=storage.busy_timeout,
            acquire_timeout=storage.acquire_timeout,
        )
        await _pool.open()
    return _pool


async def close_pool() -> None:
    """Close and forget the process-wide pool; the next get_pool() reopens."""
    global _pool
    if _pool is not None:
        await _pool.close()
        _pool = None


@asynccontextmanager
async def get_connection() -> AsyncIterator[aiosqlite.Connection]:
    """Borrow a connection from the global pool."""
    pool = await get_pool()
    async with pool.acquire() as conn:
        yield conn


@asynccontextmanager
async def get_transaction() -> AsyncIterator[aiosqlite.Connection]:
    """Borrow a transactional connection from the global pool."""
    pool = await get_pool()
    async with pool.transaction() as conn:
        yield conn
