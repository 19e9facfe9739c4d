"""Database connection and session management.

Provides async database engine, session factory and the lazily established
store connection for PostgreSQL.
"""

import asyncio
from collections.abc import Awaitable, Callable

import logfire
from sqlalchemy import text
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from journal.config import DatabaseSettings, Settings

# Driver-level failures that mean the store could not be reached
CONNECTIVITY_ERRORS: tuple[type[BaseException], ...] = (
    OperationalError,
    InterfaceError,
    OSError,
    asyncio.TimeoutError,
)


def create_engine(settings: Settings) -> AsyncEngine:
    """Create async database engine.

    The engine does not connect until first use.

    Args:
        settings: Application settings with database URL

    Returns:
        Configured async engine
    """
    return create_async_engine(
        settings.database.url,
        echo=settings.debug,  # Log SQL queries in debug mode
        pool_pre_ping=True,  # Verify connections before using
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
        connect_args={"timeout": settings.database.connect_timeout},
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create async session factory.

    Args:
        engine: Database engine

    Returns:
        Session factory for creating database sessions
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,  # Don't expire objects after commit
        autoflush=False,  # Manual flushing for better control
        autocommit=False,  # Explicit transaction management
    )


class StoreConnection:
    """Process-wide, lazily verified connection to the store.

    ``ensure_connected`` makes up to ``connect_retries`` attempts, each
    bounded by ``connect_timeout`` and separated by a fixed
    ``retry_backoff``. When every attempt fails it logs and returns False
    without raising; requests then surface the failure themselves.
    """

    def __init__(
        self, ping: Callable[[], Awaitable[None]], settings: DatabaseSettings
    ) -> None:
        """Initialize store connection.

        Args:
            ping: Coroutine factory performing one round trip to the store
            settings: Timeout, retry and backoff configuration
        """
        self._ping = ping
        self.settings = settings
        self._connected = False
        self._lock = asyncio.Lock()

    @classmethod
    def for_engine(cls, engine: AsyncEngine, settings: DatabaseSettings) -> "StoreConnection":
        async def ping() -> None:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))

        return cls(ping, settings)

    @property
    def connected(self) -> bool:
        return self._connected

    async def ensure_connected(self) -> bool:
        """Establish the connection once, retrying with a fixed backoff.

        Returns:
            True if the store answered, False after all attempts failed
        """
        if self._connected:
            return True

        async with self._lock:
            if self._connected:
                return True

            attempts = max(1, self.settings.connect_retries)
            for attempt in range(1, attempts + 1):
                try:
                    await asyncio.wait_for(
                        self._ping(), timeout=self.settings.connect_timeout
                    )
                except CONNECTIVITY_ERRORS as e:
                    logfire.warn(
                        "Store connection attempt failed",
                        attempt=attempt,
                        attempts=attempts,
                        error=type(e).__name__,
                    )
                    if attempt < attempts:
                        await asyncio.sleep(self.settings.retry_backoff)
                    continue

                self._connected = True
                logfire.info("Store connection established", attempt=attempt)
                return True

            logfire.error("Store unreachable", attempts=attempts)
            return False

    async def check(self) -> bool:
        """Ping the store once, updating the connection state.

        Returns:
            True if the store answered within ``connect_timeout``
        """
        try:
            await asyncio.wait_for(self._ping(), timeout=self.settings.connect_timeout)
        except CONNECTIVITY_ERRORS as e:
            logfire.warn("Store health check failed", error=type(e).__name__)
            self._connected = False
            return False
        self._connected = True
        return True

    def reset(self) -> None:
        """Forget the established connection so the next request re-checks."""
        self._connected = False
