"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from journal.config import DatabaseSettings, Settings
from journal.domain.repository import (
    LinkedAccountRepository,
    LogRepository,
    UnitRepository,
    UserRepository,
)
from journal.persistence.database import (
    StoreConnection,
    create_engine,
    create_session_factory,
)
from journal.persistence.repository import (
    PostgresLinkedAccountRepository,
    PostgresLogRepository,
    PostgresUnitRepository,
    PostgresUserRepository,
)
from journal.util.di.base import ProviderBase
from journal.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide database engine, disposed when the container closes."""
        engine = create_engine(settings)
        # Instrument SQLAlchemy for observability
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_store_connection(
        self, engine: AsyncEngine, database_settings: DatabaseSettings
    ) -> StoreConnection:
        """Provide the lazily established store connection."""
        return StoreConnection.for_engine(engine, database_settings)

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        store_connection: StoreConnection,
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        The session is automatically committed at the end of the request
        if no exception occurred, or rolled back if an exception was raised.
        """
        # Fails open: an unreachable store surfaces from the first query
        await store_connection.ensure_connected()

        async with session_factory() as session:
            try:
                yield session
                await session.commit()
                logfire.debug("Session committed")
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, session: AsyncSession) -> UserRepository:
        """Provide User repository."""
        return PostgresUserRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_linked_account_repository(
        self, session: AsyncSession
    ) -> LinkedAccountRepository:
        """Provide LinkedAccount repository."""
        return PostgresLinkedAccountRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_unit_repository(self, session: AsyncSession) -> UnitRepository:
        """Provide Unit repository."""
        return PostgresUnitRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_log_repository(self, session: AsyncSession) -> LogRepository:
        """Provide Log repository."""
        return PostgresLogRepository(session)
