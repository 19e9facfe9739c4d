"""Mock persistence providers for testing."""

from dishka import Scope, provide

from journal.config import DatabaseSettings
from journal.domain.repository import (
    LinkedAccountRepository,
    LogRepository,
    UnitRepository,
    UserRepository,
)
from journal.persistence.database import StoreConnection
from journal.persistence.repository.inmemory import (
    InMemoryLinkedAccountRepository,
    InMemoryLogRepository,
    InMemoryUnitRepository,
    InMemoryUserRepository,
)
from journal.util.di.infrastructure.persistence import PersistenceProvider


async def _noop_ping() -> None:
    return None


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Uses APP scope so state survives across the HTTP requests of one test;
    each test builds its own container, so tests stay isolated.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_store_connection(self, database_settings: DatabaseSettings) -> StoreConnection:
        """Provide a store connection that always answers."""
        return StoreConnection(_noop_ping, database_settings)

    @provide(scope=Scope.APP)
    def get_user_repository(self) -> UserRepository:
        """Provide in-memory user repository."""
        return InMemoryUserRepository()

    @provide(scope=Scope.APP)
    def get_linked_account_repository(self) -> LinkedAccountRepository:
        """Provide in-memory linked account repository."""
        return InMemoryLinkedAccountRepository()

    @provide(scope=Scope.APP)
    def get_unit_repository(self) -> UnitRepository:
        """Provide in-memory unit repository."""
        return InMemoryUnitRepository()

    @provide(scope=Scope.APP)
    def get_log_repository(self) -> LogRepository:
        """Provide in-memory log repository."""
        return InMemoryLogRepository()
