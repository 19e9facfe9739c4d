"""Mock password hasher provider for testing."""

from dishka import Scope, provide

from journal.adapter.security.hasher import MockPasswordHasher
from journal.domain.service import PasswordHasher
from journal.util.di.infrastructure.hasher import HasherProvider


class MockHasherProvider(HasherProvider):
    """Fast deterministic hasher instead of bcrypt."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_password_hasher(self) -> PasswordHasher:
        return MockPasswordHasher()
