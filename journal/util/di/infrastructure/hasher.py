"""Password hashing infrastructure providers."""

from dishka import Scope, provide

from journal.adapter.security.hasher import BcryptPasswordHasher
from journal.config import AuthSettings
from journal.domain.service import PasswordHasher
from journal.util.di.base import ProviderBase


class HasherProvider(ProviderBase):
    """Password hasher component base."""

    __mock_component__ = "hasher"


class ProdHasherProvider(HasherProvider):
    """Production hasher provider using bcrypt."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_password_hasher(self, auth_settings: AuthSettings) -> PasswordHasher:
        """Provide bcrypt password hasher with the configured cost factor."""
        return BcryptPasswordHasher(rounds=auth_settings.password_hash_rounds)
