"""Domain layer DI providers."""

from dishka import Scope, provide

from journal.config import AuthSettings
from journal.domain.repository import (
    LinkedAccountRepository,
    LogRepository,
    UnitRepository,
    UserRepository,
)
from journal.domain.service import (
    AuthMethodService,
    AuthService,
    CredentialService,
    IdentityService,
    OAuthClient,
    PasswordHasher,
    ProfileNormalizer,
    SessionService,
    UnitService,
    UserService,
)
from journal.domain.value import AuthProvider
from journal.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_auth_service(
        self, oauth_clients: dict[AuthProvider, OAuthClient]
    ) -> AuthService:
        """Provide multi-provider authentication domain service.

        Args:
            oauth_clients: Dictionary mapping providers to their OAuth clients

        Returns:
            AuthService configured with all available OAuth clients
        """
        return AuthService(oauth_clients=oauth_clients)

    @provide
    def get_session_service(self, auth_settings: AuthSettings) -> SessionService:
        """Provide session token domain service."""
        return SessionService(auth_settings=auth_settings)

    @provide(scope=Scope.APP)
    def get_profile_normalizer(self) -> ProfileNormalizer:
        return ProfileNormalizer()

    @provide
    def get_credential_service(
        self,
        user_repository: UserRepository,
        linked_account_repository: LinkedAccountRepository,
        password_hasher: PasswordHasher,
        auth_settings: AuthSettings,
    ) -> CredentialService:
        """Provide credential verification domain service."""
        return CredentialService(
            user_repository=user_repository,
            linked_account_repository=linked_account_repository,
            password_hasher=password_hasher,
            auth_settings=auth_settings,
        )

    @provide
    def get_identity_service(
        self,
        user_repository: UserRepository,
        linked_account_repository: LinkedAccountRepository,
    ) -> IdentityService:
        """Provide identity merging domain service."""
        return IdentityService(
            user_repository=user_repository,
            linked_account_repository=linked_account_repository,
        )

    @provide
    def get_auth_method_service(
        self,
        user_repository: UserRepository,
        linked_account_repository: LinkedAccountRepository,
        password_hasher: PasswordHasher,
        auth_settings: AuthSettings,
    ) -> AuthMethodService:
        """Provide auth-method registry domain service."""
        return AuthMethodService(
            user_repository=user_repository,
            linked_account_repository=linked_account_repository,
            password_hasher=password_hasher,
            auth_settings=auth_settings,
        )

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_unit_service(
        self, unit_repository: UnitRepository, log_repository: LogRepository
    ) -> UnitService:
        """Provide unit domain service."""
        return UnitService(
            unit_repository=unit_repository, log_repository=log_repository
        )
