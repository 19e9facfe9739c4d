"""Credential verification domain service."""

from uuid import uuid4

import logfire

from journal.config import AuthSettings
from journal.domain.error import (
    AlreadyRegisteredError,
    ConflictError,
    NoPasswordSetError,
    PasswordTooShortError,
    ValidationError,
)
from journal.domain.model import User
from journal.domain.repository import LinkedAccountRepository, UserRepository
from journal.domain.value import AuthMethod, Email, UserId

from .base import Service
from .password_hasher import PasswordHasher


class CredentialService(Service):
    """Resolves email/password pairs to users."""

    def __init__(
        self,
        user_repository: UserRepository,
        linked_account_repository: LinkedAccountRepository,
        password_hasher: PasswordHasher,
        auth_settings: AuthSettings,
    ) -> None:
        """Initialize credential service.

        Args:
            user_repository: User repository
            linked_account_repository: Linked account repository
            password_hasher: Password hashing primitive
            auth_settings: Authentication settings
        """
        self.user_repository = user_repository
        self.linked_account_repository = linked_account_repository
        self.password_hasher = password_hasher
        self.auth_settings = auth_settings

    async def verify(self, email: str, password: str) -> User | None:
        """Verify an email/password pair.

        An unseen email is provisioned as a new account when
        ``auto_provision_credentials`` is enabled.

        Args:
            email: Email as typed by the user
            password: Plaintext password

        Returns:
            The authenticated user, or None when the pair does not verify

        Raises:
            NoPasswordSetError: The account only signs in through OAuth providers
        """
        if not email or not email.strip() or not password:
            return None

        try:
            address = Email(email)
        except ValueError:
            return None

        with logfire.span("credential_service.verify"):
            user = await self.user_repository.find_by_email(address.root)

            if user is None:
                if not self.auth_settings.auto_provision_credentials:
                    logfire.info("Credentials rejected - unknown email")
                    return None
                try:
                    user = await self._create_user(address, password, name=None)
                    logfire.info(
                        "User auto-provisioned on sign-in", user_id=str(user.id)
                    )
                    return user
                except ConflictError:
                    # A concurrent request created the account first
                    user = await self.user_repository.find_by_email(address.root)
                    if user is None:
                        raise

            if user.hashed_password:
                if self.password_hasher.verify(password, user.hashed_password):
                    return user
                logfire.info("Credentials rejected - wrong password", user_id=str(user.id))
                return None

            accounts = await self.linked_account_repository.find_all_by_user_id(user.id)
            if accounts:
                providers: list[str] = []
                for account in accounts:
                    if account.provider.value not in providers:
                        providers.append(account.provider.value)
                logfire.info(
                    "Credentials rejected - no password set",
                    user_id=str(user.id),
                    providers=providers,
                )
                raise NoPasswordSetError(available_providers=providers)

            return None

    async def register(self, email: str, password: str, name: str | None) -> User:
        """Register a new email/password account.

        Args:
            email: Email address
            password: Plaintext password
            name: Display name (defaults to the email local part)

        Returns:
            The created user

        Raises:
            ValidationError: If the email is malformed
            PasswordTooShortError: If the password is below the minimum length
            AlreadyRegisteredError: If the email already belongs to a user
        """
        try:
            address = Email(email)
        except ValueError as e:
            raise ValidationError(str(e))

        with logfire.span("credential_service.register"):
            existing = await self.user_repository.find_by_email(address.root)
            if existing is not None:
                raise AlreadyRegisteredError()

            if len(password) < self.auth_settings.password_min_length:
                raise PasswordTooShortError(self.auth_settings.password_min_length)

            try:
                user = await self._create_user(address, password, name=name)
            except ConflictError:
                raise AlreadyRegisteredError()
            logfire.info("User registered", user_id=str(user.id))
            return user

    async def _create_user(self, address: Email, password: str, name: str | None) -> User:
        user = User(
            id=UserId(uuid4()),
            email=address.root,
            name=name or address.local_part,
            hashed_password=self.password_hasher.hash(password),
            primary_auth_method=AuthMethod.EMAIL,
        )
        return await self.user_repository.save(user)
