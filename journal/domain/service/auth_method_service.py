"""Auth-method registry domain service.

Keeps the invariant that every user retains at least one way to sign in:
a password hash or one linked provider.
"""

from datetime import datetime, timezone

import logfire

from journal.config import AuthSettings
from journal.domain.error import (
    LastAuthMethodError,
    NotFoundError,
    PasswordAlreadySetError,
    PasswordMismatchError,
    PasswordTooShortError,
    ProviderNotLinkedError,
    WrongCurrentPasswordError,
)
from journal.domain.model import LinkedAccount, User
from journal.domain.repository import LinkedAccountRepository, UserRepository
from journal.domain.value import AuthMethod, AuthProvider, UserId

from .base import Service
from .password_hasher import PasswordHasher


class AuthMethodService(Service):
    """Set or change a password and unlink providers."""

    def __init__(
        self,
        user_repository: UserRepository,
        linked_account_repository: LinkedAccountRepository,
        password_hasher: PasswordHasher,
        auth_settings: AuthSettings,
    ) -> None:
        self.user_repository = user_repository
        self.linked_account_repository = linked_account_repository
        self.password_hasher = password_hasher
        self.auth_settings = auth_settings

    async def has_password(self, user_id: UserId) -> bool:
        user = await self._get_user(user_id)
        return user.has_password

    async def list_methods(self, user_id: UserId) -> list[AuthMethod]:
        """Active sign-in methods in their deterministic order.

        ``email`` comes first when a password is set, then providers from
        the oldest link to the newest.
        """
        user = await self._get_user(user_id)
        accounts = await self.linked_account_repository.find_all_by_user_id(user_id)
        return self._ordered_methods(user, accounts)

    async def set_password(
        self,
        user_id: UserId,
        new_password: str,
        confirm_password: str | None = None,
    ) -> User:
        """Add a password to an account that has none.

        Args:
            user_id: Account owner
            new_password: Plaintext password
            confirm_password: Repeated password, checked when given

        Returns:
            Updated user with ``primary_auth_method`` set to email

        Raises:
            PasswordMismatchError: If the confirmation differs
            PasswordTooShortError: If the password is below the minimum length
            PasswordAlreadySetError: If the account already has a password
        """
        with logfire.span("auth_method_service.set_password", user_id=str(user_id)):
            user = await self._get_user(user_id, for_update=True)

            if confirm_password is not None and new_password != confirm_password:
                raise PasswordMismatchError()
            self._check_length(new_password)
            if user.has_password:
                raise PasswordAlreadySetError()

            saved = await self._store_password(user, new_password)
            logfire.info("Password set", user_id=str(user_id))
            return saved

    async def change_password(
        self,
        user_id: UserId,
        current_password: str | None,
        new_password: str,
        confirm_password: str,
    ) -> User:
        """Replace the password, or set it when the account has none.

        The current password is only required when a hash already exists.

        Raises:
            PasswordMismatchError: If the confirmation differs
            PasswordTooShortError: If the password is below the minimum length
            WrongCurrentPasswordError: If the current password does not verify
        """
        with logfire.span(
            "auth_method_service.change_password", user_id=str(user_id)
        ):
            user = await self._get_user(user_id, for_update=True)

            if new_password != confirm_password:
                raise PasswordMismatchError()
            self._check_length(new_password)
            if user.hashed_password and not (
                current_password
                and self.password_hasher.verify(current_password, user.hashed_password)
            ):
                logfire.info("Password change rejected", user_id=str(user_id))
                raise WrongCurrentPasswordError()

            saved = await self._store_password(user, new_password)
            logfire.info("Password changed", user_id=str(user_id))
            return saved

    async def unlink_provider(self, user_id: UserId, provider: AuthProvider) -> User:
        """Remove a provider link while keeping at least one method active.

        The new ``primary_auth_method`` is the first remaining method: email
        when a password is set, otherwise the oldest remaining link.

        Raises:
            LastAuthMethodError: If the account would be left without a method
            ProviderNotLinkedError: If the provider is not linked
        """
        with logfire.span(
            "auth_method_service.unlink_provider",
            user_id=str(user_id),
            provider=provider.value,
        ):
            user = await self._get_user(user_id, for_update=True)
            accounts = await self.linked_account_repository.find_all_by_user_id(
                user_id
            )

            total = (1 if user.has_password else 0) + len(accounts)
            if total <= 1:
                logfire.info(
                    "Unlink rejected - last method",
                    user_id=str(user_id),
                    provider=provider.value,
                )
                raise LastAuthMethodError()

            if not any(account.provider == provider for account in accounts):
                raise ProviderNotLinkedError(provider.value)

            removed = await self.linked_account_repository.delete_by_user_and_provider(
                user_id, provider
            )
            remaining = [a for a in accounts if a.provider != provider]
            methods = self._ordered_methods(user, remaining)
            primary = methods[0] if methods else AuthMethod.EMAIL

            saved = await self.user_repository.save(
                user.model_copy(
                    update={
                        "primary_auth_method": primary,
                        "updated_at": datetime.now(timezone.utc),
                    }
                )
            )
            logfire.info(
                "Provider unlinked",
                user_id=str(user_id),
                provider=provider.value,
                removed=removed,
                primary_auth_method=primary.value,
            )
            return saved

    async def _get_user(self, user_id: UserId, for_update: bool = False) -> User:
        user = await self.user_repository.find_by_id(user_id, for_update=for_update)
        if user is None:
            raise NotFoundError("User", str(user_id))
        return user

    def _check_length(self, password: str) -> None:
        if len(password) < self.auth_settings.password_min_length:
            raise PasswordTooShortError(self.auth_settings.password_min_length)

    async def _store_password(self, user: User, password: str) -> User:
        return await self.user_repository.save(
            user.model_copy(
                update={
                    "hashed_password": self.password_hasher.hash(password),
                    "primary_auth_method": AuthMethod.EMAIL,
                    "updated_at": datetime.now(timezone.utc),
                }
            )
        )

    @staticmethod
    def _ordered_methods(
        user: User, accounts: list[LinkedAccount]
    ) -> list[AuthMethod]:
        methods: list[AuthMethod] = [AuthMethod.EMAIL] if user.has_password else []
        for account in sorted(accounts, key=lambda a: a.created_at):
            method = AuthMethod.from_provider(account.provider)
            if method not in methods:
                methods.append(method)
        return methods
