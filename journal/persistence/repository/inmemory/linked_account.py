"""In-memory linked account repository for testing."""

from typing import Optional

from journal.domain.error import ConflictError
from journal.domain.model.linked_account import LinkedAccount
from journal.domain.repository.linked_account import LinkedAccountRepository
from journal.domain.value import AuthProvider, LinkedAccountId, UserId


class InMemoryLinkedAccountRepository(LinkedAccountRepository):
    """In-memory implementation of LinkedAccountRepository for testing."""

    def __init__(self) -> None:
        self._accounts: list[LinkedAccount] = []

    async def save(self, account: LinkedAccount) -> LinkedAccount:
        """Save linked account, enforcing both unique constraints."""
        for existing in self._accounts:
            if existing.id == account.id:
                continue
            if (
                existing.provider == account.provider
                and existing.provider_account_id == account.provider_account_id
            ):
                raise ConflictError("linked account")
            if existing.user_id == account.user_id and existing.provider == account.provider:
                raise ConflictError("linked account")

        # Check for existing account with same ID (update case)
        for i, existing in enumerate(self._accounts):
            if existing.id == account.id:
                self._accounts[i] = account
                return account

        self._accounts.append(account)
        return account

    async def find_by_id(self, account_id: LinkedAccountId) -> Optional[LinkedAccount]:
        for account in self._accounts:
            if account.id == account_id:
                return account
        return None

    async def find_by_provider(
        self, provider: AuthProvider, provider_account_id: str
    ) -> Optional[LinkedAccount]:
        """Find linked account by provider and provider account ID."""
        for account in self._accounts:
            if (
                account.provider == provider
                and account.provider_account_id == provider_account_id
            ):
                return account
        return None

    async def find_by_user_and_provider(
        self, user_id: UserId, provider: AuthProvider
    ) -> Optional[LinkedAccount]:
        for account in self._accounts:
            if account.user_id == user_id and account.provider == provider:
                return account
        return None

    async def find_all_by_user_id(self, user_id: UserId) -> list[LinkedAccount]:
        """Find all linked accounts for a user."""
        matches = [a for a in self._accounts if a.user_id == user_id]
        # Stable sort keeps insertion order for equal timestamps
        matches.sort(key=lambda a: a.created_at)
        return matches

    async def delete_by_user_and_provider(
        self, user_id: UserId, provider: AuthProvider
    ) -> int:
        before = len(self._accounts)
        self._accounts = [
            a
            for a in self._accounts
            if not (a.user_id == user_id and a.provider == provider)
        ]
        return before - len(self._accounts)
