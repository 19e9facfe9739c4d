"""Linked account repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from journal.domain.model.linked_account import LinkedAccount
from journal.domain.value import AuthProvider, LinkedAccountId, UserId


class LinkedAccountRepository(ABC):
    """Repository for LinkedAccount entity.

    Manages the relationship between users and the OAuth providers
    that have authenticated them.
    """

    @abstractmethod
    async def find_by_id(self, account_id: LinkedAccountId) -> Optional[LinkedAccount]:
        """Find a linked account by ID.

        Args:
            account_id: The linked account's unique identifier

        Returns:
            The linked account if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_provider(
        self, provider: AuthProvider, provider_account_id: str
    ) -> Optional[LinkedAccount]:
        """Find a linked account by provider and provider account ID.

        Args:
            provider: The OAuth provider
            provider_account_id: The user's ID on that provider

        Returns:
            The linked account if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_user_and_provider(
        self, user_id: UserId, provider: AuthProvider
    ) -> Optional[LinkedAccount]:
        """Find the link a user holds for one provider.

        Args:
            user_id: The user's unique identifier
            provider: The OAuth provider

        Returns:
            The linked account if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all_by_user_id(self, user_id: UserId) -> list[LinkedAccount]:
        """Get all accounts linked to a user, oldest first.

        Args:
            user_id: The user's unique identifier

        Returns:
            List of linked accounts (may be empty)
        """
        pass

    @abstractmethod
    async def save(self, account: LinkedAccount) -> LinkedAccount:
        """Save a linked account (create or update).

        Args:
            account: The linked account to save

        Returns:
            The saved linked account

        Raises:
            ConflictError: If the provider identity or user/provider pair is taken
        """
        pass

    @abstractmethod
    async def delete_by_user_and_provider(
        self, user_id: UserId, provider: AuthProvider
    ) -> int:
        """Delete every link a user holds for a provider.

        Args:
            user_id: The user's unique identifier
            provider: The OAuth provider

        Returns:
            Number of deleted links
        """
        pass
