"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from journal.domain.model.user import User
from journal.domain.value import UserId


class UserRepository(ABC):
    """Repository for User aggregate.

    Defines the contract for user persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(
        self, user_id: UserId, for_update: bool = False
    ) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier
            for_update: Lock the row for the rest of the transaction

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(
        self, email: str, for_update: bool = False
    ) -> Optional[User]:
        """Find a user by their normalised email.

        Args:
            email: The user's email address (already normalised)
            for_update: Lock the row for the rest of the transaction

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: The user to save

        Returns:
            The saved user

        Raises:
            ConflictError: If another user already holds the email
        """
        pass
