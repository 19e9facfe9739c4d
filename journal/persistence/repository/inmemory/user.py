"""In-memory user repository for testing."""

from typing import Optional

from journal.domain.error import ConflictError
from journal.domain.model.user import User
from journal.domain.repository.user import UserRepository
from journal.domain.value import UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing.

    Enforces the unique email constraint like the database does.
    """

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    async def find_by_id(
        self, user_id: UserId, for_update: bool = False
    ) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_email(
        self, email: str, for_update: bool = False
    ) -> Optional[User]:
        """Find a user by their email."""
        for user in self._users.values():
            if user.email == email:
                return user
        return None

    async def save(self, user: User) -> User:
        """Save or update a user."""
        for existing in self._users.values():
            if existing.email == user.email and existing.id != user.id:
                raise ConflictError("user")
        self._users[user.id] = user
        return user
