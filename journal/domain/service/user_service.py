"""User domain service."""

from datetime import datetime, timezone
from typing import Any

import logfire

from journal.domain.error import NotFoundError
from journal.domain.model import User
from journal.domain.repository import UserRepository
from journal.domain.value import UserId


class UserService:
    """Domain service for user operations."""

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Args:
            user_id: User ID

        Returns:
            User entity

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            return user


    async def update_profile(self, user_id: UserId, changes: dict[str, Any]) -> User:
        """Apply profile field changes to a user.

        Args:
            user_id: User ID
            changes: Profile field name to new value

        Returns:
            Updated user

        Raises:
            NotFoundError: If user not found
            ValueError: If a changed field fails validation
        """
        with logfire.span("user_service.update_profile", user_id=str(user_id)):
            user = await self.get_by_id(user_id)
            updated = User.model_validate(
                {
                    **user.model_dump(),
                    **changes,
                    "updated_at": datetime.now(timezone.utc),
                }
            )
            saved = await self.user_repository.save(updated)
            logfire.info("Profile updated", user_id=str(user_id), fields=sorted(changes))
            return saved
