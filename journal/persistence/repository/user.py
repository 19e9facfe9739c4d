"""PostgreSQL implementation of User repository."""

from typing import Optional

from sqlalchemy import select

from journal.domain.model import User
from journal.domain.repository import UserRepository
from journal.domain.value import UserId
from journal.persistence.mappers import row_to_user, user_to_dict
from journal.persistence.repository.base import PostgresRepository
from journal.persistence.tables import users_table


class PostgresUserRepository(PostgresRepository, UserRepository):
    """PostgreSQL implementation of UserRepository."""

    async def find_by_id(
        self, user_id: UserId, for_update: bool = False
    ) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: User ID to look up
            for_update: Take a row lock until the transaction ends

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.id == user_id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self._execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_email(
        self, email: str, for_update: bool = False
    ) -> Optional[User]:
        """Find a user by their normalised email.

        Args:
            email: Email to search for
            for_update: Take a row lock until the transaction ends

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.email == email)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self._execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: User to save

        Returns:
            Saved user

        Raises:
            ConflictError: If another user already holds the email
        """
        existing = await self.find_by_id(user.id)

        user_dict = user_to_dict(user)

        if existing:
            stmt = (
                users_table.update()
                .where(users_table.c.id == user.id)
                .values(**user_dict)
            )
        else:
            stmt = users_table.insert().values(**user_dict)

        await self._write(stmt, "user")
        return user
