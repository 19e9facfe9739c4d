"""LinkedAccount repository implementation using PostgreSQL."""

from typing import Optional

from sqlalchemy import select

from journal.domain.model.linked_account import LinkedAccount
from journal.domain.repository.linked_account import LinkedAccountRepository
from journal.domain.value import AuthProvider, LinkedAccountId, UserId
from journal.persistence.mappers import linked_account_to_dict, row_to_linked_account
from journal.persistence.repository.base import PostgresRepository
from journal.persistence.tables import linked_accounts_table


class PostgresLinkedAccountRepository(PostgresRepository, LinkedAccountRepository):
    """PostgreSQL implementation of LinkedAccountRepository."""

    async def save(self, account: LinkedAccount) -> LinkedAccount:
        """Save linked account to database.

        Args:
            account: LinkedAccount to save

        Returns:
            Saved LinkedAccount

        Raises:
            ConflictError: If the provider identity or user/provider pair is taken
        """
        account_dict = linked_account_to_dict(account)

        existing = await self.find_by_id(account.id)

        if existing:
            stmt = (
                linked_accounts_table.update()
                .where(linked_accounts_table.c.id == account.id)
                .values(**account_dict)
            )
        else:
            stmt = linked_accounts_table.insert().values(**account_dict)

        await self._write(stmt, "linked account")
        return account

    async def find_by_id(self, account_id: LinkedAccountId) -> Optional[LinkedAccount]:
        stmt = select(linked_accounts_table).where(
            linked_accounts_table.c.id == account_id
        )
        result = await self._execute(stmt)
        row = result.mappings().first()

        if not row:
            return None

        return row_to_linked_account(dict(row))

    async def find_by_provider(
        self, provider: AuthProvider, provider_account_id: str
    ) -> Optional[LinkedAccount]:
        """Get linked account by provider and provider account ID.

        Args:
            provider: OAuth provider
            provider_account_id: Provider-specific account ID

        Returns:
            LinkedAccount if found, None otherwise
        """
        stmt = select(linked_accounts_table).where(
            linked_accounts_table.c.provider == provider.value,
            linked_accounts_table.c.provider_account_id == provider_account_id,
        )
        result = await self._execute(stmt)
        row = result.mappings().first()

        if not row:
            return None

        return row_to_linked_account(dict(row))

    async def find_by_user_and_provider(
        self, user_id: UserId, provider: AuthProvider
    ) -> Optional[LinkedAccount]:
        stmt = select(linked_accounts_table).where(
            linked_accounts_table.c.user_id == user_id,
            linked_accounts_table.c.provider == provider.value,
        )
        result = await self._execute(stmt)
        row = result.mappings().first()

        if not row:
            return None

        return row_to_linked_account(dict(row))

    async def find_all_by_user_id(self, user_id: UserId) -> list[LinkedAccount]:
        """Find all linked accounts for a user, oldest first.

        Args:
            user_id: User ID to find linked accounts for

        Returns:
            List of LinkedAccount objects (may be empty)
        """
        stmt = (
            select(linked_accounts_table)
            .where(linked_accounts_table.c.user_id == user_id)
            .order_by(linked_accounts_table.c.created_at, linked_accounts_table.c.id)
        )
        result = await self._execute(stmt)
        rows = result.mappings().all()

        return [row_to_linked_account(dict(row)) for row in rows]

    async def delete_by_user_and_provider(
        self, user_id: UserId, provider: AuthProvider
    ) -> int:
        """Delete a user's links for a provider.

        Returns:
            Number of deleted rows
        """
        stmt = linked_accounts_table.delete().where(
            linked_accounts_table.c.user_id == user_id,
            linked_accounts_table.c.provider == provider.value,
        )
        result = await self._execute(stmt)
        await self.session.flush()
        return result.rowcount
