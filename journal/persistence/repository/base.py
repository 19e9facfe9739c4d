"""Shared behaviour for PostgreSQL repositories."""

from typing import Any

import logfire
from sqlalchemy import Executable
from sqlalchemy.engine import Result
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from journal.domain.error import ConflictError
from journal.persistence.database import CONNECTIVITY_ERRORS
from journal.util.error import StoreUnavailableError


class PostgresRepository:
    """Base for repositories working on a request-scoped session."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _execute(self, stmt: Executable) -> Result[Any]:
        try:
            return await self.session.execute(stmt)
        except CONNECTIVITY_ERRORS as e:
            logfire.error("Store query failed", error=type(e).__name__)
            raise StoreUnavailableError() from e

    async def _write(self, stmt: Executable, resource: str) -> Result[Any]:
        """Run a write inside a savepoint.

        A unique violation rolls back to the savepoint only, leaving the
        request transaction usable.

        Raises:
            ConflictError: If the write violates a unique constraint
            StoreUnavailableError: If the store cannot be reached
        """
        try:
            async with self.session.begin_nested():
                result = await self.session.execute(stmt)
            await self.session.flush()
            return result
        except IntegrityError as e:
            logfire.warn("Unique constraint violated", resource=resource)
            raise ConflictError(resource) from e
        except CONNECTIVITY_ERRORS as e:
            logfire.error("Store write failed", error=type(e).__name__)
            raise StoreUnavailableError() from e
