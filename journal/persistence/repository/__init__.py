"""PostgreSQL repository implementations."""

from journal.persistence.repository.linked_account import (
    PostgresLinkedAccountRepository,
)
from journal.persistence.repository.unit import (
    PostgresLogRepository,
    PostgresUnitRepository,
)
from journal.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresLinkedAccountRepository",
    "PostgresUnitRepository",
    "PostgresLogRepository",
]
