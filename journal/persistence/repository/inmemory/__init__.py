"""In-memory repository implementations for testing."""

from .linked_account import InMemoryLinkedAccountRepository
from .unit import InMemoryLogRepository, InMemoryUnitRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryLinkedAccountRepository",
    "InMemoryLogRepository",
    "InMemoryUnitRepository",
    "InMemoryUserRepository",
]
