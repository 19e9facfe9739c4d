"""Repository interfaces for the Learning Journal domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from journal.domain.repository.linked_account import LinkedAccountRepository
from journal.domain.repository.unit import LogRepository, UnitRepository
from journal.domain.repository.user import UserRepository

__all__ = [
    "UserRepository",
    "LinkedAccountRepository",
    "UnitRepository",
    "LogRepository",
]
