"""Domain model entities for the Learning Journal."""

from journal.domain.model.linked_account import LinkedAccount
from journal.domain.model.unit import Log, Unit
from journal.domain.model.user import User

__all__ = [
    "User",
    "LinkedAccount",
    "Unit",
    "Log",
]
