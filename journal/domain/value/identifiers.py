"""Strongly typed identifiers for Learning Journal domain entities."""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
LinkedAccountId = NewType("LinkedAccountId", UUID)
UnitId = NewType("UnitId", UUID)
LogId = NewType("LogId", UUID)
