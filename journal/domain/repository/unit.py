"""Unit and log repository interfaces."""

from abc import ABC, abstractmethod
from typing import Optional

from journal.domain.model.unit import Log, Unit
from journal.domain.value import LogId, UnitId, UserId


class UnitRepository(ABC):
    """Repository for Unit entity."""

    @abstractmethod
    async def find_by_id(self, unit_id: UnitId) -> Optional[Unit]:
        """Find a unit by ID.

        Args:
            unit_id: The unit's unique identifier

        Returns:
            The unit if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all_by_user_id(self, user_id: UserId) -> list[Unit]:
        """Get a user's units, newest first.

        Args:
            user_id: Owner of the units

        Returns:
            List of units (may be empty)
        """
        pass

    @abstractmethod
    async def save(self, unit: Unit) -> Unit:
        """Save a unit (create or update).

        Args:
            unit: The unit to save

        Returns:
            The saved unit
        """
        pass

    @abstractmethod
    async def delete(self, unit_id: UnitId) -> None:
        """Delete a unit.

        Args:
            unit_id: The unit to delete
        """
        pass


class LogRepository(ABC):
    """Repository for Log entity."""

    @abstractmethod
    async def find_by_id(self, log_id: LogId) -> Optional[Log]:
        """Find a log by ID.

        Args:
            log_id: The log's unique identifier

        Returns:
            The log if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all_by_unit_id(self, unit_id: UnitId) -> list[Log]:
        """Get the logs recorded against a unit, most recent first.

        Args:
            unit_id: The unit's unique identifier

        Returns:
            List of logs (may be empty)
        """
        pass

    @abstractmethod
    async def save(self, log: Log) -> Log:
        """Save a log (create or update).

        Args:
            log: The log to save

        Returns:
            The saved log
        """
        pass

    @abstractmethod
    async def delete(self, log_id: LogId) -> None:
        """Delete a log.

        Args:
            log_id: The log to delete
        """
        pass

    @abstractmethod
    async def delete_by_unit_id(self, unit_id: UnitId) -> int:
        """Delete every log recorded against a unit.

        Args:
            unit_id: The unit whose logs are removed

        Returns:
            Number of deleted logs
        """
        pass
