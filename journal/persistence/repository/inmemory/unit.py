"""In-memory unit and log repositories for testing."""

from typing import Optional

from journal.domain.model import Log, Unit
from journal.domain.repository import LogRepository, UnitRepository
from journal.domain.value import LogId, UnitId, UserId


class InMemoryUnitRepository(UnitRepository):
    """In-memory implementation of UnitRepository for testing."""

    def __init__(self) -> None:
        self._units: dict[UnitId, Unit] = {}

    async def find_by_id(self, unit_id: UnitId) -> Optional[Unit]:
        return self._units.get(unit_id)

    async def find_all_by_user_id(self, user_id: UserId) -> list[Unit]:
        units = [u for u in self._units.values() if u.user_id == user_id]
        units.sort(key=lambda u: u.created_at, reverse=True)
        return units

    async def save(self, unit: Unit) -> Unit:
        self._units[unit.id] = unit
        return unit

    async def delete(self, unit_id: UnitId) -> None:
        self._units.pop(unit_id, None)


class InMemoryLogRepository(LogRepository):
    """In-memory implementation of LogRepository for testing."""

    def __init__(self) -> None:
        self._logs: dict[LogId, Log] = {}

    async def find_by_id(self, log_id: LogId) -> Optional[Log]:
        return self._logs.get(log_id)

    async def find_all_by_unit_id(self, unit_id: UnitId) -> list[Log]:
        logs = [log for log in self._logs.values() if log.unit_id == unit_id]
        logs.sort(key=lambda log: log.logged_at, reverse=True)
        return logs

    async def save(self, log: Log) -> Log:
        self._logs[log.id] = log
        return log

    async def delete(self, log_id: LogId) -> None:
        self._logs.pop(log_id, None)

    async def delete_by_unit_id(self, unit_id: UnitId) -> int:
        doomed = [log_id for log_id, log in self._logs.items() if log.unit_id == unit_id]
        for log_id in doomed:
            del self._logs[log_id]
        return len(doomed)
