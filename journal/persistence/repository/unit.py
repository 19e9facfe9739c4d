"""PostgreSQL implementations of Unit and Log repositories."""

from typing import Optional

from sqlalchemy import select

from journal.domain.model import Log, Unit
from journal.domain.repository import LogRepository, UnitRepository
from journal.domain.value import LogId, UnitId, UserId
from journal.persistence.mappers import log_to_dict, row_to_log, row_to_unit, unit_to_dict
from journal.persistence.repository.base import PostgresRepository
from journal.persistence.tables import logs_table, units_table


class PostgresUnitRepository(PostgresRepository, UnitRepository):
    """PostgreSQL implementation of UnitRepository."""

    async def find_by_id(self, unit_id: UnitId) -> Optional[Unit]:
        stmt = select(units_table).where(units_table.c.id == unit_id)
        result = await self._execute(stmt)
        row = result.mappings().first()
        return row_to_unit(dict(row)) if row else None

    async def find_all_by_user_id(self, user_id: UserId) -> list[Unit]:
        stmt = (
            select(units_table)
            .where(units_table.c.user_id == user_id)
            .order_by(units_table.c.created_at.desc())
        )
        result = await self._execute(stmt)
        return [row_to_unit(dict(row)) for row in result.mappings().all()]

    async def save(self, unit: Unit) -> Unit:
        """Save a unit (create or update).

        Args:
            unit: Unit to save

        Returns:
            Saved unit
        """
        existing = await self.find_by_id(unit.id)
        unit_dict = unit_to_dict(unit)

        if existing:
            stmt = (
                units_table.update()
                .where(units_table.c.id == unit.id)
                .values(**unit_dict)
            )
        else:
            stmt = units_table.insert().values(**unit_dict)

        await self._write(stmt, "unit")
        return unit

    async def delete(self, unit_id: UnitId) -> None:
        stmt = units_table.delete().where(units_table.c.id == unit_id)
        await self._execute(stmt)
        await self.session.flush()


class PostgresLogRepository(PostgresRepository, LogRepository):
    """PostgreSQL implementation of LogRepository."""

    async def find_by_id(self, log_id: LogId) -> Optional[Log]:
        stmt = select(logs_table).where(logs_table.c.id == log_id)
        result = await self._execute(stmt)
        row = result.mappings().first()
        return row_to_log(dict(row)) if row else None

    async def find_all_by_unit_id(self, unit_id: UnitId) -> list[Log]:
        stmt = (
            select(logs_table)
            .where(logs_table.c.unit_id == unit_id)
            .order_by(logs_table.c.logged_at.desc())
        )
        result = await self._execute(stmt)
        return [row_to_log(dict(row)) for row in result.mappings().all()]

    async def save(self, log: Log) -> Log:
        existing = await self.find_by_id(log.id)
        log_dict = log_to_dict(log)

        if existing:
            stmt = logs_table.update().where(logs_table.c.id == log.id).values(**log_dict)
        else:
            stmt = logs_table.insert().values(**log_dict)

        await self._write(stmt, "log")
        return log

    async def delete(self, log_id: LogId) -> None:
        stmt = logs_table.delete().where(logs_table.c.id == log_id)
        await self._execute(stmt)
        await self.session.flush()

    async def delete_by_unit_id(self, unit_id: UnitId) -> int:
        """Delete all logs of a unit.

        Returns:
            Number of deleted rows
        """
        stmt = logs_table.delete().where(logs_table.c.unit_id == unit_id)
        result = await self._execute(stmt)
        await self.session.flush()
        return result.rowcount
