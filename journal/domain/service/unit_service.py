"""Unit and log domain service."""

from datetime import datetime, timezone
from typing import Any, Optional

import logfire

from journal.domain.error import NotAuthorizedError, NotFoundError
from journal.domain.model import Log, Unit
from journal.domain.repository import LogRepository, UnitRepository
from journal.domain.value import LogId, UnitId, UserId


class UnitService:
    """Domain service for learning units and their logs.

    Only the owner of a unit may modify it or its logs.
    """

    def __init__(
        self, unit_repository: UnitRepository, log_repository: LogRepository
    ) -> None:
        """Initialize unit service.

        Args:
            unit_repository: Unit repository
            log_repository: Log repository
        """
        self.unit_repository = unit_repository
        self.log_repository = log_repository

    async def get_unit(self, unit_id: UnitId) -> Unit:
        """Get unit by ID.

        Raises:
            NotFoundError: If unit not found
        """
        unit = await self.unit_repository.find_by_id(unit_id)
        if unit is None:
            raise NotFoundError("Unit", str(unit_id))
        return unit

    async def get_owned_unit(self, unit_id: UnitId, user_id: UserId) -> Unit:
        """Get a unit the user owns.

        Args:
            unit_id: Unit ID
            user_id: Caller

        Returns:
            Unit entity

        Raises:
            NotFoundError: If unit not found
            NotAuthorizedError: If the caller does not own the unit
        """
        unit = await self.get_unit(unit_id)
        if unit.user_id != user_id:
            logfire.warn(
                "Unit access denied", unit_id=str(unit_id), user_id=str(user_id)
            )
            raise NotAuthorizedError("unit", str(unit_id), str(user_id))
        return unit

    async def get_visible_unit(
        self, unit_id: UnitId, viewer_id: Optional[UserId]
    ) -> Unit:
        """Get a unit as seen by a viewer.

        A unit with ``display_flag`` off is reported missing to everyone
        but its owner.

        Raises:
            NotFoundError: If unit not found or hidden from the viewer
        """
        unit = await self.get_unit(unit_id)
        if not unit.display_flag and unit.user_id != viewer_id:
            raise NotFoundError("Unit", str(unit_id))
        return unit

    async def list_units(
        self, user_id: UserId, viewer_id: Optional[UserId] = None
    ) -> list[Unit]:
        """List a user's units, newest first.

        Hidden units are only listed when the owner is the viewer.
        """
        units = await self.unit_repository.find_all_by_user_id(user_id)
        if viewer_id == user_id:
            return units
        return [unit for unit in units if unit.display_flag]

    async def create_unit(self, unit: Unit) -> Unit:
        with logfire.span("unit_service.create_unit", user_id=str(unit.user_id)):
            saved = await self.unit_repository.save(unit)
            logfire.info("Unit created", unit_id=str(saved.id))
            return saved

    async def update_unit(
        self, unit_id: UnitId, user_id: UserId, changes: dict[str, Any]
    ) -> Unit:
        """Apply field changes to a unit the user owns.

        Args:
            unit_id: Unit ID
            user_id: Caller
            changes: Field name to new value

        Returns:
            Updated unit
        """
        with logfire.span("unit_service.update_unit", unit_id=str(unit_id)):
            unit = await self.get_owned_unit(unit_id, user_id)
            updated = unit.model_copy(
                update={**changes, "updated_at": datetime.now(timezone.utc)}
            )
            # model_copy skips validation
            updated = Unit.model_validate(updated.model_dump())
            return await self.unit_repository.save(updated)

    async def delete_unit(self, unit_id: UnitId, user_id: UserId) -> int:
        """Delete a unit the user owns together with its logs.

        Returns:
            Number of logs deleted with the unit
        """
        with logfire.span("unit_service.delete_unit", unit_id=str(unit_id)):
            await self.get_owned_unit(unit_id, user_id)
            removed_logs = await self.log_repository.delete_by_unit_id(unit_id)
            await self.unit_repository.delete(unit_id)
            logfire.info(
                "Unit deleted", unit_id=str(unit_id), removed_logs=removed_logs
            )
            return removed_logs

    async def add_log(self, log: Log) -> Log:
        """Record a log against a unit the log's author owns."""
        with logfire.span("unit_service.add_log", unit_id=str(log.unit_id)):
            await self.get_owned_unit(log.unit_id, log.user_id)
            saved = await self.log_repository.save(log)
            logfire.info("Log created", log_id=str(saved.id), unit_id=str(log.unit_id))
            return saved

    async def list_logs(self, unit_id: UnitId) -> list[Log]:
        return await self.log_repository.find_all_by_unit_id(unit_id)

    async def update_log(
        self,
        unit_id: UnitId,
        log_id: LogId,
        user_id: UserId,
        changes: dict[str, Any],
    ) -> Log:
        """Replace the fields of a log on a unit the user owns.

        Raises:
            NotFoundError: If the log does not exist on that unit
            NotAuthorizedError: If the caller does not own the unit
        """
        with logfire.span("unit_service.update_log", log_id=str(log_id)):
            await self.get_owned_unit(unit_id, user_id)
            log = await self.log_repository.find_by_id(log_id)
            if log is None or log.unit_id != unit_id:
                raise NotFoundError("Log", str(log_id))
            updated = Log.model_validate(
                {
                    **log.model_dump(),
                    **changes,
                    "updated_at": datetime.now(timezone.utc),
                }
            )
            return await self.log_repository.save(updated)

    async def delete_log(self, unit_id: UnitId, log_id: LogId, user_id: UserId) -> None:
        """Delete a log from a unit the user owns.

        Raises:
            NotFoundError: If the log does not exist on that unit
            NotAuthorizedError: If the caller does not own the unit
        """
        with logfire.span("unit_service.delete_log", log_id=str(log_id)):
            await self.get_owned_unit(unit_id, user_id)
            log = await self.log_repository.find_by_id(log_id)
            if log is None or log.unit_id != unit_id:
                raise NotFoundError("Log", str(log_id))
            await self.log_repository.delete(log_id)
