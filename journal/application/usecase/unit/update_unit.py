"""Update unit use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel

from journal.application.usecase.base import BaseUseCase
from journal.application.usecase.result import Failure, Result, Success, failure_from
from journal.application.usecase.unit.common import UnitResponse
from journal.domain.error import DomainError, ErrorCode
from journal.domain.service import UnitService
from journal.domain.value import UnitId, UnitStatus, UserId
from journal.util.error import StoreUnavailableError


class UnitChanges(BaseModel):
    """Fields to change; unset fields are left alone."""

    title: str | None = None
    learning_goal: str | None = None
    pre_learning_state: str | None = None
    reflection: str | None = None
    next_action: str | None = None
    status: UnitStatus | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    display_flag: bool | None = None
    tags: list[str] | None = None


class UpdateUnitRequest(BaseModel):
    """Update unit request."""

    unit_id: UnitId
    user_id: UserId  # Caller, must own the unit
    changes: UnitChanges


class UpdateUnitUseCase(BaseUseCase):
    """Use case for editing a unit the caller owns."""

    def __init__(self, unit_service: UnitService) -> None:
        self.unit_service = unit_service

    async def execute(self, request: UpdateUnitRequest) -> Result[UnitResponse]:
        """Apply the changes.

        Returns:
            Success with the updated unit, or Failure with ``not_found``,
            ``not_authorized`` or ``validation``
        """
        changes = request.changes.model_dump(exclude_unset=True)

        with logfire.span("update_unit", unit_id=str(request.unit_id)):
            try:
                unit = await self.unit_service.update_unit(
                    request.unit_id, request.user_id, changes
                )
            except (DomainError, StoreUnavailableError) as e:
                return failure_from(e)
            except ValueError as e:
                return Failure(code=ErrorCode.VALIDATION, message=str(e))

        return Success(value=UnitResponse.from_unit(unit))
