"""Get unit use case."""

from typing import Optional

import logfire
from pydantic import BaseModel

from journal.application.usecase.base import BaseUseCase
from journal.application.usecase.result import Result, Success, failure_from
from journal.application.usecase.unit.common import UnitDetailResponse
from journal.domain.error import DomainError
from journal.domain.service import UnitService
from journal.domain.value import UnitId, UserId
from journal.util.error import StoreUnavailableError


class GetUnitRequest(BaseModel):
    """Get unit request."""

    unit_id: UnitId
    viewer_id: Optional[UserId] = None  # None for anonymous callers


class GetUnitUseCase(BaseUseCase):
    """Use case for reading a unit with its logs."""

    def __init__(self, unit_service: UnitService) -> None:
        self.unit_service = unit_service

    async def execute(self, request: GetUnitRequest) -> Result[UnitDetailResponse]:
        """Load the unit and its logs.

        Returns:
            Success with the unit detail, or Failure with ``not_found`` when
            the unit is missing or hidden from the viewer
        """
        with logfire.span("get_unit", unit_id=str(request.unit_id)):
            try:
                unit = await self.unit_service.get_visible_unit(
                    request.unit_id, request.viewer_id
                )
                logs = await self.unit_service.list_logs(unit.id)
            except (DomainError, StoreUnavailableError) as e:
                return failure_from(e)

        return Success(value=UnitDetailResponse.from_unit_and_logs(unit, logs))
