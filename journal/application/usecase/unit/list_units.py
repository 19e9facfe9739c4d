"""List units use case."""

from typing import Optional

from pydantic import BaseModel

from journal.application.usecase.base import BaseUseCase
from journal.application.usecase.result import Result, Success, failure_from
from journal.application.usecase.unit.common import UnitResponse
from journal.domain.error import DomainError
from journal.domain.service import UnitService
from journal.domain.value import UnitStatus, UserId
from journal.util.error import StoreUnavailableError


class ListUnitsRequest(BaseModel):
    """List units request."""

    user_id: UserId  # Owner whose units are listed
    viewer_id: Optional[UserId] = None
    status: Optional[UnitStatus] = None


class ListUnitsResponse(BaseModel):
    units: list[UnitResponse]
    total: int


class ListUnitsUseCase(BaseUseCase):
    """Use case for listing a user's units.

    Owners see all of their units; everyone else only sees displayed ones.
    """

    def __init__(self, unit_service: UnitService) -> None:
        self.unit_service = unit_service

    async def execute(self, request: ListUnitsRequest) -> Result[ListUnitsResponse]:
        try:
            units = await self.unit_service.list_units(
                request.user_id, request.viewer_id
            )
        except (DomainError, StoreUnavailableError) as e:
            return failure_from(e)

        if request.status is not None:
            units = [unit for unit in units if unit.status == request.status]

        return Success(
            value=ListUnitsResponse(
                units=[UnitResponse.from_unit(unit) for unit in units],
                total=len(units),
            )
        )
