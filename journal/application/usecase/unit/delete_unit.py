"""Delete unit use case."""

import logfire
from pydantic import BaseModel

from journal.application.usecase.base import BaseUseCase
from journal.application.usecase.result import Result, Success, failure_from
from journal.domain.error import DomainError
from journal.domain.service import UnitService
from journal.domain.value import UnitId, UserId
from journal.util.error import StoreUnavailableError


class DeleteUnitRequest(BaseModel):
    unit_id: UnitId
    user_id: UserId


class DeleteUnitResponse(BaseModel):
    unit_id: str
    deleted_logs: int


class DeleteUnitUseCase(BaseUseCase):
    """Use case for deleting a unit together with its logs."""

    def __init__(self, unit_service: UnitService) -> None:
        self.unit_service = unit_service

    async def execute(self, request: DeleteUnitRequest) -> Result[DeleteUnitResponse]:
        with logfire.span("delete_unit", unit_id=str(request.unit_id)):
            try:
                deleted_logs = await self.unit_service.delete_unit(
                    request.unit_id, request.user_id
                )
            except (DomainError, StoreUnavailableError) as e:
                return failure_from(e)

        return Success(
            value=DeleteUnitResponse(
                unit_id=str(request.unit_id), deleted_logs=deleted_logs
            )
        )
