"""Delete log use case."""

from pydantic import BaseModel

from journal.application.usecase.base import BaseUseCase
from journal.application.usecase.result import Result, Success, failure_from
from journal.domain.error import DomainError
from journal.domain.service import UnitService
from journal.domain.value import LogId, UnitId, UserId
from journal.util.error import StoreUnavailableError


class DeleteLogRequest(BaseModel):
    unit_id: UnitId
    log_id: LogId
    user_id: UserId


class DeleteLogResponse(BaseModel):
    log_id: str


class DeleteLogUseCase(BaseUseCase):
    """Use case for deleting a log from a unit the caller owns."""

    def __init__(self, unit_service: UnitService) -> None:
        self.unit_service = unit_service

    async def execute(self, request: DeleteLogRequest) -> Result[DeleteLogResponse]:
        try:
            await self.unit_service.delete_log(
                request.unit_id, request.log_id, request.user_id
            )
        except (DomainError, StoreUnavailableError) as e:
            return failure_from(e)

        return Success(value=DeleteLogResponse(log_id=str(request.log_id)))
