"""Create unit use case."""

from datetime import datetime
from uuid import uuid4

import logfire
from pydantic import BaseModel

from journal.application.usecase.base import BaseUseCase
from journal.application.usecase.result import Failure, Result, Success, failure_from
from journal.application.usecase.unit.common import UnitResponse
from journal.domain.error import DomainError, ErrorCode
from journal.domain.model import Unit
from journal.domain.service import UnitService
from journal.domain.value import UnitId, UnitStatus, UserId
from journal.util.error import StoreUnavailableError


class CreateUnitRequest(BaseModel):
    """Create unit request."""

    user_id: UserId
    title: str
    learning_goal: str | None = None
    pre_learning_state: str | None = None
    reflection: str | None = None
    next_action: str | None = None
    status: UnitStatus = UnitStatus.PLANNED
    start_date: datetime | None = None
    end_date: datetime | None = None
    display_flag: bool = True
    tags: list[str] = []


class CreateUnitUseCase(BaseUseCase):
    """Use case for creating a learning unit."""

    def __init__(self, unit_service: UnitService) -> None:
        """Initialize create unit use case.

        Args:
            unit_service: Unit domain service
        """
        self.unit_service = unit_service

    async def execute(self, request: CreateUnitRequest) -> Result[UnitResponse]:
        try:
            unit = Unit(id=UnitId(uuid4()), **request.model_dump())
        except ValueError as e:
            return Failure(code=ErrorCode.VALIDATION, message=str(e))

        with logfire.span("create_unit", user_id=str(request.user_id)):
            try:
                saved = await self.unit_service.create_unit(unit)
            except (DomainError, StoreUnavailableError) as e:
                return failure_from(e)

        return Success(value=UnitResponse.from_unit(saved))
