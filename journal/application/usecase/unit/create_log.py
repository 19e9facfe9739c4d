"""Create log use case."""

from datetime import datetime, timezone
from uuid import uuid4

import logfire
from pydantic import BaseModel, Field

from journal.application.usecase.base import BaseUseCase
from journal.application.usecase.result import Failure, Result, Success, failure_from
from journal.application.usecase.unit.common import LogResponse
from journal.domain.error import DomainError, ErrorCode
from journal.domain.model import Log
from journal.domain.service import UnitService
from journal.domain.value import LearningResource, LogId, UnitId, UserId
from journal.util.error import StoreUnavailableError


class CreateLogRequest(BaseModel):
    """Create log request."""

    unit_id: UnitId
    user_id: UserId
    title: str
    learning_time: int = 0  # Minutes
    note: str | None = None
    logged_at: datetime | None = None
    tags: list[str] = Field(default_factory=list)
    resources: list[LearningResource] = Field(default_factory=list)


class CreateLogUseCase(BaseUseCase):
    """Use case for recording a study session against a unit."""

    def __init__(self, unit_service: UnitService) -> None:
        self.unit_service = unit_service

    async def execute(self, request: CreateLogRequest) -> Result[LogResponse]:
        """Record the log.

        Returns:
            Success with the created log, or Failure with ``not_found``,
            ``not_authorized`` or ``validation``
        """
        data = request.model_dump(exclude={"logged_at", "resources"})
        try:
            log = Log(
                id=LogId(uuid4()),
                logged_at=request.logged_at or datetime.now(timezone.utc),
                resources=request.resources,
                **data,
            )
        except ValueError as e:
            return Failure(code=ErrorCode.VALIDATION, message=str(e))

        with logfire.span("create_log", unit_id=str(request.unit_id)):
            try:
                saved = await self.unit_service.add_log(log)
            except (DomainError, StoreUnavailableError) as e:
                return failure_from(e)

        return Success(value=LogResponse.from_log(saved))
