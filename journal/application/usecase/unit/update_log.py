"""Update log use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel, Field

from journal.application.usecase.base import BaseUseCase
from journal.application.usecase.result import Failure, Result, Success, failure_from
from journal.application.usecase.unit.common import LogResponse
from journal.domain.error import DomainError, ErrorCode
from journal.domain.service import UnitService
from journal.domain.value import LearningResource, LogId, UnitId, UserId
from journal.util.error import StoreUnavailableError


class UpdateLogRequest(BaseModel):
    """Update log request.

    Replaces every editable field of the log. A missing ``logged_at``
    keeps the recorded time.
    """

    unit_id: UnitId
    log_id: LogId
    user_id: UserId  # Caller, must own the unit
    title: str
    learning_time: int = 0  # Minutes
    note: str | None = None
    logged_at: datetime | None = None
    tags: list[str] = Field(default_factory=list)
    resources: list[LearningResource] = Field(default_factory=list)


class UpdateLogUseCase(BaseUseCase):
    """Use case for rewriting a log on a unit the caller owns."""

    def __init__(self, unit_service: UnitService) -> None:
        self.unit_service = unit_service

    async def execute(self, request: UpdateLogRequest) -> Result[LogResponse]:
        """Replace the log's fields.

        Returns:
            Success with the updated log, or Failure with ``not_found``,
            ``not_authorized`` or ``validation``
        """
        changes = request.model_dump(
            include={"title", "learning_time", "note", "tags", "resources"}
        )
        if request.logged_at is not None:
            changes["logged_at"] = request.logged_at

        with logfire.span("update_log", log_id=str(request.log_id)):
            try:
                log = await self.unit_service.update_log(
                    request.unit_id, request.log_id, request.user_id, changes
                )
            except (DomainError, StoreUnavailableError) as e:
                return failure_from(e)
            except ValueError as e:
                return Failure(code=ErrorCode.VALIDATION, message=str(e))

        return Success(value=LogResponse.from_log(log))
