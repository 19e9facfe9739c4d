"""Learning unit and log routes."""

import logging
from datetime import datetime
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query, Request, status
from pydantic import BaseModel, Field

from journal.application.usecase.result import Failure
from journal.application.usecase.unit import (
    CreateLogUseCase,
    CreateUnitUseCase,
    DeleteLogUseCase,
    DeleteUnitUseCase,
    GetUnitUseCase,
    ListUnitsUseCase,
    UpdateLogUseCase,
    UpdateUnitUseCase,
)
from journal.application.usecase.unit.common import (
    LogResponse,
    UnitDetailResponse,
    UnitResponse,
)
from journal.application.usecase.unit.create_log import CreateLogRequest
from journal.application.usecase.unit.create_unit import CreateUnitRequest
from journal.application.usecase.unit.delete_log import (
    DeleteLogRequest,
    DeleteLogResponse,
)
from journal.application.usecase.unit.delete_unit import (
    DeleteUnitRequest,
    DeleteUnitResponse,
)
from journal.application.usecase.unit.get_unit import GetUnitRequest
from journal.application.usecase.unit.list_units import (
    ListUnitsRequest,
    ListUnitsResponse,
)
from journal.application.usecase.unit.update_log import UpdateLogRequest
from journal.application.usecase.unit.update_unit import (
    UnitChanges,
    UpdateUnitRequest,
)
from journal.config import Settings
from journal.domain.service import SessionService
from journal.domain.value import LearningResource, LogId, UnitId, UnitStatus, UserId
from journal.interface.api.session import (
    optional_user_id,
    read_session_token,
    require_user_id,
)
from journal.interface.error import http_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/units", tags=["units"], route_class=DishkaRoute)


class CreateUnitBody(BaseModel):
    """Create unit request body."""

    title: str
    learning_goal: str | None = None
    pre_learning_state: str | None = None
    reflection: str | None = None
    next_action: str | None = None
    status: UnitStatus = UnitStatus.PLANNED
    start_date: datetime | None = None
    end_date: datetime | None = None
    display_flag: bool = True
    tags: list[str] = Field(default_factory=list)


class CreateLogBody(BaseModel):
    """Log request body, used to create or replace a log."""

    title: str
    learning_time: int = 0  # Minutes
    note: str | None = None
    logged_at: datetime | None = None
    tags: list[str] = Field(default_factory=list)
    resources: list[LearningResource] = Field(default_factory=list)


@router.get("", response_model=ListUnitsResponse)
async def list_units(
    request: Request,
    use_case: FromDishka[ListUnitsUseCase],
    session_service: FromDishka[SessionService],
    settings: FromDishka[Settings],
    user_id: UUID | None = None,
    unit_status: UnitStatus | None = Query(default=None, alias="status"),
) -> ListUnitsResponse:
    """List a user's units, newest first.

    Without ``user_id`` the caller's own units are listed, which needs a
    session. Units with ``display_flag`` off are only listed for their owner.
    """
    token = read_session_token(request, settings)
    viewer_id: UserId | None
    if user_id is None:
        owner_id = require_user_id(session_service, token)
        viewer_id = owner_id
    else:
        owner_id = UserId(user_id)
        viewer_id = optional_user_id(session_service, token)

    result = await use_case.execute(
        ListUnitsRequest(user_id=owner_id, viewer_id=viewer_id, status=unit_status)
    )
    if isinstance(result, Failure):
        raise http_error(result)
    return result.value


@router.get("/{unit_id}", response_model=UnitDetailResponse)
async def get_unit(
    unit_id: UUID,
    request: Request,
    use_case: FromDishka[GetUnitUseCase],
    session_service: FromDishka[SessionService],
    settings: FromDishka[Settings],
) -> UnitDetailResponse:
    """Get a unit with its logs.

    Raises:
        InterfaceError: 404 if the unit does not exist or is hidden from
            the caller
    """
    viewer_id = optional_user_id(session_service, read_session_token(request, settings))

    result = await use_case.execute(
        GetUnitRequest(unit_id=UnitId(unit_id), viewer_id=viewer_id)
    )
    if isinstance(result, Failure):
        raise http_error(result)
    return result.value


@router.post("", response_model=UnitResponse, status_code=status.HTTP_201_CREATED)
async def create_unit(
    body: CreateUnitBody,
    request: Request,
    use_case: FromDishka[CreateUnitUseCase],
    session_service: FromDishka[SessionService],
    settings: FromDishka[Settings],
) -> UnitResponse:
    """Create a learning unit owned by the caller."""
    user_id = require_user_id(session_service, read_session_token(request, settings))

    result = await use_case.execute(
        CreateUnitRequest(user_id=user_id, **body.model_dump())
    )
    if isinstance(result, Failure):
        raise http_error(result)

    logger.info(f"User {user_id} created unit {result.value.id}")
    return result.value


@router.patch("/{unit_id}", response_model=UnitResponse)
async def update_unit(
    unit_id: UUID,
    changes: UnitChanges,
    request: Request,
    use_case: FromDishka[UpdateUnitUseCase],
    session_service: FromDishka[SessionService],
    settings: FromDishka[Settings],
) -> UnitResponse:
    """Update the given fields of a unit.

    Only fields present in the body are changed.

    Raises:
        InterfaceError: 404 if the unit does not exist, 403 if the caller
            does not own it
    """
    user_id = require_user_id(session_service, read_session_token(request, settings))

    result = await use_case.execute(
        UpdateUnitRequest(unit_id=UnitId(unit_id), user_id=user_id, changes=changes)
    )
    if isinstance(result, Failure):
        raise http_error(result)
    return result.value


@router.delete("/{unit_id}", response_model=DeleteUnitResponse)
async def delete_unit(
    unit_id: UUID,
    request: Request,
    use_case: FromDishka[DeleteUnitUseCase],
    session_service: FromDishka[SessionService],
    settings: FromDishka[Settings],
) -> DeleteUnitResponse:
    """Delete a unit together with its logs."""
    user_id = require_user_id(session_service, read_session_token(request, settings))

    result = await use_case.execute(
        DeleteUnitRequest(unit_id=UnitId(unit_id), user_id=user_id)
    )
    if isinstance(result, Failure):
        raise http_error(result)

    logger.info(
        f"User {user_id} deleted unit {unit_id} with {result.value.deleted_logs} logs"
    )
    return result.value


@router.post(
    "/{unit_id}/logs",
    response_model=LogResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_log(
    unit_id: UUID,
    body: CreateLogBody,
    request: Request,
    use_case: FromDishka[CreateLogUseCase],
    session_service: FromDishka[SessionService],
    settings: FromDishka[Settings],
) -> LogResponse:
    """Record a study session against a unit the caller owns."""
    user_id = require_user_id(session_service, read_session_token(request, settings))

    result = await use_case.execute(
        CreateLogRequest(
            unit_id=UnitId(unit_id),
            user_id=user_id,
            title=body.title,
            learning_time=body.learning_time,
            note=body.note,
            logged_at=body.logged_at,
            tags=body.tags,
            resources=body.resources,
        )
    )
    if isinstance(result, Failure):
        raise http_error(result)
    return result.value


@router.put("/{unit_id}/logs/{log_id}", response_model=LogResponse)
async def update_log(
    unit_id: UUID,
    log_id: UUID,
    body: CreateLogBody,
    request: Request,
    use_case: FromDishka[UpdateLogUseCase],
    session_service: FromDishka[SessionService],
    settings: FromDishka[Settings],
) -> LogResponse:
    """Replace a log on a unit the caller owns.

    Raises:
        InterfaceError: 404 if the log is not on that unit, 403 if the
            caller does not own the unit
    """
    user_id = require_user_id(session_service, read_session_token(request, settings))

    result = await use_case.execute(
        UpdateLogRequest(
            unit_id=UnitId(unit_id),
            log_id=LogId(log_id),
            user_id=user_id,
            **body.model_dump(),
        )
    )
    if isinstance(result, Failure):
        raise http_error(result)
    return result.value


@router.delete("/{unit_id}/logs/{log_id}", response_model=DeleteLogResponse)
async def delete_log(
    unit_id: UUID,
    log_id: UUID,
    request: Request,
    use_case: FromDishka[DeleteLogUseCase],
    session_service: FromDishka[SessionService],
    settings: FromDishka[Settings],
) -> DeleteLogResponse:
    user_id = require_user_id(session_service, read_session_token(request, settings))

    result = await use_case.execute(
        DeleteLogRequest(unit_id=UnitId(unit_id), log_id=LogId(log_id), user_id=user_id)
    )
    if isinstance(result, Failure):
        raise http_error(result)
    return result.value
