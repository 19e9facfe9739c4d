"""User profile routes."""

import logging
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Request

from journal.application.usecase.result import Failure
from journal.application.usecase.user import GetProfileUseCase, UpdateProfileUseCase
from journal.application.usecase.user.common import ProfileResponse
from journal.application.usecase.user.get_profile import GetProfileRequest
from journal.application.usecase.user.update_profile import (
    ProfileChanges,
    UpdateProfileRequest,
)
from journal.config import Settings
from journal.domain.service import SessionService
from journal.domain.value import UserId
from journal.interface.api.session import (
    optional_user_id,
    read_session_token,
    require_user_id,
)
from journal.interface.error import http_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(
    request: Request,
    use_case: FromDishka[GetProfileUseCase],
    session_service: FromDishka[SessionService],
    settings: FromDishka[Settings],
) -> ProfileResponse:
    user_id = require_user_id(session_service, read_session_token(request, settings))

    result = await use_case.execute(GetProfileRequest(user_id=user_id, viewer_id=user_id))
    if isinstance(result, Failure):
        raise http_error(result)
    return result.value


@router.put("/me", response_model=ProfileResponse)
async def update_my_profile(
    changes: ProfileChanges,
    request: Request,
    use_case: FromDishka[UpdateProfileUseCase],
    session_service: FromDishka[SessionService],
    settings: FromDishka[Settings],
) -> ProfileResponse:
    """Update the caller's profile.

    Only fields present in the body are changed.

    Raises:
        InterfaceError: 400 validation when a field is out of range
    """
    user_id = require_user_id(session_service, read_session_token(request, settings))

    result = await use_case.execute(
        UpdateProfileRequest(user_id=user_id, changes=changes)
    )
    if isinstance(result, Failure):
        raise http_error(result)

    logger.info(f"User {user_id} updated their profile")
    return result.value


@router.get("/{user_id}", response_model=ProfileResponse)
async def get_profile(
    user_id: UUID,
    request: Request,
    use_case: FromDishka[GetProfileUseCase],
    session_service: FromDishka[SessionService],
    settings: FromDishka[Settings],
) -> ProfileResponse:
    """Public profile of a user.

    Email and sign-in method are left out, and age too unless the user
    made it visible.
    """
    viewer_id = optional_user_id(session_service, read_session_token(request, settings))

    result = await use_case.execute(
        GetProfileRequest(user_id=UserId(user_id), viewer_id=viewer_id)
    )
    if isinstance(result, Failure):
        raise http_error(result)
    return result.value
