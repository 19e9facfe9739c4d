"""Get profile use case."""

from typing import Optional

from pydantic import BaseModel

from journal.application.usecase.base import BaseUseCase
from journal.application.usecase.result import Result, Success, failure_from
from journal.application.usecase.user.common import ProfileResponse
from journal.domain.error import DomainError
from journal.domain.service import UserService
from journal.domain.value import UserId
from journal.util.error import StoreUnavailableError


class GetProfileRequest(BaseModel):
    user_id: UserId
    viewer_id: Optional[UserId] = None


class GetProfileUseCase(BaseUseCase):
    """Use case for reading a user's profile as seen by the viewer."""

    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def execute(self, request: GetProfileRequest) -> Result[ProfileResponse]:
        try:
            user = await self.user_service.get_by_id(request.user_id)
        except (DomainError, StoreUnavailableError) as e:
            return failure_from(e)

        is_self = request.viewer_id == request.user_id
        return Success(value=ProfileResponse.from_user(user, is_self=is_self))
