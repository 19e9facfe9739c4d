"""Update profile use case."""

import logfire
from pydantic import BaseModel, Field

from journal.application.usecase.base import BaseUseCase
from journal.application.usecase.result import Failure, Result, Success, failure_from
from journal.application.usecase.user.common import ProfileResponse
from journal.domain.error import DomainError, ErrorCode
from journal.domain.service import UserService
from journal.domain.value import UserId
from journal.util.error import StoreUnavailableError


class ProfileChanges(BaseModel):
    """Profile fields to change; unset fields are left alone."""

    name: str | None = Field(default=None, max_length=255)
    image: str | None = None
    bio: str | None = None
    age: int | None = None
    age_visible: bool | None = None


class UpdateProfileRequest(BaseModel):
    user_id: UserId
    changes: ProfileChanges


class UpdateProfileUseCase(BaseUseCase):
    """Use case for editing the caller's own profile.

    Email and sign-in methods are managed by the account use cases.
    """

    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def execute(self, request: UpdateProfileRequest) -> Result[ProfileResponse]:
        """Apply the changes.

        Returns:
            Success with the updated profile, or Failure with ``not_found``
            or ``validation``
        """
        changes = request.changes.model_dump(exclude_unset=True)
        if changes.get("age_visible") is None:
            changes.pop("age_visible", None)

        with logfire.span("update_profile", user_id=str(request.user_id)):
            try:
                user = await self.user_service.update_profile(request.user_id, changes)
            except (DomainError, StoreUnavailableError) as e:
                return failure_from(e)
            except ValueError as e:
                return Failure(code=ErrorCode.VALIDATION, message=str(e))

        return Success(value=ProfileResponse.from_user(user, is_self=True))
