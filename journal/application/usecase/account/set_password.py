"""Set password use case."""

import logfire
from pydantic import BaseModel

from journal.application.usecase.account.common import (
    AuthMethodsResponse,
    build_methods_response,
)
from journal.application.usecase.base import BaseUseCase
from journal.application.usecase.result import Result, Success, failure_from
from journal.domain.error import DomainError
from journal.domain.service import AuthMethodService, SessionService
from journal.domain.value import UserId
from journal.util.error import StoreUnavailableError


class SetPasswordRequest(BaseModel):
    """Add a password to an OAuth-only account."""

    user_id: UserId
    new_password: str
    confirm_password: str | None = None


class SetPasswordUseCase(BaseUseCase):
    """Use case for adding email/password sign-in to an account."""

    def __init__(
        self, auth_method_service: AuthMethodService, session_service: SessionService
    ) -> None:
        self.auth_method_service = auth_method_service
        self.session_service = session_service

    async def execute(self, request: SetPasswordRequest) -> Result[AuthMethodsResponse]:
        """Set the password.

        Returns:
            Success with the updated methods, or Failure with
            ``password_mismatch``, ``password_too_short`` or
            ``password_already_set``
        """
        with logfire.span("set_password", user_id=str(request.user_id)):
            try:
                user = await self.auth_method_service.set_password(
                    request.user_id, request.new_password, request.confirm_password
                )
                response = await build_methods_response(
                    user, self.auth_method_service, self.session_service
                )
            except (DomainError, StoreUnavailableError) as e:
                return failure_from(e)

        return Success(value=response)
