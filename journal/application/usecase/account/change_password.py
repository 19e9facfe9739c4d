"""Change password use case."""

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


class ChangePasswordRequest(BaseModel):
    """Replace the account password.

    ``current_password`` may be omitted when the account has no password yet.
    """

    user_id: UserId
    current_password: str | None = None
    new_password: str
    confirm_password: str


class ChangePasswordUseCase(BaseUseCase):
    """Use case for changing the account password."""

    def __init__(
        self, auth_method_service: AuthMethodService, session_service: SessionService
    ) -> None:
        self.auth_method_service = auth_method_service
        self.session_service = session_service

    async def execute(
        self, request: ChangePasswordRequest
    ) -> Result[AuthMethodsResponse]:
        """Change the password.

        Returns:
            Success with the updated methods, or Failure with
            ``password_mismatch``, ``password_too_short`` or
            ``wrong_current_password``; the stored hash is untouched on failure
        """
        with logfire.span("change_password", user_id=str(request.user_id)):
            try:
                user = await self.auth_method_service.change_password(
                    request.user_id,
                    request.current_password,
                    request.new_password,
                    request.confirm_password,
                )
                response = await build_methods_response(
                    user, self.auth_method_service, self.session_service
                )
            except (DomainError, StoreUnavailableError) as e:
                return failure_from(e)

        return Success(value=response)
