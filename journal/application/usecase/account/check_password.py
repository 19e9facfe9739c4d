"""Check password use case."""

from pydantic import BaseModel

from journal.application.usecase.account.common import (
    AuthMethodsResponse,
    build_methods_response,
)
from journal.application.usecase.base import BaseUseCase
from journal.application.usecase.result import Result, Success, failure_from
from journal.domain.error import DomainError
from journal.domain.service import AuthMethodService, UserService
from journal.domain.value import UserId
from journal.util.error import StoreUnavailableError


class CheckPasswordRequest(BaseModel):
    user_id: UserId


class CheckPasswordUseCase(BaseUseCase):
    """Use case reporting whether an account has a password and its methods."""

    def __init__(
        self, user_service: UserService, auth_method_service: AuthMethodService
    ) -> None:
        self.user_service = user_service
        self.auth_method_service = auth_method_service

    async def execute(self, request: CheckPasswordRequest) -> Result[AuthMethodsResponse]:
        try:
            user = await self.user_service.get_by_id(request.user_id)
            response = await build_methods_response(user, self.auth_method_service)
        except (DomainError, StoreUnavailableError) as e:
            return failure_from(e)

        return Success(value=response)
