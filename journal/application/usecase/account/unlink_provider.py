"""Unlink provider use case."""

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
from journal.domain.value import AuthProvider, UserId
from journal.util.error import StoreUnavailableError


class UnlinkProviderRequest(BaseModel):
    """Remove one provider from an account."""

    user_id: UserId
    provider: AuthProvider


class UnlinkProviderUseCase(BaseUseCase):
    """Use case for unlinking an OAuth provider."""

    def __init__(
        self, auth_method_service: AuthMethodService, session_service: SessionService
    ) -> None:
        self.auth_method_service = auth_method_service
        self.session_service = session_service

    async def execute(
        self, request: UnlinkProviderRequest
    ) -> Result[AuthMethodsResponse]:
        """Unlink the provider.

        Returns:
            Success with the remaining methods, or Failure with
            ``last_auth_method`` or ``provider_not_linked``
        """
        with logfire.span(
            "unlink_provider",
            user_id=str(request.user_id),
            provider=request.provider.value,
        ):
            try:
                user = await self.auth_method_service.unlink_provider(
                    request.user_id, request.provider
                )
                response = await build_methods_response(
                    user, self.auth_method_service, self.session_service
                )
            except (DomainError, StoreUnavailableError) as e:
                return failure_from(e)

        return Success(value=response)
