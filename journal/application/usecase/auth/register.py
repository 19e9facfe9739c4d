"""Register use case."""

import logfire
from pydantic import BaseModel

from journal.application.usecase.base import BaseUseCase
from journal.application.usecase.result import Failure, Result, Success, failure_from
from journal.domain.error import DomainError
from journal.domain.service import CredentialService
from journal.domain.value import AuthMethod
from journal.util.error import StoreUnavailableError


class RegisterRequest(BaseModel):
    """Email/password registration."""

    email: str
    password: str
    name: str | None = None


class RegisterResponse(BaseModel):
    """Registered account."""

    user_id: str
    email: str
    name: str | None
    primary_auth_method: AuthMethod


class RegisterUseCase(BaseUseCase):
    """Use case for creating an email/password account."""

    def __init__(self, credential_service: CredentialService) -> None:
        """Initialize register use case.

        Args:
            credential_service: Credential domain service
        """
        self.credential_service = credential_service

    async def execute(self, request: RegisterRequest) -> Result[RegisterResponse]:
        """Register a new account.

        Returns:
            Success with the new account, or Failure with
            ``already_registered``, ``password_too_short`` or ``validation``
        """
        with logfire.span("register"):
            try:
                user = await self.credential_service.register(
                    request.email, request.password, request.name
                )
            except (DomainError, StoreUnavailableError) as e:
                failure: Failure = failure_from(e)
                logfire.info("Registration failed", code=failure.code.value)
                return failure

        return Success(
            value=RegisterResponse(
                user_id=str(user.id),
                email=user.email,
                name=user.name,
                primary_auth_method=user.primary_auth_method,
            )
        )
