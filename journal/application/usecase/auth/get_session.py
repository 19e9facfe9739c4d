"""Get session use case."""

from pydantic import BaseModel

from journal.application.usecase.base import BaseUseCase
from journal.application.usecase.result import Result, Success, failure_from
from journal.domain.service import SessionService
from journal.domain.value import AuthMethod
from journal.util.jwt import JWTError


class GetSessionRequest(BaseModel):
    """Get session request."""

    token: str


class GetSessionResponse(BaseModel):
    """Current session.

    ``refreshed_token`` is set when the session slid forward and the cookie
    has to be replaced.
    """

    user_id: str
    email: str
    name: str | None
    image: str | None
    primary_auth_method: AuthMethod
    issued_at: int
    expires_at: int
    refreshed_token: str | None = None


class GetSessionUseCase(BaseUseCase):
    """Use case for reading and sliding the current session."""

    def __init__(self, session_service: SessionService) -> None:
        """Initialize get session use case.

        Args:
            session_service: Session token service
        """
        self.session_service = session_service

    async def execute(self, request: GetSessionRequest) -> Result[GetSessionResponse]:
        """Decode the session token.

        Returns:
            Success with the session claims, or Failure with
            ``token_expired`` or ``token_invalid``
        """
        try:
            claims = self.session_service.decode(request.token)
        except JWTError as e:
            return failure_from(e)

        refreshed = self.session_service.refresh_if_stale(claims)
        if refreshed is not None:
            claims = self.session_service.decode(refreshed)

        return Success(
            value=GetSessionResponse(
                user_id=claims.user_id,
                email=claims.email,
                name=claims.name,
                image=claims.picture,
                primary_auth_method=AuthMethod(claims.primary_auth_method),
                issued_at=claims.iat,
                expires_at=claims.exp,
                refreshed_token=refreshed,
            )
        )
