"""OAuth callback use case."""

import logfire
from pydantic import BaseModel

from journal.adapter.error import ProviderError
from journal.application.usecase.auth.sign_in import SignInResponse, SignInUseCase
from journal.application.usecase.base import BaseUseCase
from journal.application.usecase.result import Failure, Result
from journal.domain.error import ErrorCode
from journal.domain.service import AuthService
from journal.domain.value import AuthProvider, OAuthAttempt


class OAuthCallbackRequest(BaseModel):
    """Login request from OAuth callback.

    These parameters come from the OAuth provider in the callback URL.
    """

    provider: AuthProvider
    code: str  # OAuth authorization code
    state: str  # State parameter, already checked against the login cookie


class OAuthCallbackUseCase(BaseUseCase):
    """Use case completing a provider authorization and signing the user in."""

    def __init__(self, auth_service: AuthService, sign_in: SignInUseCase) -> None:
        """Initialize OAuth callback use case.

        Args:
            auth_service: Multi-provider OAuth service
            sign_in: Sign-in pipeline the normalised profile is fed into
        """
        self.auth_service = auth_service
        self.sign_in = sign_in

    async def execute(self, request: OAuthCallbackRequest) -> Result[SignInResponse]:
        """Exchange the code and sign the user in.

        Returns:
            Sign-in result, or Failure with ``provider_error`` when the
            provider exchange fails
        """
        with logfire.span("oauth_callback", provider=request.provider.value):
            try:
                authorization = await self.auth_service.complete_login(
                    request.provider, request.code, request.state
                )
            except ProviderError as e:
                logfire.error(
                    "OAuth exchange failed",
                    provider=request.provider.value,
                    error=str(e),
                )
                return Failure(
                    code=ErrorCode.PROVIDER_ERROR,
                    message=f"Sign-in with {request.provider.value} failed",
                )

            return await self.sign_in.execute(
                OAuthAttempt(
                    profile=authorization.profile, account=authorization.account
                )
            )
