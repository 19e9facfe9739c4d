"""Authentication routes."""

import logging
import secrets
from urllib.parse import urlencode

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Request, Response, status
from fastapi.responses import RedirectResponse
from pydantic import BaseModel

from journal.adapter.error import ProviderError
from journal.adapter.ratelimit.limiter import RateLimiter
from journal.application.usecase.auth import (
    GetSessionUseCase,
    OAuthCallbackUseCase,
    RegisterUseCase,
    SignInUseCase,
)
from journal.application.usecase.auth.get_session import (
    GetSessionRequest,
    GetSessionResponse,
)
from journal.application.usecase.auth.oauth_callback import OAuthCallbackRequest
from journal.application.usecase.auth.register import (
    RegisterRequest,
    RegisterResponse,
)
from journal.application.usecase.result import Failure
from journal.config import Settings
from journal.domain.error import ErrorCode
from journal.domain.service import AuthService
from journal.domain.value import AuthMethod, AuthProvider, CredentialsAttempt
from journal.interface.api.session import (
    clear_session_cookie,
    enforce_rate_limit,
    read_session_token,
    set_session_cookie,
)
from journal.interface.error import InterfaceError, http_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)

OAUTH_STATE_COOKIE = "oauth_state"
OAUTH_STATE_MAX_AGE = 10 * 60


class CredentialsLoginRequest(BaseModel):
    """Email/password sign-in request."""

    email: str
    password: str


class SignedInResponse(BaseModel):
    """Signed-in user; the session token itself travels in the cookie."""

    user_id: str
    email: str
    name: str | None
    image: str | None
    primary_auth_method: AuthMethod
    user_created: bool
    account_linked: bool


class InitiateLoginRequest(BaseModel):
    """Initiate login request for an OAuth provider."""

    provider: AuthProvider


class InitiateLoginResponse(BaseModel):
    """Initiate login response."""

    authorization_url: str


class LogoutResponse(BaseModel):
    """Logout response."""

    success: bool
    message: str


class SessionStatusResponse(BaseModel):
    """Response for checking authentication status.

    Returns the current session if authenticated, or indicates the
    unauthenticated state (with the reason when a token was rejected)
    without raising an error.
    """

    authenticated: bool
    session: GetSessionResponse | None = None
    error: ErrorCode | None = None


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    body: RegisterRequest,
    request: Request,
    use_case: FromDishka[RegisterUseCase],
    rate_limiter: FromDishka[RateLimiter],
    settings: FromDishka[Settings],
) -> RegisterResponse:
    """Create an email/password account.

    Raises:
        InterfaceError: 409 already_registered, 400 password_too_short, 429
    """
    enforce_rate_limit(request, rate_limiter, settings, scope="register")

    result = await use_case.execute(body)
    if isinstance(result, Failure):
        raise http_error(result)
    return result.value


@router.post("/login/credentials", response_model=SignedInResponse)
async def login_with_credentials(
    body: CredentialsLoginRequest,
    request: Request,
    response: Response,
    use_case: FromDishka[SignInUseCase],
    rate_limiter: FromDishka[RateLimiter],
    settings: FromDishka[Settings],
) -> SignedInResponse:
    """Sign in with email and password and start a session.

    Returns:
        Signed-in user, with the session token set as an HTTP-only cookie

    Raises:
        InterfaceError: 401 invalid_credentials, or 401 no_password_set
            listing the providers the account can sign in with
    """
    enforce_rate_limit(request, rate_limiter, settings, scope="login")

    result = await use_case.execute(
        CredentialsAttempt(email=body.email, password=body.password)
    )
    if isinstance(result, Failure):
        raise http_error(result)

    signed_in = result.value
    set_session_cookie(response, signed_in.token, settings)
    return SignedInResponse(**signed_in.model_dump(exclude={"token"}))


@router.post("/login", response_model=InitiateLoginResponse)
async def initiate_login(
    body: InitiateLoginRequest,
    response: Response,
    auth_service: FromDishka[AuthService],
    settings: FromDishka[Settings],
) -> InitiateLoginResponse:
    """Initiate OAuth login flow.

    The state parameter is kept in a short-lived cookie and checked again
    on the callback.

    Examples:
        POST /auth/login
        {
            "provider": "github"
        }

        Response:
        {
            "authorization_url": "https://github.com/login/oauth/authorize?..."
        }
    """
    logger.info(f"Initiating {body.provider.value} login")

    state = secrets.token_urlsafe(32)
    try:
        auth_url = await auth_service.initiate_login(body.provider, state)
    except ProviderError as e:
        logger.error(f"Failed to initiate {body.provider.value} login: {e}")
        raise InterfaceError(
            status_code=status.HTTP_502_BAD_GATEWAY,
            code=ErrorCode.PROVIDER_ERROR,
            message="Failed to initiate login",
        )

    response.set_cookie(
        key=OAUTH_STATE_COOKIE,
        value=state,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
        path="/auth",
        max_age=OAUTH_STATE_MAX_AGE,
    )
    return InitiateLoginResponse(authorization_url=auth_url)


def _error_redirect(settings: Settings, code: ErrorCode) -> RedirectResponse:
    query = urlencode({"error": code.value})
    response = RedirectResponse(
        url=f"{settings.api.frontend_url}/auth/error?{query}",
        status_code=status.HTTP_302_FOUND,
    )
    response.delete_cookie(key=OAUTH_STATE_COOKIE, path="/auth")
    return response


@router.get("/callback/{provider}")
async def oauth_callback(
    provider: AuthProvider,
    use_case: FromDishka[OAuthCallbackUseCase],
    settings: FromDishka[Settings],
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
    oauth_state: str | None = Cookie(default=None),
) -> RedirectResponse:
    """Handle the provider's redirect back after authorization.

    Exchanges the code, merges the provider identity into an account,
    sets the session cookie and redirects to the frontend. Any failure
    redirects to the frontend error page with the failure code.
    """
    if error or not code:
        # User denied access, or the provider failed before issuing a code
        logger.warning(f"{provider.value} authorization failed: {error}")
        return _error_redirect(settings, ErrorCode.PROVIDER_ERROR)

    if not state or not oauth_state or not secrets.compare_digest(oauth_state, state):
        logger.warning(f"{provider.value} callback with mismatched state")
        return _error_redirect(settings, ErrorCode.TOKEN_INVALID)

    result = await use_case.execute(
        OAuthCallbackRequest(provider=provider, code=code, state=state)
    )
    if isinstance(result, Failure):
        logger.warning(f"{provider.value} sign-in failed: {result.code.value}")
        return _error_redirect(settings, result.code)

    logger.info(f"{provider.value} sign-in succeeded for user {result.value.user_id}")
    response = RedirectResponse(
        url=settings.api.frontend_url,
        status_code=status.HTTP_302_FOUND,
    )
    set_session_cookie(response, result.value.token, settings)
    response.delete_cookie(key=OAUTH_STATE_COOKIE, path="/auth")
    return response


@router.post("/logout", response_model=LogoutResponse)
async def logout(response: Response, settings: FromDishka[Settings]) -> LogoutResponse:
    """Logout user by clearing the session cookie."""
    clear_session_cookie(response, settings)
    return LogoutResponse(success=True, message="Logged out successfully")


@router.get("/session", response_model=SessionStatusResponse)
async def get_session(
    request: Request,
    response: Response,
    use_case: FromDishka[GetSessionUseCase],
    settings: FromDishka[Settings],
) -> SessionStatusResponse:
    """Get the current session, sliding it forward when it is stale.

    Unlike protected routes this never returns 401: a missing or rejected
    token is reported as ``authenticated: false``.
    """
    session_token = read_session_token(request, settings)
    if not session_token:
        return SessionStatusResponse(authenticated=False)

    result = await use_case.execute(GetSessionRequest(token=session_token))
    if isinstance(result, Failure):
        clear_session_cookie(response, settings)
        return SessionStatusResponse(authenticated=False, error=result.code)

    if result.value.refreshed_token:
        set_session_cookie(response, result.value.refreshed_token, settings)

    return SessionStatusResponse(
        authenticated=True,
        session=result.value.model_copy(update={"refreshed_token": None}),
    )
