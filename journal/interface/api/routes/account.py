"""Account routes: password management and linked providers.

Every route requires a session. Mutations re-issue the session token so
the cookie reflects the account's new primary auth method.
"""

import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Request, Response
from pydantic import BaseModel

from journal.adapter.ratelimit.limiter import RateLimiter
from journal.application.usecase.account import (
    ChangePasswordUseCase,
    CheckPasswordUseCase,
    SetPasswordUseCase,
    UnlinkProviderUseCase,
)
from journal.application.usecase.account.change_password import ChangePasswordRequest
from journal.application.usecase.account.check_password import CheckPasswordRequest
from journal.application.usecase.account.common import AuthMethodsResponse
from journal.application.usecase.account.set_password import SetPasswordRequest
from journal.application.usecase.account.unlink_provider import UnlinkProviderRequest
from journal.application.usecase.result import Failure, Result
from journal.config import Settings
from journal.domain.service import SessionService
from journal.domain.value import AuthMethod, AuthProvider
from journal.interface.api.session import (
    enforce_rate_limit,
    read_session_token,
    require_user_id,
    set_session_cookie,
)
from journal.interface.error import http_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/account", tags=["account"], route_class=DishkaRoute)


class AuthMethodsView(BaseModel):
    """Sign-in methods of the current account."""

    user_id: str
    has_password: bool
    primary_auth_method: AuthMethod
    methods: list[AuthMethod]


class SetPasswordBody(BaseModel):
    new_password: str
    confirm_password: str | None = None


class ChangePasswordBody(BaseModel):
    """Change password request.

    ``current_password`` may be omitted when the account has no password
    yet (OAuth-only accounts adding one).
    """

    current_password: str | None = None
    new_password: str
    confirm_password: str


def _respond(
    result: Result[AuthMethodsResponse], response: Response, settings: Settings
) -> AuthMethodsView:
    if isinstance(result, Failure):
        raise http_error(result)

    methods = result.value
    if methods.token:
        set_session_cookie(response, methods.token, settings)
    return AuthMethodsView(**methods.model_dump(exclude={"token"}))


@router.get("/password", response_model=AuthMethodsView)
async def check_password(
    request: Request,
    response: Response,
    use_case: FromDishka[CheckPasswordUseCase],
    session_service: FromDishka[SessionService],
    rate_limiter: FromDishka[RateLimiter],
    settings: FromDishka[Settings],
) -> AuthMethodsView:
    """Report whether the account has a password and which methods it has."""
    user_id = require_user_id(session_service, read_session_token(request, settings))
    enforce_rate_limit(request, rate_limiter, settings, scope="account")

    result = await use_case.execute(CheckPasswordRequest(user_id=user_id))
    return _respond(result, response, settings)


@router.post("/password", response_model=AuthMethodsView)
async def set_password(
    body: SetPasswordBody,
    request: Request,
    response: Response,
    use_case: FromDishka[SetPasswordUseCase],
    session_service: FromDishka[SessionService],
    rate_limiter: FromDishka[RateLimiter],
    settings: FromDishka[Settings],
) -> AuthMethodsView:
    """Add a password to an account that has none.

    Raises:
        InterfaceError: 409 password_already_set, 400 password_mismatch
            or password_too_short
    """
    user_id = require_user_id(session_service, read_session_token(request, settings))
    enforce_rate_limit(request, rate_limiter, settings, scope="account")

    logger.info(f"Setting password for user {user_id}")
    result = await use_case.execute(
        SetPasswordRequest(
            user_id=user_id,
            new_password=body.new_password,
            confirm_password=body.confirm_password,
        )
    )
    return _respond(result, response, settings)


@router.put("/password", response_model=AuthMethodsView)
async def change_password(
    body: ChangePasswordBody,
    request: Request,
    response: Response,
    use_case: FromDishka[ChangePasswordUseCase],
    session_service: FromDishka[SessionService],
    rate_limiter: FromDishka[RateLimiter],
    settings: FromDishka[Settings],
) -> AuthMethodsView:
    """Change the account password.

    Raises:
        InterfaceError: 400 wrong_current_password, password_mismatch
            or password_too_short
    """
    user_id = require_user_id(session_service, read_session_token(request, settings))
    enforce_rate_limit(request, rate_limiter, settings, scope="account")

    logger.info(f"Changing password for user {user_id}")
    result = await use_case.execute(
        ChangePasswordRequest(
            user_id=user_id,
            current_password=body.current_password,
            new_password=body.new_password,
            confirm_password=body.confirm_password,
        )
    )
    return _respond(result, response, settings)


@router.delete("/providers/{provider}", response_model=AuthMethodsView)
async def unlink_provider(
    provider: AuthProvider,
    request: Request,
    response: Response,
    use_case: FromDishka[UnlinkProviderUseCase],
    session_service: FromDishka[SessionService],
    rate_limiter: FromDishka[RateLimiter],
    settings: FromDishka[Settings],
) -> AuthMethodsView:
    """Remove a linked provider from the account.

    Raises:
        InterfaceError: 404 provider_not_linked, 400 last_auth_method
    """
    user_id = require_user_id(session_service, read_session_token(request, settings))
    enforce_rate_limit(request, rate_limiter, settings, scope="account")

    logger.info(f"Unlinking {provider.value} from user {user_id}")
    result = await use_case.execute(
        UnlinkProviderRequest(user_id=user_id, provider=provider)
    )
    return _respond(result, response, settings)
