"""Request helpers shared by routes: caller address, rate limits and the
session cookie."""

import logging
from uuid import UUID

from fastapi import Request, Response

from journal.adapter.ratelimit.limiter import RateLimiter
from journal.config import Settings
from journal.domain.service import SessionService
from journal.domain.value import UserId
from journal.interface.error import authentication_required, rate_limited

logger = logging.getLogger(__name__)


def get_client_ip(request: Request) -> str:
    """Get the real client IP address, handling proxies.

    Checks X-Forwarded-For and X-Real-IP headers before falling back
    to the direct client address.
    """
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        # client, proxy1, proxy2: the first one is the original client
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip.strip()

    return request.client.host if request.client else "unknown"


def enforce_rate_limit(
    request: Request, rate_limiter: RateLimiter, settings: Settings, scope: str
) -> None:
    """Consume one request from the caller's budget.

    Raises:
        InterfaceError: 429 once the budget for the window is spent
    """
    if not settings.rate_limit.enabled:
        return
    client_ip = get_client_ip(request)
    if not rate_limiter.consume(client_ip, scope):
        logger.warning(f"Rate limit exceeded: scope={scope}, client={client_ip}")
        raise rate_limited()


def require_user_id(session_service: SessionService, token: str | None) -> UserId:
    """Resolve the caller from the session cookie.

    Raises:
        InterfaceError: 401 when the token is missing, expired or invalid
    """
    user_id = optional_user_id(session_service, token)
    if user_id is None:
        raise authentication_required()
    return user_id


def optional_user_id(
    session_service: SessionService, token: str | None
) -> UserId | None:
    """Resolve the caller if a valid session cookie is present."""
    user_id = session_service.get_user_id_from_token(token)
    if not user_id:
        return None
    try:
        return UserId(UUID(user_id))
    except ValueError:
        return None


def set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    """Attach the session token as an HTTP-only cookie.

    Production (cross-site frontend): samesite="none" with secure=True.
    Development (same-origin): samesite="lax" over plain HTTP.
    """
    is_production = settings.is_production
    response.set_cookie(
        key=settings.auth.cookie_name,
        value=token,
        httponly=True,
        secure=is_production,
        samesite="none" if is_production else "lax",
        domain=settings.auth.cookie_domain,
        path="/",
        max_age=settings.auth.session_max_age_days * 24 * 60 * 60,
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    # Same domain/path as when it was created
    response.delete_cookie(
        key=settings.auth.cookie_name,
        domain=settings.auth.cookie_domain,
        path="/",
    )


def read_session_token(request: Request, settings: Settings) -> str | None:
    return request.cookies.get(settings.auth.cookie_name)
