"""JWT token utilities."""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel

from journal.config import AuthSettings


class SessionClaims(BaseModel):
    """Session token payload."""

    user_id: str
    primary_auth_method: str
    name: str | None = None
    email: str
    picture: str | None = None
    iat: int
    exp: int


class JWTError(Exception):
    """JWT-related error."""

    pass


class TokenExpiredError(JWTError):
    """Token signature is valid but its lifetime has passed."""

    def __init__(self) -> None:
        super().__init__("Token has expired")


class TokenInvalidError(JWTError):
    """Token is malformed, tampered with, or signed with another key."""

    def __init__(self) -> None:
        super().__init__("Invalid token")


def create_token(
    user_id: str,
    primary_auth_method: str,
    email: str,
    settings: AuthSettings,
    name: str | None = None,
    picture: str | None = None,
    issued_at: datetime | None = None,
) -> str:
    """Create a signed session token.

    Args:
        user_id: User ID
        primary_auth_method: Method the user last signed in with
        email: User email
        settings: Authentication settings
        name: Display name
        picture: Avatar URL
        issued_at: Issue time (defaults to now)

    Returns:
        Encoded JWT token
    """
    issued = issued_at or datetime.now(timezone.utc)
    iat = int(issued.timestamp())
    exp = iat + int(timedelta(days=settings.session_max_age_days).total_seconds())

    payload = {
        "user_id": user_id,
        "primary_auth_method": primary_auth_method,
        "name": name,
        "email": email,
        "picture": picture,
        "iat": iat,
        "exp": exp,
    }

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> SessionClaims:
    """Verify and decode a session token.

    Args:
        token: JWT token to verify
        settings: Authentication settings

    Returns:
        Token claims if valid

    Raises:
        TokenExpiredError: If the token lifetime has passed
        TokenInvalidError: If the token is malformed or the signature is wrong
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "iat"]},
        )
    except jwt.ExpiredSignatureError:
        raise TokenExpiredError()
    except jwt.InvalidTokenError:
        raise TokenInvalidError()

    try:
        return SessionClaims(**payload)
    except ValueError:
        raise TokenInvalidError()
