"""Session token domain service."""

from datetime import datetime, timedelta, timezone

import logfire

from journal.config import AuthSettings
from journal.domain.model import User
from journal.domain.value import AuthMethod
from journal.util.jwt import JWTError, SessionClaims, create_token, verify_token

from .base import Service


class SessionService(Service):
    """Issues, decodes and slides session tokens."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize session service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    @property
    def max_age(self) -> timedelta:
        return timedelta(days=self.auth_settings.session_max_age_days)

    @property
    def update_age(self) -> timedelta:
        return timedelta(hours=self.auth_settings.session_update_age_hours)

    def issue(
        self,
        user_id: str,
        primary_auth_method: AuthMethod,
        email: str,
        name: str | None = None,
        image: str | None = None,
        issued_at: datetime | None = None,
    ) -> str:
        """Issue a session token valid for ``session_max_age_days``.

        Args:
            user_id: User ID
            primary_auth_method: Method the user last signed in with
            email: User email
            name: Display name
            image: Avatar URL
            issued_at: Issue time (defaults to now)

        Returns:
            Signed token string
        """
        with logfire.span("session_service.issue", user_id=user_id):
            token = create_token(
                user_id=user_id,
                primary_auth_method=primary_auth_method.value,
                email=email,
                settings=self.auth_settings,
                name=name,
                picture=image,
                issued_at=issued_at,
            )
            logfire.info(
                "Session token issued",
                user_id=user_id,
                primary_auth_method=primary_auth_method.value,
            )
            return token

    def issue_for(self, user: User, primary_auth_method: AuthMethod | None = None) -> str:
        """Issue a session token for a user entity."""
        return self.issue(
            user_id=str(user.id),
            primary_auth_method=primary_auth_method or user.primary_auth_method,
            email=user.email,
            name=user.name,
            image=user.image,
        )

    def decode(self, token: str) -> SessionClaims:
        """Decode and verify a session token.

        Args:
            token: Token string

        Returns:
            Token claims

        Raises:
            TokenExpiredError: If the token lifetime has passed
            TokenInvalidError: If the token is malformed or tampered with
        """
        with logfire.span("session_service.decode"):
            try:
                return verify_token(token, self.auth_settings)
            except JWTError as e:
                logfire.info("Session token rejected", error=str(e))
                raise

    def refresh_if_stale(
        self, claims: SessionClaims, now: datetime | None = None
    ) -> str | None:
        """Slide a session forward once it is older than ``update_age``.

        Args:
            claims: Claims of a token that already verified
            now: Current time (defaults to now)

        Returns:
            A replacement token, or None when the session is still fresh
        """
        now = now or datetime.now(timezone.utc)
        issued_at = datetime.fromtimestamp(claims.iat, tz=timezone.utc)
        if now - issued_at < self.update_age:
            return None

        logfire.info("Session token refreshed", user_id=claims.user_id)
        return self.issue(
            user_id=claims.user_id,
            primary_auth_method=AuthMethod(claims.primary_auth_method),
            email=claims.email,
            name=claims.name,
            image=claims.picture,
            issued_at=now,
        )

    def get_user_id_from_token(self, token: str | None) -> str | None:
        """Extract the user ID from a token without raising.

        Args:
            token: Token string (optional)

        Returns:
            User ID if the token verifies, None otherwise
        """
        if not token:
            return None
        try:
            return self.decode(token).user_id
        except JWTError as e:
            logfire.debug("Token rejected, treating as unauthenticated", error=str(e))
            return None
