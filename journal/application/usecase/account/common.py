"""Shared account-management response."""

from pydantic import BaseModel

from journal.domain.model import User
from journal.domain.service import AuthMethodService, SessionService
from journal.domain.value import AuthMethod


class AuthMethodsResponse(BaseModel):
    """Sign-in methods of an account after a change.

    ``token`` is a fresh session token carrying the new primary method.
    """

    user_id: str
    has_password: bool
    primary_auth_method: AuthMethod
    methods: list[AuthMethod]
    token: str | None = None


async def build_methods_response(
    user: User,
    auth_method_service: AuthMethodService,
    session_service: SessionService | None = None,
) -> AuthMethodsResponse:
    methods = await auth_method_service.list_methods(user.id)
    return AuthMethodsResponse(
        user_id=str(user.id),
        has_password=user.has_password,
        primary_auth_method=user.primary_auth_method,
        methods=methods,
        token=session_service.issue_for(user) if session_service else None,
    )
