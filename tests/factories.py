"""Builders for domain objects used across tests."""

from uuid import uuid4

from journal.domain.model import LinkedAccount, Unit, User
from journal.domain.value import (
    AuthMethod,
    AuthProvider,
    LinkedAccountId,
    OAuthProfile,
    UnitId,
    UserId,
)


def make_oauth_profile(
    email: str = "ada@example.com",
    provider: AuthProvider = AuthProvider.GOOGLE,
    provider_account_id: str = "provider-account-1",
    name: str | None = "Ada Lovelace",
    image: str | None = None,
) -> OAuthProfile:
    """Build a normalised OAuth profile."""
    return OAuthProfile(
        provider=provider,
        provider_account_id=provider_account_id,
        email=email,
        name=name,
        image=image,
        primary_auth_method=AuthMethod.from_provider(provider),
    )


def make_user(
    email: str = "ada@example.com",
    hashed_password: str | None = None,
    primary_auth_method: AuthMethod = AuthMethod.EMAIL,
) -> User:
    return User(
        id=UserId(uuid4()),
        email=email,
        hashed_password=hashed_password,
        primary_auth_method=primary_auth_method,
    )


def make_link(
    user: User, provider: AuthProvider, provider_account_id: str | None = None
) -> LinkedAccount:
    return LinkedAccount(
        id=LinkedAccountId(uuid4()),
        user_id=user.id,
        provider=provider,
        provider_account_id=provider_account_id or f"{provider.value}-{user.id}",
    )


def make_unit(user_id: UserId, title: str = "Linear algebra") -> Unit:
    return Unit(id=UnitId(uuid4()), user_id=user_id, title=title)
