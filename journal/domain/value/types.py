"""Domain value objects for the Learning Journal.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import Field, field_validator

from journal.domain.value.common import RootValueObject, ValueObject


class AuthProvider(str, Enum):
    """Supported OAuth providers."""

    GOOGLE = "google"
    GITHUB = "github"
    DISCORD = "discord"


class AuthMethod(str, Enum):
    """Ways a user can sign in: email/password or one of the OAuth providers."""

    EMAIL = "email"
    GOOGLE = "google"
    GITHUB = "github"
    DISCORD = "discord"

    @classmethod
    def from_provider(cls, provider: AuthProvider) -> "AuthMethod":
        return cls(provider.value)


class UnitStatus(str, Enum):
    """Progress of a learning unit."""

    PLANNED = "planned"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


def normalize_email(value: str) -> str:
    """Canonical form used for every email comparison and lookup."""
    return value.strip().lower()


class Email(RootValueObject[str]):
    """Normalised email address (trimmed, lower-cased)."""

    @field_validator("root")
    @classmethod
    def validate_email(cls, v: str) -> str:
        v = normalize_email(v)
        if len(v) < 3 or len(v) > 255:
            raise ValueError("Email must be 3-255 characters")
        local, sep, domain = v.rpartition("@")
        if not sep or not local or not domain:
            raise ValueError("Email must contain a local part and a domain")
        return v

    @property
    def local_part(self) -> str:
        return self.root.rpartition("@")[0]


# ---------------------------------------------------------------------------
# Raw provider payloads
# ---------------------------------------------------------------------------


class GoogleProfile(ValueObject):
    """Profile returned by Google's OpenID Connect userinfo endpoint."""

    kind: Literal["google"] = "google"
    sub: str
    name: str | None = None
    email: str | None = None
    picture: str | None = None


class GitHubProfile(ValueObject):
    """Profile returned by GitHub's /user endpoint."""

    kind: Literal["github"] = "github"
    id: int
    login: str
    name: str | None = None
    email: str | None = None
    avatar_url: str | None = None


class DiscordProfile(ValueObject):
    """Profile returned by Discord's /users/@me endpoint."""

    kind: Literal["discord"] = "discord"
    id: str
    username: str
    email: str | None = None
    avatar: str | None = None


RawProviderProfile = Annotated[
    Union[GoogleProfile, GitHubProfile, DiscordProfile],
    Field(discriminator="kind"),
]


class OAuthProfile(ValueObject):
    """Canonical identity produced from any provider profile."""

    provider: AuthProvider
    provider_account_id: str
    name: str | None = None
    email: str
    image: str | None = None
    primary_auth_method: AuthMethod
    # True when the provider withheld the email and a placeholder was synthesised
    email_is_placeholder: bool = False

    @field_validator("email")
    @classmethod
    def normalise_email(cls, v: str) -> str:
        return normalize_email(v)


class OAuthAccount(ValueObject):
    """Tokens handed back by a provider at the end of an authorization."""

    type: str = "oauth"
    access_token: str | None = None
    refresh_token: str | None = None
    token_type: str | None = None
    scope: str | None = None
    expires_at: int | None = None  # Unix seconds


class OAuthAuthorization(ValueObject):
    """Outcome of a completed provider authorization."""

    profile: RawProviderProfile
    account: OAuthAccount


# ---------------------------------------------------------------------------
# Sign-in attempts
# ---------------------------------------------------------------------------


class CredentialsAttempt(ValueObject):
    """Email/password sign-in attempt."""

    kind: Literal["credentials"] = "credentials"
    email: str = ""
    password: str = ""


class OAuthAttempt(ValueObject):
    """Provider sign-in attempt after the authorization code was exchanged."""

    kind: Literal["oauth"] = "oauth"
    profile: RawProviderProfile
    account: OAuthAccount = OAuthAccount()


SignInAttempt = Annotated[
    Union[CredentialsAttempt, OAuthAttempt],
    Field(discriminator="kind"),
]


class LearningResource(ValueObject):
    """External material referenced from a log entry."""

    title: str = Field(min_length=1, max_length=255)
    url: str | None = None

