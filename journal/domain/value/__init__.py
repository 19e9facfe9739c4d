"""Domain value objects for the Learning Journal."""

from journal.domain.value.identifiers import (
    LinkedAccountId,
    LogId,
    UnitId,
    UserId,
)
from journal.domain.value.types import (
    AuthMethod,
    AuthProvider,
    CredentialsAttempt,
    DiscordProfile,
    Email,
    GitHubProfile,
    GoogleProfile,
    LearningResource,
    OAuthAccount,
    OAuthAttempt,
    OAuthAuthorization,
    OAuthProfile,
    RawProviderProfile,
    SignInAttempt,
    UnitStatus,
    normalize_email,
)

__all__ = [
    # Identifiers
    "UserId",
    "LinkedAccountId",
    "UnitId",
    "LogId",
    # Types
    "AuthMethod",
    "AuthProvider",
    "CredentialsAttempt",
    "DiscordProfile",
    "Email",
    "GitHubProfile",
    "GoogleProfile",
    "LearningResource",
    "OAuthAccount",
    "OAuthAttempt",
    "OAuthAuthorization",
    "OAuthProfile",
    "RawProviderProfile",
    "SignInAttempt",
    "UnitStatus",
    "normalize_email",
]
