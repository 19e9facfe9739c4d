"""OAuth profile normalisation.

Every provider returns its own profile shape. Each variant has exactly one
normalisation function; dispatch happens on the ``kind`` discriminator.
"""

from typing import Callable

from journal.domain.error import ProfileIncompleteError
from journal.domain.value import (
    AuthMethod,
    AuthProvider,
    DiscordProfile,
    GitHubProfile,
    GoogleProfile,
    OAuthProfile,
    RawProviderProfile,
    normalize_email,
)

DISCORD_AVATAR_URL = "https://cdn.discordapp.com/avatars/{id}/{avatar}.png"
GITHUB_PLACEHOLDER_DOMAIN = "github.com"


def _require_email(provider: AuthProvider, email: str | None) -> str:
    if not email or not email.strip():
        raise ProfileIncompleteError(provider.value)
    return normalize_email(email)


def normalize_google(profile: GoogleProfile) -> OAuthProfile:
    return OAuthProfile(
        provider=AuthProvider.GOOGLE,
        provider_account_id=profile.sub,
        name=profile.name,
        email=_require_email(AuthProvider.GOOGLE, profile.email),
        image=profile.picture,
        primary_auth_method=AuthMethod.GOOGLE,
    )


def normalize_github(profile: GitHubProfile) -> OAuthProfile:
    """GitHub may withhold the email; a ``{login}@github.com`` placeholder stands in.

    The placeholder is not a real mailbox and is flagged on the result.
    """
    placeholder = not (profile.email and profile.email.strip())
    email = (
        f"{profile.login}@{GITHUB_PLACEHOLDER_DOMAIN}" if placeholder else profile.email
    )
    return OAuthProfile(
        provider=AuthProvider.GITHUB,
        provider_account_id=str(profile.id),
        name=profile.name or profile.login,
        email=normalize_email(email),
        image=profile.avatar_url,
        primary_auth_method=AuthMethod.GITHUB,
        email_is_placeholder=placeholder,
    )


def normalize_discord(profile: DiscordProfile) -> OAuthProfile:
    image = (
        DISCORD_AVATAR_URL.format(id=profile.id, avatar=profile.avatar)
        if profile.avatar
        else None
    )
    return OAuthProfile(
        provider=AuthProvider.DISCORD,
        provider_account_id=profile.id,
        name=profile.username,
        email=_require_email(AuthProvider.DISCORD, profile.email),
        image=image,
        primary_auth_method=AuthMethod.DISCORD,
    )


_NORMALIZERS: dict[str, Callable[..., OAuthProfile]] = {
    "google": normalize_google,
    "github": normalize_github,
    "discord": normalize_discord,
}


class ProfileNormalizer:
    """Maps raw provider profiles to the canonical OAuthProfile."""

    def normalize(self, raw: RawProviderProfile) -> OAuthProfile:
        """Normalise a raw provider profile.

        Args:
            raw: Provider payload tagged with its ``kind``

        Returns:
            Canonical profile with ``primary_auth_method`` set to the provider

        Raises:
            ProfileIncompleteError: If the provider did not share an email
        """
        normalizer = _NORMALIZERS.get(raw.kind)
        if normalizer is None:
            raise ValueError(f"Unsupported provider profile: {raw.kind}")
        return normalizer(raw)
