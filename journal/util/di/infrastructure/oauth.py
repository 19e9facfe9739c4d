"""OAuth infrastructure provider for multi-provider authentication."""

from dishka import Scope, provide

from journal.adapter.oauth.client import (
    DiscordOAuthClient,
    GitHubOAuthClient,
    GoogleOAuthClient,
)
from journal.config import Settings
from journal.domain.service.auth_service import OAuthClient
from journal.domain.value import AuthProvider
from journal.util.di.base import ProviderBase


class OAuthProvider(ProviderBase):
    """OAuth component base."""

    __mock_component__ = "oauth"


class ProdOAuthProvider(OAuthProvider):
    """Production OAuth provider talking to Google, GitHub and Discord."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_oauth_clients(self, settings: Settings) -> dict[AuthProvider, OAuthClient]:
        """Provide dictionary of all OAuth clients by provider.

        This allows the AuthService to support multiple authentication providers.

        Returns:
            Dictionary mapping AuthProvider to OAuthClient
        """
        auth = settings.auth
        return {
            AuthProvider.GOOGLE: GoogleOAuthClient(
                client_id=auth.google.client_id,
                client_secret=auth.google.client_secret,
                redirect_uri=auth.google_callback_url,
            ),
            AuthProvider.GITHUB: GitHubOAuthClient(
                client_id=auth.github.client_id,
                client_secret=auth.github.client_secret,
                redirect_uri=auth.github_callback_url,
            ),
            AuthProvider.DISCORD: DiscordOAuthClient(
                client_id=auth.discord.client_id,
                client_secret=auth.discord.client_secret,
                redirect_uri=auth.discord_callback_url,
            ),
        }
