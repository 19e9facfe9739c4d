"""OAuth authentication domain service."""

from journal.domain.value import AuthProvider, OAuthAuthorization

from .base import Service


class OAuthClient:
    """Generic OAuth client interface for all providers."""

    async def initiate_authorization(self, state: str) -> str:
        """Initiate OAuth authorization flow.

        Args:
            state: State parameter for CSRF protection

        Returns:
            Authorization URL to redirect user to
        """
        raise NotImplementedError

    async def complete_authorization(self, code: str, state: str) -> OAuthAuthorization:
        """Complete OAuth authorization flow.

        Args:
            code: Authorization code from OAuth callback
            state: State parameter for verification

        Returns:
            Raw provider profile and the issued tokens
        """
        raise NotImplementedError


class AuthService(Service):
    """Domain service for multi-provider OAuth operations.

    Coordinates authorization across Google, GitHub and Discord.
    """

    def __init__(self, oauth_clients: dict[AuthProvider, OAuthClient]) -> None:
        """Initialize auth service.

        Args:
            oauth_clients: Map of provider to OAuth client implementation
        """
        self.oauth_clients = oauth_clients

    def _client(self, provider: AuthProvider) -> OAuthClient:
        client = self.oauth_clients.get(provider)
        if not client:
            raise ValueError(f"Unsupported provider: {provider}")
        return client

    async def initiate_login(self, provider: AuthProvider, state: str) -> str:
        """Initiate OAuth login flow for any provider.

        Args:
            provider: OAuth provider to use
            state: State parameter for CSRF protection

        Returns:
            Authorization URL to redirect user to

        Raises:
            ValueError: If provider not supported
        """
        return await self._client(provider).initiate_authorization(state)

    async def complete_login(
        self, provider: AuthProvider, code: str, state: str
    ) -> OAuthAuthorization:
        """Complete OAuth login flow for any provider.

        Args:
            provider: OAuth provider used
            code: Authorization code from OAuth callback
            state: State parameter for verification

        Returns:
            Raw provider profile and tokens

        Raises:
            ValueError: If provider not supported
        """
        return await self._client(provider).complete_authorization(code, state)
