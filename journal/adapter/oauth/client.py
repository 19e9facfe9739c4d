"""OAuth 2.0 authorization-code clients for Google, GitHub and Discord."""

import hashlib
import time
from urllib.parse import urlencode

import httpx
import logfire

from journal.adapter.error import OAuthProviderError
from journal.domain.service.auth_service import OAuthClient
from journal.domain.value import (
    AuthProvider,
    DiscordProfile,
    GitHubProfile,
    GoogleProfile,
    OAuthAccount,
    OAuthAuthorization,
    RawProviderProfile,
)


class OAuth2Client(OAuthClient):
    """Authorization-code flow shared by every provider.

    Subclasses declare the provider endpoints and map the provider's user
    info payload to its raw profile type.
    """

    provider: AuthProvider
    authorize_url: str
    token_url: str
    user_info_url: str
    scope: str

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize OAuth client.

        Args:
            client_id: OAuth client ID
            client_secret: OAuth client secret
            redirect_uri: Callback URL registered with the provider
            timeout: Per-request timeout in seconds
            transport: Custom httpx transport (defaults to the network)
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.timeout = timeout
        self.transport = transport

    def _authorization_params(self, state: str) -> dict[str, str]:
        return {
            "response_type": "code",
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "scope": self.scope,
            "state": state,
        }

    async def initiate_authorization(self, state: str) -> str:
        """Build the provider authorization URL.

        Args:
            state: State parameter for CSRF protection

        Returns:
            Authorization URL to redirect user to
        """
        auth_url = f"{self.authorize_url}?{urlencode(self._authorization_params(state))}"

        logfire.info(
            "OAuth authorization initiated",
            provider=self.provider.value,
            redirect_uri=self.redirect_uri,
        )

        return auth_url

    async def complete_authorization(self, code: str, state: str) -> OAuthAuthorization:
        """Exchange the code and fetch the provider profile.

        Args:
            code: Authorization code from provider callback
            state: State parameter (verified by the caller)

        Returns:
            Raw provider profile and issued tokens

        Raises:
            OAuthProviderError: If any provider call fails
        """
        _ = state
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            token_data = await self._exchange_code_for_token(client, code)
            access_token = token_data["access_token"]
            user_info = await self._get_user_info(client, access_token)
            try:
                profile = await self._build_profile(client, user_info, access_token)
            except (KeyError, TypeError, ValueError) as e:
                logfire.error(
                    "OAuth user info malformed",
                    provider=self.provider.value,
                    error=repr(e),
                )
                raise OAuthProviderError(
                    self.provider.value, f"malformed user info: {e!r}"
                )

        expires_in = token_data.get("expires_in")
        account = OAuthAccount(
            type="oauth",
            access_token=access_token,
            refresh_token=token_data.get("refresh_token"),
            token_type=token_data.get("token_type"),
            scope=token_data.get("scope"),
            expires_at=int(time.time()) + int(expires_in) if expires_in else None,
        )

        logfire.info("OAuth completed", provider=self.provider.value)

        return OAuthAuthorization(profile=profile, account=account)

    async def _exchange_code_for_token(
        self, client: httpx.AsyncClient, code: str
    ) -> dict:
        """Exchange authorization code for tokens.

        Raises:
            OAuthProviderError: If token exchange fails
        """
        data = {
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": self.redirect_uri,
            "client_id": self.client_id,
            "client_secret": self.client_secret,
        }

        try:
            response = await client.post(
                self.token_url,
                data=data,
                headers={
                    "Accept": "application/json",
                    "Content-Type": "application/x-www-form-urlencoded",
                },
            )
        except httpx.HTTPError as e:
            logfire.error(
                "OAuth token exchange HTTP error",
                provider=self.provider.value,
                error=str(e),
            )
            raise OAuthProviderError(self.provider.value, f"token exchange failed: {e}")

        if response.status_code != 200:
            logfire.error(
                "OAuth token exchange failed",
                provider=self.provider.value,
                status_code=response.status_code,
                error=response.text,
            )
            raise OAuthProviderError(
                self.provider.value, f"token exchange failed: {response.status_code}"
            )

        result = response.json()
        if "access_token" not in result:
            # GitHub reports errors with a 200 status
            raise OAuthProviderError(
                self.provider.value, result.get("error", "no access token issued")
            )
        return result

    async def _get_json(
        self, client: httpx.AsyncClient, url: str, access_token: str
    ) -> dict | list:
        try:
            response = await client.get(
                url,
                headers={
                    "Authorization": f"Bearer {access_token}",
                    "Accept": "application/json",
                },
            )
        except httpx.HTTPError as e:
            logfire.error(
                "OAuth user info HTTP error", provider=self.provider.value, error=str(e)
            )
            raise OAuthProviderError(self.provider.value, f"user info failed: {e}")

        if response.status_code != 200:
            logfire.error(
                "OAuth user info request failed",
                provider=self.provider.value,
                status_code=response.status_code,
                error=response.text,
            )
            raise OAuthProviderError(
                self.provider.value, f"user info failed: {response.status_code}"
            )
        return response.json()

    async def _get_user_info(self, client: httpx.AsyncClient, access_token: str) -> dict:
        return await self._get_json(client, self.user_info_url, access_token)

    async def _build_profile(
        self, client: httpx.AsyncClient, user_info: dict, access_token: str
    ) -> RawProviderProfile:
        raise NotImplementedError


class GoogleOAuthClient(OAuth2Client):
    """Google OpenID Connect client."""

    provider = AuthProvider.GOOGLE
    authorize_url = "https://accounts.google.com/o/oauth2/v2/auth"
    token_url = "https://oauth2.googleapis.com/token"
    user_info_url = "https://openidconnect.googleapis.com/v1/userinfo"
    scope = "openid email profile"

    def _authorization_params(self, state: str) -> dict[str, str]:
        params = super()._authorization_params(state)
        params["access_type"] = "offline"
        params["prompt"] = "consent"
        return params

    async def _build_profile(
        self, client: httpx.AsyncClient, user_info: dict, access_token: str
    ) -> RawProviderProfile:
        return GoogleProfile(
            sub=user_info["sub"],
            name=user_info.get("name"),
            email=user_info.get("email"),
            picture=user_info.get("picture"),
        )


class GitHubOAuthClient(OAuth2Client):
    """GitHub OAuth app client."""

    provider = AuthProvider.GITHUB
    authorize_url = "https://github.com/login/oauth/authorize"
    token_url = "https://github.com/login/oauth/access_token"
    user_info_url = "https://api.github.com/user"
    emails_url = "https://api.github.com/user/emails"
    scope = "read:user user:email"

    async def _build_profile(
        self, client: httpx.AsyncClient, user_info: dict, access_token: str
    ) -> RawProviderProfile:
        email = user_info.get("email")
        if not email:
            # Private emails are only listed on /user/emails
            emails = await self._get_json(client, self.emails_url, access_token)
            if not isinstance(emails, list):
                raise OAuthProviderError(self.provider.value, "malformed email list")
            email = next(
                (
                    e["email"]
                    for e in emails
                    if e.get("primary") and e.get("verified")
                ),
                None,
            )
        return GitHubProfile(
            id=user_info["id"],
            login=user_info["login"],
            name=user_info.get("name"),
            email=email,
            avatar_url=user_info.get("avatar_url"),
        )


class DiscordOAuthClient(OAuth2Client):
    """Discord OAuth2 client."""

    provider = AuthProvider.DISCORD
    authorize_url = "https://discord.com/oauth2/authorize"
    token_url = "https://discord.com/api/oauth2/token"
    user_info_url = "https://discord.com/api/users/@me"
    scope = "identify email"

    async def _build_profile(
        self, client: httpx.AsyncClient, user_info: dict, access_token: str
    ) -> RawProviderProfile:
        return DiscordProfile(
            id=user_info["id"],
            username=user_info["username"],
            email=user_info.get("email") if user_info.get("verified", True) else None,
            avatar=user_info.get("avatar"),
        )


class MockOAuthClient(OAuthClient):
    """Mock OAuth client for testing.

    The authorization code doubles as the email of the signing-in user, so
    tests choose who authenticates: ``code="bob@example.com"``. A code
    without ``@`` becomes ``<code>@example.com``.
    """

    def __init__(self, provider: AuthProvider):
        self.provider = provider

    async def initiate_authorization(self, state: str) -> str:
        return f"https://{self.provider.value}.example.com/authorize?state={state}&mock=true"

    async def complete_authorization(self, code: str, state: str) -> OAuthAuthorization:
        email = code if "@" in code else f"{code}@example.com"
        local = email.split("@", 1)[0]
        digest = hashlib.sha256(f"{self.provider.value}:{email}".encode()).hexdigest()

        profile: RawProviderProfile
        if self.provider == AuthProvider.GOOGLE:
            profile = GoogleProfile(
                sub=str(int(digest[:15], 16)),
                name=f"Mock {local}",
                email=email,
                picture="https://example.com/avatar.png",
            )
        elif self.provider == AuthProvider.GITHUB:
            profile = GitHubProfile(
                id=int(digest[:12], 16),
                login=local,
                name=None,
                email=email,
                avatar_url="https://example.com/avatar.png",
            )
        else:
            profile = DiscordProfile(
                id=str(int(digest[:15], 16)),
                username=local,
                email=email,
                avatar=digest[:32],
            )

        return OAuthAuthorization(
            profile=profile,
            account=OAuthAccount(
                access_token=f"mock-access-{digest[:16]}",
                token_type="bearer",
                scope="mock",
            ),
        )
