"""Unit tests for the sign-in pipeline use cases."""

from uuid import UUID

from dishka import AsyncContainer
import pytest

from journal.application.usecase.auth import (
    OAuthCallbackUseCase,
    RegisterUseCase,
    SignInUseCase,
)
from journal.application.usecase.auth.oauth_callback import OAuthCallbackRequest
from journal.application.usecase.auth.register import RegisterRequest
from journal.application.usecase.result import Failure, Success
from journal.domain.error import ErrorCode
from journal.domain.repository import LinkedAccountRepository
from journal.domain.service import SessionService
from journal.domain.value import AuthMethod, AuthProvider, CredentialsAttempt, UserId
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def _oauth_sign_in(env: AsyncContainer, provider: AuthProvider, email: str):
    use_case = await env.get(OAuthCallbackUseCase)
    return await use_case.execute(
        OAuthCallbackRequest(provider=provider, code=email, state="state-123")
    )


class TestSignInUseCase:
    """Tests for SignInUseCase and OAuthCallbackUseCase."""

    @pytest.mark.asyncio
    async def test_oauth_sign_in_links_existing_credentials_account(
        self, unit_env: AsyncContainer
    ):
        """A provider sign-in with a registered email joins that account."""
        # Arrange
        register = await unit_env.get(RegisterUseCase)
        registered = await register.execute(
            RegisterRequest(email="ada@example.com", password="correct-horse")
        )
        assert isinstance(registered, Success)

        # Act
        result = await _oauth_sign_in(unit_env, AuthProvider.GITHUB, "Ada@Example.com")

        # Assert
        assert isinstance(result, Success)
        assert result.value.user_id == registered.value.user_id
        assert result.value.user_created is False
        assert result.value.account_linked is True
        assert result.value.primary_auth_method == AuthMethod.GITHUB

        # The password still works; credentials keep the stored primary method
        sign_in = await unit_env.get(SignInUseCase)
        again = await sign_in.execute(
            CredentialsAttempt(email="ada@example.com", password="correct-horse")
        )
        assert isinstance(again, Success)
        assert again.value.user_id == registered.value.user_id
        assert again.value.primary_auth_method == AuthMethod.GITHUB

    @pytest.mark.asyncio
    async def test_credentials_on_oauth_only_account_lists_providers(
        self, unit_env: AsyncContainer
    ):
        """Credentials against an OAuth-only account report where to sign in."""
        # Arrange
        created = await _oauth_sign_in(unit_env, AuthProvider.GOOGLE, "bob@example.com")
        assert isinstance(created, Success)
        assert created.value.user_created is True

        # Act
        sign_in = await unit_env.get(SignInUseCase)
        result = await sign_in.execute(
            CredentialsAttempt(email="bob@example.com", password="anything-at-all")
        )

        # Assert
        assert isinstance(result, Failure)
        assert result.code == ErrorCode.NO_PASSWORD_SET
        assert result.available_providers == ["google"]

    @pytest.mark.asyncio
    async def test_wrong_password_is_invalid_credentials(
        self, unit_env: AsyncContainer
    ):
        register = await unit_env.get(RegisterUseCase)
        await register.execute(
            RegisterRequest(email="ada@example.com", password="correct-horse")
        )

        sign_in = await unit_env.get(SignInUseCase)
        result = await sign_in.execute(
            CredentialsAttempt(email="ada@example.com", password="battery-staple")
        )

        assert isinstance(result, Failure)
        assert result.code == ErrorCode.INVALID_CREDENTIALS
        assert result.available_providers == []

    @pytest.mark.asyncio
    async def test_empty_credentials_are_invalid(self, unit_env: AsyncContainer):
        sign_in = await unit_env.get(SignInUseCase)

        result = await sign_in.execute(CredentialsAttempt(email="", password=""))

        assert isinstance(result, Failure)
        assert result.code == ErrorCode.INVALID_CREDENTIALS

    @pytest.mark.asyncio
    async def test_issued_token_carries_primary_method(self, unit_env: AsyncContainer):
        """The session token reflects the method used for this sign-in."""
        result = await _oauth_sign_in(unit_env, AuthProvider.DISCORD, "cy@example.com")
        assert isinstance(result, Success)

        session_service = await unit_env.get(SessionService)
        claims = session_service.decode(result.value.token)

        assert claims.user_id == result.value.user_id
        assert claims.email == "cy@example.com"
        assert claims.primary_auth_method == "discord"

    @pytest.mark.asyncio
    async def test_repeat_oauth_sign_in_reuses_link(self, unit_env: AsyncContainer):
        first = await _oauth_sign_in(unit_env, AuthProvider.GOOGLE, "dee@example.com")
        second = await _oauth_sign_in(unit_env, AuthProvider.GOOGLE, "dee@example.com")

        assert isinstance(first, Success)
        assert isinstance(second, Success)
        assert second.value.user_id == first.value.user_id
        assert second.value.user_created is False
        assert second.value.account_linked is False

        links = await unit_env.get(LinkedAccountRepository)
        accounts = await links.find_all_by_user_id(UserId(UUID(first.value.user_id)))
        assert len(accounts) == 1
