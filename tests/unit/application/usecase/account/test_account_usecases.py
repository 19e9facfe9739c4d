"""Unit tests for account management use cases."""

from uuid import UUID, uuid4

from dishka import AsyncContainer
import pytest

from journal.application.usecase.account import (
    ChangePasswordUseCase,
    CheckPasswordUseCase,
    SetPasswordUseCase,
    UnlinkProviderUseCase,
)
from journal.application.usecase.account.change_password import ChangePasswordRequest
from journal.application.usecase.account.check_password import CheckPasswordRequest
from journal.application.usecase.account.set_password import SetPasswordRequest
from journal.application.usecase.account.unlink_provider import UnlinkProviderRequest
from journal.application.usecase.auth import OAuthCallbackUseCase, SignInUseCase
from journal.application.usecase.auth.oauth_callback import OAuthCallbackRequest
from journal.application.usecase.result import Failure, Success
from journal.domain.error import ErrorCode
from journal.domain.service import SessionService
from journal.domain.value import AuthMethod, AuthProvider, CredentialsAttempt, UserId
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def _oauth_user(
    env: AsyncContainer, provider: AuthProvider, email: str = "ada@example.com"
) -> UserId:
    use_case = await env.get(OAuthCallbackUseCase)
    result = await use_case.execute(
        OAuthCallbackRequest(provider=provider, code=email, state="state-123")
    )
    assert isinstance(result, Success)
    return UserId(UUID(result.value.user_id))


class TestAccountUseCases:
    """Tests for password and provider management."""

    @pytest.mark.asyncio
    async def test_unlinking_the_only_method_is_rejected(
        self, unit_env: AsyncContainer
    ):
        user_id = await _oauth_user(unit_env, AuthProvider.GOOGLE)
        use_case = await unit_env.get(UnlinkProviderUseCase)

        result = await use_case.execute(
            UnlinkProviderRequest(user_id=user_id, provider=AuthProvider.GOOGLE)
        )

        assert isinstance(result, Failure)
        assert result.code == ErrorCode.LAST_AUTH_METHOD

    @pytest.mark.asyncio
    async def test_set_password_then_unlink_falls_back_to_email(
        self, unit_env: AsyncContainer
    ):
        """Adding a password lets the last provider go."""
        # Arrange
        user_id = await _oauth_user(unit_env, AuthProvider.GOOGLE)
        set_password = await unit_env.get(SetPasswordUseCase)
        unlink = await unit_env.get(UnlinkProviderUseCase)

        # Act
        set_result = await set_password.execute(
            SetPasswordRequest(
                user_id=user_id,
                new_password="correct-horse",
                confirm_password="correct-horse",
            )
        )
        unlink_result = await unlink.execute(
            UnlinkProviderRequest(user_id=user_id, provider=AuthProvider.GOOGLE)
        )

        # Assert
        assert isinstance(set_result, Success)
        assert set_result.value.has_password is True
        assert set_result.value.methods == [AuthMethod.EMAIL, AuthMethod.GOOGLE]

        assert isinstance(unlink_result, Success)
        assert unlink_result.value.methods == [AuthMethod.EMAIL]
        assert unlink_result.value.primary_auth_method == AuthMethod.EMAIL

        # Credentials now sign the user in
        sign_in = await unit_env.get(SignInUseCase)
        signed_in = await sign_in.execute(
            CredentialsAttempt(email="ada@example.com", password="correct-horse")
        )
        assert isinstance(signed_in, Success)
        assert signed_in.value.user_id == str(user_id)

    @pytest.mark.asyncio
    async def test_account_changes_reissue_token(self, unit_env: AsyncContainer):
        """The new token reflects the account's updated primary method."""
        user_id = await _oauth_user(unit_env, AuthProvider.GITHUB)
        set_password = await unit_env.get(SetPasswordUseCase)

        result = await set_password.execute(
            SetPasswordRequest(user_id=user_id, new_password="correct-horse")
        )

        assert isinstance(result, Success)
        assert result.value.token is not None
        session_service = await unit_env.get(SessionService)
        claims = session_service.decode(result.value.token)
        assert claims.user_id == str(user_id)
        assert claims.primary_auth_method == "email"

    @pytest.mark.asyncio
    async def test_set_password_twice_is_rejected(self, unit_env: AsyncContainer):
        user_id = await _oauth_user(unit_env, AuthProvider.GOOGLE)
        set_password = await unit_env.get(SetPasswordUseCase)
        await set_password.execute(
            SetPasswordRequest(user_id=user_id, new_password="correct-horse")
        )

        result = await set_password.execute(
            SetPasswordRequest(user_id=user_id, new_password="battery-staple")
        )

        assert isinstance(result, Failure)
        assert result.code == ErrorCode.PASSWORD_ALREADY_SET

    @pytest.mark.asyncio
    async def test_change_password_checks_current(self, unit_env: AsyncContainer):
        user_id = await _oauth_user(unit_env, AuthProvider.GOOGLE)
        set_password = await unit_env.get(SetPasswordUseCase)
        change_password = await unit_env.get(ChangePasswordUseCase)
        await set_password.execute(
            SetPasswordRequest(user_id=user_id, new_password="correct-horse")
        )

        wrong = await change_password.execute(
            ChangePasswordRequest(
                user_id=user_id,
                current_password="not-the-password",
                new_password="battery-staple",
                confirm_password="battery-staple",
            )
        )
        right = await change_password.execute(
            ChangePasswordRequest(
                user_id=user_id,
                current_password="correct-horse",
                new_password="battery-staple",
                confirm_password="battery-staple",
            )
        )

        assert isinstance(wrong, Failure)
        assert wrong.code == ErrorCode.WRONG_CURRENT_PASSWORD
        assert isinstance(right, Success)

        sign_in = await unit_env.get(SignInUseCase)
        signed_in = await sign_in.execute(
            CredentialsAttempt(email="ada@example.com", password="battery-staple")
        )
        assert isinstance(signed_in, Success)

    @pytest.mark.asyncio
    async def test_mismatched_confirmation_is_rejected(
        self, unit_env: AsyncContainer
    ):
        user_id = await _oauth_user(unit_env, AuthProvider.GOOGLE)
        set_password = await unit_env.get(SetPasswordUseCase)

        result = await set_password.execute(
            SetPasswordRequest(
                user_id=user_id,
                new_password="correct-horse",
                confirm_password="correct-h0rse",
            )
        )

        assert isinstance(result, Failure)
        assert result.code == ErrorCode.PASSWORD_MISMATCH

    @pytest.mark.asyncio
    async def test_check_password_lists_methods(self, unit_env: AsyncContainer):
        user_id = await _oauth_user(unit_env, AuthProvider.GOOGLE)
        await _oauth_user(unit_env, AuthProvider.GITHUB)
        use_case = await unit_env.get(CheckPasswordUseCase)

        result = await use_case.execute(CheckPasswordRequest(user_id=user_id))

        assert isinstance(result, Success)
        assert result.value.has_password is False
        assert result.value.methods == [AuthMethod.GOOGLE, AuthMethod.GITHUB]
        assert result.value.token is None

    @pytest.mark.asyncio
    async def test_unknown_user_is_not_found(self, unit_env: AsyncContainer):
        use_case = await unit_env.get(CheckPasswordUseCase)

        result = await use_case.execute(CheckPasswordRequest(user_id=UserId(uuid4())))

        assert isinstance(result, Failure)
        assert result.code == ErrorCode.NOT_FOUND
