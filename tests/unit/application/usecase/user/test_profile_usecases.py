"""Unit tests for profile use cases."""

from uuid import uuid4

from dishka import AsyncContainer
import pytest

from journal.application.usecase.result import Failure, Success
from journal.application.usecase.user import GetProfileUseCase, UpdateProfileUseCase
from journal.application.usecase.user.get_profile import GetProfileRequest
from journal.application.usecase.user.update_profile import (
    ProfileChanges,
    UpdateProfileRequest,
)
from journal.domain.error import ErrorCode
from journal.domain.model import User
from journal.domain.repository import UserRepository
from journal.domain.value import AuthMethod, UserId
from tests.factories import make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def _saved_user(
    env: AsyncContainer, email: str = "ada@example.com", **profile
) -> User:
    users = await env.get(UserRepository)
    user = make_user(email=email).model_copy(update=profile)
    return await users.save(user)


class TestProfileUseCases:
    """Tests for reading and editing profiles."""

    @pytest.mark.asyncio
    async def test_own_profile_includes_private_fields(
        self, unit_env: AsyncContainer
    ):
        user = await _saved_user(unit_env, name="Ada", age=36)
        use_case = await unit_env.get(GetProfileUseCase)

        result = await use_case.execute(
            GetProfileRequest(user_id=user.id, viewer_id=user.id)
        )

        assert isinstance(result, Success)
        assert result.value.email == "ada@example.com"
        assert result.value.primary_auth_method == AuthMethod.EMAIL
        assert result.value.age == 36

    @pytest.mark.asyncio
    async def test_others_see_age_only_when_visible(self, unit_env: AsyncContainer):
        hidden = await _saved_user(unit_env, age=36)
        shown = await _saved_user(
            unit_env, email="grace@example.com", age=41, age_visible=True
        )
        use_case = await unit_env.get(GetProfileUseCase)

        hidden_result = await use_case.execute(GetProfileRequest(user_id=hidden.id))
        shown_result = await use_case.execute(
            GetProfileRequest(user_id=shown.id, viewer_id=UserId(uuid4()))
        )

        assert isinstance(hidden_result, Success)
        assert hidden_result.value.age is None
        assert hidden_result.value.email is None
        assert isinstance(shown_result, Success)
        assert shown_result.value.age == 41

    @pytest.mark.asyncio
    async def test_missing_user_is_not_found(self, unit_env: AsyncContainer):
        use_case = await unit_env.get(GetProfileUseCase)

        result = await use_case.execute(GetProfileRequest(user_id=UserId(uuid4())))

        assert isinstance(result, Failure)
        assert result.code == ErrorCode.NOT_FOUND

    @pytest.mark.asyncio
    async def test_update_changes_only_given_fields(self, unit_env: AsyncContainer):
        # Arrange
        user = await _saved_user(unit_env, name="Ada", bio="Analyst")
        use_case = await unit_env.get(UpdateProfileUseCase)

        # Act
        result = await use_case.execute(
            UpdateProfileRequest(
                user_id=user.id, changes=ProfileChanges(age=36, age_visible=True)
            )
        )

        # Assert
        assert isinstance(result, Success)
        assert result.value.name == "Ada"
        assert result.value.bio == "Analyst"
        assert result.value.age == 36
        users = await unit_env.get(UserRepository)
        stored = await users.find_by_id(user.id)
        assert stored is not None
        assert stored.age_visible is True

    @pytest.mark.asyncio
    async def test_negative_age_is_validation_failure(self, unit_env: AsyncContainer):
        user = await _saved_user(unit_env)
        use_case = await unit_env.get(UpdateProfileUseCase)

        result = await use_case.execute(
            UpdateProfileRequest(user_id=user.id, changes=ProfileChanges(age=-1))
        )

        assert isinstance(result, Failure)
        assert result.code == ErrorCode.VALIDATION
