"""Unit tests for AuthMethodService."""

import random
from uuid import uuid4

import pytest

from journal.adapter.security.hasher import MockPasswordHasher
from journal.config import AuthSettings
from journal.domain.error import (
    AuthError,
    LastAuthMethodError,
    NotFoundError,
    PasswordAlreadySetError,
    PasswordMismatchError,
    PasswordTooShortError,
    ProviderNotLinkedError,
    WrongCurrentPasswordError,
)
from journal.domain.service import AuthMethodService, IdentityService
from journal.domain.value import AuthMethod, AuthProvider, UserId
from journal.persistence.repository.inmemory import (
    InMemoryLinkedAccountRepository,
    InMemoryUserRepository,
)
from tests.factories import make_link, make_oauth_profile, make_user


@pytest.fixture
def hasher() -> MockPasswordHasher:
    return MockPasswordHasher()


@pytest.fixture
def user_repo() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def account_repo() -> InMemoryLinkedAccountRepository:
    return InMemoryLinkedAccountRepository()


@pytest.fixture
def service(user_repo, account_repo, hasher) -> AuthMethodService:
    return AuthMethodService(
        user_repository=user_repo,
        linked_account_repository=account_repo,
        password_hasher=hasher,
        auth_settings=AuthSettings(),
    )


class TestSetPassword:
    """Tests for AuthMethodService.set_password()."""

    @pytest.mark.asyncio
    async def test_set_password_on_oauth_only_account(
        self, service, user_repo, account_repo, hasher
    ):
        """Should store a hash and switch the primary method to email."""
        user = make_user(primary_auth_method=AuthMethod.GITHUB)
        await user_repo.save(user)
        await account_repo.save(make_link(user, AuthProvider.GITHUB))

        updated = await service.set_password(user.id, "correct-horse", "correct-horse")

        assert updated.primary_auth_method == AuthMethod.EMAIL
        assert hasher.verify("correct-horse", updated.hashed_password)
        assert await service.has_password(user.id) is True

    @pytest.mark.asyncio
    async def test_set_password_twice_fails(self, service, user_repo, hasher):
        user = make_user(hashed_password=hasher.hash("correct-horse"))
        await user_repo.save(user)

        with pytest.raises(PasswordAlreadySetError):
            await service.set_password(user.id, "another-horse", "another-horse")

    @pytest.mark.asyncio
    async def test_set_password_mismatch_leaves_account_unchanged(
        self, service, user_repo, account_repo
    ):
        user = make_user(primary_auth_method=AuthMethod.GOOGLE)
        await user_repo.save(user)
        await account_repo.save(make_link(user, AuthProvider.GOOGLE))

        with pytest.raises(PasswordMismatchError):
            await service.set_password(user.id, "correct-horse", "correct-hrose")

        stored = await user_repo.find_by_id(user.id)
        assert stored.hashed_password is None
        assert stored.primary_auth_method == AuthMethod.GOOGLE

    @pytest.mark.asyncio
    async def test_set_password_too_short(self, service, user_repo):
        user = make_user()
        await user_repo.save(user)

        with pytest.raises(PasswordTooShortError):
            await service.set_password(user.id, "short", None)

    @pytest.mark.asyncio
    async def test_set_password_unknown_user(self, service):
        with pytest.raises(NotFoundError):
            await service.set_password(UserId(uuid4()), "correct-horse", None)


class TestChangePassword:
    """Tests for AuthMethodService.change_password()."""

    @pytest.mark.asyncio
    async def test_change_password_with_correct_current(self, service, user_repo, hasher):
        user = make_user(hashed_password=hasher.hash("correct-horse"))
        await user_repo.save(user)

        updated = await service.change_password(
            user.id, "correct-horse", "battery-staple", "battery-staple"
        )

        assert hasher.verify("battery-staple", updated.hashed_password)
        assert not hasher.verify("correct-horse", updated.hashed_password)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("current", [None, "", "wrong-horse"])
    async def test_change_password_wrong_current_keeps_hash(
        self, service, user_repo, hasher, current
    ):
        """Should reject a missing or wrong current password, keeping the old hash."""
        original = hasher.hash("correct-horse")
        user = make_user(hashed_password=original)
        await user_repo.save(user)

        with pytest.raises(WrongCurrentPasswordError):
            await service.change_password(
                user.id, current, "battery-staple", "battery-staple"
            )

        stored = await user_repo.find_by_id(user.id)
        assert stored.hashed_password == original

    @pytest.mark.asyncio
    async def test_change_password_mismatch_keeps_hash(self, service, user_repo, hasher):
        original = hasher.hash("correct-horse")
        user = make_user(hashed_password=original)
        await user_repo.save(user)

        with pytest.raises(PasswordMismatchError):
            await service.change_password(
                user.id, "correct-horse", "battery-staple", "battery-stapel"
            )

        stored = await user_repo.find_by_id(user.id)
        assert stored.hashed_password == original

    @pytest.mark.asyncio
    async def test_change_password_without_existing_hash_sets_it(
        self, service, user_repo, account_repo, hasher
    ):
        """OAuth-only accounts may add a password without a current one."""
        user = make_user(primary_auth_method=AuthMethod.DISCORD)
        await user_repo.save(user)
        await account_repo.save(make_link(user, AuthProvider.DISCORD))

        updated = await service.change_password(
            user.id, None, "battery-staple", "battery-staple"
        )

        assert hasher.verify("battery-staple", updated.hashed_password)
        assert updated.primary_auth_method == AuthMethod.EMAIL


class TestUnlinkProvider:
    """Tests for AuthMethodService.unlink_provider()."""

    @pytest.mark.asyncio
    async def test_unlink_only_provider_without_password_fails(
        self, service, user_repo, account_repo
    ):
        user = make_user(primary_auth_method=AuthMethod.GITHUB)
        await user_repo.save(user)
        await account_repo.save(make_link(user, AuthProvider.GITHUB))

        with pytest.raises(LastAuthMethodError):
            await service.unlink_provider(user.id, AuthProvider.GITHUB)

        assert len(await account_repo.find_all_by_user_id(user.id)) == 1

    @pytest.mark.asyncio
    async def test_unlink_with_password_falls_back_to_email(
        self, service, user_repo, account_repo, hasher
    ):
        user = make_user(
            hashed_password=hasher.hash("correct-horse"),
            primary_auth_method=AuthMethod.GOOGLE,
        )
        await user_repo.save(user)
        await account_repo.save(make_link(user, AuthProvider.GOOGLE))

        updated = await service.unlink_provider(user.id, AuthProvider.GOOGLE)

        assert updated.primary_auth_method == AuthMethod.EMAIL
        assert await account_repo.find_all_by_user_id(user.id) == []

    @pytest.mark.asyncio
    async def test_unlink_without_password_falls_back_to_oldest_link(
        self, service, user_repo, account_repo
    ):
        user = make_user(primary_auth_method=AuthMethod.DISCORD)
        await user_repo.save(user)
        for provider in (AuthProvider.GITHUB, AuthProvider.GOOGLE, AuthProvider.DISCORD):
            await account_repo.save(make_link(user, provider))

        updated = await service.unlink_provider(user.id, AuthProvider.DISCORD)

        assert updated.primary_auth_method == AuthMethod.GITHUB
        assert await service.list_methods(user.id) == [
            AuthMethod.GITHUB,
            AuthMethod.GOOGLE,
        ]

    @pytest.mark.asyncio
    async def test_unlink_provider_not_linked(self, service, user_repo, account_repo, hasher):
        user = make_user(hashed_password=hasher.hash("correct-horse"))
        await user_repo.save(user)
        await account_repo.save(make_link(user, AuthProvider.GOOGLE))

        with pytest.raises(ProviderNotLinkedError):
            await service.unlink_provider(user.id, AuthProvider.DISCORD)


class TestListMethods:
    @pytest.mark.asyncio
    async def test_email_first_then_links_oldest_first(
        self, service, user_repo, account_repo, hasher
    ):
        user = make_user(hashed_password=hasher.hash("correct-horse"))
        await user_repo.save(user)
        await account_repo.save(make_link(user, AuthProvider.DISCORD))
        await account_repo.save(make_link(user, AuthProvider.GOOGLE))

        methods = await service.list_methods(user.id)

        assert methods == [AuthMethod.EMAIL, AuthMethod.DISCORD, AuthMethod.GOOGLE]


class TestAtLeastOneMethodInvariant:
    """Random sequences of account operations never strand an account."""

    PASSWORDS = ["correct-horse", "battery-staple", "short", "tr0ub4dor&3"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("seed", range(25))
    async def test_random_operation_sequences_keep_a_method(
        self, seed, service, user_repo, account_repo
    ):
        rng = random.Random(seed)
        identity = IdentityService(
            user_repository=user_repo, linked_account_repository=account_repo
        )
        first = await identity.merge_sign_in(
            make_oauth_profile(provider=rng.choice(list(AuthProvider)))
        )
        user_id = first.user.id

        for _ in range(30):
            operation = rng.choice(["link", "unlink", "set", "change"])
            before = await user_repo.find_by_id(user_id)
            try:
                if operation == "link":
                    provider = rng.choice(list(AuthProvider))
                    await identity.merge_sign_in(
                        make_oauth_profile(
                            provider=provider, provider_account_id=f"{provider.value}-1"
                        )
                    )
                elif operation == "unlink":
                    await service.unlink_provider(user_id, rng.choice(list(AuthProvider)))
                elif operation == "set":
                    password = rng.choice(self.PASSWORDS)
                    confirm = password if rng.random() < 0.8 else password + "!"
                    await service.set_password(user_id, password, confirm)
                else:
                    password = rng.choice(self.PASSWORDS)
                    await service.change_password(
                        user_id, rng.choice(self.PASSWORDS), password, password
                    )
            except AuthError:
                # Rejected operations leave the password hash untouched
                after = await user_repo.find_by_id(user_id)
                assert after.hashed_password == before.hashed_password

            user = await user_repo.find_by_id(user_id)
            links = await account_repo.find_all_by_user_id(user_id)
            methods = await service.list_methods(user_id)

            assert user.has_password or len(links) >= 1
            assert user.primary_auth_method in methods
            assert len({link.provider for link in links}) == len(links)
