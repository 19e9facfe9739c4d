"""Unit tests for IdentityService."""

from uuid import uuid4

import pytest

from journal.domain.error import ConflictError
from journal.domain.model import LinkedAccount, User
from journal.domain.service import IdentityService
from journal.domain.value import (
    AuthMethod,
    AuthProvider,
    LinkedAccountId,
    OAuthAccount,
    UserId,
)
from journal.persistence.repository.inmemory import (
    InMemoryLinkedAccountRepository,
    InMemoryUserRepository,
)
from tests.factories import make_oauth_profile


class RacingUserRepository(InMemoryUserRepository):
    """Runs a competing writer right before the first new-user insert."""

    def __init__(self) -> None:
        super().__init__()
        self.race = None

    async def save(self, user: User) -> User:
        if self.race is not None and await self.find_by_id(user.id) is None:
            race, self.race = self.race, None
            await race()
        return await super().save(user)


class AlwaysConflictingLinkedAccountRepository(InMemoryLinkedAccountRepository):
    def __init__(self) -> None:
        super().__init__()
        self.attempts = 0

    async def save(self, account: LinkedAccount) -> LinkedAccount:
        self.attempts += 1
        raise ConflictError("linked account")


@pytest.fixture
def user_repo() -> RacingUserRepository:
    return RacingUserRepository()


@pytest.fixture
def account_repo() -> InMemoryLinkedAccountRepository:
    return InMemoryLinkedAccountRepository()


@pytest.fixture
def service(user_repo, account_repo) -> IdentityService:
    return IdentityService(user_repository=user_repo, linked_account_repository=account_repo)


class TestMergeSignIn:
    """Tests for IdentityService.merge_sign_in()."""

    @pytest.mark.asyncio
    async def test_credentials_user_passes_through(self, service, user_repo):
        """A verified credentials user is returned unchanged."""
        user = User(id=UserId(uuid4()), email="ada@example.com", hashed_password="x")
        await user_repo.save(user)

        outcome = await service.merge_sign_in(user)

        assert outcome.user == user
        assert outcome.primary_auth_method == AuthMethod.EMAIL
        assert outcome.user_created is False
        assert outcome.account_linked is False

    @pytest.mark.asyncio
    async def test_unseen_email_creates_user_and_link(self, service, user_repo, account_repo):
        """First OAuth sign-in creates both the user and the provider link."""
        profile = make_oauth_profile(provider=AuthProvider.GITHUB)
        account = OAuthAccount(access_token="gho_1", token_type="bearer")

        outcome = await service.merge_sign_in(profile, account)

        assert outcome.user_created is True
        assert outcome.account_linked is True
        assert outcome.primary_auth_method == AuthMethod.GITHUB
        assert outcome.user.email == "ada@example.com"
        assert outcome.user.hashed_password is None

        links = await account_repo.find_all_by_user_id(outcome.user.id)
        assert len(links) == 1
        assert links[0].provider == AuthProvider.GITHUB
        assert links[0].access_token == "gho_1"

    @pytest.mark.asyncio
    async def test_existing_credentials_user_gets_linked(self, service, user_repo, account_repo):
        """An OAuth sign-in with a registered email links to that account."""
        existing = User(
            id=UserId(uuid4()),
            email="ada@example.com",
            hashed_password="stored-hash",
            primary_auth_method=AuthMethod.EMAIL,
        )
        await user_repo.save(existing)

        outcome = await service.merge_sign_in(
            make_oauth_profile(email="ADA@example.com", provider=AuthProvider.GOOGLE)
        )

        assert outcome.user.id == existing.id
        assert outcome.user_created is False
        assert outcome.account_linked is True
        assert outcome.user.hashed_password == "stored-hash"
        assert outcome.user.primary_auth_method == AuthMethod.GOOGLE
        stored = await user_repo.find_by_id(existing.id)
        assert stored.primary_auth_method == AuthMethod.GOOGLE

    @pytest.mark.asyncio
    async def test_mixed_case_email_links_instead_of_conflicting(
        self, service, user_repo, account_repo
    ):
        existing = User(id=UserId(uuid4()), email="bob@example.com")
        await user_repo.save(existing)

        outcome = await service.merge_sign_in(
            make_oauth_profile(email="Bob@Example.com", provider_account_id="g-bob")
        )

        assert outcome.user.id == existing.id
        assert outcome.user_created is False
        assert outcome.user.email == "bob@example.com"
        links = await account_repo.find_all_by_user_id(existing.id)
        assert [link.provider for link in links] == [AuthProvider.GOOGLE]

    @pytest.mark.asyncio
    async def test_second_provider_links_to_same_user(self, service, account_repo):
        """Two providers sharing an email end up on one user."""
        first = await service.merge_sign_in(
            make_oauth_profile(provider=AuthProvider.GOOGLE, provider_account_id="g-1")
        )
        second = await service.merge_sign_in(
            make_oauth_profile(provider=AuthProvider.DISCORD, provider_account_id="d-1")
        )

        assert second.user.id == first.user.id
        assert second.account_linked is True
        assert second.primary_auth_method == AuthMethod.DISCORD
        links = await account_repo.find_all_by_user_id(first.user.id)
        assert [link.provider for link in links] == [
            AuthProvider.GOOGLE,
            AuthProvider.DISCORD,
        ]

    @pytest.mark.asyncio
    async def test_repeat_sign_in_refreshes_tokens_without_new_link(
        self, service, account_repo
    ):
        profile = make_oauth_profile(provider=AuthProvider.GOOGLE)
        first = await service.merge_sign_in(
            profile, OAuthAccount(access_token="old", refresh_token="refresh-1")
        )

        again = await service.merge_sign_in(profile, OAuthAccount(access_token="new"))

        assert again.user.id == first.user.id
        assert again.user_created is False
        assert again.account_linked is False
        links = await account_repo.find_all_by_user_id(first.user.id)
        assert len(links) == 1
        assert links[0].access_token == "new"
        # Providers omit the refresh token on repeat grants
        assert links[0].refresh_token == "refresh-1"

    @pytest.mark.asyncio
    async def test_linked_identity_wins_over_changed_email(self, service, user_repo):
        """A known provider identity resolves to its user even after an email change."""
        first = await service.merge_sign_in(
            make_oauth_profile(email="ada@example.com", provider_account_id="g-1")
        )

        outcome = await service.merge_sign_in(
            make_oauth_profile(email="ada@newmail.example", provider_account_id="g-1")
        )

        assert outcome.user.id == first.user.id
        assert outcome.user_created is False
        assert await user_repo.find_by_email("ada@newmail.example") is None

    @pytest.mark.asyncio
    async def test_different_account_of_linked_provider_is_not_linked_twice(
        self, service, account_repo
    ):
        """A user keeps at most one link per provider."""
        first = await service.merge_sign_in(
            make_oauth_profile(provider=AuthProvider.GITHUB, provider_account_id="1")
        )

        outcome = await service.merge_sign_in(
            make_oauth_profile(provider=AuthProvider.GITHUB, provider_account_id="2")
        )

        assert outcome.user.id == first.user.id
        assert outcome.account_linked is False
        links = await account_repo.find_all_by_user_id(first.user.id)
        assert [link.provider_account_id for link in links] == ["1"]

    @pytest.mark.asyncio
    async def test_last_login_method_wins(self, service, user_repo):
        """Every OAuth sign-in overwrites the primary auth method."""
        google = make_oauth_profile(provider=AuthProvider.GOOGLE, provider_account_id="g")
        github = make_oauth_profile(provider=AuthProvider.GITHUB, provider_account_id="h")

        await service.merge_sign_in(google)
        await service.merge_sign_in(github)
        outcome = await service.merge_sign_in(google)

        stored = await user_repo.find_by_id(outcome.user.id)
        assert stored.primary_auth_method == AuthMethod.GOOGLE


class TestConcurrentFirstSignIn:
    """Two first-time sign-ins for the same identity racing each other."""

    @pytest.mark.asyncio
    async def test_losing_request_retries_and_joins_winner(
        self, service, user_repo, account_repo
    ):
        """The loser sees the winner's rows on retry and ends on the same user."""
        profile = make_oauth_profile(provider=AuthProvider.GOOGLE, provider_account_id="g-1")
        winner = User(
            id=UserId(uuid4()),
            email=profile.email,
            primary_auth_method=AuthMethod.GOOGLE,
        )

        async def concurrent_sign_in() -> None:
            await user_repo.save(winner)
            await account_repo.save(
                LinkedAccount(
                    id=LinkedAccountId(uuid4()),
                    user_id=winner.id,
                    provider=AuthProvider.GOOGLE,
                    provider_account_id="g-1",
                )
            )

        user_repo.race = concurrent_sign_in

        outcome = await service.merge_sign_in(profile)

        assert outcome.user.id == winner.id
        assert outcome.user_created is False
        assert outcome.account_linked is False
        assert len(await account_repo.find_all_by_user_id(winner.id)) == 1

    @pytest.mark.asyncio
    async def test_persistent_conflict_is_raised_after_one_retry(self, user_repo):
        account_repo = AlwaysConflictingLinkedAccountRepository()
        service = IdentityService(
            user_repository=user_repo, linked_account_repository=account_repo
        )

        with pytest.raises(ConflictError):
            await service.merge_sign_in(make_oauth_profile())

        assert account_repo.attempts == 2
