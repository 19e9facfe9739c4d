"""Identity merging domain service.

Decides, for every successful sign-in, which user the caller becomes and
whether a provider link has to be recorded.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import uuid4

import logfire

from journal.domain.error import ConflictError
from journal.domain.model import LinkedAccount, User
from journal.domain.repository import LinkedAccountRepository, UserRepository
from journal.domain.value import (
    AuthMethod,
    LinkedAccountId,
    OAuthAccount,
    OAuthProfile,
    UserId,
)

from .base import Service


@dataclass(frozen=True)
class MergeOutcome:
    """Result of merging a sign-in into the user store."""

    user: User
    primary_auth_method: AuthMethod
    user_created: bool = False
    account_linked: bool = False


class IdentityService(Service):
    """Merges credentials and OAuth sign-ins into a single user per email.

    Every OAuth sign-in overwrites ``primary_auth_method`` with the provider
    just used, including when no new link is created.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        linked_account_repository: LinkedAccountRepository,
    ) -> None:
        """Initialize identity service.

        Args:
            user_repository: User repository
            linked_account_repository: Linked account repository
        """
        self.user_repository = user_repository
        self.linked_account_repository = linked_account_repository

    async def merge_sign_in(
        self, subject: User | OAuthProfile, account: OAuthAccount | None = None
    ) -> MergeOutcome:
        """Resolve a sign-in to a user, creating or linking as needed.

        Args:
            subject: A user already resolved by credential verification,
                or a normalised OAuth profile
            account: Provider tokens to cache on the link (OAuth only)

        Returns:
            Merge outcome carrying the user and its primary auth method

        Raises:
            ConflictError: If a uniqueness conflict persists after one retry
        """
        if isinstance(subject, User):
            return MergeOutcome(
                user=subject, primary_auth_method=subject.primary_auth_method
            )

        account = account or OAuthAccount()

        with logfire.span(
            "identity_service.merge_sign_in",
            provider=subject.provider.value,
            provider_account_id=subject.provider_account_id,
        ):
            try:
                return await self._merge_oauth(subject, account)
            except ConflictError as e:
                # Lost a race with a concurrent first-time sign-in; the rows
                # written by the winner are visible now.
                logfire.warn(
                    "Sign-in merge conflict, retrying once",
                    provider=subject.provider.value,
                    error=str(e),
                )
                return await self._merge_oauth(subject, account)

    async def _merge_oauth(
        self, profile: OAuthProfile, account: OAuthAccount
    ) -> MergeOutcome:
        method = AuthMethod.from_provider(profile.provider)
        now = datetime.now(timezone.utc)
        user_created = False
        account_linked = False

        # A provider identity that is already linked always resolves to its user
        link = await self.linked_account_repository.find_by_provider(
            profile.provider, profile.provider_account_id
        )
        user = (
            await self.user_repository.find_by_id(link.user_id, for_update=True)
            if link
            else None
        )

        if user is None:
            user = await self.user_repository.find_by_email(
                profile.email, for_update=True
            )

        if user is None:
            user = await self.user_repository.save(
                User(
                    id=UserId(uuid4()),
                    email=profile.email,
                    name=profile.name,
                    image=profile.image,
                    primary_auth_method=method,
                    created_at=now,
                    updated_at=now,
                )
            )
            user_created = True
            logfire.info(
                "User created from provider sign-in",
                user_id=str(user.id),
                provider=profile.provider.value,
                email_is_placeholder=profile.email_is_placeholder,
            )

        if link is None or link.user_id != user.id:
            link = await self.linked_account_repository.find_by_user_and_provider(
                user.id, profile.provider
            )

        if link is None:
            await self.linked_account_repository.save(
                LinkedAccount(
                    id=LinkedAccountId(uuid4()),
                    user_id=user.id,
                    provider=profile.provider,
                    provider_account_id=profile.provider_account_id,
                    type=account.type,
                    access_token=account.access_token,
                    refresh_token=account.refresh_token,
                    token_type=account.token_type,
                    scope=account.scope,
                    expires_at=account.expires_at,
                    created_at=now,
                )
            )
            account_linked = True
            logfire.info(
                "Provider linked to user",
                user_id=str(user.id),
                provider=profile.provider.value,
            )
        elif link.provider_account_id == profile.provider_account_id:
            await self.linked_account_repository.save(link.with_tokens(account))

        user = await self.user_repository.save(
            user.model_copy(update={"primary_auth_method": method, "updated_at": now})
        )

        return MergeOutcome(
            user=user,
            primary_auth_method=method,
            user_created=user_created,
            account_linked=account_linked,
        )
