"""Linked account entity.

Records that an external OAuth provider authenticated a user.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from journal.domain.model.common import DomainModel
from journal.domain.value import AuthProvider, LinkedAccountId, OAuthAccount, UserId


class LinkedAccount(DomainModel):
    """External provider identity linked to a user account.

    ``(provider, provider_account_id)`` is globally unique and a user holds
    at most one link per provider.
    """

    id: LinkedAccountId
    user_id: UserId
    provider: AuthProvider
    provider_account_id: str  # Permanent ID from provider
    type: str = "oauth"
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    token_type: Optional[str] = None
    scope: Optional[str] = None
    expires_at: Optional[int] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def with_tokens(self, account: OAuthAccount) -> "LinkedAccount":
        """Return a copy carrying the freshly issued provider tokens."""
        return self.model_copy(
            update={
                "type": account.type,
                "access_token": account.access_token,
                "refresh_token": account.refresh_token or self.refresh_token,
                "token_type": account.token_type,
                "scope": account.scope,
                "expires_at": account.expires_at,
            }
        )
