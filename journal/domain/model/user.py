"""User aggregate root.

A user signs in with an email/password pair, with any number of linked
OAuth providers, or both. At least one of those methods stays active for
the lifetime of the account.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field, field_validator

from journal.domain.model.common import DomainModel
from journal.domain.value import AuthMethod, UserId, normalize_email


def _now() -> datetime:
    return datetime.now(timezone.utc)


class User(DomainModel):
    """User aggregate root."""

    id: UserId
    email: str  # Unique, stored normalised
    name: Optional[str] = None
    hashed_password: Optional[str] = None
    primary_auth_method: AuthMethod = AuthMethod.EMAIL  # Last method used to sign in
    image: Optional[str] = None
    bio: Optional[str] = None
    age: Optional[int] = Field(default=None, ge=0)
    age_visible: bool = False
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)

    @field_validator("email")
    @classmethod
    def normalise_email(cls, v: str) -> str:
        return normalize_email(v)

    @property
    def has_password(self) -> bool:
        return bool(self.hashed_password)
