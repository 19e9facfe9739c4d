"""Profile response model."""

from datetime import datetime

from pydantic import BaseModel

from journal.domain.model import User
from journal.domain.value import AuthMethod


class ProfileResponse(BaseModel):
    """User profile.

    ``email`` and ``primary_auth_method`` are only filled in for the user
    themself; ``age`` is withheld from others unless ``age_visible``.
    """

    id: str
    name: str | None
    image: str | None
    bio: str | None
    age: int | None
    age_visible: bool
    email: str | None = None
    primary_auth_method: AuthMethod | None = None
    created_at: datetime

    @classmethod
    def from_user(cls, user: User, is_self: bool) -> "ProfileResponse":
        return cls(
            id=str(user.id),
            name=user.name,
            image=user.image,
            bio=user.bio,
            age=user.age if is_self or user.age_visible else None,
            age_visible=user.age_visible,
            email=user.email if is_self else None,
            primary_auth_method=user.primary_auth_method if is_self else None,
            created_at=user.created_at,
        )
