"""Learning unit and log entities."""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field, field_validator

from journal.domain.model.common import DomainModel
from journal.domain.value import (
    LearningResource,
    LogId,
    UnitId,
    UnitStatus,
    UserId,
)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _clean_tags(tags: list[str]) -> list[str]:
    cleaned: list[str] = []
    for tag in tags:
        tag = tag.strip()
        if tag and tag not in cleaned:
            cleaned.append(tag)
    return cleaned


class Unit(DomainModel):
    """A learning unit: a goal, the state before and a reflection after.

    Owned by exactly one user. Deleting a unit deletes its logs.
    """

    id: UnitId
    user_id: UserId
    title: str = Field(min_length=1, max_length=255)
    learning_goal: Optional[str] = None
    pre_learning_state: Optional[str] = None
    reflection: Optional[str] = None
    next_action: Optional[str] = None
    status: UnitStatus = UnitStatus.PLANNED
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    display_flag: bool = True
    tags: list[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, v: list[str]) -> list[str]:
        return _clean_tags(v)


class Log(DomainModel):
    """A single study session recorded against a unit."""

    id: LogId
    unit_id: UnitId
    user_id: UserId
    title: str = Field(min_length=1, max_length=255)
    learning_time: int = Field(default=0, ge=0)  # Minutes
    note: Optional[str] = None
    logged_at: datetime = Field(default_factory=_now)
    tags: list[str] = Field(default_factory=list)
    resources: list[LearningResource] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, v: list[str]) -> list[str]:
        return _clean_tags(v)
