"""Unit and log response models."""

from datetime import datetime

from pydantic import BaseModel

from journal.domain.model import Log, Unit
from journal.domain.value import LearningResource, UnitStatus


class UnitResponse(BaseModel):
    """Unit as returned to its owner."""

    id: str
    user_id: str
    title: str
    learning_goal: str | None
    pre_learning_state: str | None
    reflection: str | None
    next_action: str | None
    status: UnitStatus
    start_date: datetime | None
    end_date: datetime | None
    display_flag: bool
    tags: list[str]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_unit(cls, unit: Unit) -> "UnitResponse":
        data = unit.model_dump()
        data["id"] = str(unit.id)
        data["user_id"] = str(unit.user_id)
        return cls(**data)


class LogResponse(BaseModel):
    """Log as returned to its author."""

    id: str
    unit_id: str
    user_id: str
    title: str
    learning_time: int
    note: str | None
    logged_at: datetime
    tags: list[str]
    resources: list[LearningResource]
    created_at: datetime

    @classmethod
    def from_log(cls, log: Log) -> "LogResponse":
        return cls(
            id=str(log.id),
            unit_id=str(log.unit_id),
            user_id=str(log.user_id),
            title=log.title,
            learning_time=log.learning_time,
            note=log.note,
            logged_at=log.logged_at,
            tags=log.tags,
            resources=log.resources,
            created_at=log.created_at,
        )


class UnitDetailResponse(UnitResponse):
    """Unit together with its logs, newest first."""

    logs: list[LogResponse]
    total_learning_time: int  # Minutes across all logs

    @classmethod
    def from_unit_and_logs(
        cls, unit: Unit, logs: list[Log]
    ) -> "UnitDetailResponse":
        return cls(
            **UnitResponse.from_unit(unit).model_dump(),
            logs=[LogResponse.from_log(log) for log in logs],
            total_learning_time=sum(log.learning_time for log in logs),
        )
