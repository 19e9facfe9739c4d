"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from journal.domain.model import LinkedAccount, Log, Unit, User
from journal.domain.value import (
    AuthMethod,
    AuthProvider,
    LearningResource,
    LinkedAccountId,
    LogId,
    UnitId,
    UnitStatus,
    UserId,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        email=row["email"],
        name=row.get("name"),
        hashed_password=row.get("hashed_password"),
        primary_auth_method=AuthMethod(row["primary_auth_method"]),
        image=row.get("image"),
        bio=row.get("bio"),
        age=row.get("age"),
        age_visible=row.get("age_visible", False),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict.

    Args:
        user: User domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = user.model_dump()
    data["primary_auth_method"] = user.primary_auth_method.value
    return data


def row_to_linked_account(row: Dict[str, Any]) -> LinkedAccount:
    """Convert database row to LinkedAccount domain model.

    Args:
        row: Database row as dict

    Returns:
        LinkedAccount domain model
    """
    return LinkedAccount(
        id=LinkedAccountId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        provider=AuthProvider(row["provider"]),
        provider_account_id=row["provider_account_id"],
        type=row["type"],
        access_token=row.get("access_token"),
        refresh_token=row.get("refresh_token"),
        token_type=row.get("token_type"),
        scope=row.get("scope"),
        expires_at=row.get("expires_at"),
        created_at=row["created_at"],
    )


def linked_account_to_dict(account: LinkedAccount) -> Dict[str, Any]:
    data = account.model_dump()
    data["provider"] = account.provider.value
    return data


def row_to_unit(row: Dict[str, Any]) -> Unit:
    """Convert database row to Unit domain model."""
    return Unit(
        id=UnitId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        title=row["title"],
        learning_goal=row.get("learning_goal"),
        pre_learning_state=row.get("pre_learning_state"),
        reflection=row.get("reflection"),
        next_action=row.get("next_action"),
        status=UnitStatus(row["status"]),
        start_date=row.get("start_date"),
        end_date=row.get("end_date"),
        display_flag=row["display_flag"],
        tags=list(row.get("tags") or []),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def unit_to_dict(unit: Unit) -> Dict[str, Any]:
    data = unit.model_dump()
    data["status"] = unit.status.value
    return data


def row_to_log(row: Dict[str, Any]) -> Log:
    """Convert database row to Log domain model."""
    return Log(
        id=LogId(_uuid(row["id"])),
        unit_id=UnitId(_uuid(row["unit_id"])),
        user_id=UserId(_uuid(row["user_id"])),
        title=row["title"],
        learning_time=row["learning_time"],
        note=row.get("note"),
        logged_at=row["logged_at"],
        tags=list(row.get("tags") or []),
        resources=[LearningResource(**r) for r in row.get("resources") or []],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def log_to_dict(log: Log) -> Dict[str, Any]:
    data = log.model_dump()
    # JSONB column
    data["resources"] = [r.model_dump(mode="json") for r in log.resources]
    return data
