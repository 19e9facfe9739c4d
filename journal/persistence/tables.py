"""SQLAlchemy table definitions for the Learning Journal.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    BigInteger,
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import ARRAY, JSONB, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("email", String(255), nullable=False),  # Normalised, unique
    Column("name", String(255), nullable=True),
    Column("hashed_password", Text, nullable=True),  # NULL for OAuth-only users
    Column(
        "primary_auth_method", String(20), nullable=False, server_default="email"
    ),
    Column("image", Text, nullable=True),
    Column("bio", Text, nullable=True),
    Column("age", Integer, nullable=True),
    Column("age_visible", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("email", name="uq_users_email"),
    CheckConstraint(
        "primary_auth_method IN ('email', 'google', 'github', 'discord')",
        name="valid_primary_auth_method",
    ),
    CheckConstraint("age IS NULL OR age >= 0", name="age_non_negative"),
)

# ============================================================================
# LINKED ACCOUNTS TABLE (OAuth providers)
# ============================================================================
linked_accounts_table = Table(
    "linked_accounts",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("provider", String(50), nullable=False),  # 'google', 'github', 'discord'
    Column("provider_account_id", String(255), nullable=False),
    Column("type", String(50), nullable=False, server_default="oauth"),
    Column("access_token", Text, nullable=True),
    Column("refresh_token", Text, nullable=True),
    Column("token_type", String(50), nullable=True),
    Column("scope", Text, nullable=True),
    Column("expires_at", BigInteger, nullable=True),  # Unix seconds
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint(
        "provider", "provider_account_id", name="uq_linked_accounts_provider_account"
    ),
    UniqueConstraint("user_id", "provider", name="uq_linked_accounts_user_provider"),
)

Index("idx_linked_accounts_user_id", linked_accounts_table.c.user_id)

# ============================================================================
# UNITS TABLE
# ============================================================================
units_table = Table(
    "units",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("title", String(255), nullable=False),
    Column("learning_goal", Text, nullable=True),
    Column("pre_learning_state", Text, nullable=True),
    Column("reflection", Text, nullable=True),
    Column("next_action", Text, nullable=True),
    Column("status", String(20), nullable=False, server_default="planned"),
    Column("start_date", TIMESTAMP(timezone=True), nullable=True),
    Column("end_date", TIMESTAMP(timezone=True), nullable=True),
    Column("display_flag", Boolean, nullable=False, server_default="true"),
    Column("tags", ARRAY(String(50)), nullable=False, server_default="{}"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "status IN ('planned', 'in_progress', 'completed')", name="valid_unit_status"
    ),
)

Index("idx_units_user_id", units_table.c.user_id)
Index("idx_units_created_at", units_table.c.created_at.desc())

# ============================================================================
# LOGS TABLE
# ============================================================================
logs_table = Table(
    "logs",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("unit_id", UUID, ForeignKey("units.id", ondelete="CASCADE"), nullable=False),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("title", String(255), nullable=False),
    Column("learning_time", Integer, nullable=False, server_default="0"),  # Minutes
    Column("note", Text, nullable=True),
    Column(
        "logged_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("tags", ARRAY(String(50)), nullable=False, server_default="{}"),
    Column("resources", JSONB, nullable=False, server_default="[]"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("learning_time >= 0", name="learning_time_non_negative"),
)

Index("idx_logs_unit_id", logs_table.c.unit_id)
Index("idx_logs_user_id", logs_table.c.user_id)
