"""initial_schema

Create the foundational schema for the Learning Journal:
- Users (email identity, optional password hash, primary auth method)
- Linked Accounts (OAuth identities: Google, GitHub, Discord)
- Units (learning units owned by a user)
- Logs (study sessions recorded against a unit)

Revision ID: 3f1c9a7d2b64
Revises:
Create Date: 2026-10-19 10:12:44.318204

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3f1c9a7d2b64"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # gen_random_uuid() lives in pgcrypto before PostgreSQL 13
    op.execute('CREATE EXTENSION IF NOT EXISTS "pgcrypto"')

    # ========================================================================
    # USERS table
    # ========================================================================
    op.create_table(
        "users",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("email", sa.String(255), nullable=False),  # Normalised
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("hashed_password", sa.Text(), nullable=True),
        sa.Column(
            "primary_auth_method",
            sa.String(20),
            nullable=False,
            server_default="email",
        ),
        sa.Column("image", sa.Text(), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("age", sa.Integer(), nullable=True),
        sa.Column("age_visible", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", name="uq_users_email"),
        sa.CheckConstraint(
            "primary_auth_method IN ('email', 'google', 'github', 'discord')",
            name="valid_primary_auth_method",
        ),
        sa.CheckConstraint("age IS NULL OR age >= 0", name="age_non_negative"),
    )

    # ========================================================================
    # LINKED_ACCOUNTS table (one row per provider identity)
    # ========================================================================
    op.create_table(
        "linked_accounts",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("provider", sa.String(50), nullable=False),
        sa.Column("provider_account_id", sa.String(255), nullable=False),
        sa.Column("type", sa.String(50), nullable=False, server_default="oauth"),
        sa.Column("access_token", sa.Text(), nullable=True),
        sa.Column("refresh_token", sa.Text(), nullable=True),
        sa.Column("token_type", sa.String(50), nullable=True),
        sa.Column("scope", sa.Text(), nullable=True),
        sa.Column("expires_at", sa.BigInteger(), nullable=True),  # Unix seconds
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "provider",
            "provider_account_id",
            name="uq_linked_accounts_provider_account",
        ),
        sa.UniqueConstraint(
            "user_id", "provider", name="uq_linked_accounts_user_provider"
        ),
    )
    op.create_index("idx_linked_accounts_user_id", "linked_accounts", ["user_id"])

    # ========================================================================
    # UNITS table
    # ========================================================================
    op.create_table(
        "units",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("learning_goal", sa.Text(), nullable=True),
        sa.Column("pre_learning_state", sa.Text(), nullable=True),
        sa.Column("reflection", sa.Text(), nullable=True),
        sa.Column("next_action", sa.Text(), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="planned"),
        sa.Column("start_date", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("end_date", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("display_flag", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column(
            "tags",
            postgresql.ARRAY(sa.String(50)),
            nullable=False,
            server_default="{}",
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "status IN ('planned', 'in_progress', 'completed')",
            name="valid_unit_status",
        ),
    )
    op.create_index("idx_units_user_id", "units", ["user_id"])
    op.create_index(
        "idx_units_created_at", "units", [sa.text("created_at DESC")]
    )

    # ========================================================================
    # LOGS table
    # ========================================================================
    op.create_table(
        "logs",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("unit_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("learning_time", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("note", sa.Text(), nullable=True),
        sa.Column(
            "logged_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "tags",
            postgresql.ARRAY(sa.String(50)),
            nullable=False,
            server_default="{}",
        ),
        sa.Column(
            "resources",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'[]'::jsonb"),
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["unit_id"], ["units.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("learning_time >= 0", name="learning_time_non_negative"),
    )
    op.create_index("idx_logs_unit_id", "logs", ["unit_id"])
    op.create_index("idx_logs_user_id", "logs", ["user_id"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_logs_user_id", table_name="logs")
    op.drop_index("idx_logs_unit_id", table_name="logs")
    op.drop_table("logs")

    op.drop_index("idx_units_created_at", table_name="units")
    op.drop_index("idx_units_user_id", table_name="units")
    op.drop_table("units")

    op.drop_index("idx_linked_accounts_user_id", table_name="linked_accounts")
    op.drop_table("linked_accounts")

    op.drop_table("users")
