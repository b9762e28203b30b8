"""initial_schema

Create the schema for the leaderboard:
- Users (one row per Steam account)
- Sessions (opaque bearer tokens, one active per user)
- Gambling sites (affiliate partners)
- User statistics (one row per user and site)

Revision ID: 3f1c2a9d7e40
Revises:
Create Date: 2026-10-17 09:12:04.511203

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d7e40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # ========================================================================
    # USERS table
    # ========================================================================
    op.create_table(
        "users",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("steam_id", sa.String(20), nullable=False),
        sa.Column("username", sa.String(255), nullable=False),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        sa.Column("profile_url", sa.Text(), nullable=True),
        sa.Column("real_name", sa.String(255), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "last_login_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("steam_id", name="uq_users_steam_id"),
    )

    # ========================================================================
    # SESSIONS table
    # ========================================================================
    op.create_table(
        "sessions",
        sa.Column("token", sa.String(255), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("expires_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("token"),
        sa.CheckConstraint("expires_at > created_at", name="ck_sessions_expiry"),
    )
    op.create_index(
        "idx_sessions_user_active", "sessions", ["user_id", "is_active"]
    )
    op.create_index("idx_sessions_expires_at", "sessions", ["expires_at"])

    # ========================================================================
    # GAMBLING_SITES table
    # ========================================================================
    op.create_table(
        "gambling_sites",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("code", sa.String(100), nullable=False),
        sa.Column("logo_url", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name", name="uq_gambling_sites_name"),
    )

    # ========================================================================
    # USER_STATISTICS table
    # ========================================================================
    op.create_table(
        "user_statistics",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("site_id", sa.UUID(), nullable=False),
        sa.Column("games_played", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("win_streak", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "wagered_amount", sa.Numeric(18, 2), nullable=False, server_default="0"
        ),
        sa.Column("total_won", sa.Numeric(18, 2), nullable=False, server_default="0"),
        sa.Column("total_lost", sa.Numeric(18, 2), nullable=False, server_default="0"),
        sa.Column("affiliate_code_used", sa.String(100), nullable=True),
        sa.Column("last_played_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("last_activity_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["site_id"], ["gambling_sites.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "site_id", name="uq_user_statistics_user_site"),
        sa.CheckConstraint(
            "games_played >= 0", name="ck_user_statistics_games_played"
        ),
    )
    op.create_index(
        "idx_user_statistics_site_wagered",
        "user_statistics",
        ["site_id", sa.text("wagered_amount DESC")],
    )


def downgrade() -> None:
    """Downgrade schema."""
    # Drop tables (in reverse order of dependencies)
    op.drop_table("user_statistics")
    op.drop_table("gambling_sites")
    op.drop_table("sessions")
    op.drop_table("users")
