"""SQLAlchemy table definitions for the leaderboard.

These definitions back the SQLAlchemy Core queries in the repositories.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE (one row per Steam account)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("steam_id", String(20), nullable=False),
    Column("username", String(255), nullable=False),  # Steam personaname
    Column("avatar_url", Text, nullable=True),
    Column("profile_url", Text, nullable=True),
    Column("real_name", String(255), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "last_login_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default="NOW()",
    ),
    UniqueConstraint("steam_id", name="uq_users_steam_id"),
)

# ============================================================================
# SESSIONS TABLE (opaque bearer tokens)
# ============================================================================
sessions_table = Table(
    "sessions",
    metadata,
    Column("token", String(255), primary_key=True),
    Column(
        "user_id",
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("created_at", TIMESTAMP(timezone=True), nullable=False),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
    Column("is_active", Boolean, nullable=False, server_default="true"),
    CheckConstraint("expires_at > created_at", name="ck_sessions_expiry"),
)

Index("idx_sessions_user_active", sessions_table.c.user_id, sessions_table.c.is_active)
Index("idx_sessions_expires_at", sessions_table.c.expires_at)

# ============================================================================
# GAMBLING SITES TABLE
# ============================================================================
gambling_sites_table = Table(
    "gambling_sites",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("name", String(100), nullable=False),
    Column("code", String(100), nullable=False),  # Affiliate code players enter
    Column("logo_url", Text, nullable=True),
    Column("is_active", Boolean, nullable=False, server_default="true"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("name", name="uq_gambling_sites_name"),
)

# ============================================================================
# USER STATISTICS TABLE (one row per user and site)
# ============================================================================
user_statistics_table = Table(
    "user_statistics",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column(
        "user_id",
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "site_id",
        UUID(as_uuid=True),
        ForeignKey("gambling_sites.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("games_played", Integer, nullable=False, server_default="0"),
    Column("win_streak", Integer, nullable=False, server_default="0"),
    Column("wagered_amount", Numeric(18, 2), nullable=False, server_default="0"),
    Column("total_won", Numeric(18, 2), nullable=False, server_default="0"),
    Column("total_lost", Numeric(18, 2), nullable=False, server_default="0"),
    Column("affiliate_code_used", String(100), nullable=True),
    Column("last_played_at", TIMESTAMP(timezone=True), nullable=True),
    Column("last_activity_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("user_id", "site_id", name="uq_user_statistics_user_site"),
    CheckConstraint("games_played >= 0", name="ck_user_statistics_games_played"),
)

Index(
    "idx_user_statistics_site_wagered",
    user_statistics_table.c.site_id,
    user_statistics_table.c.wagered_amount.desc(),
)
