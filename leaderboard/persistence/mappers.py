"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict, Mapping
from uuid import UUID

from leaderboard.domain.model import GamblingSite, Session, User, UserStatistics
from leaderboard.domain.value import (
    SessionToken,
    SiteId,
    StatisticsId,
    SteamId,
    UserId,
)

# Prefix for user columns selected alongside statistics in one row
USER_PREFIX = "u_"


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_user(row: Mapping[str, Any], prefix: str = "") -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as mapping
        prefix: Column label prefix when the row joins several tables

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row[f"{prefix}id"])),
        steam_id=SteamId(row[f"{prefix}steam_id"]),
        username=row[f"{prefix}username"],
        avatar_url=row.get(f"{prefix}avatar_url"),
        profile_url=row.get(f"{prefix}profile_url"),
        real_name=row.get(f"{prefix}real_name"),
        created_at=row[f"{prefix}created_at"],
        last_login_at=row[f"{prefix}last_login_at"],
    )


def row_to_session(row: Mapping[str, Any]) -> Session:
    """Convert database row to Session domain model."""
    return Session(
        token=SessionToken(row["token"]),
        user_id=UserId(_uuid(row["user_id"])),
        created_at=row["created_at"],
        expires_at=row["expires_at"],
        is_active=row["is_active"],
    )


def session_to_dict(session: Session) -> Dict[str, Any]:
    """Convert Session domain model to database dict."""
    return {
        "token": session.token.root,
        "user_id": session.user_id,
        "created_at": session.created_at,
        "expires_at": session.expires_at,
        "is_active": session.is_active,
    }


def row_to_site(row: Mapping[str, Any]) -> GamblingSite:
    """Convert database row to GamblingSite domain model."""
    return GamblingSite(
        id=SiteId(_uuid(row["id"])),
        name=row["name"],
        code=row["code"],
        logo_url=row.get("logo_url"),
        is_active=row["is_active"],
    )


def site_to_dict(site: GamblingSite) -> Dict[str, Any]:
    """Convert GamblingSite domain model to database dict."""
    return site.model_dump()


def row_to_statistics(row: Mapping[str, Any]) -> UserStatistics:
    """Convert database row to UserStatistics domain model."""
    return UserStatistics(
        id=StatisticsId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        site_id=SiteId(_uuid(row["site_id"])),
        games_played=row["games_played"],
        win_streak=row["win_streak"],
        wagered_amount=row["wagered_amount"],
        total_won=row["total_won"],
        total_lost=row["total_lost"],
        affiliate_code_used=row.get("affiliate_code_used"),
        last_played_at=row.get("last_played_at"),
        last_activity_at=row.get("last_activity_at"),
        updated_at=row["updated_at"],
    )


def statistics_to_dict(statistics: UserStatistics) -> Dict[str, Any]:
    """Convert UserStatistics domain model to database dict."""
    return statistics.model_dump()
