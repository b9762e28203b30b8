"""Domain services."""

from .auth_service import AuthService, IdentityProviderClient
from .base import Service
from .leaderboard_service import LeaderboardService
from .session_service import SessionService, generate_session_token
from .user_service import UserService

__all__ = [
    "AuthService",
    "IdentityProviderClient",
    "LeaderboardService",
    "Service",
    "SessionService",
    "UserService",
    "generate_session_token",
]
