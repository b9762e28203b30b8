"""Domain layer DI providers."""

from dishka import Scope, provide

from leaderboard.config import AuthSettings
from leaderboard.domain.repository import (
    SessionRepository,
    SiteRepository,
    StatisticsRepository,
    UserRepository,
)
from leaderboard.domain.service import (
    AuthService,
    IdentityProviderClient,
    LeaderboardService,
    SessionService,
    UserService,
)
from leaderboard.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_auth_service(self, identity_client: IdentityProviderClient) -> AuthService:
        """Provide Steam authentication domain service."""
        return AuthService(identity_client=identity_client)

    @provide
    def get_session_service(
        self, session_repository: SessionRepository, auth_settings: AuthSettings
    ) -> SessionService:
        """Provide session domain service."""
        return SessionService(
            session_repository=session_repository, auth_settings=auth_settings
        )

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_leaderboard_service(
        self,
        site_repository: SiteRepository,
        statistics_repository: StatisticsRepository,
        user_repository: UserRepository,
    ) -> LeaderboardService:
        """Provide leaderboard domain service."""
        return LeaderboardService(
            site_repository=site_repository,
            statistics_repository=statistics_repository,
            user_repository=user_repository,
        )
