"""Application layer DI providers."""

from dishka import Scope, provide

from leaderboard.application.usecase.auth import (
    ExchangeSessionUseCase,
    LogoutUseCase,
    VerifySessionUseCase,
)
from leaderboard.application.usecase.leaderboard import (
    GetLeaderboardUseCase,
    GetUserStatisticsUseCase,
    ListSitesUseCase,
    RecordStatisticsUseCase,
)
from leaderboard.config import Settings
from leaderboard.domain.service import (
    AuthService,
    LeaderboardService,
    SessionService,
    UserService,
)
from leaderboard.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Auth use cases
    @provide(scope=Scope.REQUEST)
    def get_exchange_session_use_case(
        self,
        auth_service: AuthService,
        user_service: UserService,
        session_service: SessionService,
        settings: Settings,
    ) -> ExchangeSessionUseCase:
        """Provide session exchange use case."""
        return ExchangeSessionUseCase(
            auth_service=auth_service,
            user_service=user_service,
            session_service=session_service,
            settings=settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_verify_session_use_case(
        self, session_service: SessionService, user_service: UserService
    ) -> VerifySessionUseCase:
        """Provide verify session use case."""
        return VerifySessionUseCase(
            session_service=session_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_logout_use_case(self, session_service: SessionService) -> LogoutUseCase:
        """Provide logout use case."""
        return LogoutUseCase(session_service=session_service)

    # Leaderboard use cases
    @provide(scope=Scope.REQUEST)
    def get_list_sites_use_case(
        self, leaderboard_service: LeaderboardService
    ) -> ListSitesUseCase:
        """Provide list sites use case."""
        return ListSitesUseCase(leaderboard_service=leaderboard_service)

    @provide(scope=Scope.REQUEST)
    def get_get_leaderboard_use_case(
        self, leaderboard_service: LeaderboardService
    ) -> GetLeaderboardUseCase:
        """Provide get leaderboard use case."""
        return GetLeaderboardUseCase(leaderboard_service=leaderboard_service)

    @provide(scope=Scope.REQUEST)
    def get_get_user_statistics_use_case(
        self, leaderboard_service: LeaderboardService
    ) -> GetUserStatisticsUseCase:
        """Provide get user statistics use case."""
        return GetUserStatisticsUseCase(leaderboard_service=leaderboard_service)

    @provide(scope=Scope.REQUEST)
    def get_record_statistics_use_case(
        self, leaderboard_service: LeaderboardService, settings: Settings
    ) -> RecordStatisticsUseCase:
        """Provide record statistics use case."""
        return RecordStatisticsUseCase(
            leaderboard_service=leaderboard_service, settings=settings
        )
