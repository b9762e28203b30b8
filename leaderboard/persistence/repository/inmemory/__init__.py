"""In-memory repository implementations for testing."""

from .session import InMemorySessionRepository
from .site import InMemorySiteRepository
from .statistics import InMemoryStatisticsRepository
from .store import InMemoryStore
from .user import InMemoryUserRepository

__all__ = [
    "InMemorySessionRepository",
    "InMemorySiteRepository",
    "InMemoryStatisticsRepository",
    "InMemoryStore",
    "InMemoryUserRepository",
]
