"""Authentication use cases."""

from .exchange_session import ExchangeSessionUseCase
from .logout import LogoutUseCase
from .verify_session import VerifySessionUseCase

__all__ = ["ExchangeSessionUseCase", "LogoutUseCase", "VerifySessionUseCase"]
