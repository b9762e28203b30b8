"""Translation of driver failures into domain storage errors."""

from collections.abc import Iterator
from contextlib import contextmanager

import logfire
from sqlalchemy.exc import SQLAlchemyError

from leaderboard.domain.error import StorageError


@contextmanager
def storage_errors(operation: str) -> Iterator[None]:
    """Re-raise SQLAlchemy failures as ``StorageError``.

    The driver message is logged and kept as the cause; callers only see the
    generic storage error.

    Args:
        operation: Name of the repository operation, for logs
    """
    try:
        yield
    except SQLAlchemyError as e:
        logfire.error("Storage operation failed", operation=operation, error=str(e))
        raise StorageError(f"{operation} failed") from e
