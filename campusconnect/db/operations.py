"""Database operations and utilities.

Retry logic for transient failures of the relational store.
"""

import logging
import time
from functools import wraps
from typing import Any, Callable, TypeVar

from sqlalchemy.exc import OperationalError

from .db_core import DatabaseError, SessionError

logger = logging.getLogger(__name__)

T = TypeVar('T')


def _is_transient(error: BaseException, exceptions: tuple) -> bool:
    # Database.session() wraps driver errors in SessionError
    if isinstance(error, exceptions):
        return True
    return isinstance(error, SessionError) and isinstance(error.__cause__, exceptions)


def with_retry(
    max_attempts: int = 3,
    delay: float = 0.1,
    backoff: float = 2,
    exceptions: tuple = (OperationalError,)
) -> Callable:
    """
    Retry a blocking database read on transient errors.

    Only ``exceptions`` (raised directly or as the cause of a SessionError)
    are retried, with exponential backoff; anything else, and the last
    transient failure, propagates.

    Example:
        @with_retry(max_attempts=3)
        def event_ids_for(user_id: str) -> List[str]:
            with db.session() as session:
                ...
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            wait = delay
            for attempt in range(1, max_attempts + 1):
                try:
                    return func(*args, **kwargs)
                except (DatabaseError, *exceptions) as e:
                    if not _is_transient(e, exceptions) or attempt == max_attempts:
                        logger.error(f"{func.__name__} failed after {attempt} attempt(s): {e}")
                        raise
                    logger.warning(
                        f"{func.__name__} attempt {attempt}/{max_attempts} failed: {e}. "
                        f"Retrying in {wait}s..."
                    )
                    time.sleep(wait)
                    wait *= backoff
            raise DatabaseError(f"{func.__name__} was not attempted")
        return wrapper
    return decorator
