"""
Reintentos ante fallas transitorias de la base de datos.

Las escrituras de reservas y pagos compiten por las mismas filas (agenda del
proveedor, pagos de una reserva). Un deadlock de MySQL o un "database is
locked" de SQLite se reintenta con backoff exponencial; cualquier otro error
se propaga de inmediato.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from sqlalchemy.exc import DBAPIError, OperationalError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# MySQL error codes
MYSQL_DEADLOCK_ERROR = "1213"
MYSQL_LOCK_WAIT_TIMEOUT = "1205"
SQLITE_LOCKED = "database is locked"


def is_deadlock_error(error: Exception) -> bool:
    """
    Check if an exception is a transient locking error worth retrying.

    Args:
        error: The exception to check

    Returns:
        True for MySQL deadlocks/lock wait timeouts and SQLite lock errors
    """
    if isinstance(error, (OperationalError, DBAPIError)):
        error_str = str(error)
        return (
            MYSQL_DEADLOCK_ERROR in error_str
            or MYSQL_LOCK_WAIT_TIMEOUT in error_str
            or SQLITE_LOCKED in error_str
        )
    return False


async def retry_on_deadlock(
    func: Callable[[], Awaitable[T]],
    max_attempts: int = 3,
    base_delay: float = 0.1,
) -> T:
    """
    Run ``func`` and retry it when it fails with a locking error.

    Uses exponential backoff: base_delay * (2 ** attempt). ``func`` must open
    its own transaction so every attempt starts clean.

    Raises:
        The original exception if max attempts are exhausted or the error is
        not a locking error.

    Example:
        response = await retry_on_deadlock(
            lambda: use_case.execute(context=context, request=payload)
        )
    """
    for attempt in range(max_attempts):
        try:
            return await func()
        except Exception as e:
            if not is_deadlock_error(e):
                raise

            if attempt == max_attempts - 1:
                logger.error(
                    "Database deadlock persists after max retries",
                    extra={"attempts": max_attempts, "error": str(e)},
                )
                raise

            delay = base_delay * (2 ** attempt)
            logger.warning(
                "Database deadlock detected, retrying",
                extra={
                    "attempt": attempt + 1,
                    "max_attempts": max_attempts,
                    "retry_delay": delay,
                    "error": str(e),
                },
            )
            await asyncio.sleep(delay)

    raise RuntimeError("retry_on_deadlock called with max_attempts < 1")
