"""
Reintentos ante bloqueos de la base de datos.

- Detecta MySQL 1213 (Deadlock) y 1205 (Lock wait timeout)
- Detecta "database is locked" de SQLite
- Reintenta con backoff exponencial y se rinde tras max_attempts
"""

from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError

from marketplace.infrastructure.db.retry import is_deadlock_error, retry_on_deadlock


def _deadlock() -> OperationalError:
    return OperationalError(
        "statement",
        "params",
        "(asyncmy.errors.OperationalError) (1213, 'Deadlock found')",
        connection_invalidated=False,
    )


class TestDeadlockDetection:
    def test_detect_mysql_deadlock_error_1213(self):
        assert is_deadlock_error(_deadlock())

    def test_detect_mysql_lock_timeout_error_1205(self):
        error = OperationalError(
            "statement",
            "params",
            "(asyncmy.errors.OperationalError) (1205, 'Lock wait timeout exceeded')",
            connection_invalidated=False,
        )

        assert is_deadlock_error(error)

    def test_detect_sqlite_locked(self):
        error = OperationalError(
            "statement",
            "params",
            "(sqlite3.OperationalError) database is locked",
            connection_invalidated=False,
        )

        assert is_deadlock_error(error)

    def test_ignore_non_deadlock_errors(self):
        assert not is_deadlock_error(Exception("Generic error"))

        lost_connection = OperationalError(
            "statement",
            "params",
            "(asyncmy.errors.OperationalError) (2013, 'Lost connection to MySQL server')",
            connection_invalidated=False,
        )
        assert not is_deadlock_error(lost_connection)


class TestRetryLogic:
    async def test_retry_succeeds_on_first_attempt(self):
        call_count = 0

        async def successful_func():
            nonlocal call_count
            call_count += 1
            return "success"

        result = await retry_on_deadlock(successful_func, max_attempts=3)

        assert result == "success"
        assert call_count == 1

    async def test_retry_on_deadlock_until_success(self):
        call_count = 0

        async def fails_twice_then_succeeds():
            nonlocal call_count
            call_count += 1
            if call_count <= 2:
                raise _deadlock()
            return "success_after_retries"

        result = await retry_on_deadlock(fails_twice_then_succeeds, max_attempts=3, base_delay=0.01)

        assert result == "success_after_retries"
        assert call_count == 3

    async def test_retry_fails_after_max_attempts(self):
        call_count = 0

        async def always_fails():
            nonlocal call_count
            call_count += 1
            raise _deadlock()

        with pytest.raises(OperationalError):
            await retry_on_deadlock(always_fails, max_attempts=3, base_delay=0.01)

        assert call_count == 3

    async def test_non_deadlock_error_not_retried(self):
        call_count = 0

        async def raises_value_error():
            nonlocal call_count
            call_count += 1
            raise ValueError("Not a deadlock")

        with pytest.raises(ValueError, match="Not a deadlock"):
            await retry_on_deadlock(raises_value_error, max_attempts=3)

        assert call_count == 1

    async def test_backoff_delays_double(self):
        delays = []

        async def fake_sleep(delay):
            delays.append(delay)

        async def always_fails():
            raise _deadlock()

        with patch("marketplace.infrastructure.db.retry.asyncio.sleep", fake_sleep):
            with pytest.raises(OperationalError):
                await retry_on_deadlock(always_fails, max_attempts=4, base_delay=0.1)

        assert delays == pytest.approx([0.1, 0.2, 0.4])

    async def test_retry_is_logged(self):
        call_count = 0

        async def fails_once():
            nonlocal call_count
            call_count += 1
            if call_count == 1:
                raise _deadlock()
            return "success"

        with patch("marketplace.infrastructure.db.retry.logger") as mock_logger:
            await retry_on_deadlock(fails_once, max_attempts=3, base_delay=0.01)

        assert mock_logger.warning.called
        assert "deadlock" in mock_logger.warning.call_args[0][0].lower()
