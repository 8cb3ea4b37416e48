"""Connection-level retry: transient errors are retried, business errors are not."""
import pytest
from sqlalchemy.exc import OperationalError, IntegrityError

from car_rental.models.store import run_with_retry, with_retry


def _flaky(failures, exc):
    calls = {"n": 0}

    def work():
        calls["n"] += 1
        if calls["n"] <= failures:
            raise exc
        return "ok"

    return work, calls


def test_retries_operational_error_then_succeeds(app):
    work, calls = _flaky(2, OperationalError("SELECT 1", {}, Exception("server closed the connection")))
    sleeps = []
    assert run_with_retry(work, attempts=3, sleep=sleeps.append) == "ok"
    assert calls["n"] == 3
    assert len(sleeps) == 2


def test_backoff_is_capped(app):
    work, _ = _flaky(2, OperationalError("SELECT 1", {}, Exception("gone")))
    sleeps = []
    run_with_retry(work, attempts=3, max_delay=0.6, sleep=sleeps.append)
    assert sleeps == [0.5, 0.6]


def test_gives_up_after_bounded_attempts(app):
    work, calls = _flaky(10, OperationalError("SELECT 1", {}, Exception("gone")))
    with pytest.raises(OperationalError):
        run_with_retry(work, attempts=3, sleep=lambda s: None)
    assert calls["n"] == 3


def test_integrity_error_is_not_retried(app):
    work, calls = _flaky(1, IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed")))
    with pytest.raises(IntegrityError):
        run_with_retry(work, attempts=3, sleep=lambda s: None)
    assert calls["n"] == 1


def test_decorator_form(app):
    @with_retry
    def add(a, b):
        return a + b

    assert add(2, 3) == 5
