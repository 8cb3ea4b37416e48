"""Database handle, schema setup and the connection-level retry policy."""
import logging
import time
from functools import wraps

from flask import current_app
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import inspect, text
from sqlalchemy.exc import DBAPIError, OperationalError, SQLAlchemyError

logger = logging.getLogger(__name__)

db = SQLAlchemy()

# Columns added to ``users`` after the table first shipped. Older databases
# get them via ALTER TABLE; all are additive and nullable or defaulted.
ADDITIVE_USER_COLUMNS = {
    "role": "VARCHAR(20) NOT NULL DEFAULT 'Customer'",
    "profile_image_url": "VARCHAR(500)",
    "preferred_car_type": "VARCHAR(50)",
    "driving_license_image_url": "VARCHAR(500)",
    "nid_image_url": "VARCHAR(500)",
    "car_number": "VARCHAR(20)",
    "driving_experience_years": "INTEGER",
    "license_number": "VARCHAR(100)",
}


def init_db():
    """Create missing tables, then add any missing additive ``users`` columns."""
    try:
        db.create_all()
        existing = {c["name"] for c in inspect(db.engine).get_columns("users")}
        missing = [name for name in ADDITIVE_USER_COLUMNS if name not in existing]
        for name in missing:
            db.session.execute(text(f"ALTER TABLE users ADD COLUMN {name} {ADDITIVE_USER_COLUMNS[name]}"))
            logger.info("Added column users.%s", name)
        if missing:
            db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Error initialising database schema")
        raise


def drop_db():
    db.drop_all()
    logger.info("All tables dropped")


def _is_transient(exc: Exception) -> bool:
    if isinstance(exc, OperationalError):
        return True
    return isinstance(exc, DBAPIError) and bool(exc.connection_invalidated)


def run_with_retry(work, attempts=None, max_delay=None, sleep=time.sleep):
    """
    Run ``work()`` and retry it when the database connection fails.

    Only connectivity failures are retried (OperationalError or an invalidated
    connection); integrity or validation errors propagate on the first try.
    The session is rolled back between attempts; backoff doubles from 0.5s
    and is capped at ``max_delay``.
    """
    cfg = current_app.config
    attempts = attempts if attempts is not None else cfg.get("DB_RETRY_ATTEMPTS", 3)
    max_delay = max_delay if max_delay is not None else cfg.get("DB_RETRY_MAX_DELAY", 30)
    attempts = max(1, int(attempts))

    delay = 0.5
    for attempt in range(1, attempts + 1):
        try:
            return work()
        except DBAPIError as exc:
            if not _is_transient(exc) or attempt == attempts:
                raise
            db.session.rollback()
            wait = min(delay, max_delay)
            logger.warning("Transient database error (attempt %d/%d), retrying in %.1fs: %s",
                           attempt, attempts, wait, exc)
            sleep(wait)
            delay *= 2


def with_retry(fn):
    """Decorator form of :func:`run_with_retry`."""

    @wraps(fn)
    def wrapper(*args, **kwargs):
        return run_with_retry(lambda: fn(*args, **kwargs))

    return wrapper
