"""Request-scoped identity built from the signed session cookie."""
import logging
import time
from dataclasses import dataclass
from typing import Optional

from flask import current_app, session

from .constants import (
    SESSION_USER_ID, SESSION_USER_EMAIL, SESSION_USER_NAME, SESSION_USER_ROLE, SESSION_LAST_SEEN,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    user_id: int
    email: str
    name: str
    role: str


def start_session(user) -> Identity:
    """Replace whatever the session held with the given user's identity."""
    session.clear()
    session.permanent = True
    session[SESSION_USER_ID] = user.id
    session[SESSION_USER_EMAIL] = user.email
    session[SESSION_USER_NAME] = user.full_name
    session[SESSION_USER_ROLE] = user.role
    session[SESSION_LAST_SEEN] = time.time()
    return current_identity()


def current_identity() -> Optional[Identity]:
    uid = session.get(SESSION_USER_ID)
    if not uid:
        return None
    return Identity(
        user_id=int(uid),
        email=session.get(SESSION_USER_EMAIL, ""),
        name=session.get(SESSION_USER_NAME, ""),
        role=session.get(SESSION_USER_ROLE, ""),
    )


def enforce_idle_timeout():
    """before_request hook: drop sessions idle longer than SESSION_IDLE_MINUTES."""
    if SESSION_USER_ID not in session:
        return
    now = time.time()
    limit = current_app.config.get("SESSION_IDLE_MINUTES", 30) * 60
    last_seen = session.get(SESSION_LAST_SEEN)
    if last_seen is None or now - float(last_seen) > limit:
        logger.info("Session for user %s expired after inactivity", session.get(SESSION_USER_ID))
        session.clear()
        return
    session[SESSION_LAST_SEEN] = now
