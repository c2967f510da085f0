from __future__ import annotations

import json
import logging
from typing import Optional

from flask import has_request_context, session

from ..core.constants import AUTH_TOKEN_KEY, AUTH_USER_KEY
from .model import User

logger = logging.getLogger(__name__)


class AuthStore:
    """Persists the token/user pair in the signed Flask session cookie."""

    def get_token(self) -> Optional[str]:
        if not has_request_context():
            return None
        return session.get(AUTH_TOKEN_KEY)

    def get_user(self) -> Optional[User]:
        if not has_request_context():
            return None
        raw = session.get(AUTH_USER_KEY)
        if not raw:
            return None
        try:
            return User.from_snapshot(json.loads(raw))
        except (TypeError, ValueError, KeyError):
            logger.warning("Discarding unreadable user snapshot from session")
            return None

    def save(self, token: str, user: User, *, remember: bool = False) -> None:
        session.permanent = remember
        session[AUTH_TOKEN_KEY] = token
        session[AUTH_USER_KEY] = json.dumps(user.to_snapshot())

    def save_user(self, user: User) -> None:
        session[AUTH_USER_KEY] = json.dumps(user.to_snapshot())

    def clear(self) -> None:
        session.pop(AUTH_TOKEN_KEY, None)
        session.pop(AUTH_USER_KEY, None)
