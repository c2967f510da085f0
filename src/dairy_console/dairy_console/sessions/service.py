from __future__ import annotations

import logging
from typing import List, Optional

from ..common.validators import require_non_empty
from ..core.enums import Role
from ..users.model import User
from ..users.service import require_role
from .model import SessionLog
from .repository import SessionLogRepository

logger = logging.getLogger(__name__)


class SessionLogService:
    """Use case: list active sessions and force-logout them (admin only)."""

    def __init__(self, sessions: SessionLogRepository):
        self._sessions = sessions

    def list_sessions(self, *, current_user: Optional[User], search: str = "") -> List[SessionLog]:
        require_role(current_user, Role.ADMIN)
        items = list(self._sessions.list_all())
        q = (search or "").strip().lower()
        if not q:
            return items
        return [
            s
            for s in items
            if q in s.username.lower() or q in s.ip_address.lower() or q in s.token.lower()
        ]

    def force_logout(self, *, current_user: Optional[User], token: str) -> None:
        admin = require_role(current_user, Role.ADMIN)
        token = require_non_empty(token, "Token")
        self._sessions.delete_by_token(token)
        logger.info("Session %s... closed by %s", token[:8], admin.username)
