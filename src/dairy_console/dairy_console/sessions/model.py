from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SessionLog:
    """One active login on the backend, keyed by its bearer token."""

    token: str
    user_id: Optional[int]
    username: str
    ip_address: str
    user_agent: str
    created_at: Optional[str] = None

    @property
    def created_label(self) -> str:
        # 2025-07-15T08:30:00.000Z -> 2025-07-15 08:30
        if not self.created_at:
            return ""
        return self.created_at[:16].replace("T", " ")
