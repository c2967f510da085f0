from __future__ import annotations

from typing import Any, Dict, Sequence
from urllib.parse import quote

from ..api.client import ApiClient
from ..api.envelope import unwrap_list
from ..core.exceptions import ApiError
from .model import SessionLog
from .repository import SessionLogRepository


def to_session_log(row: Dict[str, Any]) -> SessionLog:
    try:
        user = row.get("user") if isinstance(row.get("user"), dict) else {}
        user_id = row.get("userId")
        return SessionLog(
            token=str(row["token"]),
            user_id=int(user_id) if user_id is not None else None,
            username=str(user.get("username") or ""),
            ip_address=str(row.get("ipAddress") or ""),
            user_agent=str(row.get("userAgent") or ""),
            created_at=row.get("createdAt"),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ApiError(f"Unexpected session log payload: {e}")


class RestSessionLogRepository(SessionLogRepository):
    def __init__(self, client: ApiClient):
        self._client = client

    def list_all(self) -> Sequence[SessionLog]:
        rows = unwrap_list(self._client.get("/session-logs"), "sessionLogs", "sessionLog")
        return [to_session_log(r) for r in rows]

    def delete_by_token(self, token: str) -> None:
        self._client.delete(f"/session-logs/{quote(token, safe='')}")
