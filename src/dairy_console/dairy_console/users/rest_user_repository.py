from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..api.client import ApiClient
from ..api.envelope import unwrap_item, unwrap_list
from ..core.enums import Role
from ..core.exceptions import ApiError
from .model import AuthResult, User
from .repository import AuthRepository, UserRepository


def to_user(row: Dict[str, Any]) -> User:
    try:
        return User(
            id=int(row["id"]),
            username=str(row["username"]),
            role=Role(str(row.get("role") or Role.USER.value).upper()),
            created_at=row.get("createdAt"),
            updated_at=row.get("updatedAt"),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ApiError(f"Unexpected user payload: {e}")


def _to_auth_result(payload: Any) -> AuthResult:
    if not isinstance(payload, dict) or not payload.get("token") or not isinstance(payload.get("user"), dict):
        raise ApiError("Unexpected authentication response")
    return AuthResult(token=str(payload["token"]), user=to_user(payload["user"]))


class RestAuthRepository(AuthRepository):
    def __init__(self, client: ApiClient):
        self._client = client

    def login(self, username: str, password: str) -> AuthResult:
        payload = self._client.post("/auth/login", {"username": username, "password": password})
        return _to_auth_result(payload)

    def register(self, username: str, password: str, role: Optional[Role] = None) -> AuthResult:
        body: Dict[str, Any] = {"username": username, "password": password}
        if role is not None:
            body["role"] = role.value
        payload = self._client.post("/auth/register", body)
        return _to_auth_result(payload)


class RestUserRepository(UserRepository):
    def __init__(self, client: ApiClient):
        self._client = client

    def list_all(self) -> Sequence[User]:
        rows = unwrap_list(self._client.get("/users"), "users", "user")
        return [to_user(r) for r in rows]

    def get_current(self) -> User:
        return to_user(unwrap_item(self._client.get("/users/me"), "user"))

    def get_by_id(self, user_id: int) -> User:
        return to_user(unwrap_item(self._client.get(f"/users/{user_id}"), "user"))

    def update_role(self, user_id: int, role: Role) -> None:
        self._client.put(f"/users/{user_id}/role", {"role": role.value})

    def update_password(self, user_id: int, password: str) -> None:
        self._client.put(f"/users/{user_id}/password", {"password": password})

    def delete_by_id(self, user_id: int) -> None:
        self._client.delete(f"/users/{user_id}")
