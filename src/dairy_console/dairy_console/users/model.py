from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Console user as returned by the backend.

    Note: the password never leaves the backend; only id/username/role are mirrored.
    """

    id: int
    username: str
    role: Role
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def to_snapshot(self) -> Dict[str, Any]:
        data = asdict(self)
        data["role"] = self.role.value
        return data

    @classmethod
    def from_snapshot(cls, data: Dict[str, Any]) -> "User":
        return cls(
            id=int(data["id"]),
            username=str(data["username"]),
            role=Role(data["role"]),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )


@dataclass(frozen=True)
class AuthResult:
    token: str
    user: User
