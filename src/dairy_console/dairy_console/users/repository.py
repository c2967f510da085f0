from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import AuthResult, User


class AuthRepository(Protocol):
    """Login/registration endpoints of the backend."""

    def login(self, username: str, password: str) -> AuthResult:
        raise NotImplementedError

    def register(self, username: str, password: str, role: Optional[Role] = None) -> AuthResult:
        raise NotImplementedError


class UserRepository(Protocol):
    """Repository interface for User.

    Note: services depend on this interface, never on the HTTP client directly.
    """

    def list_all(self) -> Sequence[User]:
        raise NotImplementedError

    def get_current(self) -> User:
        raise NotImplementedError

    def get_by_id(self, user_id: int) -> User:
        raise NotImplementedError

    def update_role(self, user_id: int, role: Role) -> None:
        raise NotImplementedError

    def update_password(self, user_id: int, password: str) -> None:
        raise NotImplementedError

    def delete_by_id(self, user_id: int) -> None:
        raise NotImplementedError
