from __future__ import annotations

import logging
from typing import List, Optional, Protocol

from ..common.validators import require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import ApiError, AuthenticationError, AuthorizationError, UnauthorizedError, ValidationError
from .model import User
from .repository import AuthRepository, UserRepository

logger = logging.getLogger(__name__)


def has_permission(user: Optional[User], required_role: Role) -> bool:
    if not user:
        return False
    return user.role.rank >= required_role.rank


def require_role(user: Optional[User], required_role: Role) -> User:
    if not has_permission(user, required_role):
        raise AuthorizationError("Sizda bu amal uchun ruxsat yo'q")
    return user


class TokenStore(Protocol):
    def get_token(self) -> Optional[str]: ...

    def get_user(self) -> Optional[User]: ...

    def save(self, token: str, user: User, *, remember: bool = False) -> None: ...

    def save_user(self, user: User) -> None: ...

    def clear(self) -> None: ...


class AuthService:
    """Use case: login/logout and the current-user snapshot."""

    def __init__(self, auth: AuthRepository, users: UserRepository, store: TokenStore):
        self._auth = auth
        self._users = users
        self._store = store

    def login(self, username: str, password: str, *, remember: bool = False) -> User:
        username = require_non_empty(username, "Foydalanuvchi nomi")
        password = require_non_empty(password, "Parol")

        try:
            result = self._auth.login(username, password)
        except UnauthorizedError:
            raise AuthenticationError("Foydalanuvchi nomi yoki parol noto'g'ri")

        self._store.save(result.token, result.user, remember=remember)
        logger.info("User %s logged in (role=%s)", result.user.username, result.user.role.value)
        return result.user

    def logout(self) -> None:
        user = self._store.get_user()
        self._store.clear()
        if user:
            logger.info("User %s logged out", user.username)

    def current_user(self) -> Optional[User]:
        if not self._store.get_token():
            return None
        return self._store.get_user()

    def is_authenticated(self) -> bool:
        return self.current_user() is not None

    def refresh_current_user(self) -> Optional[User]:
        """Re-read /users/me so role changes made elsewhere are picked up."""
        if not self._store.get_token():
            return None
        user = self._users.get_current()
        self._store.save_user(user)
        return user


class UserService:
    """Use case: manage console users (admin only)."""

    def __init__(self, auth: AuthRepository, users: UserRepository):
        self._auth = auth
        self._users = users

    def list_users(self, *, current_user: Optional[User], search: str = "") -> List[User]:
        require_role(current_user, Role.ADMIN)
        users = list(self._users.list_all())
        q = (search or "").strip().lower()
        if not q:
            return users
        return [u for u in users if q in u.username.lower() or q in u.role.value.lower()]

    def create_user(self, *, current_user: Optional[User], username: str, password: str, role: str) -> User:
        require_role(current_user, Role.ADMIN)
        username = require_non_empty(username, "Foydalanuvchi nomi")
        require_non_empty(password, "Parol")
        require_min_length(password, "Parol", MIN_PASSWORD_LENGTH)
        result = self._auth.register(username, password, _parse_role(role))
        return result.user

    def change_role(self, *, current_user: Optional[User], user_id: int, role: str) -> None:
        admin = require_role(current_user, Role.ADMIN)
        new_role = _parse_role(role)
        if admin.id == user_id and new_role != Role.ADMIN:
            raise ValidationError("O'zingizning rolingizni pasaytira olmaysiz")
        self._users.update_role(user_id, new_role)

    def change_password(self, *, current_user: Optional[User], user_id: int, password: str) -> None:
        require_role(current_user, Role.ADMIN)
        require_min_length(password, "Parol", MIN_PASSWORD_LENGTH)
        self._users.update_password(user_id, password)

    def delete_user(self, *, current_user: Optional[User], user_id: int) -> None:
        admin = require_role(current_user, Role.ADMIN)
        if admin.id == user_id:
            raise ValidationError("O'zingizning hisobingizni o'chira olmaysiz")
        try:
            self._users.delete_by_id(user_id)
        except ApiError as e:
            if e.status_code == 404:
                raise ValidationError("Foydalanuvchi topilmadi")
            raise


def _parse_role(value: str) -> Role:
    try:
        return Role(str(value or "").upper())
    except ValueError:
        raise ValidationError("Rol noto'g'ri")
