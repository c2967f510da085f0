from __future__ import annotations

from typing import Optional

import pytest

from src.dairy_console.dairy_console.core.enums import Role
from src.dairy_console.dairy_console.core.exceptions import (
    ApiError,
    AuthenticationError,
    AuthorizationError,
    UnauthorizedError,
    ValidationError,
)
from src.dairy_console.dairy_console.users.model import AuthResult, User
from src.dairy_console.dairy_console.users.service import AuthService, UserService, has_permission

ADMIN = User(id=1, username="admin", role=Role.ADMIN)
MANAGER = User(id=2, username="manager", role=Role.MANAGER)
CLERK = User(id=3, username="clerk", role=Role.USER)


class FakeAuthRepo:
    def __init__(self):
        self.registered = []

    def login(self, username: str, password: str) -> AuthResult:
        if username == "admin" and password == "secret":
            return AuthResult(token="tok-1", user=ADMIN)
        raise UnauthorizedError(401)

    def register(self, username: str, password: str, role: Optional[Role] = None) -> AuthResult:
        self.registered.append((username, password, role))
        return AuthResult(token="tok-new", user=User(id=10, username=username, role=role or Role.USER))


class FakeUsersRepo:
    def __init__(self, users):
        self.users = {u.id: u for u in users}
        self.me: Optional[User] = None
        self.roles = {}
        self.passwords = {}

    def list_all(self):
        return list(self.users.values())

    def get_current(self) -> User:
        return self.me

    def get_by_id(self, user_id: int) -> User:
        return self.users[user_id]

    def update_role(self, user_id: int, role: Role) -> User:
        self.roles[user_id] = role
        return self.users[user_id]

    def update_password(self, user_id: int, password: str) -> None:
        self.passwords[user_id] = password

    def delete_by_id(self, user_id: int) -> None:
        if user_id not in self.users:
            raise ApiError("User not found", 404)
        del self.users[user_id]


class FakeStore:
    def __init__(self):
        self.token = None
        self.user = None
        self.remember = None

    def get_token(self):
        return self.token

    def get_user(self):
        return self.user

    def save(self, token, user, *, remember=False):
        self.token, self.user, self.remember = token, user, remember

    def save_user(self, user):
        self.user = user

    def clear(self):
        self.token = None
        self.user = None


@pytest.mark.parametrize(
    "user, required, expected",
    [
        (ADMIN, Role.ADMIN, True),
        (ADMIN, Role.USER, True),
        (MANAGER, Role.MANAGER, True),
        (MANAGER, Role.ADMIN, False),
        (CLERK, Role.MANAGER, False),
        (CLERK, Role.USER, True),
        (None, Role.USER, False),
    ],
)
def test_has_permission_follows_role_ranking(user, required, expected):
    assert has_permission(user, required) is expected


def test_login_stores_token_and_user():
    store = FakeStore()
    svc = AuthService(FakeAuthRepo(), FakeUsersRepo([]), store)

    user = svc.login("admin", "secret", remember=True)

    assert user == ADMIN
    assert store.token == "tok-1"
    assert store.remember is True
    assert svc.is_authenticated()
    assert svc.current_user() == ADMIN


def test_login_blank_credentials_are_rejected_before_the_backend():
    svc = AuthService(FakeAuthRepo(), FakeUsersRepo([]), FakeStore())

    with pytest.raises(ValidationError):
        svc.login("  ", "secret")


def test_login_wrong_password_is_authentication_error():
    store = FakeStore()
    svc = AuthService(FakeAuthRepo(), FakeUsersRepo([]), store)

    with pytest.raises(AuthenticationError):
        svc.login("admin", "wrong")
    assert store.token is None


def test_logout_clears_store():
    store = FakeStore()
    svc = AuthService(FakeAuthRepo(), FakeUsersRepo([]), store)
    svc.login("admin", "secret")

    svc.logout()

    assert store.token is None and store.user is None
    assert svc.current_user() is None


def test_refresh_current_user_updates_snapshot():
    store = FakeStore()
    users = FakeUsersRepo([])
    svc = AuthService(FakeAuthRepo(), users, store)
    svc.login("admin", "secret")
    users.me = User(id=1, username="admin", role=Role.MANAGER)

    refreshed = svc.refresh_current_user()

    assert refreshed.role == Role.MANAGER
    assert store.user.role == Role.MANAGER


def test_list_users_requires_admin_and_filters():
    svc = UserService(FakeAuthRepo(), FakeUsersRepo([ADMIN, MANAGER, CLERK]))

    with pytest.raises(AuthorizationError):
        svc.list_users(current_user=MANAGER)

    assert [u.username for u in svc.list_users(current_user=ADMIN, search="man")] == ["manager"]
    assert [u.username for u in svc.list_users(current_user=ADMIN, search="user")] == ["clerk"]


def test_create_user_goes_through_register():
    auth = FakeAuthRepo()
    svc = UserService(auth, FakeUsersRepo([ADMIN]))

    created = svc.create_user(current_user=ADMIN, username="dilnoza", password="123456", role="manager")

    assert created.username == "dilnoza"
    assert auth.registered == [("dilnoza", "123456", Role.MANAGER)]


def test_create_user_short_password():
    svc = UserService(FakeAuthRepo(), FakeUsersRepo([ADMIN]))

    with pytest.raises(ValidationError):
        svc.create_user(current_user=ADMIN, username="x", password="123", role="USER")


def test_create_user_unknown_role():
    svc = UserService(FakeAuthRepo(), FakeUsersRepo([ADMIN]))

    with pytest.raises(ValidationError):
        svc.create_user(current_user=ADMIN, username="x", password="123456", role="OWNER")


def test_admin_cannot_demote_or_delete_self():
    users = FakeUsersRepo([ADMIN, CLERK])
    svc = UserService(FakeAuthRepo(), users)

    with pytest.raises(ValidationError):
        svc.change_role(current_user=ADMIN, user_id=ADMIN.id, role="USER")
    with pytest.raises(ValidationError):
        svc.delete_user(current_user=ADMIN, user_id=ADMIN.id)

    svc.change_role(current_user=ADMIN, user_id=CLERK.id, role="MANAGER")
    assert users.roles == {CLERK.id: Role.MANAGER}


def test_change_password_min_length():
    users = FakeUsersRepo([ADMIN, CLERK])
    svc = UserService(FakeAuthRepo(), users)

    with pytest.raises(ValidationError):
        svc.change_password(current_user=ADMIN, user_id=CLERK.id, password="12345")

    svc.change_password(current_user=ADMIN, user_id=CLERK.id, password="123456")
    assert users.passwords == {CLERK.id: "123456"}


def test_delete_missing_user_is_validation_error():
    svc = UserService(FakeAuthRepo(), FakeUsersRepo([ADMIN]))

    with pytest.raises(ValidationError):
        svc.delete_user(current_user=ADMIN, user_id=99)
