from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles, ordered ADMIN > MANAGER > USER."""

    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    USER = "USER"

    @property
    def rank(self) -> int:
        return _ROLE_RANK[self]

    @property
    def label(self) -> str:
        return _ROLE_LABEL[self]


_ROLE_RANK = {
    Role.ADMIN: 3,
    Role.MANAGER: 2,
    Role.USER: 1,
}

_ROLE_LABEL = {
    Role.ADMIN: "Admin",
    Role.MANAGER: "Menejer",
    Role.USER: "Foydalanuvchi",
}


class Period(str, Enum):
    """Dashboard quick-action periods."""

    TODAY = "today"
    YESTERDAY = "yesterday"
    THIS_MONTH = "thisMonth"
    LAST_MONTH = "lastMonth"

    @property
    def title(self) -> str:
        return _PERIOD_TITLE[self]


_PERIOD_TITLE = {
    Period.TODAY: "Bugun",
    Period.YESTERDAY: "Kecha",
    Period.THIS_MONTH: "Bu oy",
    Period.LAST_MONTH: "Oldingi oy",
}
