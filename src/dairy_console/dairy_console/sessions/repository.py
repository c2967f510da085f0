from __future__ import annotations

from typing import Protocol, Sequence

from .model import SessionLog


class SessionLogRepository(Protocol):
    def list_all(self) -> Sequence[SessionLog]:
        raise NotImplementedError

    def delete_by_token(self, token: str) -> None:
        raise NotImplementedError
