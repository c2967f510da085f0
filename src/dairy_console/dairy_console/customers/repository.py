from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Customer


class CustomerRepository(Protocol):
    def list_all(self) -> Sequence[Customer]:
        raise NotImplementedError

    def get_by_id(self, customer_id: int) -> Customer:
        raise NotImplementedError

    def create(self, *, name: str, type: str, phone: str, notes: Optional[str]) -> Customer:
        raise NotImplementedError

    def update(self, customer_id: int, *, name: str, type: str, phone: str, notes: Optional[str]) -> Customer:
        raise NotImplementedError

    def delete_by_id(self, customer_id: int) -> None:
        raise NotImplementedError
