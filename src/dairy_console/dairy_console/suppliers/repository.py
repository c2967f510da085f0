from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Supplier


class SupplierRepository(Protocol):
    def list_all(self) -> Sequence[Supplier]:
        raise NotImplementedError

    def get_by_id(self, supplier_id: int) -> Supplier:
        raise NotImplementedError

    def create(self, *, name: str, phone: str, notes: Optional[str]) -> Supplier:
        raise NotImplementedError

    def update(self, supplier_id: int, *, name: str, phone: str, notes: Optional[str]) -> Supplier:
        raise NotImplementedError

    def delete_by_id(self, supplier_id: int) -> None:
        raise NotImplementedError
