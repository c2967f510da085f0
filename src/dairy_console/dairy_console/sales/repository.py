from __future__ import annotations

from typing import Protocol, Sequence

from .model import Sale, SaleInput


class SaleRepository(Protocol):
    def list_all(self) -> Sequence[Sale]:
        raise NotImplementedError

    def get_by_id(self, sale_id: int) -> Sale:
        raise NotImplementedError

    def create(self, data: SaleInput) -> Sale:
        raise NotImplementedError

    def update(self, sale_id: int, data: SaleInput) -> Sale:
        raise NotImplementedError

    def delete_by_id(self, sale_id: int) -> None:
        raise NotImplementedError
