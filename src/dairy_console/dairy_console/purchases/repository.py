from __future__ import annotations

from typing import Protocol, Sequence

from .model import MilkPurchase, MilkPurchaseInput


class MilkPurchaseRepository(Protocol):
    def list_all(self) -> Sequence[MilkPurchase]:
        raise NotImplementedError

    def get_by_id(self, purchase_id: int) -> MilkPurchase:
        raise NotImplementedError

    def create(self, data: MilkPurchaseInput) -> MilkPurchase:
        raise NotImplementedError

    def update(self, purchase_id: int, data: MilkPurchaseInput) -> MilkPurchase:
        raise NotImplementedError

    def delete_by_id(self, purchase_id: int) -> None:
        raise NotImplementedError
