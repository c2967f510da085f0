from __future__ import annotations

from typing import Protocol, Sequence

from .model import Product


class ProductRepository(Protocol):
    def list_all(self) -> Sequence[Product]:
        raise NotImplementedError

    def get_by_id(self, product_id: int) -> Product:
        raise NotImplementedError

    def create(self, *, name: str, unit: str, price_per_unit: float) -> Product:
        raise NotImplementedError

    def update(self, product_id: int, *, name: str, unit: str, price_per_unit: float) -> Product:
        raise NotImplementedError

    def delete_by_id(self, product_id: int) -> None:
        raise NotImplementedError
