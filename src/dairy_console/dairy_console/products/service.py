from __future__ import annotations

from typing import List, Optional

from ..common.validators import require_non_empty, require_non_negative
from ..core.enums import Role
from ..users.model import User
from ..users.service import require_role
from .model import Product
from .repository import ProductRepository


class ProductService:
    def __init__(self, products: ProductRepository):
        self._products = products

    def list_products(self, *, search: str = "") -> List[Product]:
        items = list(self._products.list_all())
        q = (search or "").strip().lower()
        if not q:
            return items
        return [p for p in items if q in p.name.lower() or q in p.unit.lower()]

    def get_product(self, product_id: int) -> Product:
        return self._products.get_by_id(product_id)

    def create_product(self, *, current_user: Optional[User], name: str, unit: str, price_per_unit) -> Product:
        require_role(current_user, Role.MANAGER)
        return self._products.create(
            name=require_non_empty(name, "Mahsulot nomi"),
            unit=require_non_empty(unit, "O'lchov birligi"),
            price_per_unit=require_non_negative(price_per_unit, "Birlik narxi"),
        )

    def update_product(
        self,
        *,
        current_user: Optional[User],
        product_id: int,
        name: str,
        unit: str,
        price_per_unit,
    ) -> Product:
        require_role(current_user, Role.MANAGER)
        return self._products.update(
            product_id,
            name=require_non_empty(name, "Mahsulot nomi"),
            unit=require_non_empty(unit, "O'lchov birligi"),
            price_per_unit=require_non_negative(price_per_unit, "Birlik narxi"),
        )

    def delete_product(self, *, current_user: Optional[User], product_id: int) -> None:
        require_role(current_user, Role.MANAGER)
        self._products.delete_by_id(product_id)
