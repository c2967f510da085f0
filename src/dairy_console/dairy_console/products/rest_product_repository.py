from __future__ import annotations

from typing import Any, Dict, Sequence

from ..api.client import ApiClient
from ..api.envelope import to_float, unwrap_item, unwrap_list
from ..core.exceptions import ApiError
from .model import Product
from .repository import ProductRepository


def to_product(row: Dict[str, Any]) -> Product:
    try:
        return Product(
            id=int(row["id"]),
            name=str(row.get("name") or ""),
            unit=str(row.get("unit") or ""),
            price_per_unit=to_float(row.get("pricePerUnit")),
            created_at=row.get("createdAt"),
            updated_at=row.get("updatedAt"),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ApiError(f"Unexpected product payload: {e}")


class RestProductRepository(ProductRepository):
    def __init__(self, client: ApiClient):
        self._client = client

    def list_all(self) -> Sequence[Product]:
        # products are only ever a list or {"products": [...]}
        rows = unwrap_list(self._client.get("/products"), "products", "product", wrap_single=False)
        return [to_product(r) for r in rows]

    def get_by_id(self, product_id: int) -> Product:
        return to_product(unwrap_item(self._client.get(f"/products/{product_id}"), "product"))

    def create(self, *, name: str, unit: str, price_per_unit: float) -> Product:
        payload = self._client.post("/products", {"name": name, "unit": unit, "pricePerUnit": price_per_unit})
        return to_product(unwrap_item(payload, "product"))

    def update(self, product_id: int, *, name: str, unit: str, price_per_unit: float) -> Product:
        payload = self._client.put(
            f"/products/{product_id}",
            {"name": name, "unit": unit, "pricePerUnit": price_per_unit},
        )
        return to_product(unwrap_item(payload, "product"))

    def delete_by_id(self, product_id: int) -> None:
        self._client.delete(f"/products/{product_id}")
