from __future__ import annotations

from typing import Any, Dict, Sequence

from ..api.client import ApiClient
from ..api.envelope import to_float, unwrap_item, unwrap_list
from ..common.datetime_utils import parse_api_date, to_api_datetime
from ..core.exceptions import ApiError
from ..suppliers.rest_supplier_repository import to_supplier
from .model import MilkPurchase, MilkPurchaseInput
from .repository import MilkPurchaseRepository


def to_purchase(row: Dict[str, Any]) -> MilkPurchase:
    try:
        supplier = row.get("supplier")
        return MilkPurchase(
            id=int(row["id"]),
            supplier_id=int(row.get("supplierId") or 0),
            date=parse_api_date(row.get("date")),
            quantity_liters=to_float(row.get("quantityLiters")),
            price_per_liter=to_float(row.get("pricePerLiter")),
            total=to_float(row.get("total")),
            supplier=to_supplier(supplier) if isinstance(supplier, dict) else None,
            created_at=row.get("createdAt"),
            updated_at=row.get("updatedAt"),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ApiError(f"Unexpected milk purchase payload: {e}")


def _to_body(data: MilkPurchaseInput) -> Dict[str, Any]:
    return {
        "supplierId": data.supplier_id,
        "date": to_api_datetime(data.date),
        "quantityLiters": data.quantity_liters,
        "pricePerLiter": data.price_per_liter,
        "total": data.total,
    }


class RestMilkPurchaseRepository(MilkPurchaseRepository):
    def __init__(self, client: ApiClient):
        self._client = client

    def list_all(self) -> Sequence[MilkPurchase]:
        rows = unwrap_list(self._client.get("/milk-purchases"), "milkPurchases", "milkPurchase")
        return [to_purchase(r) for r in rows]

    def get_by_id(self, purchase_id: int) -> MilkPurchase:
        return to_purchase(unwrap_item(self._client.get(f"/milk-purchases/{purchase_id}"), "milkPurchase"))

    def create(self, data: MilkPurchaseInput) -> MilkPurchase:
        return to_purchase(unwrap_item(self._client.post("/milk-purchases", _to_body(data)), "milkPurchase"))

    def update(self, purchase_id: int, data: MilkPurchaseInput) -> MilkPurchase:
        payload = self._client.put(f"/milk-purchases/{purchase_id}", _to_body(data))
        return to_purchase(unwrap_item(payload, "milkPurchase"))

    def delete_by_id(self, purchase_id: int) -> None:
        self._client.delete(f"/milk-purchases/{purchase_id}")
