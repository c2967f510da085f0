from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..api.client import ApiClient
from ..api.envelope import unwrap_item, unwrap_list
from ..core.exceptions import ApiError
from .model import Supplier
from .repository import SupplierRepository


def to_supplier(row: Dict[str, Any]) -> Supplier:
    try:
        return Supplier(
            id=int(row["id"]),
            name=str(row.get("name") or ""),
            phone=str(row.get("phone") or ""),
            notes=row.get("notes"),
            created_at=row.get("createdAt"),
            updated_at=row.get("updatedAt"),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ApiError(f"Unexpected supplier payload: {e}")


class RestSupplierRepository(SupplierRepository):
    def __init__(self, client: ApiClient):
        self._client = client

    def list_all(self) -> Sequence[Supplier]:
        rows = unwrap_list(self._client.get("/suppliers"), "suppliers", "supplier")
        return [to_supplier(r) for r in rows]

    def get_by_id(self, supplier_id: int) -> Supplier:
        return to_supplier(unwrap_item(self._client.get(f"/suppliers/{supplier_id}"), "supplier"))

    def create(self, *, name: str, phone: str, notes: Optional[str]) -> Supplier:
        payload = self._client.post("/suppliers", {"name": name, "phone": phone, "notes": notes})
        return to_supplier(unwrap_item(payload, "supplier"))

    def update(self, supplier_id: int, *, name: str, phone: str, notes: Optional[str]) -> Supplier:
        payload = self._client.put(f"/suppliers/{supplier_id}", {"name": name, "phone": phone, "notes": notes})
        return to_supplier(unwrap_item(payload, "supplier"))

    def delete_by_id(self, supplier_id: int) -> None:
        self._client.delete(f"/suppliers/{supplier_id}")
