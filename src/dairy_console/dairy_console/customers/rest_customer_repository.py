from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..api.client import ApiClient
from ..api.envelope import unwrap_item, unwrap_list
from ..core.exceptions import ApiError
from .model import Customer
from .repository import CustomerRepository


def to_customer(row: Dict[str, Any]) -> Customer:
    try:
        return Customer(
            id=int(row["id"]),
            name=str(row.get("name") or ""),
            type=str(row.get("type") or ""),
            phone=str(row.get("phone") or ""),
            notes=row.get("notes"),
            created_at=row.get("createdAt"),
            updated_at=row.get("updatedAt"),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ApiError(f"Unexpected customer payload: {e}")


class RestCustomerRepository(CustomerRepository):
    def __init__(self, client: ApiClient):
        self._client = client

    def list_all(self) -> Sequence[Customer]:
        rows = unwrap_list(self._client.get("/customers"), "customers", "customer")
        return [to_customer(r) for r in rows]

    def get_by_id(self, customer_id: int) -> Customer:
        return to_customer(unwrap_item(self._client.get(f"/customers/{customer_id}"), "customer"))

    def create(self, *, name: str, type: str, phone: str, notes: Optional[str]) -> Customer:
        payload = self._client.post("/customers", {"name": name, "type": type, "phone": phone, "notes": notes})
        return to_customer(unwrap_item(payload, "customer"))

    def update(self, customer_id: int, *, name: str, type: str, phone: str, notes: Optional[str]) -> Customer:
        # PUT answers with {"customer": {...}}
        payload = self._client.put(
            f"/customers/{customer_id}",
            {"name": name, "type": type, "phone": phone, "notes": notes},
        )
        return to_customer(unwrap_item(payload, "customer"))

    def delete_by_id(self, customer_id: int) -> None:
        self._client.delete(f"/customers/{customer_id}")
