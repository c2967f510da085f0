from __future__ import annotations

from typing import Any, Dict, Sequence

from ..api.client import ApiClient
from ..api.envelope import to_float, unwrap_item, unwrap_list
from ..common.datetime_utils import parse_api_date, to_api_datetime
from ..core.exceptions import ApiError
from ..customers.rest_customer_repository import to_customer
from ..products.rest_product_repository import to_product
from .model import Sale, SaleInput
from .repository import SaleRepository


def to_sale(row: Dict[str, Any]) -> Sale:
    try:
        customer = row.get("customer")
        product = row.get("product")
        return Sale(
            id=int(row["id"]),
            customer_id=int(row.get("customerId") or 0),
            product_id=int(row.get("productId") or 0),
            date=parse_api_date(row.get("date")),
            quantity=to_float(row.get("quantity")),
            price_per_unit=to_float(row.get("pricePerUnit")),
            total=to_float(row.get("total")),
            customer=to_customer(customer) if isinstance(customer, dict) else None,
            product=to_product(product) if isinstance(product, dict) else None,
            created_at=row.get("createdAt"),
            updated_at=row.get("updatedAt"),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ApiError(f"Unexpected sale payload: {e}")


def _to_body(data: SaleInput) -> Dict[str, Any]:
    return {
        "customerId": data.customer_id,
        "productId": data.product_id,
        "date": to_api_datetime(data.date),
        "quantity": data.quantity,
        "pricePerUnit": data.price_per_unit,
        "total": data.total,
    }


class RestSaleRepository(SaleRepository):
    def __init__(self, client: ApiClient):
        self._client = client

    def list_all(self) -> Sequence[Sale]:
        rows = unwrap_list(self._client.get("/sales"), "sales", "sale")
        return [to_sale(r) for r in rows]

    def get_by_id(self, sale_id: int) -> Sale:
        return to_sale(unwrap_item(self._client.get(f"/sales/{sale_id}"), "sale"))

    def create(self, data: SaleInput) -> Sale:
        return to_sale(unwrap_item(self._client.post("/sales", _to_body(data)), "sale"))

    def update(self, sale_id: int, data: SaleInput) -> Sale:
        return to_sale(unwrap_item(self._client.put(f"/sales/{sale_id}", _to_body(data)), "sale"))

    def delete_by_id(self, sale_id: int) -> None:
        self._client.delete(f"/sales/{sale_id}")
