from __future__ import annotations

import io
from typing import List, Optional

from ..common.datetime_utils import parse_iso_date
from ..common.export import rows_to_excel
from ..common.formatting import compute_total
from ..common.validators import require_id, require_non_empty, require_non_negative
from ..core.enums import Role
from ..users.model import User
from ..users.service import require_role
from .model import Sale, SaleInput
from .repository import SaleRepository

EXPORT_COLUMNS = ["ID", "Sana", "Mijoz", "Mahsulot", "Miqdor", "Birlik", "Birlik narxi", "Jami"]


def build_sale_input(*, customer_id, product_id, date, quantity, price_per_unit, total=None) -> SaleInput:
    """Validate raw form values; a blank total becomes quantity x price."""
    qty = require_non_negative(quantity, "Miqdor")
    price = require_non_negative(price_per_unit, "Birlik narxi")
    if total is None or str(total).strip() == "":
        total_value = compute_total(qty, price)
    else:
        total_value = require_non_negative(total, "Jami")

    return SaleInput(
        customer_id=require_id(customer_id, "Mijoz"),
        product_id=require_id(product_id, "Mahsulot"),
        date=parse_iso_date(require_non_empty(date, "Sana")),
        quantity=qty,
        price_per_unit=price,
        total=total_value,
    )


class SaleService:
    """Use case: record sales of products to customers."""

    def __init__(self, sales: SaleRepository):
        self._sales = sales

    def list_sales(self, *, search: str = "") -> List[Sale]:
        items = list(self._sales.list_all())
        q = (search or "").strip().lower()
        if not q:
            return items
        return [
            s
            for s in items
            if q in s.customer_name.lower() or q in s.product_name.lower() or (s.date_iso and q in s.date_iso)
        ]

    def get_sale(self, sale_id: int) -> Sale:
        return self._sales.get_by_id(sale_id)

    def create_sale(self, *, current_user: Optional[User], **form) -> Sale:
        require_role(current_user, Role.MANAGER)
        return self._sales.create(build_sale_input(**form))

    def update_sale(self, *, current_user: Optional[User], sale_id: int, **form) -> Sale:
        require_role(current_user, Role.MANAGER)
        return self._sales.update(sale_id, build_sale_input(**form))

    def delete_sale(self, *, current_user: Optional[User], sale_id: int) -> None:
        require_role(current_user, Role.MANAGER)
        self._sales.delete_by_id(sale_id)

    def export_sales(self, *, search: str = "") -> io.BytesIO:
        rows = [
            {
                "ID": s.id,
                "Sana": s.date_iso,
                "Mijoz": s.customer_name,
                "Mahsulot": s.product_name,
                "Miqdor": s.quantity,
                "Birlik": s.unit,
                "Birlik narxi": s.price_per_unit,
                "Jami": s.total,
            }
            for s in self.list_sales(search=search)
        ]
        return rows_to_excel(rows, sheet_name="Sotuvlar", columns=EXPORT_COLUMNS)
