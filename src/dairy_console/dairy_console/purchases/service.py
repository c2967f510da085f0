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
from .model import MilkPurchase, MilkPurchaseInput
from .repository import MilkPurchaseRepository

EXPORT_COLUMNS = ["ID", "Sana", "Yetkazib beruvchi", "Miqdor (litr)", "1 litr narxi", "Jami"]


def build_purchase_input(*, supplier_id, date, quantity_liters, price_per_liter, total=None) -> MilkPurchaseInput:
    """Validate raw form values; a blank total becomes quantity x price."""
    quantity = require_non_negative(quantity_liters, "Miqdor")
    price = require_non_negative(price_per_liter, "1 litr narxi")
    if total is None or str(total).strip() == "":
        total_value = compute_total(quantity, price)
    else:
        total_value = require_non_negative(total, "Jami")

    return MilkPurchaseInput(
        supplier_id=require_id(supplier_id, "Yetkazib beruvchi"),
        date=parse_iso_date(require_non_empty(date, "Sana")),
        quantity_liters=quantity,
        price_per_liter=price,
        total=total_value,
    )


class MilkPurchaseService:
    """Use case: record milk bought from suppliers."""

    def __init__(self, purchases: MilkPurchaseRepository):
        self._purchases = purchases

    def list_purchases(self, *, search: str = "") -> List[MilkPurchase]:
        items = list(self._purchases.list_all())
        q = (search or "").strip().lower()
        if not q:
            return items
        return [p for p in items if q in p.supplier_name.lower() or (p.date_iso and q in p.date_iso)]

    def get_purchase(self, purchase_id: int) -> MilkPurchase:
        return self._purchases.get_by_id(purchase_id)

    def create_purchase(self, *, current_user: Optional[User], **form) -> MilkPurchase:
        require_role(current_user, Role.MANAGER)
        return self._purchases.create(build_purchase_input(**form))

    def update_purchase(self, *, current_user: Optional[User], purchase_id: int, **form) -> MilkPurchase:
        require_role(current_user, Role.MANAGER)
        return self._purchases.update(purchase_id, build_purchase_input(**form))

    def delete_purchase(self, *, current_user: Optional[User], purchase_id: int) -> None:
        require_role(current_user, Role.MANAGER)
        self._purchases.delete_by_id(purchase_id)

    def export_purchases(self, *, search: str = "") -> io.BytesIO:
        rows = [
            {
                "ID": p.id,
                "Sana": p.date_iso,
                "Yetkazib beruvchi": p.supplier_name,
                "Miqdor (litr)": p.quantity_liters,
                "1 litr narxi": p.price_per_liter,
                "Jami": p.total,
            }
            for p in self.list_purchases(search=search)
        ]
        return rows_to_excel(rows, sheet_name="SutXaridlari", columns=EXPORT_COLUMNS)
