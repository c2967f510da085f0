from __future__ import annotations

from typing import List, Optional

from ..common.validators import optional_text, require_non_empty
from ..core.enums import Role
from ..users.model import User
from ..users.service import require_role
from .model import Supplier
from .repository import SupplierRepository


class SupplierService:
    """Use case: supplier master data. Writes need MANAGER or higher."""

    def __init__(self, suppliers: SupplierRepository):
        self._suppliers = suppliers

    def list_suppliers(self, *, search: str = "") -> List[Supplier]:
        items = list(self._suppliers.list_all())
        q = (search or "").strip().lower()
        if not q:
            return items
        return [s for s in items if q in s.name.lower() or q in s.phone]

    def get_supplier(self, supplier_id: int) -> Supplier:
        return self._suppliers.get_by_id(supplier_id)

    def create_supplier(self, *, current_user: Optional[User], name: str, phone: str, notes: Optional[str] = None) -> Supplier:
        require_role(current_user, Role.MANAGER)
        return self._suppliers.create(
            name=require_non_empty(name, "Yetkazib beruvchi ismi"),
            phone=require_non_empty(phone, "Telefon raqami"),
            notes=optional_text(notes),
        )

    def update_supplier(
        self,
        *,
        current_user: Optional[User],
        supplier_id: int,
        name: str,
        phone: str,
        notes: Optional[str] = None,
    ) -> Supplier:
        require_role(current_user, Role.MANAGER)
        return self._suppliers.update(
            supplier_id,
            name=require_non_empty(name, "Yetkazib beruvchi ismi"),
            phone=require_non_empty(phone, "Telefon raqami"),
            notes=optional_text(notes),
        )

    def delete_supplier(self, *, current_user: Optional[User], supplier_id: int) -> None:
        require_role(current_user, Role.MANAGER)
        self._suppliers.delete_by_id(supplier_id)
