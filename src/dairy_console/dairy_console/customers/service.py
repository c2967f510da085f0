from __future__ import annotations

from typing import List, Optional

from ..common.validators import optional_text, require_non_empty
from ..core.enums import Role
from ..users.model import User
from ..users.service import require_role
from .model import Customer
from .repository import CustomerRepository


class CustomerService:
    def __init__(self, customers: CustomerRepository):
        self._customers = customers

    def list_customers(self, *, search: str = "") -> List[Customer]:
        items = list(self._customers.list_all())
        q = (search or "").strip().lower()
        if not q:
            return items
        return [c for c in items if q in c.name.lower() or q in c.type.lower() or q in c.phone]

    def get_customer(self, customer_id: int) -> Customer:
        return self._customers.get_by_id(customer_id)

    def create_customer(
        self,
        *,
        current_user: Optional[User],
        name: str,
        type: str,
        phone: str,
        notes: Optional[str] = None,
    ) -> Customer:
        require_role(current_user, Role.MANAGER)
        return self._customers.create(
            name=require_non_empty(name, "Mijoz ismi"),
            type=require_non_empty(type, "Mijoz turi"),
            phone=require_non_empty(phone, "Telefon raqami"),
            notes=optional_text(notes),
        )

    def update_customer(
        self,
        *,
        current_user: Optional[User],
        customer_id: int,
        name: str,
        type: str,
        phone: str,
        notes: Optional[str] = None,
    ) -> Customer:
        require_role(current_user, Role.MANAGER)
        return self._customers.update(
            customer_id,
            name=require_non_empty(name, "Mijoz ismi"),
            type=require_non_empty(type, "Mijoz turi"),
            phone=require_non_empty(phone, "Telefon raqami"),
            notes=optional_text(notes),
        )

    def delete_customer(self, *, current_user: Optional[User], customer_id: int) -> None:
        require_role(current_user, Role.MANAGER)
        self._customers.delete_by_id(customer_id)
