from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..customers.model import Customer
from ..products.model import Product


@dataclass(frozen=True)
class Sale:
    id: int
    customer_id: int
    product_id: int
    date: Optional[date]
    quantity: float
    price_per_unit: float
    total: float
    customer: Optional[Customer] = None
    product: Optional[Product] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def customer_name(self) -> str:
        return self.customer.name if self.customer else ""

    @property
    def product_name(self) -> str:
        return self.product.name if self.product else ""

    @property
    def unit(self) -> str:
        return self.product.unit if self.product else ""

    @property
    def date_iso(self) -> str:
        return self.date.isoformat() if self.date else ""


@dataclass(frozen=True)
class SaleInput:
    customer_id: int
    product_id: int
    date: date
    quantity: float
    price_per_unit: float
    total: float
