from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..suppliers.model import Supplier


@dataclass(frozen=True)
class MilkPurchase:
    id: int
    supplier_id: int
    date: Optional[date]
    quantity_liters: float
    price_per_liter: float
    total: float
    supplier: Optional[Supplier] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def supplier_name(self) -> str:
        return self.supplier.name if self.supplier else ""

    @property
    def date_iso(self) -> str:
        return self.date.isoformat() if self.date else ""


@dataclass(frozen=True)
class MilkPurchaseInput:
    """Validated form data, ready to be sent to the backend."""

    supplier_id: int
    date: date
    quantity_liters: float
    price_per_liter: float
    total: float
