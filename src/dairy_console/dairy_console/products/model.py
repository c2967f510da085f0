from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Product:
    id: int
    name: str
    unit: str
    price_per_unit: float
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
