from __future__ import annotations

from typing import Mapping

from ..core.constants import CURRENCY_SUFFIX


def format_number(value: float, decimals: int = 0) -> str:
    """Group thousands with a space, e.g. 1234567 -> '1 234 567'."""
    text = f"{float(value or 0):,.{decimals}f}"
    return text.replace(",", " ")


def format_currency(amount: float) -> str:
    return f"{format_number(amount)} {CURRENCY_SUFFIX}"


def format_volume(liters: float) -> str:
    return f"{float(liters or 0):.1f} litr"


def format_quantity(quantity: float, unit: str) -> str:
    return f"{float(quantity or 0):.1f} {unit}"


def format_sales_quantity(entry: Mapping) -> str:
    parts = []
    for key, unit in (("totalLiters", "litr"), ("totalKg", "kg"), ("totalUnits", "dona")):
        value = float(entry.get(key) or 0)
        if value > 0:
            parts.append(f"{value:.1f} {unit}")
    return ", ".join(parts) if parts else "0"


def compute_total(quantity: float, price: float) -> float:
    return round(float(quantity) * float(price), 2)
