from __future__ import annotations

import math
from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} majburiy")
    return value.strip()


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} kamida {min_len} ta belgidan iborat bo'lishi kerak")
    return value


def require_id(value, field_name: str) -> int:
    """Parse a positive integer id coming from a <select>."""
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} majburiy")
    if parsed <= 0:
        raise ValidationError(f"{field_name} majburiy")
    return parsed


def require_non_negative(value, field_name: str) -> float:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{field_name} majburiy")
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} son bo'lishi kerak")
    if not math.isfinite(parsed):
        raise ValidationError(f"{field_name} son bo'lishi kerak")
    if parsed < 0:
        raise ValidationError(f"{field_name} manfiy bo'lmasligi kerak")
    return parsed


def optional_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None
