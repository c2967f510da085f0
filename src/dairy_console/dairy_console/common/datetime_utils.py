from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Optional

from ..core.constants import MONTHS_UZ, MONTHS_UZ_SHORT
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError("Sana noto'g'ri formatda (YYYY-MM-DD)")


def parse_api_date(value: Optional[str]) -> Optional[date]:
    """Backend dates are ISO datetimes; only the first 10 characters matter."""
    if not value or not isinstance(value, str):
        return None
    try:
        return datetime.strptime(value[:10], "%Y-%m-%d").date()
    except ValueError:
        return None


def to_api_datetime(value: date) -> str:
    return f"{value.isoformat()}T00:00:00.000Z"


def today_local() -> date:
    """Current local date.

    Note: Wrapped so tests can patch it.
    """
    return date.today()


def start_of_month(value: date) -> date:
    return value.replace(day=1)


def end_of_month(value: date) -> date:
    return value.replace(day=calendar.monthrange(value.year, value.month)[1])


def previous_month(value: date) -> date:
    return start_of_month(value) - timedelta(days=1)


def inclusive_days(start: date, end: date) -> int:
    return (end - start).days + 1


def format_date_uz(value: date, *, with_year: bool = True, short: bool = True) -> str:
    """'15 iyul 2025' style labels (month names in Uzbek)."""
    months = MONTHS_UZ_SHORT if short else MONTHS_UZ
    label = f"{value.day:02d} {months[value.month - 1]}"
    if with_year:
        label = f"{label} {value.year}"
    return label


def format_month_uz(value: str) -> str:
    """Turn a 'YYYY-MM' trend key into 'iyul 2025'."""
    try:
        parsed = datetime.strptime(value[:7], "%Y-%m")
    except (TypeError, ValueError):
        return value
    return f"{MONTHS_UZ[parsed.month - 1]} {parsed.year}"
