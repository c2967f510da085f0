from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Any, Dict, Optional, Tuple

from ..common.datetime_utils import (
    end_of_month,
    format_date_uz,
    format_month_uz,
    parse_api_date,
    parse_iso_date,
    previous_month,
    start_of_month,
    today_local,
)
from ..common.formatting import format_currency, format_sales_quantity, format_volume
from ..core.enums import Period
from ..core.exceptions import ApiError, ValidationError
from .model import AllTimeData, DashboardData, DashboardSummary, DateRange
from .repository import DashboardRepository

logger = logging.getLogger(__name__)


def resolve_period(period: Period, today: date) -> DateRange:
    if period == Period.TODAY:
        return DateRange(today, today)
    if period == Period.YESTERDAY:
        yesterday = today - timedelta(days=1)
        return DateRange(yesterday, yesterday)
    if period == Period.THIS_MONTH:
        return DateRange(start_of_month(today), end_of_month(today))
    last = previous_month(today)
    return DateRange(start_of_month(last), end_of_month(last))


def parse_period(value: str) -> Period:
    try:
        return Period(value)
    except ValueError:
        raise ValidationError("Noma'lum davr")


def parse_range(from_value: str, to_value: str, today: date) -> DateRange:
    """Explicit ?from&to wins; a missing bound falls back to the current month."""
    start = parse_iso_date(from_value) if from_value else start_of_month(today)
    end = parse_iso_date(to_value) if to_value else end_of_month(today)
    if end < start:
        raise ValidationError("Tugash sanasi boshlanish sanasidan oldin bo'lishi mumkin emas")
    return DateRange(start, end)


def range_label(date_range: DateRange) -> str:
    start = format_date_uz(date_range.start, short=False)
    if date_range.start == date_range.end:
        return start
    return f"{start} - {format_date_uz(date_range.end, short=False)}"


def _series_label(value: Any) -> str:
    parsed = parse_api_date(value)
    return format_date_uz(parsed, with_year=False) if parsed else str(value or "")


def chart_payload(data: DashboardData, all_time: Optional[AllTimeData] = None) -> Dict[str, Any]:
    """Labels/values handed to Chart.js as JSON."""
    payload = {
        "purchases": {
            "labels": [_series_label(p["date"]) for p in data.purchases_over_time],
            "values": [p["totalLiters"] for p in data.purchases_over_time],
        },
        "sales": {
            "labels": [_series_label(s["date"]) for s in data.sales_over_time],
            "liters": [s["totalLiters"] for s in data.sales_over_time],
            "kg": [s["totalKg"] for s in data.sales_over_time],
            "units": [s["totalUnits"] for s in data.sales_over_time],
            "tooltips": [format_sales_quantity(s) for s in data.sales_over_time],
        },
    }
    if all_time is not None:
        payload["trends"] = {
            "labels": [format_month_uz(str(t.get("month", ""))) for t in all_time.monthly_trends],
            "revenue": [t.get("salesRevenue") or 0 for t in all_time.monthly_trends],
            "cost": [t.get("purchaseCost") or 0 for t in all_time.monthly_trends],
            "profit": [t.get("profit") or 0 for t in all_time.monthly_trends],
        }
    return payload


def quick_payload(period: Period, data: DashboardData) -> Dict[str, Any]:
    """JSON body of the quick-action modal: raw numbers plus display strings."""
    totals = data.totals
    return {
        "period": period.value,
        "title": period.title,
        "dateRange": {"from": data.date_range.from_iso, "to": data.date_range.to_iso},
        "label": range_label(data.date_range),
        "days": data.date_range.days,
        "summary": {
            "totalMilkPurchased": totals.total_milk_purchased,
            "totalMilkSold": totals.total_milk_sold,
            "totalPurchaseCost": totals.total_purchase_cost,
            "totalSalesRevenue": totals.total_sales_revenue,
            "grossProfit": totals.gross_profit,
            "margin": round(totals.margin, 1),
        },
        "display": {
            "milkPurchased": format_volume(totals.total_milk_purchased),
            "milkSold": format_volume(totals.total_milk_sold),
            "purchaseCost": format_currency(totals.total_purchase_cost),
            "salesRevenue": format_currency(totals.total_sales_revenue),
            "grossProfit": format_currency(totals.gross_profit),
            "margin": f"{totals.margin:.1f}% marja",
        },
        "salesOverTime": data.sales_over_time,
        "purchasesOverTime": data.purchases_over_time,
        "supplierBreakdown": data.supplier_breakdown,
        "customerBreakdown": data.customer_breakdown,
        "productBreakdown": data.product_breakdown,
    }


class DashboardService:
    """Use case: period and all-time analytics for the dashboard page."""

    def __init__(self, dashboard: DashboardRepository):
        self._dashboard = dashboard

    def get_summary(self) -> DashboardSummary:
        return self._dashboard.get_summary()

    def get_period(self, date_range: DateRange) -> DashboardData:
        return self._dashboard.get_range(date_range.start, date_range.end)

    def get_all_time(self) -> Optional[AllTimeData]:
        # the all-time panel is optional; the period view must still render
        try:
            return self._dashboard.get_all_time()
        except ApiError as e:
            logger.warning("All-time dashboard data unavailable: %s", e)
            return None

    def get_quick(self, period: Period, *, today: Optional[date] = None) -> Tuple[DateRange, DashboardData]:
        date_range = resolve_period(period, today or today_local())
        return date_range, self.get_period(date_range)

    def page_range(self, *, from_value: str = "", to_value: str = "", period: str = "",
                   today: Optional[date] = None) -> DateRange:
        today = today or today_local()
        if period:
            return resolve_period(parse_period(period), today)
        return parse_range(from_value, to_value, today)
