from __future__ import annotations

from datetime import date
from typing import Any, Dict, List

from ..api.client import ApiClient
from ..api.envelope import to_float
from ..common.datetime_utils import parse_api_date
from ..core.exceptions import ApiError
from ..purchases.rest_purchase_repository import to_purchase
from ..sales.rest_sale_repository import to_sale
from .model import AllTimeData, DashboardData, DashboardSummary, DateRange, PeriodTotals
from .repository import DashboardRepository

SALES_SERIES_KEYS = ("totalLiters", "totalKg", "totalUnits", "totalQuantity")


def normalize_sales_over_time(entries: Any) -> List[Dict[str, Any]]:
    """Every entry gets all four quantity keys; missing or null ones become 0."""
    if not isinstance(entries, list):
        return []
    out = []
    for item in entries:
        if not isinstance(item, dict):
            continue
        row = {"date": item.get("date")}
        for key in SALES_SERIES_KEYS:
            row[key] = to_float(item.get(key))
        out.append(row)
    return out


def to_totals(payload: Any) -> PeriodTotals:
    data = payload if isinstance(payload, dict) else {}
    return PeriodTotals(
        total_milk_purchased=to_float(data.get("totalMilkPurchased")),
        total_milk_sold=to_float(data.get("totalMilkSold")),
        total_purchase_cost=to_float(data.get("totalPurchaseCost")),
        total_sales_revenue=to_float(data.get("totalSalesRevenue")),
        gross_profit=to_float(data.get("grossProfit")),
    )


def _list_of_dicts(value: Any) -> List[Dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [v for v in value if isinstance(v, dict)]


def to_dashboard_data(payload: Any, *, start: date, end: date) -> DashboardData:
    if not isinstance(payload, dict):
        raise ApiError("Unexpected dashboard payload")

    # the backend echoes the range it actually used
    echoed = payload.get("dateRange")
    if not isinstance(echoed, dict):
        echoed = {}
    date_range = DateRange(
        start=parse_api_date(echoed.get("from")) or start,
        end=parse_api_date(echoed.get("to")) or end,
    )

    purchases = [
        {"date": p.get("date"), "totalLiters": to_float(p.get("totalLiters"))}
        for p in _list_of_dicts(payload.get("purchasesOverTime"))
    ]

    return DashboardData(
        date_range=date_range,
        totals=to_totals(payload.get("summary")),
        purchases_over_time=purchases,
        sales_over_time=normalize_sales_over_time(payload.get("salesOverTime")),
        supplier_breakdown=_list_of_dicts(payload.get("supplierBreakdown")),
        customer_breakdown=_list_of_dicts(payload.get("customerBreakdown")),
        product_breakdown=_list_of_dicts(payload.get("productBreakdown")),
    )


def to_all_time_data(payload: Any) -> AllTimeData:
    if not isinstance(payload, dict):
        raise ApiError("Unexpected all-time dashboard payload")
    return AllTimeData(
        totals=to_totals(payload.get("summary")),
        supplier_breakdown=_list_of_dicts(payload.get("supplierBreakdown")),
        customer_breakdown=_list_of_dicts(payload.get("customerBreakdown")),
        product_breakdown=_list_of_dicts(payload.get("productBreakdown")),
        monthly_trends=_list_of_dicts(payload.get("monthlyTrends")),
    )


def to_summary(payload: Any) -> DashboardSummary:
    if not isinstance(payload, dict):
        raise ApiError("Unexpected dashboard summary payload")
    return DashboardSummary(
        suppliers=int(to_float(payload.get("suppliers"))),
        customers=int(to_float(payload.get("customers"))),
        products=int(to_float(payload.get("products"))),
        milk_purchases=int(to_float(payload.get("milkPurchases"))),
        sales=int(to_float(payload.get("sales"))),
        total_revenue=to_float(payload.get("totalRevenue")),
        total_milk_purchased=to_float(payload.get("totalMilkPurchased")),
        recent_milk_purchases=[to_purchase(r) for r in _list_of_dicts(payload.get("recentMilkPurchases"))],
        recent_sales=[to_sale(r) for r in _list_of_dicts(payload.get("recentSales"))],
    )


class RestDashboardRepository(DashboardRepository):
    def __init__(self, client: ApiClient):
        self._client = client

    def get_summary(self) -> DashboardSummary:
        return to_summary(self._client.get("/dashboard/summary"))

    def get_range(self, start: date, end: date) -> DashboardData:
        payload = self._client.get("/dashboard", params={"from": start.isoformat(), "to": end.isoformat()})
        return to_dashboard_data(payload, start=start, end=end)

    def get_all_time(self) -> AllTimeData:
        return to_all_time_data(self._client.get("/dashboard/all-time"))
