from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List

from ..common.datetime_utils import inclusive_days
from ..purchases.model import MilkPurchase
from ..sales.model import Sale


@dataclass(frozen=True)
class DateRange:
    start: date
    end: date

    @property
    def days(self) -> int:
        return inclusive_days(self.start, self.end)

    @property
    def from_iso(self) -> str:
        return self.start.isoformat()

    @property
    def to_iso(self) -> str:
        return self.end.isoformat()


@dataclass(frozen=True)
class DashboardSummary:
    """Counts plus the latest records (``GET /dashboard/summary``)."""

    suppliers: int = 0
    customers: int = 0
    products: int = 0
    milk_purchases: int = 0
    sales: int = 0
    total_revenue: float = 0.0
    total_milk_purchased: float = 0.0
    recent_milk_purchases: List[MilkPurchase] = field(default_factory=list)
    recent_sales: List[Sale] = field(default_factory=list)


@dataclass(frozen=True)
class PeriodTotals:
    total_milk_purchased: float = 0.0
    total_milk_sold: float = 0.0
    total_purchase_cost: float = 0.0
    total_sales_revenue: float = 0.0
    gross_profit: float = 0.0

    @property
    def margin(self) -> float:
        """Gross profit as a percentage of revenue; 0 when nothing was sold."""
        if not self.total_sales_revenue:
            return 0.0
        return self.gross_profit / self.total_sales_revenue * 100


@dataclass(frozen=True)
class DashboardData:
    """Aggregate over one date range. Series and breakdowns stay as wire dicts."""

    date_range: DateRange
    totals: PeriodTotals
    purchases_over_time: List[Dict[str, Any]]
    sales_over_time: List[Dict[str, Any]]
    supplier_breakdown: List[Dict[str, Any]]
    customer_breakdown: List[Dict[str, Any]]
    product_breakdown: List[Dict[str, Any]]


@dataclass(frozen=True)
class AllTimeData:
    totals: PeriodTotals
    supplier_breakdown: List[Dict[str, Any]]
    customer_breakdown: List[Dict[str, Any]]
    product_breakdown: List[Dict[str, Any]]
    monthly_trends: List[Dict[str, Any]]
