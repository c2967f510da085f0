from __future__ import annotations

from datetime import date
from typing import Protocol

from .model import AllTimeData, DashboardData, DashboardSummary


class DashboardRepository(Protocol):
    def get_summary(self) -> DashboardSummary:
        raise NotImplementedError

    def get_range(self, start: date, end: date) -> DashboardData:
        raise NotImplementedError

    def get_all_time(self) -> AllTimeData:
        raise NotImplementedError
