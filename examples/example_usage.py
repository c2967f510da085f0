"""Example: use the service layer without Flask.

Logs in against the configured backend and prints this month's dashboard totals.
Usage: DAIRY_USER=admin DAIRY_PASSWORD=secret python examples/example_usage.py
"""

import importlib
import os

from config import get_settings_module

from src.dairy_console.dairy_console.api.client import ApiClient, ApiConfig
from src.dairy_console.dairy_console.common.datetime_utils import today_local
from src.dairy_console.dairy_console.common.formatting import format_currency, format_volume
from src.dairy_console.dairy_console.core.enums import Period
from src.dairy_console.dairy_console.dashboard.rest_dashboard_repository import RestDashboardRepository
from src.dairy_console.dairy_console.dashboard.service import DashboardService, range_label
from src.dairy_console.dairy_console.users.rest_user_repository import RestAuthRepository


def main():
    settings = importlib.import_module(get_settings_module())
    config = ApiConfig(base_url=settings.API_CONFIG["base_url"], timeout=settings.API_CONFIG["timeout"])

    auth = RestAuthRepository(ApiClient(config)).login(os.environ["DAIRY_USER"], os.environ["DAIRY_PASSWORD"])
    client = ApiClient(config, token_provider=lambda: auth.token)

    service = DashboardService(RestDashboardRepository(client))
    date_range, data = service.get_quick(Period.THIS_MONTH, today=today_local())

    print(range_label(date_range))
    print("Sotib olingan sut:", format_volume(data.totals.total_milk_purchased))
    print("Daromad:", format_currency(data.totals.total_sales_revenue))
    print("Yalpi foyda:", format_currency(data.totals.gross_profit), f"({data.totals.margin:.1f}% marja)")


if __name__ == "__main__":
    main()
