from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import requests

from .api.client import ApiClient, ApiConfig
from .core.constants import DEFAULT_API_BASE_URL, DEFAULT_API_TIMEOUT
from .customers.rest_customer_repository import RestCustomerRepository
from .customers.service import CustomerService
from .dashboard.rest_dashboard_repository import RestDashboardRepository
from .dashboard.service import DashboardService
from .products.rest_product_repository import RestProductRepository
from .products.service import ProductService
from .purchases.rest_purchase_repository import RestMilkPurchaseRepository
from .purchases.service import MilkPurchaseService
from .sales.rest_sale_repository import RestSaleRepository
from .sales.service import SaleService
from .sessions.rest_session_repository import RestSessionLogRepository
from .sessions.service import SessionLogService
from .suppliers.rest_supplier_repository import RestSupplierRepository
from .suppliers.service import SupplierService
from .users.rest_user_repository import RestAuthRepository, RestUserRepository
from .users.service import AuthService, TokenStore, UserService
from .users.session_store import AuthStore


@dataclass(frozen=True)
class Container:
    client: Optional[ApiClient]
    store: TokenStore

    auth_service: AuthService
    user_service: UserService
    supplier_service: SupplierService
    customer_service: CustomerService
    product_service: ProductService
    purchase_service: MilkPurchaseService
    sale_service: SaleService
    session_service: SessionLogService
    dashboard_service: DashboardService


def build_container(*, api_config: dict, session: Optional[requests.Session] = None) -> Container:
    config = ApiConfig(
        base_url=str(api_config.get("base_url") or DEFAULT_API_BASE_URL),
        timeout=float(api_config.get("timeout", DEFAULT_API_TIMEOUT)),
    )
    store = AuthStore()
    client = ApiClient(config, token_provider=store.get_token, session=session)

    auth_repo = RestAuthRepository(client)
    users_repo = RestUserRepository(client)

    return Container(
        client=client,
        store=store,
        auth_service=AuthService(auth_repo, users_repo, store),
        user_service=UserService(auth_repo, users_repo),
        supplier_service=SupplierService(RestSupplierRepository(client)),
        customer_service=CustomerService(RestCustomerRepository(client)),
        product_service=ProductService(RestProductRepository(client)),
        purchase_service=MilkPurchaseService(RestMilkPurchaseRepository(client)),
        sale_service=SaleService(RestSaleRepository(client)),
        session_service=SessionLogService(RestSessionLogRepository(client)),
        dashboard_service=DashboardService(RestDashboardRepository(client)),
    )
