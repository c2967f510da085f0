from __future__ import annotations

import io
import json
from datetime import date

import pandas as pd
import pytest

from src.dairy_console.dairy_console.api.client import ApiClient, ApiConfig
from src.dairy_console.dairy_console.core.enums import Role
from src.dairy_console.dairy_console.core.exceptions import AuthorizationError, ValidationError
from src.dairy_console.dairy_console.customers.model import Customer
from src.dairy_console.dairy_console.products.model import Product
from src.dairy_console.dairy_console.purchases.model import MilkPurchase
from src.dairy_console.dairy_console.purchases.service import MilkPurchaseService, build_purchase_input
from src.dairy_console.dairy_console.sales.model import Sale
from src.dairy_console.dairy_console.sales.rest_sale_repository import RestSaleRepository
from src.dairy_console.dairy_console.sales.service import SaleService, build_sale_input
from src.dairy_console.dairy_console.suppliers.model import Supplier
from src.dairy_console.dairy_console.users.model import User

MANAGER = User(id=2, username="manager", role=Role.MANAGER)
CLERK = User(id=3, username="clerk", role=Role.USER)


class InMemoryPurchases:
    def __init__(self, items=()):
        self.items = list(items)
        self.created = []

    def list_all(self):
        return self.items

    def create(self, data):
        self.created.append(data)
        return MilkPurchase(
            id=len(self.created),
            supplier_id=data.supplier_id,
            date=data.date,
            quantity_liters=data.quantity_liters,
            price_per_liter=data.price_per_liter,
            total=data.total,
        )


class InMemorySales(InMemoryPurchases):
    pass


def _purchase(pid, supplier_name, day):
    return MilkPurchase(
        id=pid,
        supplier_id=pid,
        date=day,
        quantity_liters=100,
        price_per_liter=5000,
        total=500000,
        supplier=Supplier(id=pid, name=supplier_name, phone="1"),
    )


def test_blank_total_is_quantity_times_price():
    data = build_purchase_input(supplier_id="4", date="2025-07-15", quantity_liters="12.5", price_per_liter="3000", total="")

    assert data.total == 37500.0
    assert data.supplier_id == 4
    assert data.date == date(2025, 7, 15)


def test_explicit_total_is_kept():
    data = build_purchase_input(supplier_id=4, date="2025-07-15", quantity_liters=10, price_per_liter=3000, total="29000")

    assert data.total == 29000.0


@pytest.mark.parametrize(
    "overrides",
    [
        {"supplier_id": ""},
        {"date": ""},
        {"date": "15.07.2025"},
        {"quantity_liters": "-1"},
        {"price_per_liter": "abc"},
        {"total": "-5"},
        {"quantity_liters": "nan"},
        {"price_per_liter": "inf"},
        {"total": "nan"},
    ],
)
def test_purchase_input_validation(overrides):
    form = {"supplier_id": "1", "date": "2025-07-15", "quantity_liters": "10", "price_per_liter": "3000", "total": ""}
    form.update(overrides)

    with pytest.raises(ValidationError):
        build_purchase_input(**form)


def test_create_purchase_requires_manager():
    repo = InMemoryPurchases()
    svc = MilkPurchaseService(repo)
    form = {"supplier_id": "1", "date": "2025-07-15", "quantity_liters": "10", "price_per_liter": "3000", "total": ""}

    with pytest.raises(AuthorizationError):
        svc.create_purchase(current_user=CLERK, **form)

    created = svc.create_purchase(current_user=MANAGER, **form)
    assert created.total == 30000.0


def test_purchase_search_by_supplier_or_date():
    svc = MilkPurchaseService(
        InMemoryPurchases([_purchase(1, "Ali Fermer", date(2025, 7, 1)), _purchase(2, "Vali", date(2025, 8, 3))])
    )

    assert [p.id for p in svc.list_purchases(search="ali")] == [1, 2]
    assert [p.id for p in svc.list_purchases(search="fermer")] == [1]
    assert [p.id for p in svc.list_purchases(search="2025-08")] == [2]


def test_purchase_export_is_xlsx_of_filtered_rows():
    svc = MilkPurchaseService(
        InMemoryPurchases([_purchase(1, "Ali Fermer", date(2025, 7, 1)), _purchase(2, "Vali", date(2025, 8, 3))])
    )

    output = svc.export_purchases(search="2025-07")
    df = pd.read_excel(io.BytesIO(output.getvalue()), sheet_name="SutXaridlari")

    assert list(df["Yetkazib beruvchi"]) == ["Ali Fermer"]
    assert list(df["Jami"]) == [500000]


def test_sale_input_and_search():
    data = build_sale_input(customer_id="2", product_id="5", date="2025-07-15", quantity="3", price_per_unit="12000")
    assert data.total == 36000.0

    sale = Sale(
        id=1,
        customer_id=2,
        product_id=5,
        date=date(2025, 7, 15),
        quantity=3,
        price_per_unit=12000,
        total=36000,
        customer=Customer(id=2, name="Bahor do'koni", type="Do'kon", phone="1"),
        product=Product(id=5, name="Qatiq", unit="litr", price_per_unit=12000),
    )
    svc = SaleService(InMemorySales([sale]))

    assert svc.list_sales(search="qatiq") == [sale]
    assert svc.list_sales(search="bahor") == [sale]
    assert svc.list_sales(search="2025-07-15") == [sale]
    assert svc.list_sales(search="kefir") == []


def test_sale_writes_need_manager():
    svc = SaleService(InMemorySales())

    with pytest.raises(AuthorizationError):
        svc.delete_sale(current_user=CLERK, sale_id=1)


class RecordingSession:
    def __init__(self, body):
        self.body = body
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        return _JsonResponse(self.body)


class _JsonResponse:
    status_code = 201
    ok = True
    reason = "Created"

    def __init__(self, body):
        self.content = json.dumps(body).encode("utf-8")

    def json(self):
        return json.loads(self.content)


def test_rest_sale_repository_sends_camel_case_body():
    body = {
        "sale": {
            "id": 7,
            "customerId": 2,
            "productId": 5,
            "date": "2025-07-15T00:00:00.000Z",
            "quantity": 3,
            "pricePerUnit": 12000,
            "total": 36000,
            "product": {"id": 5, "name": "Qatiq", "unit": "litr", "pricePerUnit": 12000},
        }
    }
    session = RecordingSession(body)
    repo = RestSaleRepository(ApiClient(ApiConfig(base_url="http://backend.test/api"), session=session))

    created = repo.create(build_sale_input(customer_id=2, product_id=5, date="2025-07-15", quantity=3, price_per_unit=12000))

    sent = session.calls[0]
    assert sent["method"] == "POST"
    assert sent["url"] == "http://backend.test/api/sales"
    assert sent["json"] == {
        "customerId": 2,
        "productId": 5,
        "date": "2025-07-15T00:00:00.000Z",
        "quantity": 3.0,
        "pricePerUnit": 12000.0,
        "total": 36000.0,
    }
    assert created.id == 7
    assert created.date == date(2025, 7, 15)
    assert created.product_name == "Qatiq"
    assert created.customer is None
