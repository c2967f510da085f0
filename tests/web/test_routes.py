from __future__ import annotations

import json
from datetime import date
from urllib.parse import parse_qs, urlparse

import pytest

from src.dairy_console.dairy_console.container import Container
from src.dairy_console.dairy_console.core.constants import AUTH_TOKEN_KEY, AUTH_USER_KEY
from src.dairy_console.dairy_console.core.enums import Role
from src.dairy_console.dairy_console.core.exceptions import UnauthorizedError
from src.dairy_console.dairy_console.customers.service import CustomerService
from src.dairy_console.dairy_console.dashboard.rest_dashboard_repository import (
    to_all_time_data,
    to_dashboard_data,
    to_summary,
)
from src.dairy_console.dairy_console.dashboard.service import DashboardService
from src.dairy_console.dairy_console.main import create_app
from src.dairy_console.dairy_console.products.service import ProductService
from src.dairy_console.dairy_console.purchases.model import MilkPurchase
from src.dairy_console.dairy_console.purchases.service import MilkPurchaseService
from src.dairy_console.dairy_console.sales.service import SaleService
from src.dairy_console.dairy_console.sessions.model import SessionLog
from src.dairy_console.dairy_console.sessions.service import SessionLogService
from src.dairy_console.dairy_console.suppliers.model import Supplier
from src.dairy_console.dairy_console.suppliers.service import SupplierService
from src.dairy_console.dairy_console.users.model import AuthResult, User
from src.dairy_console.dairy_console.users.service import AuthService, UserService
from src.dairy_console.dairy_console.users.session_store import AuthStore

ADMIN = User(id=1, username="admin", role=Role.ADMIN)
MANAGER = User(id=2, username="manager", role=Role.MANAGER)
CLERK = User(id=3, username="clerk", role=Role.USER)


class FakeAuth:
    def login(self, username, password):
        if password == "secret":
            return AuthResult(token="tok-" + username, user=ADMIN if username == "admin" else CLERK)
        raise UnauthorizedError(401)

    def register(self, username, password, role=None):
        return AuthResult(token="t", user=User(id=9, username=username, role=role or Role.USER))


class FakeUsers:
    def __init__(self):
        self.me = ADMIN

    def list_all(self):
        return [ADMIN, MANAGER, CLERK]

    def get_current(self):
        return self.me


class FakeSuppliers:
    def __init__(self):
        self.items = [Supplier(id=1, name="Ali Fermer", phone="901112233")]
        self.fail_with = None

    def list_all(self):
        if self.fail_with:
            raise self.fail_with
        return self.items


class Empty:
    def list_all(self):
        return []


class FakePurchases:
    def __init__(self):
        self.created = []

    def list_all(self):
        return [
            MilkPurchase(id=1, supplier_id=1, date=date(2025, 3, 1), quantity_liters=10, price_per_liter=5000, total=50000)
        ]

    def create(self, data):
        self.created.append(data)
        return self.list_all()[0]


class FakeSessions:
    def __init__(self):
        self.deleted = []

    def list_all(self):
        return [SessionLog(token="abc123", user_id=3, username="clerk", ip_address="10.0.0.5", user_agent="Firefox")]

    def delete_by_token(self, token):
        self.deleted.append(token)


class FakeDashboard:
    def __init__(self):
        self.fail_with = None

    def get_summary(self):
        return to_summary({"suppliers": 1, "totalRevenue": 1000})

    def get_range(self, start, end):
        if self.fail_with:
            raise self.fail_with
        return to_dashboard_data(
            {
                "summary": {"totalSalesRevenue": 1000, "grossProfit": 250},
                "salesOverTime": [{"date": start.isoformat(), "totalLiters": 4}],
            },
            start=start,
            end=end,
        )

    def get_all_time(self):
        return to_all_time_data({"summary": {}, "monthlyTrends": [{"month": "2025-02", "salesRevenue": 10}]})


@pytest.fixture()
def fakes():
    return {
        "users": FakeUsers(),
        "suppliers": FakeSuppliers(),
        "purchases": FakePurchases(),
        "sessions": FakeSessions(),
        "dashboard": FakeDashboard(),
    }


def build_app(fakes, store):
    container = Container(
        client=None,
        store=store,
        auth_service=AuthService(FakeAuth(), fakes["users"], store),
        user_service=UserService(FakeAuth(), fakes["users"]),
        supplier_service=SupplierService(fakes["suppliers"]),
        customer_service=CustomerService(Empty()),
        product_service=ProductService(Empty()),
        purchase_service=MilkPurchaseService(fakes["purchases"]),
        sale_service=SaleService(Empty()),
        session_service=SessionLogService(fakes["sessions"]),
        dashboard_service=DashboardService(fakes["dashboard"]),
    )
    return create_app(container)


@pytest.fixture()
def client(monkeypatch, fakes):
    monkeypatch.setenv("APP_ENV", "testing")
    return build_app(fakes, AuthStore()).test_client()


def login_as(client, user):
    with client.session_transaction() as sess:
        sess[AUTH_TOKEN_KEY] = "tok"
        sess[AUTH_USER_KEY] = json.dumps(user.to_snapshot())


def test_root_redirects_to_login_when_anonymous(client):
    resp = client.get("/")
    assert resp.status_code == 302
    assert "/login" in resp.headers["Location"]


def test_protected_page_redirects_with_next(client):
    resp = client.get("/suppliers")
    assert resp.status_code == 302
    location = urlparse(resp.headers["Location"])
    assert location.path.endswith("/login")
    assert parse_qs(location.query) == {"next": ["/suppliers"]}


def test_login_success_stores_auth_and_follows_next(client):
    resp = client.post("/login", data={"username": "admin", "password": "secret", "next": "/sales"})

    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/sales")
    with client.session_transaction() as sess:
        assert sess[AUTH_TOKEN_KEY] == "tok-admin"
        assert json.loads(sess[AUTH_USER_KEY])["role"] == "ADMIN"


def test_login_ignores_external_next(client):
    resp = client.post("/login", data={"username": "admin", "password": "secret", "next": "//evil.example"})

    assert resp.headers["Location"].endswith("/dashboard")


def test_login_failure_shows_message(client):
    resp = client.post("/login", data={"username": "admin", "password": "bad"})

    assert resp.status_code == 200
    assert "noto&#39;g&#39;ri" in resp.get_data(as_text=True)


def test_logout_clears_session(client):
    login_as(client, CLERK)
    client.get("/logout")

    with client.session_transaction() as sess:
        assert AUTH_TOKEN_KEY not in sess


def test_user_role_can_read_but_not_write(client):
    login_as(client, CLERK)

    listing = client.get("/suppliers")
    assert listing.status_code == 200
    assert "Ali Fermer" in listing.get_data(as_text=True)

    assert client.get("/suppliers/new").status_code == 403
    assert client.post("/suppliers/1/delete").status_code == 403


def test_admin_pages_are_forbidden_for_manager(client):
    login_as(client, MANAGER)

    assert client.get("/users").status_code == 403
    assert client.get("/admin-sessions").status_code == 403


def test_admin_sees_users_and_sessions(client, fakes):
    login_as(client, ADMIN)

    users_page = client.get("/users")
    assert users_page.status_code == 200
    assert "clerk" in users_page.get_data(as_text=True)

    sessions_page = client.get("/admin-sessions?q=10.0")
    assert sessions_page.status_code == 200
    assert "abc123" in sessions_page.get_data(as_text=True)

    resp = client.post("/admin-sessions/abc123/delete")
    assert resp.status_code == 302
    assert fakes["sessions"].deleted == ["abc123"]


def test_backend_401_logs_out_and_redirects(client, fakes):
    login_as(client, CLERK)
    fakes["suppliers"].fail_with = UnauthorizedError(401)

    resp = client.get("/suppliers")

    assert resp.status_code == 302
    assert "/login" in resp.headers["Location"]
    with client.session_transaction() as sess:
        assert AUTH_TOKEN_KEY not in sess
        assert AUTH_USER_KEY not in sess


def test_manager_creates_purchase_with_computed_total(client, fakes):
    login_as(client, MANAGER)

    resp = client.post(
        "/milk-purchases/new",
        data={"supplier_id": "1", "date": "2025-03-02", "quantity_liters": "20", "price_per_liter": "4500", "total": ""},
    )

    assert resp.status_code == 302
    assert fakes["purchases"].created[0].total == 90000.0


def test_invalid_purchase_form_is_rerendered(client, fakes):
    login_as(client, MANAGER)

    resp = client.post(
        "/milk-purchases/new",
        data={"supplier_id": "", "date": "2025-03-02", "quantity_liters": "20", "price_per_liter": "4500"},
    )

    assert resp.status_code == 200
    assert fakes["purchases"].created == []


def test_purchase_export_is_excel(client):
    login_as(client, CLERK)

    resp = client.get("/milk-purchases/export")

    assert resp.status_code == 200
    assert resp.mimetype == "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    assert resp.data[:2] == b"PK"


def test_dashboard_renders_period_and_all_time(client):
    login_as(client, CLERK)

    resp = client.get("/dashboard?from=2025-03-01&to=2025-03-07")

    assert resp.status_code == 200
    body = resp.get_data(as_text=True)
    assert "7 kun" in body
    assert "25.0% marja" in body


def test_dashboard_bad_range_falls_back(client):
    login_as(client, CLERK)

    resp = client.get("/dashboard?from=2025-03-10&to=2025-03-01")

    assert resp.status_code == 200


def test_dashboard_summary_page(client):
    login_as(client, CLERK)

    resp = client.get("/dashboard/summary")

    assert resp.status_code == 200
    assert "1 000 so&#39;m" in resp.get_data(as_text=True)


def test_quick_action_json(client):
    login_as(client, CLERK)

    resp = client.get("/api/dashboard/quick/today")

    assert resp.status_code == 200
    data = resp.get_json()
    assert data["title"] == "Bugun"
    assert data["days"] == 1
    assert data["salesOverTime"][0]["totalKg"] == 0.0


def test_quick_action_unknown_period(client):
    login_as(client, CLERK)

    assert client.get("/api/dashboard/quick/tomorrow").status_code == 400


def test_unknown_route_is_404(client):
    assert client.get("/no-such-page").status_code == 404


def test_quick_action_requires_login_as_json(client):
    resp = client.get("/api/dashboard/quick/today")

    assert resp.status_code == 401
    assert resp.get_json()["message"] == "Unauthorized"


def test_quick_action_backend_401_clears_session(client, fakes):
    login_as(client, CLERK)
    fakes["dashboard"].fail_with = UnauthorizedError(401)

    resp = client.get("/api/dashboard/quick/today")

    assert resp.status_code == 401
    assert resp.get_json()["message"] == "Unauthorized"
    with client.session_transaction() as sess:
        assert AUTH_TOKEN_KEY not in sess


def test_non_finite_purchase_quantity_is_rejected(client, fakes):
    login_as(client, MANAGER)

    resp = client.post(
        "/milk-purchases/new",
        data={"supplier_id": "1", "date": "2025-03-02", "quantity_liters": "nan", "price_per_liter": "4500", "total": ""},
    )

    assert resp.status_code == 200
    assert fakes["purchases"].created == []


class MemoryStore:
    def __init__(self, token=None, user=None):
        self.token = token
        self.user = user

    def get_token(self):
        return self.token

    def get_user(self):
        return self.user

    def save(self, token, user, *, remember=False):
        self.token, self.user = token, user

    def save_user(self, user):
        self.user = user

    def clear(self):
        self.token = self.user = None


def test_guards_read_the_container_store(monkeypatch, fakes):
    monkeypatch.setenv("APP_ENV", "testing")
    store = MemoryStore(token="tok", user=MANAGER)
    client = build_app(fakes, store).test_client()

    assert client.get("/suppliers").status_code == 200
    assert client.get("/users").status_code == 403

    store.clear()
    resp = client.get("/suppliers")
    assert resp.status_code == 302
    assert "/login" in resp.headers["Location"]
