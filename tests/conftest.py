import json

import pytest

from core.api import ApiClient, ApiError
from core.controllers import ViewLifetime
from core.schemas import Identity, InventoryItem, Order, OrderResult, StaffMember
from core.services import EmailLog
from core.session import SessionStore
from core.storage import MemoryStorage


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None, content=None):
        self.status_code = status_code
        self._payload = payload
        if text is None:
            text = json.dumps(payload) if payload is not None else ""
        self.text = text
        self.content = content if content is not None else text.encode("utf-8")

    @property
    def ok(self):
        return 200 <= self.status_code < 300

    def json(self):
        if self._payload is None:
            return json.loads(self.text)
        return self._payload


class FakeHttp:
    """Records requests and answers from a queue of canned responses."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def request(self, method, url, headers=None, json=None, timeout=None):
        self.calls.append({"method": method, "url": url, "headers": headers or {}, "json": json})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class FakeApi:
    """Stands in for ApiClient in controller tests."""

    def __init__(self, inventory=None, orders=None, staff=None):
        self.inventory = list(inventory or [])
        self.orders = list(orders or [])
        self.staff = list(staff or [])
        self.calls = []
        self.failures = {}
        self.order_result = OrderResult(success=True)
        self.identity = Identity(email="admin@example.com", name="Ada", role="ADMIN", token="tok-1")

    def fail(self, name, message):
        self.failures[name] = ApiError(message)

    def _record(self, name, *args):
        self.calls.append((name,) + args)
        if name in self.failures:
            raise self.failures[name]

    def calls_to(self, name):
        return [c for c in self.calls if c[0] == name]

    def login(self, username, password):
        self._record("login", username, password)
        return self.identity

    def register(self, form):
        self._record("register", form)
        return {}

    def get_inventory(self, token):
        self._record("get_inventory", token)
        return list(self.inventory)

    def add_inventory_item(self, token, item):
        self._record("add_inventory_item", token, item)

    def update_inventory_item(self, token, item_id, item):
        self._record("update_inventory_item", token, item_id, item)

    def delete_inventory_item(self, token, item_id):
        self._record("delete_inventory_item", token, item_id)
        return "deleted"

    def export_inventory_csv(self, token):
        self._record("export_inventory_csv", token)
        return b"id,name\n1,Widget\n"

    def get_orders(self, token):
        self._record("get_orders", token)
        return list(self.orders)

    def place_order(self, token, order):
        self._record("place_order", token, order)
        return self.order_result

    def get_staff(self, token):
        self._record("get_staff", token)
        return list(self.staff)

    def add_staff(self, token, staff):
        self._record("add_staff", token, staff)

    def update_staff(self, token, staff_id, staff):
        self._record("update_staff", token, staff_id, staff)

    def delete_staff(self, token, staff_id):
        self._record("delete_staff", token, staff_id)
        return "deleted"

    def send_email(self, token, email):
        self._record("send_email", token, email)
        return {"status": "sent"}


def make_item(product_id, unit, total_price=None, name=None, model=None, price=10.0):
    return InventoryItem(
        product_id=product_id,
        product_name=name or f"Product {product_id}",
        model_name=model,
        price_per_quantity=price,
        unit=unit,
        total_price=total_price,
        status="Available",
    )


def make_order(order_id, status, product="Widget", quantity=1):
    return Order(
        order_id=order_id,
        product_name=product,
        quantity_ordered=quantity,
        customer_name="Cat",
        customer_email="cat@example.com",
        total_amount=10.0 * quantity,
        order_status=status,
        order_date="2024-03-01T10:00:00",
    )


def make_staff(staff_id, name, email, department="Sales", rights="STAFF", status="ACTIVE"):
    return StaffMember(
        id=staff_id,
        name=name,
        email=email,
        phone_number="555-0100",
        designation="Clerk",
        department=department,
        rights=rights,
        status=status,
    )


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def session(storage):
    return SessionStore(storage)


@pytest.fixture
def admin_session(session):
    session.set_session(Identity(email="admin@example.com", name="Ada", role="ADMIN", token="tok-admin"))
    return session


@pytest.fixture
def staff_session(session):
    session.set_session(Identity(email="sam@example.com", name="Sam", role="STAFF", token="tok-staff"))
    return session


@pytest.fixture
def fake_api():
    return FakeApi()


@pytest.fixture
def lifetime():
    return ViewLifetime()


@pytest.fixture
def email_log(storage):
    return EmailLog(storage)


@pytest.fixture
def make_client():
    def _make(*responses):
        http = FakeHttp(*responses)
        return ApiClient("http://api.test/", http=http), http
    return _make
