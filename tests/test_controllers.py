from datetime import date

from conftest import make_item, make_order, make_staff
from core.constants import LOW_STOCK_EMAIL_SUBJECT, STORAGE_TOKEN_KEY
from core.controllers import (
    READY,
    AdminToolsController,
    DashboardController,
    InventoryController,
    LoginController,
    Notice,
    OrdersController,
    RegisterController,
    StaffController,
    ViewLifetime,
)
from core.schemas import OrderResult

ORDER_DRAFT = {
    "product_name": "Widget",
    "model_name": "W",
    "quantity_ordered": "2",
    "customer_email": "c@example.com",
    "customer_name": "Cat",
}


# ---------------------------------------------------------------- lifecycle

def test_no_token_means_no_request(fake_api, session, lifetime):
    controller = InventoryController(fake_api, session, lifetime)
    controller.enter()
    assert fake_api.calls == []
    assert controller.items == []
    assert controller.pop_notices() == []
    assert controller.status == READY


def test_enter_fetches_with_token(fake_api, admin_session, lifetime):
    fake_api.inventory = [make_item(1, 5)]
    controller = InventoryController(fake_api, admin_session, lifetime)
    controller.enter()
    assert fake_api.calls == [("get_inventory", "tok-admin")]
    assert [i.product_id for i in controller.items] == [1]
    assert controller.status == READY


def test_fetch_failure_keeps_previous_data(fake_api, admin_session, lifetime):
    fake_api.inventory = [make_item(1, 5)]
    controller = InventoryController(fake_api, admin_session, lifetime)
    controller.enter()
    fake_api.fail("get_inventory", "Failed to fetch inventory")
    controller.refresh()
    assert [i.product_id for i in controller.items] == [1]
    assert controller.pop_notices() == [Notice("error", "Failed to fetch inventory")]


def test_stale_response_is_discarded(fake_api, admin_session):
    lifetime = ViewLifetime()
    controller = OrdersController(fake_api, admin_session, lifetime)
    controller.ticket = lifetime.begin("orders")
    fake_api.orders = [make_order(1, "PLACED")]
    # The user navigates away before the response lands
    lifetime.begin("inventory")
    controller.refresh()
    assert controller.orders == []
    assert controller.pop_notices() == []


def test_stale_failure_is_silent(fake_api, admin_session):
    lifetime = ViewLifetime()
    controller = OrdersController(fake_api, admin_session, lifetime)
    controller.ticket = lifetime.begin("orders")
    lifetime.end()
    fake_api.fail("get_orders", "Failed to fetch orders")
    controller.refresh()
    assert controller.pop_notices() == []


def test_view_lifetime_tickets():
    lifetime = ViewLifetime()
    first = lifetime.begin("a")
    assert lifetime.is_current(first)
    second = lifetime.begin("a")
    assert not lifetime.is_current(first)
    assert lifetime.is_current(second)
    lifetime.end()
    assert not lifetime.is_current(second)
    assert not lifetime.is_current(None)


# ---------------------------------------------------------------- dashboard

def test_dashboard_joins_inventory_and_orders(fake_api, staff_session, lifetime):
    fake_api.inventory = [make_item(i, unit=i, total_price=1.0) for i in range(1, 8)]
    fake_api.orders = [make_order(i, "PLACED") for i in range(1, 8)] + [make_order(8, "CANCELLED")]
    controller = DashboardController(fake_api, staff_session, lifetime)
    controller.enter()

    assert {c[0] for c in fake_api.calls} == {"get_inventory", "get_orders"}
    assert controller.stats == {"total_items": 7, "total_orders": 8, "total_value": 7, "low_stock": 7}
    assert controller.status_counts["CANCELLED"] == 1
    assert len(controller.top_products) == 5
    assert [o.order_id for o in controller.recent_orders] == [1, 2, 3, 4, 5]


def test_dashboard_join_failure_applies_nothing(fake_api, staff_session, lifetime):
    fake_api.inventory = [make_item(1, 5)]
    fake_api.fail("get_orders", "Failed to fetch orders")
    controller = DashboardController(fake_api, staff_session, lifetime)
    controller.enter()
    assert controller.inventory == []
    assert controller.orders == []
    assert controller.pop_notices() == [Notice("error", "Failed to fetch orders")]


# ---------------------------------------------------------------- inventory

def test_add_item_refetches(fake_api, admin_session, lifetime):
    controller = InventoryController(fake_api, admin_session, lifetime)
    controller.enter()
    controller.start_add()
    fake_api.inventory = [make_item(1, 3)]

    ok = controller.submit({"product_name": "Widget", "price_per_quantity": "1.5", "unit": "3", "status": ""})

    assert ok
    assert [c[0] for c in fake_api.calls] == ["get_inventory", "add_inventory_item", "get_inventory"]
    assert fake_api.calls[1][2].to_wire()["pricePerQuantity"] == 1.5
    assert [i.product_id for i in controller.items] == [1]
    assert not controller.dialog_open
    assert Notice("success", "Item added successfully") in controller.pop_notices()


def test_edit_item_updates_by_id(fake_api, admin_session, lifetime):
    item = make_item(7, 4, name="Widget")
    fake_api.inventory = [item]
    controller = InventoryController(fake_api, admin_session, lifetime)
    controller.enter()
    controller.start_edit(item)
    draft = dict(controller.draft, unit="9")

    assert controller.submit(draft)
    update = fake_api.calls_to("update_inventory_item")[0]
    assert update[2] == 7
    assert update[3].unit == 9
    assert controller.editing_id is None


def test_invalid_price_sends_nothing(fake_api, admin_session, lifetime):
    controller = InventoryController(fake_api, admin_session, lifetime)
    controller.enter()
    controller.start_add()
    ok = controller.submit({"product_name": "Widget", "price_per_quantity": "abc", "unit": "1"})
    assert not ok
    assert fake_api.calls_to("add_inventory_item") == []
    assert controller.dialog_open
    assert controller.draft["price_per_quantity"] == "abc"
    assert controller.pop_notices()[0].level == "error"


def test_mutation_failure_skips_refetch(fake_api, admin_session, lifetime):
    controller = InventoryController(fake_api, admin_session, lifetime)
    controller.enter()
    fake_api.fail("add_inventory_item", "Failed to add item")
    assert not controller.submit({"product_name": "Widget", "price_per_quantity": "1", "unit": "1"})
    assert len(fake_api.calls_to("get_inventory")) == 1
    assert controller.pop_notices() == [Notice("error", "Failed to add item")]


def test_delete_requires_confirmation(fake_api, admin_session, lifetime):
    controller = InventoryController(fake_api, admin_session, lifetime)
    controller.enter()
    controller.request_delete(3)
    controller.cancel_delete()
    assert not controller.confirm_delete()
    assert fake_api.calls_to("delete_inventory_item") == []

    controller.request_delete(3)
    assert controller.confirm_delete()
    assert fake_api.calls_to("delete_inventory_item") == [("delete_inventory_item", "tok-admin", 3)]
    assert controller.pending_delete is None
    assert len(fake_api.calls_to("get_inventory")) == 2


def test_export_csv_filename(fake_api, staff_session, lifetime):
    controller = InventoryController(fake_api, staff_session, lifetime)
    filename, content = controller.export_csv(today=date(2024, 5, 17))
    assert filename == "inventory_2024-05-17.csv"
    assert content.startswith(b"id,name")


def test_export_csv_failure(fake_api, staff_session, lifetime):
    fake_api.fail("export_inventory_csv", "Failed to export CSV")
    controller = InventoryController(fake_api, staff_session, lifetime)
    assert controller.export_csv() is None
    assert controller.pop_notices() == [Notice("error", "Failed to export CSV")]


def test_inventory_search(fake_api, staff_session, lifetime):
    fake_api.inventory = [make_item(1, 5, name="Laptop"), make_item(2, 5, name="Mouse")]
    controller = InventoryController(fake_api, staff_session, lifetime)
    controller.enter()
    controller.search = "lap"
    assert [i.product_id for i in controller.filtered] == [1]


# ------------------------------------------------------------------ orders

def test_place_order_success_refetches(fake_api, staff_session, lifetime):
    controller = OrdersController(fake_api, staff_session, lifetime)
    controller.enter()
    controller.dialog_open = True
    assert controller.submit(ORDER_DRAFT)
    assert len(fake_api.calls_to("get_orders")) == 2
    assert not controller.dialog_open
    assert controller.pop_notices() == [Notice("success", "Order placed successfully")]


def test_place_order_business_rejection(fake_api, staff_session, lifetime):
    fake_api.order_result = OrderResult(success=False, message="Insufficient stock for Widget")
    controller = OrdersController(fake_api, staff_session, lifetime)
    controller.enter()
    controller.dialog_open = True
    assert not controller.submit(ORDER_DRAFT)
    assert len(fake_api.calls_to("get_orders")) == 1
    assert controller.dialog_open
    assert controller.pop_notices() == [Notice("error", "Insufficient stock for Widget")]


def test_orders_filter(fake_api, staff_session, lifetime):
    fake_api.orders = [make_order(1, "PLACED"), make_order(2, "CANCELLED"), make_order(3, "CANCELLED")]
    controller = OrdersController(fake_api, staff_session, lifetime)
    controller.enter()
    controller.status_filter = "CANCELLED"
    assert [o.order_id for o in controller.filtered] == [2, 3]


# ------------------------------------------------------------------- staff

def test_staff_edit_of_unusual_record_is_sent_unchanged(fake_api, admin_session, lifetime):
    member = make_staff(7, "Ops ", "ops@localhost")
    fake_api.staff = [member]
    controller = StaffController(fake_api, admin_session, lifetime)
    controller.enter()
    controller.start_edit(member)

    assert controller.submit(controller.draft)
    update = fake_api.calls_to("update_staff")[0]
    assert update[2] == 7
    assert update[3].to_wire()["name"] == "Ops "
    assert update[3].to_wire()["email"] == "ops@localhost"
    assert controller.pop_notices() == [Notice("success", "Staff updated successfully")]


def test_staff_edit_without_password(fake_api, admin_session, lifetime):
    member = make_staff(5, "Alice", "alice@example.com")
    fake_api.staff = [member]
    controller = StaffController(fake_api, admin_session, lifetime)
    controller.enter()
    controller.start_edit(member)
    assert controller.submit(controller.draft)

    update = fake_api.calls_to("update_staff")[0]
    assert update[2] == 5
    assert "password" not in update[3].to_wire()


def test_staff_add_without_password_is_rejected(fake_api, admin_session, lifetime):
    controller = StaffController(fake_api, admin_session, lifetime)
    controller.enter()
    controller.start_add()
    draft = dict(controller.draft, name="Bob", email="bob@example.com")
    assert not controller.submit(draft)
    assert fake_api.calls_to("add_staff") == []


def test_staff_departments_are_distinct(fake_api, admin_session, lifetime):
    fake_api.staff = [
        make_staff(1, "A", "a@example.com", department="sales"),
        make_staff(2, "B", "b@example.com", department="Admin"),
        make_staff(3, "C", "c@example.com", department="sales"),
    ]
    controller = StaffController(fake_api, admin_session, lifetime)
    controller.enter()
    assert controller.departments == ["Admin", "sales"]


def test_staff_delete(fake_api, admin_session, lifetime):
    controller = StaffController(fake_api, admin_session, lifetime)
    controller.enter()
    controller.request_delete(2)
    assert controller.confirm_delete()
    assert fake_api.calls_to("delete_staff") == [("delete_staff", "tok-admin", 2)]


# ------------------------------------------------------------- admin tools

def test_low_stock_alert_template(fake_api, admin_session, email_log, lifetime):
    fake_api.inventory = [make_item(1, 5, total_price=50, name="Cable"), make_item(2, 30, total_price=300)]
    controller = AdminToolsController(fake_api, admin_session, email_log, lifetime)
    controller.enter()

    assert [i.product_id for i in controller.low_stock] == [1]
    assert controller.low_stock_value == 50
    assert controller.low_stock_units == 5
    assert controller.load_low_stock_alert()
    assert controller.email_draft["recipient"] == ""
    assert controller.email_draft["subject"] == LOW_STOCK_EMAIL_SUBJECT
    assert "- Cable (5 units left)" in controller.email_draft["message"]


def test_low_stock_alert_with_nothing_low(fake_api, admin_session, email_log, lifetime):
    fake_api.inventory = [make_item(1, 30)]
    controller = AdminToolsController(fake_api, admin_session, email_log, lifetime)
    controller.enter()
    assert not controller.load_low_stock_alert()
    assert controller.pop_notices() == [Notice("info", "No low stock items to alert about")]


def test_send_email_success_logs_and_clears(fake_api, admin_session, email_log, lifetime):
    controller = AdminToolsController(fake_api, admin_session, email_log, lifetime)
    assert controller.send_email({"recipient": "a@example.com", "subject": "Hi", "message": "Body"})

    sent = fake_api.calls_to("send_email")[0][2]
    assert sent.to_wire() == {"to": "a@example.com", "subject": "Hi", "message": "Body"}
    record = controller.sent_emails[0]
    assert record.status == "success"
    assert controller.email_draft == {"recipient": "", "subject": "", "message": ""}
    assert not controller.sending


def test_send_email_failure_logs_exact_text(fake_api, admin_session, email_log, lifetime):
    fake_api.fail("send_email", "Failed to send email")
    controller = AdminToolsController(fake_api, admin_session, email_log, lifetime)
    draft = {"recipient": "a@example.com", "subject": " Restock ", "message": "Line 1\nLine 2"}

    assert not controller.send_email(draft)

    record = controller.sent_emails[0]
    assert record.status == "failed"
    assert record.recipient == "a@example.com"
    assert record.subject == " Restock "
    assert record.message == "Line 1\nLine 2"
    assert controller.email_draft == draft
    assert controller.pop_notices() == [Notice("error", "Failed to send email")]


def test_send_email_without_token(fake_api, session, email_log, lifetime):
    controller = AdminToolsController(fake_api, session, email_log, lifetime)
    assert not controller.send_email({"recipient": "a@example.com", "subject": "S", "message": "M"})
    assert fake_api.calls == []
    assert controller.sent_emails == []
    assert controller.pop_notices() == [Notice("error", "Authentication required")]


def test_send_email_invalid_input_is_not_logged(fake_api, admin_session, email_log, lifetime):
    controller = AdminToolsController(fake_api, admin_session, email_log, lifetime)
    assert not controller.send_email({"recipient": "", "subject": "S", "message": "M"})
    assert fake_api.calls == []
    assert controller.sent_emails == []


# ------------------------------------------------------------ public pages

def test_login_stores_session(fake_api, session, storage):
    controller = LoginController(fake_api, session)
    assert controller.submit(" ada ", "pw")
    assert fake_api.calls == [("login", "ada", "pw")]
    assert storage.get_item(STORAGE_TOKEN_KEY) == "tok-1"
    assert session.is_admin()
    assert controller.pop_notices() == [Notice("success", "Welcome back, Ada!")]


def test_login_failure_leaves_session_empty(fake_api, session):
    fake_api.fail("login", "Login failed")
    controller = LoginController(fake_api, session)
    assert not controller.submit("ada", "bad")
    assert not session.is_authenticated()
    assert controller.pop_notices() == [Notice("error", "Login failed")]


def test_login_requires_both_fields(fake_api, session):
    controller = LoginController(fake_api, session)
    assert not controller.submit("", "pw")
    assert fake_api.calls == []


def test_register(fake_api):
    controller = RegisterController(fake_api)
    ok = controller.submit({
        "name": "Bob",
        "email": "bob@example.com",
        "password": "pw",
        "phone_number": "",
        "designation": "",
        "department": "",
        "rights": "STAFF",
    })
    assert ok
    assert fake_api.calls_to("register")[0][1].email == "bob@example.com"
    assert controller.pop_notices() == [Notice("success", "Registration successful! Please login.")]


def test_register_failure_shows_server_text(fake_api):
    fake_api.fail("register", "Email already exists")
    controller = RegisterController(fake_api)
    assert not controller.submit({"name": "Bob", "email": "bob@example.com", "password": "pw"})
    assert controller.pop_notices() == [Notice("error", "Email already exists")]
    assert controller.draft["email"] == "bob@example.com"
