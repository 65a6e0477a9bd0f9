"""Page controllers: fetch/mutate logic and local view state for each page.

Controllers know nothing about Streamlit. Each one moves through
``loading -> ready`` on entry and ``ready -> submitting -> ready`` around a
create/update/delete, re-fetching its collection after every successful
mutation. API failures become notices for the page to display; they never
escape to the caller.
"""
from __future__ import annotations

import itertools
import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import date
from typing import Callable, Dict, List, NamedTuple, Optional, Tuple

from core.api import ApiClient, ApiError
from core.constants import LOW_STOCK_EMAIL_SUBJECT, ORDER_FILTER_ALL
from core.schemas import InventoryItem, Order, SentEmailRecord, StaffMember
from core.services import (
    EmailLog,
    FormError,
    build_email_request,
    build_inventory_payload,
    build_order_payload,
    build_registration,
    build_staff_payload,
    dashboard_stats,
    empty_email_draft,
    empty_inventory_draft,
    empty_order_draft,
    empty_registration_draft,
    empty_staff_draft,
    filter_orders,
    inventory_draft_from_item,
    low_stock_email_body,
    low_stock_items,
    order_status_counts,
    search_inventory,
    search_staff,
    staff_draft_from_member,
    total_units,
    total_value,
)
from core.session import SessionStore

logger = logging.getLogger(__name__)

LOADING = "loading"
READY = "ready"
SUBMITTING = "submitting"


class Notice(NamedTuple):
    level: str  # success | error | info
    text: str


class ViewLifetime:
    """Hands out one ticket per page visit.

    A fetch started under a ticket may only apply its result while that
    ticket is still the current one; leaving the page invalidates it.
    """

    def __init__(self):
        self._counter = itertools.count(1)
        self._current: Optional[Tuple[str, int]] = None

    def begin(self, page: str) -> Tuple[str, int]:
        self._current = (page, next(self._counter))
        return self._current

    def end(self) -> None:
        self._current = None

    def is_current(self, ticket: Optional[Tuple[str, int]]) -> bool:
        return ticket is not None and ticket == self._current


class PageController:
    """Shared loading/ready/submitting pattern."""

    name = "page"

    def __init__(self, api: ApiClient, session: SessionStore, lifetime: Optional[ViewLifetime] = None):
        self.api = api
        self.session = session
        self.lifetime = lifetime
        self.ticket = None
        self.status = LOADING
        self.notices: List[Notice] = []

    # -- notices

    def notify(self, level: str, text: str) -> None:
        self.notices.append(Notice(level, text))

    def pop_notices(self) -> List[Notice]:
        notices, self.notices = self.notices, []
        return notices

    # -- lifecycle

    def enter(self) -> None:
        """Called when the page becomes visible: start a visit and fetch."""
        self.status = LOADING
        if self.lifetime is not None:
            self.ticket = self.lifetime.begin(self.name)
        self.refresh()

    def is_visible(self, ticket) -> bool:
        if self.lifetime is None:
            return True
        return self.lifetime.is_current(ticket)

    def refresh(self) -> None:
        ticket = self.ticket
        token = self.session.get_token()
        if not token:
            # The guard should already have redirected; nothing to fetch
            self.status = READY
            return
        try:
            result = self._fetch(token)
        except ApiError as e:
            logger.warning("%s fetch failed: %s", self.name, e)
            if self.is_visible(ticket):
                self.notify("error", str(e))
                self.status = READY
            return
        if not self.is_visible(ticket):
            logger.debug("Discarding stale %s response", self.name)
            return
        self._apply(result)
        self.status = READY

    def _fetch(self, token: str):
        raise NotImplementedError

    def _apply(self, result) -> None:
        raise NotImplementedError

    def _mutate(self, action: Callable[[str], object], success_text: str, refetch: bool = True) -> bool:
        """Run one create/update/delete. Returns True on success."""
        token = self.session.get_token()
        if not token:
            return False
        self.status = SUBMITTING
        try:
            action(token)
        except (ApiError, FormError) as e:
            logger.warning("%s mutation failed: %s", self.name, e)
            self.notify("error", str(e) or "Operation failed")
            self.status = READY
            return False
        self.notify("success", success_text)
        if refetch:
            self.refresh()
        self.status = READY
        return True


# ============================================================================
# Dashboard
# ============================================================================

class DashboardController(PageController):
    name = "dashboard"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.inventory: List[InventoryItem] = []
        self.orders: List[Order] = []

    def _fetch(self, token: str):
        # Both requests run concurrently; either failure fails the whole join
        with ThreadPoolExecutor(max_workers=2) as pool:
            inventory_future = pool.submit(self.api.get_inventory, token)
            orders_future = pool.submit(self.api.get_orders, token)
            return inventory_future.result(), orders_future.result()

    def _apply(self, result) -> None:
        self.inventory, self.orders = result

    @property
    def stats(self) -> Dict[str, int]:
        return dashboard_stats(self.inventory, self.orders)

    @property
    def status_counts(self) -> Dict[str, int]:
        return order_status_counts(self.orders)

    @property
    def top_products(self) -> List[InventoryItem]:
        return self.inventory[:5]

    @property
    def recent_orders(self) -> List[Order]:
        return self.orders[:5]


# ============================================================================
# Inventory
# ============================================================================

class InventoryController(PageController):
    name = "inventory"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.items: List[InventoryItem] = []
        self.search = ""
        self.draft = empty_inventory_draft()
        self.editing_id: Optional[int] = None
        self.dialog_open = False
        self.pending_delete: Optional[int] = None

    def _fetch(self, token: str):
        return self.api.get_inventory(token)

    def _apply(self, result) -> None:
        self.items = list(result)

    @property
    def filtered(self) -> List[InventoryItem]:
        return search_inventory(self.items, self.search)

    def start_add(self) -> None:
        self.reset_form()
        self.dialog_open = True

    def start_edit(self, item: InventoryItem) -> None:
        self.editing_id = item.product_id
        self.draft = inventory_draft_from_item(item)
        self.dialog_open = True

    def reset_form(self) -> None:
        self.draft = empty_inventory_draft()
        self.editing_id = None
        self.dialog_open = False

    def submit(self, draft: Dict) -> bool:
        self.draft = dict(draft)
        editing_id = self.editing_id

        def action(token):
            payload = build_inventory_payload(draft)
            if editing_id is not None:
                self.api.update_inventory_item(token, editing_id, payload)
            else:
                self.api.add_inventory_item(token, payload)

        text = "Item updated successfully" if editing_id is not None else "Item added successfully"
        ok = self._mutate(action, text)
        if ok:
            self.reset_form()
        return ok

    def request_delete(self, item_id: int) -> None:
        self.pending_delete = item_id

    def cancel_delete(self) -> None:
        self.pending_delete = None

    def confirm_delete(self) -> bool:
        item_id = self.pending_delete
        if item_id is None:
            return False
        self.pending_delete = None
        return self._mutate(
            lambda token: self.api.delete_inventory_item(token, item_id),
            "Item deleted successfully",
        )

    def export_csv(self, today: Optional[date] = None) -> Optional[Tuple[str, bytes]]:
        """Fetch the server-generated CSV. Returns (filename, content) or None."""
        token = self.session.get_token()
        if not token:
            return None
        try:
            content = self.api.export_inventory_csv(token)
        except ApiError as e:
            logger.warning("CSV export failed: %s", e)
            self.notify("error", str(e))
            return None
        filename = f"inventory_{(today or date.today()).isoformat()}.csv"
        self.notify("success", "Inventory exported successfully")
        return filename, content


# ============================================================================
# Orders
# ============================================================================

class OrdersController(PageController):
    name = "orders"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.orders: List[Order] = []
        self.status_filter = ORDER_FILTER_ALL
        self.draft = empty_order_draft()
        self.dialog_open = False

    def _fetch(self, token: str):
        return self.api.get_orders(token)

    def _apply(self, result) -> None:
        self.orders = list(result)

    @property
    def filtered(self) -> List[Order]:
        return filter_orders(self.orders, self.status_filter)

    def reset_form(self) -> None:
        self.draft = empty_order_draft()
        self.dialog_open = False

    def submit(self, draft: Dict) -> bool:
        self.draft = dict(draft)
        token = self.session.get_token()
        if not token:
            return False
        self.status = SUBMITTING
        try:
            result = self.api.place_order(token, build_order_payload(draft))
        except (ApiError, FormError) as e:
            logger.warning("Place order failed: %s", e)
            self.notify("error", str(e) or "Failed to place order")
            self.status = READY
            return False
        if not result.success:
            self.notify("error", result.message or "Failed to place order")
            self.status = READY
            return False
        self.notify("success", "Order placed successfully")
        self.refresh()
        self.reset_form()
        self.status = READY
        return True


# ============================================================================
# Staff
# ============================================================================

class StaffController(PageController):
    name = "staff"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.members: List[StaffMember] = []
        self.search = ""
        self.draft = empty_staff_draft()
        self.editing_id: Optional[int] = None
        self.dialog_open = False
        self.pending_delete: Optional[int] = None

    def _fetch(self, token: str):
        return self.api.get_staff(token)

    def _apply(self, result) -> None:
        self.members = list(result)

    @property
    def filtered(self) -> List[StaffMember]:
        return search_staff(self.members, self.search)

    @property
    def departments(self) -> List[str]:
        return sorted({m.department for m in self.members if m.department}, key=str.casefold)

    def start_add(self) -> None:
        self.reset_form()
        self.dialog_open = True

    def start_edit(self, member: StaffMember) -> None:
        self.editing_id = member.id
        self.draft = staff_draft_from_member(member)
        self.dialog_open = True

    def reset_form(self) -> None:
        self.draft = empty_staff_draft()
        self.editing_id = None
        self.dialog_open = False

    def submit(self, draft: Dict) -> bool:
        self.draft = dict(draft)
        editing_id = self.editing_id

        def action(token):
            if editing_id is not None:
                self.api.update_staff(token, editing_id, build_staff_payload(draft, editing=True))
            else:
                self.api.add_staff(token, build_staff_payload(draft))

        text = "Staff updated successfully" if editing_id is not None else "Staff added successfully"
        ok = self._mutate(action, text)
        if ok:
            self.reset_form()
        return ok

    def request_delete(self, staff_id: int) -> None:
        self.pending_delete = staff_id

    def cancel_delete(self) -> None:
        self.pending_delete = None

    def confirm_delete(self) -> bool:
        staff_id = self.pending_delete
        if staff_id is None:
            return False
        self.pending_delete = None
        return self._mutate(
            lambda token: self.api.delete_staff(token, staff_id),
            "Staff deleted successfully",
        )


# ============================================================================
# Admin tools
# ============================================================================

class AdminToolsController(PageController):
    name = "admin_tools"

    def __init__(self, api: ApiClient, session: SessionStore, email_log: EmailLog,
                 lifetime: Optional[ViewLifetime] = None):
        super().__init__(api, session, lifetime)
        self.email_log = email_log
        self.inventory: List[InventoryItem] = []
        self.email_draft = empty_email_draft()
        self.sending = False

    def _fetch(self, token: str):
        return self.api.get_inventory(token)

    def _apply(self, result) -> None:
        self.inventory = list(result)

    @property
    def low_stock(self) -> List[InventoryItem]:
        return low_stock_items(self.inventory)

    @property
    def low_stock_value(self) -> float:
        return total_value(self.low_stock)

    @property
    def low_stock_units(self) -> int:
        return total_units(self.low_stock)

    @property
    def sent_emails(self) -> List[SentEmailRecord]:
        return self.email_log.records()

    def load_low_stock_alert(self) -> bool:
        items = self.low_stock
        if not items:
            self.notify("info", "No low stock items to alert about")
            return False
        self.email_draft = {
            "recipient": "",
            "subject": LOW_STOCK_EMAIL_SUBJECT,
            "message": low_stock_email_body(items),
        }
        self.notify("success", "Low stock alert template loaded")
        return True

    def send_email(self, draft: Dict) -> bool:
        self.email_draft = dict(draft)
        token = self.session.get_token()
        if not token:
            self.notify("error", "Authentication required")
            return False
        try:
            request = build_email_request(draft)
        except FormError as e:
            self.notify("error", str(e))
            return False

        self.sending = True
        self.status = SUBMITTING
        try:
            self.api.send_email(token, request)
        except ApiError as e:
            logger.warning("Email to %s failed: %s", request.to, e)
            self.email_log.append(request.to, request.subject, request.message, "failed")
            self.notify("error", str(e) or "Failed to send email")
            return False
        else:
            self.email_log.append(request.to, request.subject, request.message, "success")
            self.notify("success", f"Email sent successfully to {request.to}")
            self.email_draft = empty_email_draft()
            return True
        finally:
            self.sending = False
            self.status = READY


# ============================================================================
# Public pages
# ============================================================================

class LoginController:
    def __init__(self, api: ApiClient, session: SessionStore):
        self.api = api
        self.session = session
        self.submitting = False
        self.notices: List[Notice] = []

    def pop_notices(self) -> List[Notice]:
        notices, self.notices = self.notices, []
        return notices

    def submit(self, username: str, password: str) -> bool:
        username = (username or "").strip()
        if not username or not password:
            self.notices.append(Notice("error", "Please enter both username and password"))
            return False
        self.submitting = True
        try:
            identity = self.api.login(username, password)
        except ApiError as e:
            logger.info("Login failed for %s: %s", username, e)
            self.notices.append(Notice("error", str(e)))
            return False
        finally:
            self.submitting = False
        self.session.set_session(identity)
        logger.info("Logged in %s as %s", identity.email or username, identity.role)
        self.notices.append(Notice("success", f"Welcome back, {identity.name or username}!"))
        return True


class RegisterController:
    def __init__(self, api: ApiClient):
        self.api = api
        self.draft = empty_registration_draft()
        self.submitting = False
        self.notices: List[Notice] = []

    def pop_notices(self) -> List[Notice]:
        notices, self.notices = self.notices, []
        return notices

    def submit(self, draft: Dict) -> bool:
        self.draft = dict(draft)
        self.submitting = True
        try:
            self.api.register(build_registration(draft))
        except (ApiError, FormError) as e:
            logger.info("Registration failed: %s", e)
            self.notices.append(Notice("error", str(e) or "Registration failed"))
            return False
        finally:
            self.submitting = False
        self.draft = empty_registration_draft()
        self.notices.append(Notice("success", "Registration successful! Please login."))
        return True
