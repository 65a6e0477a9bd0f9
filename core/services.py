"""View helpers used by the page controllers: filters, stock math, form payloads,
and the locally persisted email log."""
from __future__ import annotations

import json
import logging
import math
import re
import uuid
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

from pydantic import ValidationError

from core.constants import (
    CRITICAL_STOCK_THRESHOLD,
    DEFAULT_ITEM_STATUS,
    HEALTHY_STOCK_THRESHOLD,
    LOW_STOCK_THRESHOLD,
    ORDER_FILTER_ALL,
    ORDER_STATUSES,
    ROLE_STAFF,
    STORAGE_SENT_EMAILS_KEY,
)
from core.schemas import (
    EmailRequest,
    InventoryItem,
    InventoryItemPayload,
    Order,
    OrderPayload,
    RegistrationForm,
    SentEmailRecord,
    StaffMember,
    StaffPayload,
)
from core.storage import KeyValueStorage

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class FormError(ValueError):
    """User input that cannot be submitted."""


# ============================================================================
# Filtering
# ============================================================================

def _contains(value: Optional[str], needle: str) -> bool:
    return bool(value) and needle in value.lower()


def search_inventory(items: Iterable[InventoryItem], term: str) -> List[InventoryItem]:
    """Case-insensitive substring match on product name or model name."""
    needle = (term or "").lower()
    return [
        item for item in items
        if not needle
        or _contains(item.product_name, needle)
        or _contains(item.model_name, needle)
    ]


def search_staff(members: Iterable[StaffMember], term: str) -> List[StaffMember]:
    """Case-insensitive substring match on name, email or department."""
    needle = (term or "").lower()
    return [
        m for m in members
        if not needle
        or _contains(m.name, needle)
        or _contains(m.email, needle)
        or _contains(m.department, needle)
    ]


def filter_orders(orders: Iterable[Order], status: str) -> List[Order]:
    """Exact status match; ``ALL`` keeps everything. Relative order is kept."""
    if status == ORDER_FILTER_ALL:
        return list(orders)
    return [o for o in orders if o.order_status == status]


def format_status(status: Optional[str]) -> str:
    return (status or "").replace("_", " ")


# ============================================================================
# Stock
# ============================================================================

def low_stock_items(items: Iterable[InventoryItem], threshold: int = LOW_STOCK_THRESHOLD) -> List[InventoryItem]:
    return [item for item in items if item.unit < threshold]


def total_value(items: Iterable[InventoryItem]) -> float:
    """Sum of server-supplied totals, a missing total counting as 0."""
    return sum((item.total_price or 0) for item in items)


def total_units(items: Iterable[InventoryItem]) -> int:
    return sum(item.unit for item in items)


def stock_tier(unit: int) -> str:
    """Badge tier for the inventory table."""
    if unit < CRITICAL_STOCK_THRESHOLD:
        return "critical"
    if unit < HEALTHY_STOCK_THRESHOLD:
        return "warning"
    return "healthy"


def low_stock_label(unit: int) -> str:
    return "Critical" if unit < CRITICAL_STOCK_THRESHOLD else "Low"


def low_stock_email_body(items: Iterable[InventoryItem]) -> str:
    lines = "\n".join(f"- {item.product_name} ({item.unit} units left)" for item in items)
    return (
        "Dear Team,\n\n"
        "The following items are running low on stock:\n\n"
        f"{lines}\n\n"
        "Please arrange for restocking at your earliest convenience.\n\n"
        "Best regards,\n"
        "Inventory Management System"
    )


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def dashboard_stats(inventory: List[InventoryItem], orders: List[Order]) -> Dict[str, int]:
    return {
        "total_items": len(inventory),
        "total_orders": len(orders),
        "total_value": _round_half_up(total_value(inventory)),
        "low_stock": len(low_stock_items(inventory, CRITICAL_STOCK_THRESHOLD)),
    }


def order_status_counts(orders: Iterable[Order]) -> Dict[str, int]:
    counts = {status: 0 for status in ORDER_STATUSES}
    for order in orders:
        if order.order_status in counts:
            counts[order.order_status] += 1
    return counts


# ============================================================================
# Form parsing and payloads
# ============================================================================

def _text(draft: Dict, key: str) -> str:
    value = draft.get(key)
    return "" if value is None else str(value)


def _required(draft: Dict, key: str, label: str) -> str:
    value = _text(draft, key).strip()
    if not value:
        raise FormError(f"{label} is required")
    return value


def parse_price(raw, label: str = "Price") -> float:
    text = "" if raw is None else str(raw).strip()
    try:
        value = float(text)
    except ValueError:
        raise FormError(f"{label} must be a number") from None
    if not math.isfinite(value) or value < 0:
        raise FormError(f"{label} must be a non-negative number")
    return value


def parse_quantity(raw, label: str = "Quantity", minimum: int = 0) -> int:
    text = "" if raw is None else str(raw).strip()
    try:
        value = int(text)
    except ValueError:
        raise FormError(f"{label} must be a whole number") from None
    if value < minimum:
        raise FormError(f"{label} must be at least {minimum}")
    return value


def _email(draft: Dict, key: str, label: str) -> str:
    value = _required(draft, key, label)
    if not EMAIL_PATTERN.match(value):
        raise FormError(f"{label} is not a valid email address")
    return value


def empty_inventory_draft() -> Dict[str, str]:
    return {
        "product_name": "",
        "model_name": "",
        "price_per_quantity": "",
        "unit": "",
        "status": DEFAULT_ITEM_STATUS,
    }


def inventory_draft_from_item(item: InventoryItem) -> Dict[str, str]:
    return {
        "product_name": item.product_name,
        "model_name": item.model_name or "",
        "price_per_quantity": "" if item.price_per_quantity is None else str(item.price_per_quantity),
        "unit": str(item.unit),
        "status": item.status or DEFAULT_ITEM_STATUS,
    }


def build_inventory_payload(draft: Dict) -> InventoryItemPayload:
    return InventoryItemPayload(
        product_name=_required(draft, "product_name", "Product name"),
        model_name=_text(draft, "model_name").strip(),
        price_per_quantity=parse_price(draft.get("price_per_quantity"), "Price per unit"),
        unit=parse_quantity(draft.get("unit")),
        status=_text(draft, "status").strip() or DEFAULT_ITEM_STATUS,
    )


def empty_order_draft() -> Dict[str, str]:
    return {
        "product_name": "",
        "model_name": "",
        "quantity_ordered": "",
        "customer_email": "",
        "customer_name": "",
    }


def build_order_payload(draft: Dict) -> OrderPayload:
    return OrderPayload(
        product_name=_required(draft, "product_name", "Product name"),
        model_name=_text(draft, "model_name").strip(),
        quantity_ordered=parse_quantity(draft.get("quantity_ordered"), minimum=1),
        customer_email=_email(draft, "customer_email", "Customer email"),
        customer_name=_required(draft, "customer_name", "Customer name"),
    )


def empty_staff_draft() -> Dict[str, str]:
    return {
        "name": "",
        "email": "",
        "password": "",
        "phone_number": "",
        "designation": "",
        "department": "",
        "rights": ROLE_STAFF,
        "status": "ACTIVE",
    }


def staff_draft_from_member(member: StaffMember) -> Dict[str, str]:
    return {
        "name": member.name,
        "email": member.email,
        "password": "",
        "phone_number": member.phone_number or "",
        "designation": member.designation or "",
        "department": member.department or "",
        "rights": member.rights or ROLE_STAFF,
        "status": member.status or "ACTIVE",
    }


def _present(draft: Dict, key: str, label: str) -> str:
    """Non-blank text, returned exactly as typed."""
    value = _text(draft, key)
    if not value.strip():
        raise FormError(f"{label} is required")
    return value


def build_staff_payload(draft: Dict, editing: bool = False) -> StaffPayload:
    """Build the add/update body.

    On edit a blank password is left out entirely, and name and email are sent
    as stored so an unchanged record resubmits unchanged.
    """
    password = _text(draft, "password")
    if not password:
        if not editing:
            raise FormError("Password is required")
        password = None
    if editing:
        name = _present(draft, "name", "Full name")
        email = _present(draft, "email", "Email")
    else:
        name = _required(draft, "name", "Full name")
        email = _email(draft, "email", "Email")
    return StaffPayload(
        name=name,
        email=email,
        password=password,
        phone_number=_text(draft, "phone_number"),
        designation=_text(draft, "designation"),
        department=_text(draft, "department"),
        rights=_text(draft, "rights") or ROLE_STAFF,
        status=_text(draft, "status") or "ACTIVE",
    )


def empty_registration_draft() -> Dict[str, str]:
    draft = empty_staff_draft()
    del draft["status"]
    return draft


def build_registration(draft: Dict) -> RegistrationForm:
    return RegistrationForm(
        name=_required(draft, "name", "Full name"),
        email=_email(draft, "email", "Email"),
        password=_required(draft, "password", "Password"),
        phone_number=_text(draft, "phone_number"),
        designation=_text(draft, "designation"),
        department=_text(draft, "department"),
        rights=_text(draft, "rights") or ROLE_STAFF,
    )


def empty_email_draft() -> Dict[str, str]:
    return {"recipient": "", "subject": "", "message": ""}


def build_email_request(draft: Dict) -> EmailRequest:
    _email(draft, "recipient", "Recipient email")
    _required(draft, "subject", "Subject")
    _required(draft, "message", "Message")
    # Sent exactly as typed
    return EmailRequest(
        to=_text(draft, "recipient"),
        subject=_text(draft, "subject"),
        message=_text(draft, "message"),
    )


# ============================================================================
# Sent email log
# ============================================================================

class EmailLog:
    """Append-only log of send attempts, newest first, kept in client storage."""

    def __init__(self, storage: KeyValueStorage, key: str = STORAGE_SENT_EMAILS_KEY):
        self.storage = storage
        self.key = key

    def records(self) -> List[SentEmailRecord]:
        raw = self.storage.get_item(self.key)
        if not raw:
            return []
        try:
            data = json.loads(raw)
            return [SentEmailRecord.model_validate(r) for r in data]
        except (ValueError, TypeError, ValidationError):
            logger.warning("Sent email log is unreadable; starting a new one")
            return []

    def append(self, recipient: str, subject: str, message: str, status: str,
               now: Optional[datetime] = None) -> SentEmailRecord:
        sent_at = (now or datetime.now(timezone.utc)).isoformat()
        record = SentEmailRecord(
            id=uuid.uuid4().hex,
            recipient=recipient,
            subject=subject,
            message=message,
            sent_at=sent_at,
            status=status,
        )
        updated = [record] + self.records()
        self.storage.set_item(self.key, json.dumps([r.to_wire() for r in updated]))
        return record
