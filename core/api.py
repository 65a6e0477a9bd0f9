"""REST client for the inventory back end.

One method per endpoint. Every call is a single attempt: no retries and no
backoff. Non-2xx responses raise :class:`ApiError` with an operation-named
message; registration is the one call that reports the server's body text.
"""
from __future__ import annotations

import logging
from typing import Any, List, Optional

import requests
from pydantic import TypeAdapter, ValidationError

from core.schemas import (
    EmailRequest,
    Identity,
    InventoryItem,
    InventoryItemPayload,
    LoginRequest,
    Order,
    OrderPayload,
    OrderResult,
    RegistrationForm,
    StaffMember,
    StaffPayload,
)

logger = logging.getLogger(__name__)

_inventory_list = TypeAdapter(List[InventoryItem])
_order_list = TypeAdapter(List[Order])
_staff_list = TypeAdapter(List[StaffMember])


class ApiError(Exception):
    """A failed call to the back end."""

    def __init__(self, operation: str, status_code: Optional[int] = None, detail: str = ""):
        self.operation = operation
        self.status_code = status_code
        self.detail = detail
        super().__init__(detail or operation)


class ResponseFormatError(ApiError):
    """A 2xx response whose body does not match the expected shape."""


class ApiClient:
    """Typed wrappers around the back-end endpoints."""

    def __init__(self, base_url: str, http: Optional[requests.Session] = None, timeout=None):
        self.base_url = base_url.rstrip("/")
        self.http = http or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------ core

    def _send(
        self,
        operation: str,
        method: str,
        path: str,
        token: Optional[str] = None,
        body: Any = None,
    ) -> requests.Response:
        headers = {}
        if token is not None:
            headers["Authorization"] = f"Bearer {token}"
        if body is not None:
            headers["Content-Type"] = "application/json"
        logger.debug("%s %s", method, path)
        try:
            return self.http.request(
                method,
                f"{self.base_url}{path}",
                headers=headers,
                json=body,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise ApiError(operation) from e

    def _check(self, operation: str, response: requests.Response) -> None:
        if not response.ok:
            logger.warning("%s returned HTTP %s", operation, response.status_code)
            raise ApiError(operation, response.status_code)

    @staticmethod
    def _json(operation: str, response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise ResponseFormatError(operation, response.status_code, "Malformed server response") from e

    @staticmethod
    def _validate(operation: str, adapter_or_model, data: Any):
        try:
            if isinstance(adapter_or_model, TypeAdapter):
                return adapter_or_model.validate_python(data)
            return adapter_or_model.model_validate(data)
        except ValidationError as e:
            logger.warning("%s: unexpected response shape: %s", operation, e)
            raise ResponseFormatError(operation, None, "Malformed server response") from e

    def _call_json(self, operation, method, path, token=None, body=None) -> Any:
        response = self._send(operation, method, path, token, body)
        self._check(operation, response)
        return self._json(operation, response)

    def _call_text(self, operation, method, path, token=None) -> str:
        response = self._send(operation, method, path, token)
        self._check(operation, response)
        return response.text

    # ------------------------------------------------------------------ auth

    def login(self, username: str, password: str) -> Identity:
        op = "Login failed"
        body = LoginRequest(username=username, password=password).to_wire()
        data = self._call_json(op, "POST", "/api/auth/login", body=body)
        return self._validate(op, Identity, data)

    def register(self, form: RegistrationForm) -> Any:
        op = "Registration failed"
        response = self._send(op, "POST", "/api/auth/register", body=form.to_wire())
        if not response.ok:
            detail = response.text or ""
            logger.warning("%s: HTTP %s", op, response.status_code)
            raise ApiError(op, response.status_code, detail)
        return self._json(op, response)

    # ------------------------------------------------------------- inventory

    def get_inventory(self, token: str) -> List[InventoryItem]:
        op = "Failed to fetch inventory"
        data = self._call_json(op, "GET", "/api/inventory/getAllItem", token)
        return self._validate(op, _inventory_list, data)

    def add_inventory_item(self, token: str, item: InventoryItemPayload) -> Any:
        return self._call_json("Failed to add item", "POST", "/api/inventory/addItem", token, item.to_wire())

    def update_inventory_item(self, token: str, item_id: int, item: InventoryItemPayload) -> Any:
        return self._call_json(
            "Failed to update item", "PUT", f"/api/inventory/updateItem/{item_id}", token, item.to_wire()
        )

    def delete_inventory_item(self, token: str, item_id: int) -> str:
        return self._call_text("Failed to delete item", "DELETE", f"/api/inventory/deleteItem/{item_id}", token)

    def export_inventory_csv(self, token: str) -> bytes:
        op = "Failed to export CSV"
        response = self._send(op, "GET", "/api/inventory/export/csv", token)
        self._check(op, response)
        return response.content

    # ---------------------------------------------------------------- orders

    def get_orders(self, token: str) -> List[Order]:
        op = "Failed to fetch orders"
        data = self._call_json(op, "GET", "/api/orders/all", token)
        return self._validate(op, _order_list, data)

    def place_order(self, token: str, order: OrderPayload) -> OrderResult:
        op = "Failed to place order"
        data = self._call_json(op, "POST", "/api/orders/place", token, order.to_wire())
        return self._validate(op, OrderResult, data)

    # ----------------------------------------------------------------- staff

    def get_staff(self, token: str) -> List[StaffMember]:
        op = "Failed to fetch staff"
        data = self._call_json(op, "GET", "/api/staff/getAllStaff", token)
        return self._validate(op, _staff_list, data)

    def add_staff(self, token: str, staff: StaffPayload) -> Any:
        return self._call_json("Failed to add staff", "POST", "/api/staff/addStaff", token, staff.to_wire())

    def update_staff(self, token: str, staff_id: int, staff: StaffPayload) -> Any:
        return self._call_json(
            "Failed to update staff", "PUT", f"/api/staff/updateStaff/{staff_id}", token, staff.to_wire()
        )

    def delete_staff(self, token: str, staff_id: int) -> str:
        return self._call_text("Failed to delete staff", "DELETE", f"/api/staff/deleteStaff/{staff_id}", token)

    # ----------------------------------------------------------------- admin

    def send_email(self, token: str, email: EmailRequest) -> Any:
        return self._call_json("Failed to send email", "POST", "/api/admin/send-email", token, email.to_wire())
