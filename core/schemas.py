"""Typed models for the back-end REST payloads.

Field aliases follow the wire names used by the inventory service (camelCase);
Python code uses the snake_case attribute names.
"""
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class ApiModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_wire(self, **kwargs) -> Dict[str, Any]:
        """Dump using wire field names."""
        return self.model_dump(by_alias=True, **kwargs)


class Identity(ApiModel):
    """The authenticated user as returned by the login endpoint."""
    email: str = Field("", description="Login email")
    name: str = Field("", description="Display name")
    role: str = Field(..., description="ADMIN or STAFF")
    token: str = Field(..., min_length=1, description="Bearer token")


class LoginRequest(ApiModel):
    username: str
    password: str


class InventoryItem(ApiModel):
    product_id: Optional[int] = Field(None, alias="productId")
    product_name: str = Field("", alias="productName")
    model_name: Optional[str] = Field(None, alias="modelname")
    price_per_quantity: Optional[float] = Field(None, alias="pricePerQuantity")
    unit: int = Field(0, description="Units in stock")
    total_price: Optional[float] = Field(None, alias="totalPrice")
    status: Optional[str] = None


class InventoryItemPayload(ApiModel):
    product_name: str = Field(..., alias="productName")
    model_name: str = Field("", alias="modelname")
    price_per_quantity: float = Field(..., ge=0, alias="pricePerQuantity")
    unit: int = Field(..., ge=0)
    status: str = "Available"


class Order(ApiModel):
    order_id: Optional[int] = Field(None, alias="orderId")
    product_name: str = Field("", alias="productName")
    model_name: Optional[str] = Field(None, alias="modelName")
    quantity_ordered: int = Field(0, alias="quantityOrdered")
    customer_name: Optional[str] = Field(None, alias="customerName")
    customer_email: Optional[str] = Field(None, alias="customerEmail")
    total_amount: Optional[float] = Field(None, alias="totalAmount")
    order_status: Optional[str] = Field(None, alias="orderStatus")
    order_date: Optional[str] = Field(None, alias="orderDate")


class OrderPayload(ApiModel):
    product_name: str = Field(..., alias="productName")
    model_name: str = Field("", alias="modelName")
    quantity_ordered: int = Field(..., ge=1, alias="quantityOrdered")
    customer_email: str = Field(..., alias="customerEmail")
    customer_name: str = Field(..., alias="customerName")


class OrderResult(ApiModel):
    """Place-order response; ``success`` False is a business rejection."""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    success: bool = False
    message: Optional[str] = None


class StaffMember(ApiModel):
    id: Optional[int] = None
    name: str = ""
    email: str = ""
    phone_number: Optional[str] = Field(None, alias="phoneNumber")
    designation: Optional[str] = None
    department: Optional[str] = None
    rights: Optional[str] = None
    status: Optional[str] = None


class StaffPayload(ApiModel):
    name: str
    email: str
    # Write-only. None means "keep the current password" and is left off the wire.
    password: Optional[str] = None
    phone_number: str = Field("", alias="phoneNumber")
    designation: str = ""
    department: str = ""
    rights: str = "STAFF"
    status: str = "ACTIVE"

    def to_wire(self, **kwargs) -> Dict[str, Any]:
        data = super().to_wire(**kwargs)
        if self.password is None:
            data.pop("password", None)
        return data


class RegistrationForm(ApiModel):
    name: str
    email: str
    password: str
    phone_number: str = Field("", alias="phoneNumber")
    designation: str = ""
    department: str = ""
    rights: str = "STAFF"


class EmailRequest(ApiModel):
    to: str
    subject: str
    message: str


class SentEmailRecord(ApiModel):
    """Locally persisted audit record of one send attempt."""
    id: str
    recipient: str
    subject: str
    message: str
    sent_at: str = Field(..., alias="sentAt")
    status: Literal["success", "failed"]
