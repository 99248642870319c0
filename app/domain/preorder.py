"""
Pre-Order Domain Models

A pre-order is a customer's request to buy an out-of-stock variant,
recorded in the Supabase `preorders` table for later fulfillment.
"""
import re
from datetime import datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.domain.validators import blank_to_none, check_email, check_length


class PreOrderStatus(str, Enum):
    PENDING = "pending"
    CONTACTED = "contacted"
    CONVERTED = "converted"
    CANCELLED = "cancelled"


class PreOrder(BaseModel):
    """
    Pre-order row as stored in Supabase

    Fields:
        id: UUID primary key
        created_at: Submission timestamp
        email / name / phone: Customer contact details
        product_handle / product_title: Shopify product
        variant_id / variant_title: Shopify variant (size, colour)
        quantity: Units requested
        price_at_order: Unit price when submitted, None if unknown
        status: Follow-up state set from the admin dashboard
        notes: Free-form admin notes
    """

    id: str
    created_at: datetime
    email: str
    name: Optional[str] = None
    phone: Optional[str] = None
    product_handle: str
    product_title: str
    variant_id: str
    variant_title: str
    quantity: int = Field(1, ge=1)
    price_at_order: Optional[Decimal] = None
    status: PreOrderStatus = PreOrderStatus.PENDING
    notes: Optional[str] = None

    @property
    def line_value(self) -> Decimal:
        """Potential revenue of this pre-order, zero when price is unknown"""
        return (self.price_at_order or Decimal("0")) * self.quantity

    def to_dict(self) -> dict:
        data = self.model_dump(mode="json")
        if self.price_at_order is not None:
            data["price_at_order"] = float(self.price_at_order)
        return data


def parse_price(price: Optional[str]) -> Optional[Decimal]:
    """
    Parse a display price such as "$45.00" or "USD 1,200.50".

    Everything except digits and dots is dropped; returns None when
    nothing numeric is left.
    """
    if not price:
        return None

    cleaned = re.sub(r"[^0-9.]", "", price)
    # Keep only the first decimal point, "1.2.3" reads as 1.2
    if cleaned.count(".") > 1:
        head, _, tail = cleaned.partition(".")
        cleaned = f"{head}.{tail.split('.')[0]}"

    if not cleaned or cleaned == ".":
        return None

    try:
        return Decimal(cleaned)
    except InvalidOperation:
        return None


class PreOrderCreate(BaseModel):
    """Request body for a storefront pre-order submission"""

    model_config = ConfigDict(str_strip_whitespace=True)

    email: str
    name: Optional[str] = None
    phone: Optional[str] = None
    product_handle: str = Field(..., min_length=1, max_length=200)
    product_title: str = Field(..., min_length=1, max_length=200)
    variant_id: str = Field(..., min_length=1, max_length=200)
    variant_title: str = Field(..., min_length=1, max_length=200)
    quantity: int = Field(1, ge=1, le=999)
    price: Optional[str] = Field(None, max_length=50)

    @field_validator("email")
    @classmethod
    def _email(cls, value: str) -> str:
        return check_email(value)

    @field_validator("name")
    @classmethod
    def _name(cls, value: Optional[str]) -> Optional[str]:
        value = blank_to_none(value)
        if value is not None:
            check_length(value, "Name", 100)
        return value

    @field_validator("phone")
    @classmethod
    def _phone(cls, value: Optional[str]) -> Optional[str]:
        value = blank_to_none(value)
        if value is not None:
            check_length(value, "Phone", 50)
        return value

    def to_row(self) -> dict:
        """Row for the preorders table"""
        price = parse_price(self.price)
        return {
            "email": self.email,
            "name": self.name,
            "phone": self.phone,
            "product_handle": self.product_handle,
            "product_title": self.product_title,
            "variant_id": self.variant_id,
            "variant_title": self.variant_title,
            "quantity": self.quantity,
            "price_at_order": float(price) if price is not None else None,
        }


class PreOrderUpdate(BaseModel):
    """Admin PATCH body; only the fields that are sent get written"""

    id: Optional[str] = None
    status: Optional[PreOrderStatus] = None
    notes: Optional[str] = Field(None, max_length=5000)

    def changes(self) -> dict:
        data = self.model_dump(exclude_unset=True, exclude={"id"}, mode="json")
        # status is NOT NULL in the table, notes may be cleared
        if data.get("status") is None:
            data.pop("status", None)
        return data


class PreOrderConfirmation(BaseModel):
    """Fields rendered into the pre-order confirmation email"""

    model_config = ConfigDict(str_strip_whitespace=True)

    email: str
    name: Optional[str] = Field(None, max_length=100)
    product_title: str = Field(..., min_length=1, max_length=200)
    variant_title: str = Field(..., min_length=1, max_length=200)
    quantity: int = Field(..., ge=1, le=999)
    price: str = Field(..., max_length=50)

    @field_validator("email")
    @classmethod
    def _email(cls, value: str) -> str:
        return check_email(value)


class TopProduct(BaseModel):
    title: str
    count: int


class PreOrderStats(BaseModel):
    total_preorders: int
    potential_revenue: float
    pending_count: int
    top_products: List[TopProduct]
