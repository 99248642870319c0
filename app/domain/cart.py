"""
Cart Domain Models

A cart is a list of Shopify variant lines. Checkout is handed off to
Shopify: the cart is turned into a Storefront API cart whose
checkoutUrl the client opens.
"""
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field


MAX_LINE_QUANTITY = 999
MAX_CART_LINES = 50


class Money(BaseModel):
    amount: Decimal = Field(..., ge=0)
    currency_code: str = "USD"


class SelectedOption(BaseModel):
    name: str
    value: str


class CartLine(BaseModel):
    """One variant in the bag"""

    variant_id: str = Field(..., min_length=1, description="Shopify ProductVariant GID")
    variant_title: str = ""
    product_handle: str = ""
    product_title: str = ""
    image: Optional[str] = None
    price: Money
    quantity: int = Field(1, ge=1, le=MAX_LINE_QUANTITY)
    selected_options: List[SelectedOption] = Field(default_factory=list)

    @property
    def line_total(self) -> Decimal:
        return self.price.amount * self.quantity


class Cart(BaseModel):
    items: List[CartLine] = Field(default_factory=list)
    checkout_url: Optional[str] = None

    @property
    def total_items(self) -> int:
        return sum(line.quantity for line in self.items)

    @property
    def total_price(self) -> Decimal:
        return sum((line.line_total for line in self.items), Decimal("0"))

    @property
    def currency_code(self) -> str:
        return self.items[0].price.currency_code if self.items else "USD"

    def find(self, variant_id: str) -> Optional[CartLine]:
        for line in self.items:
            if line.variant_id == variant_id:
                return line
        return None

    def to_dict(self) -> dict:
        """Serialize with computed totals for API responses"""
        data = self.model_dump(mode="json")
        data["total_items"] = self.total_items
        data["total_price"] = {
            "amount": f"{self.total_price:.2f}",
            "currency_code": self.currency_code,
        }
        return data


class QuantityUpdate(BaseModel):
    quantity: int = Field(..., le=MAX_LINE_QUANTITY)


class CheckoutResponse(BaseModel):
    checkout_url: str
