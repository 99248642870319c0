"""
Product Domain Models

Lightweight views of Shopify products as the storefront passes them
around. The Shopify product graph stays the source of truth; these
models only shape request and response payloads.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ProductSummary(BaseModel):
    """
    Product as listed in the shop grid

    Fields:
        handle: Shopify product handle (URL slug)
        title: Product title, also used for collection matching
        description: Plain-text description
        price: Formatted display price (e.g. "$45.00")
        image: First product image URL
        product_type: Shopify productType (used as category)
        available: Whether any variant is for sale
    """

    handle: str = Field(..., min_length=1, description="Shopify product handle")
    title: str = Field(..., description="Product title")
    description: str = Field("", description="Product description")
    price: str = Field("", description="Display price")
    image: Optional[str] = Field(None, description="Primary image URL")
    product_type: Optional[str] = Field(None, description="Shopify productType")
    available: bool = Field(True, description="Whether any variant is for sale")


class StoredProduct(BaseModel):
    """Product reference kept in the wishlist and recently viewed stores"""

    handle: str = Field(..., min_length=1)
    title: str
    image: str = ""
    price: str = ""


class BrowsingHistoryItem(BaseModel):
    handle: str
    title: str
    price: str = ""


class RecommendationRequest(BaseModel):
    """Accepts both snake_case and the camelCase keys the web client sends"""

    model_config = ConfigDict(populate_by_name=True)

    browsing_history: List[BrowsingHistoryItem] = Field(default_factory=list, alias="browsingHistory")
    all_products: List[ProductSummary] = Field(default_factory=list, alias="allProducts")
    current_product_handle: Optional[str] = Field(None, alias="currentProductHandle")


class RecommendationResponse(BaseModel):
    recommendations: List[str]
