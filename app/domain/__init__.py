"""
Domain Layer - Business Entities

This layer contains Pydantic models representing storefront entities and
request payloads. These models enforce validation across the application.
"""
from app.domain.cart import Cart, CartLine, Money
from app.domain.catalog import Collection
from app.domain.inquiry import BackInStockSubmission, ContactSubmission, NewsletterSubmission
from app.domain.preorder import PreOrder, PreOrderCreate, PreOrderStatus, PreOrderUpdate
from app.domain.product import ProductSummary, StoredProduct

__all__ = [
    'Cart',
    'CartLine',
    'Money',
    'Collection',
    'BackInStockSubmission',
    'ContactSubmission',
    'NewsletterSubmission',
    'PreOrder',
    'PreOrderCreate',
    'PreOrderStatus',
    'PreOrderUpdate',
    'ProductSummary',
    'StoredProduct',
]
