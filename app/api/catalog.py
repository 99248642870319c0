"""
Catalog API
Editorial collections and product listings from the Shopify Storefront API

Endpoints:
- GET /api/v1/collections                  - All collections
- GET /api/v1/collections/{slug}           - One collection
- GET /api/v1/collections/{slug}/products  - Products in a collection
- GET /api/v1/products                     - Shop grid, optional ?collection= filter
- GET /api/v1/products/{handle}/related    - "You May Also Like"
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.connectors.shopify_connector import ShopifyConnector, get_shopify_connector
from app.core.exceptions import NotFoundError
from app.services.catalog_service import (
    RELATED_PRODUCTS_LIMIT,
    COLLECTIONS,
    filter_by_collection,
    get_collection_by_slug,
    related_products,
    resolve_filter_query,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["Catalog"])

PRODUCT_PAGE_SIZE = 50


def _collection_or_404(slug: str):
    collection = get_collection_by_slug(slug)
    if collection is None:
        raise NotFoundError(f"Collection '{slug}' not found")
    return collection


@router.get("/collections")
async def list_collections():
    return {"collections": [c.model_dump() for c in COLLECTIONS.values()]}


@router.get("/collections/{slug}")
async def get_collection(slug: str):
    return _collection_or_404(slug).model_dump()


@router.get("/collections/{slug}/products")
async def get_collection_products(
    slug: str,
    connector: ShopifyConnector = Depends(get_shopify_connector)
):
    """Fetch the catalog and keep the products whose title matches the collection"""
    collection = _collection_or_404(slug)
    products = await connector.get_products(limit=PRODUCT_PAGE_SIZE)
    matching = filter_by_collection(products, collection.filter_query)

    return {
        "collection": collection.slug,
        "count": len(matching),
        "products": [p.model_dump() for p in matching]
    }


@router.get("/products")
async def list_products(
    collection: Optional[str] = Query(None, description="Collection slug or filter query (e.g. Founders)"),
    limit: int = Query(PRODUCT_PAGE_SIZE, ge=1, le=250),
    connector: ShopifyConnector = Depends(get_shopify_connector)
):
    """Shop grid; an unknown collection value returns every product"""
    products = await connector.get_products(limit=limit)

    if collection:
        products = filter_by_collection(products, resolve_filter_query(collection))

    return {"count": len(products), "products": [p.model_dump() for p in products]}


@router.get("/products/{handle}/related")
async def get_related_products(
    handle: str,
    limit: int = Query(RELATED_PRODUCTS_LIMIT, ge=1, le=20),
    connector: ShopifyConnector = Depends(get_shopify_connector)
):
    products = await connector.get_products(limit=PRODUCT_PAGE_SIZE)
    related = related_products(products, handle, limit=limit)
    return {"products": [p.model_dump() for p in related]}
