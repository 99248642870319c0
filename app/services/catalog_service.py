"""
Catalog Service

Editorial collections and the title-based rules that decide which Shopify
products belong to each one.
"""
from typing import Callable, Dict, List, Optional

from app.domain.catalog import Collection
from app.domain.product import ProductSummary

RELATED_PRODUCTS_LIMIT = 4

COLLECTIONS: Dict[str, Collection] = {
    "founders-series": Collection(
        slug="founders-series",
        name="Founders Series",
        tagline="Premium essentials for the visionaries",
        story=[
            "The Founders Series embodies the spirit of those who dare to dream and build. "
            "Born from the streets of Chicago, this collection represents the dedication and "
            "vision that built A | M from the ground up.",
            "Crafted for the pioneers who lay the groundwork for what's next, each piece combines "
            "premium materials with timeless design.",
            "Every thread tells a story of ambition, every stitch a testament to the hustle. "
            "The Founders Series is for those who understand that greatness is built, not given.",
        ],
        hero_image="assets/founders-series-collection.png",
        filter_query="Founders",
        accent_color="purple",
    ),
    "hope-v1": Collection(
        slug="hope-v1",
        name="Hope V1",
        tagline="Bold statements, timeless style",
        story=[
            "Hope V1 is a declaration. Bold typography meets premium construction in a collection "
            "that speaks to resilience and optimism. Your future is what you make it.",
            "Inspired by Chicago's relentless spirit, Hope V1 carries a message of perseverance "
            "through every design element.",
            "This collection is for those who wear their aspirations on their sleeve. Hope V1 "
            "isn't just about looking good; it's about feeling unstoppable.",
        ],
        hero_image="assets/hope-v1-collection.png",
        filter_query="Hope",
        accent_color="magenta",
    ),
    "am-essentials": Collection(
        slug="am-essentials",
        name="A | M Essentials",
        tagline="Everyday luxury streetwear",
        story=[
            "The foundation of your wardrobe. A | M Essentials delivers everyday luxury with clean "
            "lines, premium fabrics, and the understated confidence that defines Chicago style.",
            "We believe essentials should never be basic. Each piece in this collection is designed "
            "to elevate your daily rotation.",
            "From dawn to dusk, A | M Essentials moves with you. This is streetwear refined.",
        ],
        hero_image="assets/am-essentials-collection.png",
        filter_query="A | M",
        accent_color="gold",
    ),
}

# Title membership rules keyed by filter query
TITLE_FILTERS: Dict[str, Callable[[str], bool]] = {
    "Founders": lambda title: "Founders" in title,
    "Hope": lambda title: "Hope" in title,
    "A | M": lambda title: title.startswith("A | M") and "Founders" not in title,
}


def get_collection_by_slug(slug: str) -> Optional[Collection]:
    return COLLECTIONS.get(slug)


def get_all_collection_slugs() -> List[str]:
    return list(COLLECTIONS.keys())


def filter_by_collection(products: List[ProductSummary], filter_query: Optional[str]) -> List[ProductSummary]:
    """Products whose title matches the collection rule; unknown or empty query returns all"""
    rule = TITLE_FILTERS.get(filter_query) if filter_query else None
    if rule is None:
        return list(products)
    return [product for product in products if rule(product.title)]


def related_products(products: List[ProductSummary], current_handle: str,
                     limit: int = RELATED_PRODUCTS_LIMIT) -> List[ProductSummary]:
    """"You May Also Like": everything except the current product, in catalog order"""
    return [product for product in products if product.handle != current_handle][:limit]


def resolve_filter_query(value: str) -> str:
    """Accept a collection slug ("hope-v1") or a filter query ("Hope")"""
    collection = get_collection_by_slug(value)
    return collection.filter_query if collection else value
