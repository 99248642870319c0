"""
Shopify Storefront GraphQL Connector
Reads the public catalog and creates carts for checkout handoff
"""
import logging
from typing import Dict, List, Optional

import httpx

from app.core.config import settings
from app.core.exceptions import ConfigurationError, UpstreamServiceError
from app.domain.cart import CartLine
from app.domain.product import ProductSummary

logger = logging.getLogger(__name__)

PRODUCTS_QUERY = """
query GetProducts($first: Int!, $query: String) {
  products(first: $first, query: $query) {
    edges {
      node {
        id
        title
        description
        handle
        productType
        availableForSale
        priceRange {
          minVariantPrice {
            amount
            currencyCode
          }
        }
        images(first: 1) {
          edges {
            node {
              url
            }
          }
        }
      }
    }
  }
}
"""

CART_CREATE_MUTATION = """
mutation cartCreate($input: CartInput!) {
  cartCreate(input: $input) {
    cart {
      id
      checkoutUrl
    }
    userErrors {
      field
      message
    }
  }
}
"""


def format_price(amount: str, currency_code: str = "USD") -> str:
    """Shopify amount string to display price ("45.0", "USD" -> "$45.00")"""
    value = float(amount)
    if currency_code == "USD":
        return f"${value:,.2f}"
    return f"{currency_code} {value:,.2f}"


class ShopifyConnector:
    """
    Connector for the Shopify Storefront API

    Handles:
    - Product listing for the shop grid and collections
    - Cart creation for checkout
    """

    def __init__(self, store_domain: str = None, access_token: str = None, api_version: str = None):
        """
        Args:
            store_domain: Shop domain (e.g., 'aspire-manifest.myshopify.com')
            access_token: Storefront API access token (public)
            api_version: Storefront API version
        """
        self.store_domain = store_domain or settings.SHOPIFY_STORE_DOMAIN
        self.access_token = access_token or settings.SHOPIFY_STOREFRONT_TOKEN
        self.api_version = api_version or settings.SHOPIFY_API_VERSION

        if not self.store_domain or not self.access_token:
            raise ConfigurationError(
                "Shopify credentials not configured. Set SHOPIFY_STORE_DOMAIN and SHOPIFY_STOREFRONT_TOKEN"
            )

        self.api_url = f"https://{self.store_domain}/api/{self.api_version}/graphql.json"
        self.headers = {
            'Content-Type': 'application/json',
            'X-Shopify-Storefront-Access-Token': self.access_token
        }

    async def _execute_query(self, query: str, variables: Dict = None) -> Dict:
        """Execute a GraphQL query"""
        async with httpx.AsyncClient() as client:
            payload = {'query': query}
            if variables:
                payload['variables'] = variables

            try:
                response = await client.post(
                    self.api_url,
                    json=payload,
                    headers=self.headers,
                    timeout=30.0
                )
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                logger.error(f"Shopify HTTP {e.response.status_code}: {e.response.text[:200]}")
                raise UpstreamServiceError("Shopify request failed") from e
            except httpx.HTTPError as e:
                logger.error(f"Shopify request error: {e}")
                raise UpstreamServiceError("Shopify request failed") from e

            data = response.json()

            if 'errors' in data:
                logger.error(f"Shopify GraphQL errors: {data['errors']}")
                raise UpstreamServiceError("Shopify request failed")

            return data.get('data', {})

    async def get_products(self, limit: int = 50, query: Optional[str] = None) -> List[ProductSummary]:
        """
        Get products from the storefront

        Args:
            limit: Number of products to fetch (max 250)
            query: Optional Shopify search query

        Returns:
            List of ProductSummary
        """
        variables = {'first': limit}
        if query:
            variables['query'] = query

        data = await self._execute_query(PRODUCTS_QUERY, variables)
        edges = data.get('products', {}).get('edges', [])
        return [self.normalize_product(edge.get('node', {})) for edge in edges]

    async def create_checkout(self, lines: List[CartLine]) -> str:
        """
        Create a Storefront cart from our lines

        Returns:
            The cart's checkoutUrl
        """
        variables = {
            'input': {
                'lines': [
                    {'merchandiseId': line.variant_id, 'quantity': line.quantity}
                    for line in lines
                ]
            }
        }

        data = await self._execute_query(CART_CREATE_MUTATION, variables)
        result = data.get('cartCreate') or {}

        user_errors = result.get('userErrors') or []
        if user_errors:
            logger.error(f"Shopify cartCreate errors: {user_errors}")
            raise UpstreamServiceError(f"Checkout failed: {user_errors[0].get('message')}")

        checkout_url = (result.get('cart') or {}).get('checkoutUrl')
        if not checkout_url:
            raise UpstreamServiceError("Shopify returned no checkout URL")

        return checkout_url

    def normalize_product(self, node: Dict) -> ProductSummary:
        """
        Normalize a Storefront product node to ProductSummary

        Args:
            node: Raw product node from Shopify
        """
        min_price = node.get('priceRange', {}).get('minVariantPrice', {})
        image_edges = node.get('images', {}).get('edges', [])

        price = ""
        if min_price.get('amount') is not None:
            price = format_price(min_price['amount'], min_price.get('currencyCode', 'USD'))

        return ProductSummary(
            handle=node.get('handle', ''),
            title=node.get('title', ''),
            description=node.get('description') or '',
            price=price,
            image=image_edges[0]['node'].get('url') if image_edges else None,
            product_type=node.get('productType') or None,
            available=node.get('availableForSale', True)
        )


def get_shopify_connector() -> ShopifyConnector:
    return ShopifyConnector()
