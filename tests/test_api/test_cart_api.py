"""
API tests for the session cart and checkout handoff
"""
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.connectors.shopify_connector import get_shopify_connector
from app.main import app

URL = "/api/v1/cart"
VARIANT = "gid://shopify/ProductVariant/101"
CHECKOUT_URL = "https://aspire-manifest.myshopify.com/cart/c/abc123"


@pytest.fixture
def connector():
    connector = MagicMock()
    connector.create_checkout = AsyncMock(return_value=CHECKOUT_URL)
    app.dependency_overrides[get_shopify_connector] = lambda: connector
    return connector


class TestSessionHeader:

    def test_missing(self, client):
        response = client.get(URL)

        assert response.status_code == 400
        assert response.json() == {"error": "Missing X-Session-Id header"}

    def test_malformed(self, client):
        response = client.get(URL, headers={"X-Session-Id": "short"})

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid X-Session-Id header"}


class TestCart:

    def test_empty_cart(self, client, session_headers):
        data = client.get(URL, headers=session_headers).json()

        assert data["items"] == []
        assert data["total_items"] == 0
        assert data["total_price"] == {"amount": "0.00", "currency_code": "USD"}

    def test_add_and_merge(self, client, session_headers, cart_line_data):
        client.post(f"{URL}/items", json=cart_line_data, headers=session_headers)
        data = client.post(f"{URL}/items", json=dict(cart_line_data, quantity=2), headers=session_headers).json()

        assert len(data["items"]) == 1
        assert data["total_items"] == 3
        assert data["total_price"]["amount"] == "255.00"

    def test_update_quantity_by_gid(self, client, session_headers, cart_line_data):
        client.post(f"{URL}/items", json=cart_line_data, headers=session_headers)

        response = client.patch(f"{URL}/items/{VARIANT}", json={"quantity": 4}, headers=session_headers)

        assert response.status_code == 200
        assert response.json()["items"][0]["quantity"] == 4

    def test_update_to_zero_removes(self, client, session_headers, cart_line_data):
        client.post(f"{URL}/items", json=cart_line_data, headers=session_headers)

        data = client.patch(f"{URL}/items/{VARIANT}", json={"quantity": 0}, headers=session_headers).json()

        assert data["items"] == []

    def test_update_missing_line(self, client, session_headers):
        response = client.patch(f"{URL}/items/{VARIANT}", json={"quantity": 2}, headers=session_headers)
        assert response.status_code == 404

    def test_remove_and_clear(self, client, session_headers, cart_line_data):
        client.post(f"{URL}/items", json=cart_line_data, headers=session_headers)

        assert client.delete(f"{URL}/items/{VARIANT}", headers=session_headers).json()["items"] == []

        client.post(f"{URL}/items", json=cart_line_data, headers=session_headers)
        assert client.delete(URL, headers=session_headers).json() == {"success": True}
        assert client.get(URL, headers=session_headers).json()["items"] == []

    def test_invalid_line(self, client, session_headers, cart_line_data):
        response = client.post(f"{URL}/items", json=dict(cart_line_data, quantity=0), headers=session_headers)
        assert response.status_code == 400


class TestCheckout:

    def test_empty_cart(self, client, session_headers, connector):
        response = client.post(f"{URL}/checkout", headers=session_headers)

        assert response.status_code == 400
        assert response.json() == {"error": "Cart is empty", "code": "EMPTY_CART"}

    def test_checkout_url_is_reused_until_cart_changes(self, client, session_headers, connector, cart_line_data):
        client.post(f"{URL}/items", json=cart_line_data, headers=session_headers)

        first = client.post(f"{URL}/checkout", headers=session_headers).json()
        client.post(f"{URL}/checkout", headers=session_headers)

        assert first == {"checkout_url": CHECKOUT_URL}
        assert connector.create_checkout.await_count == 1

        client.patch(f"{URL}/items/{VARIANT}", json={"quantity": 2}, headers=session_headers)
        assert client.get(URL, headers=session_headers).json()["checkout_url"] is None

        client.post(f"{URL}/checkout", headers=session_headers)
        assert connector.create_checkout.await_count == 2
