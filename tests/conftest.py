"""
Pytest fixtures and configuration for the Aspire Manifest API tests

Supabase, Shopify, Resend and Anthropic are always mocked; nothing here
reaches the network.
"""
import pytest
from fastapi.testclient import TestClient

from app.core.auth import TokenUser, require_admin
from app.core.rate_limit import ALL_LIMITERS
from app.main import app
from app.stores.storage import storage


@pytest.fixture(autouse=True)
def reset_state():
    """
    Fresh rate limiters, session stores and dependency overrides per test
    """
    for limiter in ALL_LIMITERS:
        limiter.reset()
    storage.clear()
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def session_headers():
    return {"X-Session-Id": "test-session-0001"}


@pytest.fixture
def admin_user():
    """Skip JWT + user_roles checks for admin endpoints"""
    user = TokenUser(id="admin-uuid", email="staff@aspiremanifest.com")
    app.dependency_overrides[require_admin] = lambda: user
    return user


@pytest.fixture
def preorder_row():
    """
    A preorders row as Supabase returns it
    """
    return {
        "id": "6f1c2a7e-0000-4000-8000-000000000001",
        "created_at": "2025-03-01T10:15:00+00:00",
        "email": "jordan@example.com",
        "name": "Jordan",
        "phone": None,
        "product_handle": "founders-hoodie",
        "product_title": "Founders Series Hoodie",
        "variant_id": "gid://shopify/ProductVariant/101",
        "variant_title": "Black / L",
        "quantity": 2,
        "price_at_order": 85.0,
        "status": "pending",
        "notes": None,
    }


@pytest.fixture
def cart_line_data():
    return {
        "variant_id": "gid://shopify/ProductVariant/101",
        "variant_title": "Black / L",
        "product_handle": "founders-hoodie",
        "product_title": "Founders Series Hoodie",
        "price": {"amount": "85.00", "currency_code": "USD"},
        "quantity": 1,
        "selected_options": [{"name": "Size", "value": "L"}],
    }
