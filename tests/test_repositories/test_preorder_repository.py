"""
Unit tests for PreOrderRepository

These tests validate repository logic without a Supabase connection.
"""
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from postgrest.exceptions import APIError

from app.core.exceptions import NotFoundError, PersistenceError
from app.domain.preorder import PreOrder, PreOrderStatus
from app.repositories.preorder_repository import PreOrderRepository


def api_error(code="XX000", message="boom"):
    return APIError({"message": message, "code": code, "hint": None, "details": None})


class TestPreOrderRepository:
    """Test PreOrderRepository methods"""

    def test_find_all_returns_domain_models_newest_first(self, preorder_row):
        # Arrange: Mock the Supabase query chain
        client = MagicMock()
        query = client.table.return_value.select.return_value.order.return_value
        query.execute.return_value.data = [preorder_row]

        # Act
        preorders = PreOrderRepository(client).find_all()

        # Assert
        assert len(preorders) == 1
        preorder = preorders[0]
        assert isinstance(preorder, PreOrder)
        assert preorder.status == PreOrderStatus.PENDING
        assert preorder.price_at_order == Decimal("85.0")
        assert preorder.line_value == Decimal("170.0")

        client.table.assert_called_once_with("preorders")
        client.table.return_value.select.return_value.order.assert_called_once_with("created_at", desc=True)

    def test_find_all_empty(self):
        client = MagicMock()
        client.table.return_value.select.return_value.order.return_value.execute.return_value.data = []

        assert PreOrderRepository(client).find_all() == []

    def test_create_returns_stored_row(self, preorder_row):
        client = MagicMock()
        client.table.return_value.insert.return_value.execute.return_value.data = [preorder_row]

        preorder = PreOrderRepository(client).create({"email": "jordan@example.com"})

        assert preorder.id == preorder_row["id"]
        client.table.return_value.insert.assert_called_once_with({"email": "jordan@example.com"})

    def test_create_failure(self):
        client = MagicMock()
        client.table.return_value.insert.return_value.execute.side_effect = api_error()

        with pytest.raises(PersistenceError):
            PreOrderRepository(client).create({"email": "jordan@example.com"})

    def test_update(self, preorder_row):
        client = MagicMock()
        updated = dict(preorder_row, status="contacted", notes="Left voicemail")
        query = client.table.return_value.update.return_value.eq.return_value
        query.execute.return_value.data = [updated]

        preorder = PreOrderRepository(client).update(preorder_row["id"], {"status": "contacted"})

        assert preorder.status == PreOrderStatus.CONTACTED
        assert preorder.notes == "Left voicemail"
        client.table.return_value.update.assert_called_once_with({"status": "contacted"})
        client.table.return_value.update.return_value.eq.assert_called_once_with("id", preorder_row["id"])

    def test_update_unknown_id(self):
        client = MagicMock()
        client.table.return_value.update.return_value.eq.return_value.execute.return_value.data = []

        with pytest.raises(NotFoundError):
            PreOrderRepository(client).update("missing", {"status": "contacted"})

    def test_update_malformed_id_is_not_found(self):
        client = MagicMock()
        client.table.return_value.update.return_value.eq.return_value.execute.side_effect = api_error(
            "22P02", 'invalid input syntax for type uuid: "not-a-uuid"'
        )

        with pytest.raises(NotFoundError):
            PreOrderRepository(client).update("not-a-uuid", {"status": "contacted"})
