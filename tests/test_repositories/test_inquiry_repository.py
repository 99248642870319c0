"""
Unit tests for the contact, newsletter and role repositories
"""
from unittest.mock import MagicMock

import pytest
from postgrest.exceptions import APIError

from app.core.exceptions import DuplicateEntryError, PersistenceError
from app.repositories.inquiry_repository import ContactRepository, NewsletterRepository
from app.repositories.role_repository import RoleRepository


def api_error(code):
    return APIError({"message": "error", "code": code, "hint": None, "details": None})


class TestContactRepository:

    def test_create(self):
        client = MagicMock()
        row = {"name": "Avery", "email": "avery@example.com", "subject": None, "message": "Hi"}

        ContactRepository(client).create(row)

        client.table.assert_called_once_with("contact_inquiries")
        client.table.return_value.insert.assert_called_once_with(row)

    def test_create_failure_message(self):
        client = MagicMock()
        client.table.return_value.insert.return_value.execute.side_effect = api_error("XX000")

        with pytest.raises(PersistenceError) as exc_info:
            ContactRepository(client).create({})

        assert exc_info.value.message == "Failed to send message. Please try again."


class TestNewsletterRepository:

    def test_subscribe(self):
        client = MagicMock()

        NewsletterRepository(client).subscribe("fan@example.com")

        client.table.assert_called_once_with("newsletter_subscribers")
        client.table.return_value.insert.assert_called_once_with(
            {"email": "fan@example.com", "source": "website"}
        )

    def test_duplicate(self):
        client = MagicMock()
        client.table.return_value.insert.return_value.execute.side_effect = api_error("23505")

        with pytest.raises(DuplicateEntryError) as exc_info:
            NewsletterRepository(client).subscribe("fan@example.com")

        assert exc_info.value.to_dict() == {"error": "Already subscribed", "code": "DUPLICATE"}

    def test_other_failure(self):
        client = MagicMock()
        client.table.return_value.insert.return_value.execute.side_effect = api_error("42501")

        with pytest.raises(PersistenceError) as exc_info:
            NewsletterRepository(client).subscribe("fan@example.com")

        assert exc_info.value.message == "Failed to subscribe. Please try again."


class TestRoleRepository:

    @pytest.mark.parametrize("rows, expected", [([{"role": "admin"}], True), ([], False)])
    def test_has_role(self, rows, expected):
        client = MagicMock()
        chain = client.table.return_value.select.return_value.eq.return_value.eq.return_value.limit.return_value
        chain.execute.return_value.data = rows

        assert RoleRepository(client).has_role("user-uuid", "admin") is expected
