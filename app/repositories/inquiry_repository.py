"""
Contact inquiry and newsletter subscriber repositories
"""
import logging

from postgrest.exceptions import APIError

from app.core.exceptions import DuplicateEntryError, PersistenceError
from app.repositories.base import SupabaseRepository

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"


class ContactRepository(SupabaseRepository):
    TABLE = "contact_inquiries"

    def create(self, row: dict) -> None:
        try:
            self.client.table(self.TABLE).insert(row).execute()
        except APIError as e:
            logger.error(f"Error inserting contact inquiry: {e.code} {e.message}")
            raise PersistenceError("Failed to send message. Please try again.") from e


class NewsletterRepository(SupabaseRepository):
    TABLE = "newsletter_subscribers"

    def subscribe(self, email: str, source: str = "website") -> None:
        """
        Insert a subscriber

        Raises:
            DuplicateEntryError: the (email, source) pair already exists
        """
        try:
            self.client.table(self.TABLE).insert({"email": email, "source": source}).execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                raise DuplicateEntryError("Already subscribed") from e
            logger.error(f"Error inserting subscriber: {e.code} {e.message}")
            raise PersistenceError("Failed to subscribe. Please try again.") from e
