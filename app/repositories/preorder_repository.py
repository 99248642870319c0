"""
Pre-Order Repository - Data Access Layer for the preorders table

Returns PreOrder domain models, not raw dictionaries.
"""
import logging
from typing import List, Optional

from postgrest.exceptions import APIError

from app.core.exceptions import NotFoundError, PersistenceError
from app.domain.preorder import PreOrder
from app.repositories.base import SupabaseRepository

logger = logging.getLogger(__name__)

TABLE = "preorders"
# Postgres rejects a malformed uuid literal with this code
INVALID_TEXT_REPRESENTATION = "22P02"


class PreOrderRepository(SupabaseRepository):
    """
    Repository for pre-order data access

    All Supabase queries for pre-orders are centralized here.
    """

    @staticmethod
    def _map_row_to_preorder(row: dict) -> PreOrder:
        return PreOrder(
            id=str(row['id']),
            created_at=row['created_at'],
            email=row['email'],
            name=row.get('name'),
            phone=row.get('phone'),
            product_handle=row['product_handle'],
            product_title=row['product_title'],
            variant_id=row['variant_id'],
            variant_title=row['variant_title'],
            quantity=row.get('quantity') or 1,
            price_at_order=row.get('price_at_order'),
            status=row.get('status') or 'pending',
            notes=row.get('notes'),
        )

    def find_all(self) -> List[PreOrder]:
        """All pre-orders, newest first"""
        try:
            response = (
                self.client.table(TABLE)
                .select("*")
                .order("created_at", desc=True)
                .execute()
            )
        except APIError as e:
            logger.error(f"Error fetching pre-orders: {e.message}")
            raise PersistenceError("Failed to load pre-orders") from e

        return [self._map_row_to_preorder(row) for row in response.data or []]

    def create(self, row: dict) -> Optional[PreOrder]:
        """
        Insert a pre-order

        Args:
            row: Column values from PreOrderCreate.to_row()

        Returns:
            The stored PreOrder, or None if Supabase returned no representation
        """
        try:
            response = self.client.table(TABLE).insert(row).execute()
        except APIError as e:
            logger.error(f"Error inserting pre-order: {e.message}")
            raise PersistenceError("Failed to submit pre-order") from e

        if not response.data:
            return None
        return self._map_row_to_preorder(response.data[0])

    def update(self, preorder_id: str, changes: dict) -> PreOrder:
        """
        Update status and/or notes of one pre-order

        Raises:
            NotFoundError: no row with this id
        """
        try:
            response = (
                self.client.table(TABLE)
                .update(changes)
                .eq("id", preorder_id)
                .execute()
            )
        except APIError as e:
            if e.code == INVALID_TEXT_REPRESENTATION:
                raise NotFoundError(f"Pre-order {preorder_id} not found") from e
            logger.error(f"Error updating pre-order {preorder_id}: {e.message}")
            raise PersistenceError("Failed to update pre-order") from e

        if not response.data:
            raise NotFoundError(f"Pre-order {preorder_id} not found")
        return self._map_row_to_preorder(response.data[0])
