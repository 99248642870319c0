"""
User role lookups against the user_roles table
"""
import logging

from postgrest.exceptions import APIError

from app.core.exceptions import PersistenceError
from app.repositories.base import SupabaseRepository

logger = logging.getLogger(__name__)


class RoleRepository(SupabaseRepository):
    TABLE = "user_roles"

    def has_role(self, user_id: str, role: str) -> bool:
        try:
            response = (
                self.client.table(self.TABLE)
                .select("role")
                .eq("user_id", user_id)
                .eq("role", role)
                .limit(1)
                .execute()
            )
        except APIError as e:
            logger.error(f"Error checking role {role} for {user_id}: {e.message}")
            raise PersistenceError("Failed to check user role") from e

        return bool(response.data)
