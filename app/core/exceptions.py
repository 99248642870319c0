"""
Storefront error types

Raised by services and repositories, rendered by the handler registered in
app.main as {"error": message, "code": code}.
"""
from typing import Optional


class StorefrontError(Exception):
    """Base error with the HTTP status it maps to"""

    status_code: int = 500
    code: Optional[str] = None

    def __init__(self, message: str, status_code: Optional[int] = None, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        if code is not None:
            self.code = code

    def to_dict(self) -> dict:
        body = {"error": self.message}
        if self.code:
            body["code"] = self.code
        return body


class ConfigurationError(StorefrontError):
    """A required credential or setting is missing"""

    status_code = 500
    code = "NOT_CONFIGURED"


class DuplicateEntryError(StorefrontError):
    """Unique constraint violation (Postgres 23505)"""

    status_code = 409
    code = "DUPLICATE"


class NotFoundError(StorefrontError):
    status_code = 404
    code = "NOT_FOUND"


class UpstreamServiceError(StorefrontError):
    """Shopify, Resend or Anthropic returned an error"""

    status_code = 502
    code = "UPSTREAM_ERROR"


class PersistenceError(StorefrontError):
    """Supabase rejected a read or write"""

    status_code = 500
    code = "DATABASE_ERROR"
