"""
Employee Access Service

Issues and verifies the HMAC-signed token that unlocks the employee-only
storefront preview. Tokens are stateless:

    token     = base64(json({"payload": payload, "signature": signature}))
    payload   = "employee_access:<expiry unix ms>"
    signature = base64(HMAC-SHA256(secret, payload))
"""
import base64
import binascii
import hashlib
import hmac
import json
import logging
import time
from typing import Optional

from app.core.config import settings
from app.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

TOKEN_PREFIX = "employee_access"


def _now_ms() -> int:
    return int(time.time() * 1000)


class EmployeeAccessService:
    """
    Args:
        secret: HMAC key; defaults to EMPLOYEE_TOKEN_SECRET or the
            Supabase service role key
        password: Shared employee password
        ttl_hours: Token lifetime
    """

    def __init__(self, secret: Optional[str] = None, password: Optional[str] = None,
                 ttl_hours: Optional[int] = None):
        self.secret = secret if secret is not None else settings.get_token_secret()
        self.password = password if password is not None else settings.EMPLOYEE_ACCESS_PASSWORD
        self.ttl_ms = (ttl_hours if ttl_hours is not None else settings.EMPLOYEE_TOKEN_TTL_HOURS) * 60 * 60 * 1000

    def _sign(self, payload: str) -> str:
        if not self.secret:
            raise ConfigurationError("Employee token secret is not configured")
        digest = hmac.new(self.secret.encode(), payload.encode(), hashlib.sha256).digest()
        return base64.b64encode(digest).decode()

    def check_password(self, candidate: str) -> bool:
        if not self.password:
            raise ConfigurationError("Employee access password is not configured")
        return hmac.compare_digest(candidate.encode(), self.password.encode())

    def issue_token(self, now_ms: Optional[int] = None) -> str:
        now_ms = _now_ms() if now_ms is None else now_ms
        payload = f"{TOKEN_PREFIX}:{now_ms + self.ttl_ms}"
        envelope = json.dumps({"payload": payload, "signature": self._sign(payload)})
        return base64.b64encode(envelope.encode()).decode()

    def verify_token(self, token: str, now_ms: Optional[int] = None) -> bool:
        """True only for an unexpired token signed with our secret. Never raises."""
        now_ms = _now_ms() if now_ms is None else now_ms

        try:
            envelope = json.loads(base64.b64decode(token, validate=True))
            payload = envelope["payload"]
            signature = envelope["signature"]
            prefix, expiry_str = payload.split(":", 1)
            expiry = int(expiry_str)
        except (binascii.Error, UnicodeDecodeError, ValueError, KeyError, TypeError, AttributeError):
            return False

        if prefix != TOKEN_PREFIX or not isinstance(signature, str):
            return False
        if now_ms > expiry:
            return False

        try:
            expected = self._sign(payload)
        except ConfigurationError:
            logger.error("Cannot verify employee token, secret is not configured")
            return False

        return hmac.compare_digest(signature.encode(), expected.encode())


def get_employee_access_service() -> EmployeeAccessService:
    return EmployeeAccessService()
