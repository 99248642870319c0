"""
Shared field checks for storefront request models
"""
import re
from typing import Optional

EMAIL_REGEX = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def check_email(value: str, max_length: int = 255) -> str:
    """Validate an email address and return it unchanged"""
    if not EMAIL_REGEX.match(value):
        raise ValueError("Invalid email address")
    if len(value) > max_length:
        raise ValueError(f"Email must be less than {max_length} characters")
    return value


def check_length(value: str, label: str, max_length: int, required: bool = True) -> str:
    if required and not value:
        raise ValueError(f"{label} is required")
    if len(value) > max_length:
        raise ValueError(f"{label} must be less than {max_length} characters")
    return value


def blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None
