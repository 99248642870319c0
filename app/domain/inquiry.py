"""
Contact and newsletter submission models

Both forms carry a hidden `honeypot` field. Real visitors leave it empty;
a filled honeypot is accepted silently and never stored.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.domain.validators import blank_to_none, check_email, check_length


class ContactSubmission(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str
    email: str
    subject: Optional[str] = None
    message: str
    honeypot: Optional[str] = Field(None, max_length=1000)

    @field_validator("name")
    @classmethod
    def _name(cls, value: str) -> str:
        return check_length(value, "Name", 100)

    @field_validator("email")
    @classmethod
    def _email(cls, value: str) -> str:
        return check_email(value)

    @field_validator("subject")
    @classmethod
    def _subject(cls, value: Optional[str]) -> Optional[str]:
        value = blank_to_none(value)
        if value is not None:
            check_length(value, "Subject", 200)
        return value

    @field_validator("message")
    @classmethod
    def _message(cls, value: str) -> str:
        return check_length(value, "Message", 2000)

    @property
    def is_bot(self) -> bool:
        return bool(self.honeypot)

    def to_row(self) -> dict:
        """Row for the contact_inquiries table"""
        return {
            "name": self.name,
            "email": self.email.lower(),
            "subject": self.subject,
            "message": self.message,
        }


class NewsletterSubmission(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    email: str
    honeypot: Optional[str] = Field(None, max_length=1000)

    @field_validator("email")
    @classmethod
    def _email(cls, value: str) -> str:
        return check_email(value.lower())

    @property
    def is_bot(self) -> bool:
        return bool(self.honeypot)


class BackInStockSubmission(BaseModel):
    """Ask to be emailed when a sold-out product or variant returns"""

    model_config = ConfigDict(str_strip_whitespace=True)

    email: str
    product_handle: str = Field(..., min_length=1, max_length=200)
    variant_title: Optional[str] = Field(None, max_length=200)

    @field_validator("email")
    @classmethod
    def _email(cls, value: str) -> str:
        return check_email(value.lower())

    @property
    def source(self) -> str:
        source = f"back-in-stock:{self.product_handle}"
        if self.variant_title:
            source += f":{self.variant_title}"
        return source
