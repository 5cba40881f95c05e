"""
User account schemas.

Accounts carry contact details used to pre-fill bookings; there are no
credentials.
"""

from datetime import date
from typing import Optional

from pydantic import EmailStr, Field, field_validator

from hiltim.schemas.common.base import BaseSchema, parse_optional_date

__all__ = ["UserAccount", "UserCreate", "UserSignIn", "UserUpdate"]


class UserCreate(BaseSchema):
    """Registration form."""

    email: EmailStr
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field("", max_length=100)
    phone: str = Field("", max_length=50)
    preferences: str = Field("", max_length=1000)


class UserUpdate(BaseSchema):
    """Profile update; only provided fields change."""

    email: Optional[EmailStr] = None
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, max_length=50)
    preferences: Optional[str] = Field(None, max_length=1000)


class UserAccount(BaseSchema):
    """A persisted user account."""

    id: str
    email: str
    first_name: str = ""
    last_name: str = ""
    phone: str = ""
    date_created: Optional[date] = None
    preferences: str = ""

    @field_validator("date_created", mode="before")
    @classmethod
    def parse_date_created(cls, v):
        return parse_optional_date(v)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class UserSignIn(BaseSchema):
    """Sign-in by email only; no credential is checked."""

    email: EmailStr
