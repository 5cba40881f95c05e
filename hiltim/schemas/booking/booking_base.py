"""
Booking schemas.

BookingRecord is the persisted row of the booking blob. BookingCreate and
BookingUpdate are the loosely-typed inputs: every field is optional so
that missing fields can be reported together by the validation service
instead of failing one at a time at parse time.
"""

from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import Field, field_serializer, field_validator, model_validator

from hiltim.schemas.common.base import BaseSchema, blank_to_none, decimal_to_number, parse_optional_date
from hiltim.schemas.common.enums import BookingStatus, RoomType

__all__ = [
    "BookingBase",
    "BookingCreate",
    "BookingUpdate",
    "BookingRecord",
]


class BookingBase(BaseSchema):
    """Guest and selection fields shared by every booking schema."""

    user_id: Optional[str] = Field(None, description="Owning user identifier")
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    email: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=50)
    special_requests: Optional[str] = Field(None, max_length=1000)
    activity_packages: Optional[List[str]] = Field(
        None,
        description="Ordered activity package names",
    )
    amenity_packages: Optional[List[str]] = Field(
        None,
        description="Ordered amenity package names",
    )

    @field_validator("activity_packages", "amenity_packages", mode="before")
    @classmethod
    def split_package_names(cls, v):
        """Accept a ';'-joined string as well as a list."""
        if isinstance(v, str):
            return [item for item in v.split(";") if item.strip()]
        return v


class BookingCreate(BookingBase):
    """Input for a new booking."""

    room_type: Optional[str] = None
    check_in: Optional[date] = None
    check_out: Optional[date] = None
    adults: Optional[int] = None
    children: Optional[int] = Field(None, ge=0)
    total_price: Optional[Decimal] = Field(None, ge=0)

    @field_validator("check_in", "check_out", mode="before")
    @classmethod
    def parse_dates(cls, v):
        return parse_optional_date(v)

    @field_validator("adults", "children", "total_price", mode="before")
    @classmethod
    def blank_numbers(cls, v):
        return blank_to_none(v)


class BookingUpdate(BookingCreate):
    """Partial update; only explicitly provided fields are applied."""

    status: Optional[BookingStatus] = None


class BookingRecord(BaseSchema):
    """A persisted booking."""

    id: str = Field("", description="Booking ID of the form BK###")
    user_id: str = ""
    room_type: RoomType
    check_in: Optional[date] = None
    check_out: Optional[date] = None
    adults: int = Field(1, ge=1)
    children: int = Field(0, ge=0)
    guests: int = Field(0, ge=0)
    nights: int = Field(0, ge=0)
    total_price: Decimal = Field(Decimal("0"), ge=0)
    status: BookingStatus = BookingStatus.CONFIRMED
    date_created: Optional[date] = None
    date_modified: Optional[date] = None
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    special_requests: str = ""
    activity_packages: List[str] = Field(default_factory=list)
    amenity_packages: List[str] = Field(default_factory=list)

    @field_validator("check_in", "check_out", "date_created", "date_modified", mode="before")
    @classmethod
    def parse_dates(cls, v):
        return parse_optional_date(v)

    @field_validator("room_type", mode="before")
    @classmethod
    def parse_room_type(cls, v):
        room_type = RoomType.parse(v) if v is not None else None
        if room_type is None:
            raise ValueError(f"Unknown room type '{v}'")
        return room_type

    @field_validator("user_id", "first_name", "last_name", "email", "phone", "special_requests", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        return "" if v is None else v

    @field_serializer("total_price", when_used="json")
    def serialize_total_price(self, v: Decimal):
        return decimal_to_number(v)

    @field_validator("activity_packages", "amenity_packages", mode="before")
    @classmethod
    def split_package_names(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            return [item for item in v.split(";") if item.strip()]
        return v

    @model_validator(mode="after")
    def validate_stay(self) -> "BookingRecord":
        """Check-out must fall strictly after check-in."""
        if self.check_in and self.check_out and self.check_out <= self.check_in:
            raise ValueError("Check-out date must be after check-in date")
        return self
