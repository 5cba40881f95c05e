"""
Booking response schemas: aggregate statistics, import summaries
and CSV exports.
"""

from decimal import Decimal
from typing import List

from pydantic import ConfigDict, Field, field_serializer

from hiltim.schemas.common.base import BaseSchema, decimal_to_number

__all__ = [
    "BookingStats",
    "BookingImportSummary",
    "BookingExport",
]


class BookingStats(BaseSchema):
    """Counts per status and revenue from confirmed bookings."""

    total: int = 0
    confirmed: int = 0
    pending: int = 0
    cancelled: int = 0
    total_revenue: Decimal = Field(Decimal("0"), description="Sum of totalPrice over confirmed bookings")

    @field_serializer("total_revenue", when_used="json")
    def serialize_total_revenue(self, v: Decimal):
        return decimal_to_number(v)


class BookingImportSummary(BaseSchema):
    """Outcome of a replace-all CSV import."""

    imported: int = 0
    skipped: int = 0
    warnings: List[str] = Field(default_factory=list)


class BookingExport(BaseSchema):
    """Serialized copy of the whole booking store."""

    # data is the blob verbatim, trailing newline included
    model_config = ConfigDict(str_strip_whitespace=False)

    filename: str
    data: str
    count: int
    size: int
