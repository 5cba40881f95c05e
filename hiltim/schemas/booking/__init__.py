from hiltim.schemas.booking.booking_base import (
    BookingBase,
    BookingCreate,
    BookingRecord,
    BookingUpdate,
)
from hiltim.schemas.booking.booking_response import (
    BookingExport,
    BookingImportSummary,
    BookingStats,
)

__all__ = [
    "BookingBase",
    "BookingCreate",
    "BookingRecord",
    "BookingUpdate",
    "BookingExport",
    "BookingImportSummary",
    "BookingStats",
]
