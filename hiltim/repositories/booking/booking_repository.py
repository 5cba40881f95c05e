# hiltim/repositories/booking/booking_repository.py
"""
Booking repository: the booking record store.

Holds the booking list, generates BK### identifiers and seeds the two
sample reservations on first use.
"""

import re
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional

from hiltim.core.constants import (
    BOOKING_CSV_HEADERS,
    BOOKING_DECIMAL_FIELDS,
    BOOKING_ID_PREFIX,
    BOOKING_ID_WIDTH,
    BOOKING_INT_FIELDS,
    BOOKING_LIST_FIELDS,
)
from hiltim.core.exceptions import BookingNotFoundError
from hiltim.repositories.base.base_repository import CsvRecordRepository
from hiltim.schemas.booking.booking_base import BookingRecord
from hiltim.schemas.common.enums import BookingStatus, RoomType
from hiltim.utils.csv_utils import CsvCodec

_BOOKING_ID_RE = re.compile(rf"^{BOOKING_ID_PREFIX}(\d+)$")


def booking_id_number(booking_id: str) -> Optional[int]:
    """Numeric suffix of a BK### identifier, or None for other ids."""
    match = _BOOKING_ID_RE.match(booking_id or "")
    return int(match.group(1)) if match else None


def next_booking_id(existing_ids: Iterable[str]) -> str:
    """One past the highest numeric suffix in use, zero-padded."""
    numbers = [n for n in (booking_id_number(i) for i in existing_ids) if n is not None]
    next_number = max(numbers, default=0) + 1
    return f"{BOOKING_ID_PREFIX}{next_number:0{BOOKING_ID_WIDTH}d}"


class BookingRepository(CsvRecordRepository[BookingRecord]):
    """Booking records persisted as the fixed 20-column CSV blob."""

    model = BookingRecord
    codec = CsvCodec(
        BOOKING_CSV_HEADERS,
        int_fields=BOOKING_INT_FIELDS,
        decimal_fields=BOOKING_DECIMAL_FIELDS,
        list_fields=BOOKING_LIST_FIELDS,
    )
    resource_name = "Booking"

    def next_id(self) -> str:
        return next_booking_id(b.id for b in self.get_all())

    def not_found(self, record_id: str) -> BookingNotFoundError:
        return BookingNotFoundError(record_id)

    def find_by_user(self, user_id: str) -> List[BookingRecord]:
        return self.filter(lambda b: b.user_id == user_id)

    def find_by_status(self, status: BookingStatus) -> List[BookingRecord]:
        return self.filter(lambda b: b.status == status)

    def sample_records(self) -> List[BookingRecord]:
        return [
            BookingRecord(
                id="BK001",
                user_id="user123",
                room_type=RoomType.SINGLE_KING,
                check_in=date(2025, 10, 15),
                check_out=date(2025, 10, 20),
                adults=2,
                children=0,
                guests=2,
                nights=5,
                total_price=Decimal("1100"),
                status=BookingStatus.CONFIRMED,
                date_created=date(2025, 9, 10),
                date_modified=date(2025, 9, 10),
                first_name="John",
                last_name="Doe",
                email="john.doe@email.com",
                phone="+1-555-0123",
                special_requests="Late checkout, champagne welcome",
                activity_packages=["Pearl Harbor Historical Package", "Ocean Explorer Package"],
                amenity_packages=["Spa & Wellness Package"],
            ),
            BookingRecord(
                id="BK002",
                user_id="user123",
                room_type=RoomType.STANDARD,
                check_in=date(2025, 11, 10),
                check_out=date(2025, 11, 13),
                adults=1,
                children=0,
                guests=1,
                nights=3,
                total_price=Decimal("450"),
                status=BookingStatus.PENDING,
                date_created=date(2025, 9, 12),
                date_modified=date(2025, 9, 12),
                first_name="John",
                last_name="Doe",
                email="john.doe@email.com",
                phone="+1-555-0123",
                special_requests="",
                activity_packages=["Diamond Head Adventure Package"],
                amenity_packages=[],
            ),
        ]
