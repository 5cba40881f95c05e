"""
Booking pricing: nightly rate times number of nights.
"""

from datetime import date
from decimal import Decimal
from typing import Optional, Union

from hiltim.core.constants import ROOM_CATALOG
from hiltim.schemas.common.enums import RoomType


class BookingPricingService:
    """Derives nights, guest count and total price for a stay."""

    def __init__(self, catalog: Optional[dict] = None):
        self.catalog = catalog or ROOM_CATALOG

    def nightly_rate(self, room_type: Union[RoomType, str]) -> Decimal:
        parsed = RoomType.parse(room_type)
        if parsed is None:
            raise ValueError(f"Unknown room type '{room_type}'")
        return self.catalog[parsed.value]["nightly_rate"]

    @staticmethod
    def nights(check_in: Optional[date], check_out: Optional[date]) -> int:
        """Whole nights between the dates; 0 when either is missing."""
        if not check_in or not check_out:
            return 0
        return max((check_out - check_in).days, 0)

    @staticmethod
    def guests(adults: Optional[int], children: Optional[int]) -> int:
        return (adults or 0) + (children or 0)

    def quote(self, room_type: Union[RoomType, str], check_in: date, check_out: date) -> Decimal:
        """Total price of the stay (room only; packages are not priced in)."""
        return self.nightly_rate(room_type) * self.nights(check_in, check_out)
