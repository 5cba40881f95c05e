"""
Enumerations shared by the booking and user schemas.
"""

from enum import Enum
from typing import Optional

__all__ = ["BookingStatus", "RoomType"]


class BookingStatus(str, Enum):
    """Booking lifecycle status."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class RoomType(str, Enum):
    """Room type enumeration (values as stored in the booking blob)."""

    STANDARD = "standard"
    SINGLE_KING = "singleKing"
    DOUBLE_KING = "doubleKing"

    @property
    def display_name(self) -> str:
        from hiltim.core.constants import ROOM_CATALOG

        return ROOM_CATALOG[self.value]["name"]

    @classmethod
    def parse(cls, value: str) -> Optional["RoomType"]:
        """Match a stored value or a catalogue name, case-insensitively."""
        if isinstance(value, cls):
            return value
        needle = str(value).strip().lower()
        for member in cls:
            if needle in (member.value.lower(), member.display_name.lower()):
                return member
        return None
