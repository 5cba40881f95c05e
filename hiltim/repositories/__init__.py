"""
Record repositories.

Each repository owns one persisted CSV blob and the in-memory list of
records decoded from it.
"""

from hiltim.repositories.base.base_repository import CsvRecordRepository
from hiltim.repositories.booking.booking_repository import BookingRepository
from hiltim.repositories.user.user_repository import UserRepository

__all__ = ["CsvRecordRepository", "BookingRepository", "UserRepository"]
