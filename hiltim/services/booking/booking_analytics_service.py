"""
Booking analytics: aggregate counts and revenue.
"""

from decimal import Decimal

from hiltim.repositories.booking.booking_repository import BookingRepository
from hiltim.schemas.booking.booking_response import BookingStats
from hiltim.schemas.booking.booking_base import BookingRecord
from hiltim.schemas.common.enums import BookingStatus
from hiltim.services.base.base_service import BaseService
from hiltim.services.base.service_result import ServiceResult


class BookingAnalyticsService(BaseService[BookingRecord, BookingRepository]):
    """Read-only statistics over the booking store."""

    def get_stats(self) -> ServiceResult[BookingStats]:
        """
        Count bookings per status in a single pass.

        Revenue is the sum of totalPrice over confirmed bookings only.
        """
        try:
            counts = {status: 0 for status in BookingStatus}
            revenue = Decimal("0")
            total = 0

            for booking in self.repository.get_all():
                total += 1
                counts[booking.status] += 1
                if booking.status == BookingStatus.CONFIRMED:
                    revenue += booking.total_price or 0

            stats = BookingStats(
                total=total,
                confirmed=counts[BookingStatus.CONFIRMED],
                pending=counts[BookingStatus.PENDING],
                cancelled=counts[BookingStatus.CANCELLED],
                total_revenue=revenue,
            )
            return ServiceResult.success(stats)
        except Exception as e:
            return self._handle_exception(e, "compute booking stats")
