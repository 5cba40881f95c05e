from hiltim.repositories.booking.booking_repository import BookingRepository, next_booking_id

__all__ = ["BookingRepository", "next_booking_id"]
