"""
Booking service: create, read, update, cancel, reactivate and delete
reservations held in the booking record store.

Every operation returns a ServiceResult; expected failures (unknown id,
invalid input, failed write) never raise.
"""

from datetime import date
from functools import wraps
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from hiltim.config.logging import get_logger
from hiltim.core.exceptions import BookingNotFoundError
from hiltim.repositories.booking.booking_repository import BookingRepository, next_booking_id
from hiltim.schemas.booking.booking_base import BookingCreate, BookingRecord, BookingUpdate
from hiltim.schemas.common.enums import BookingStatus
from hiltim.services.base.base_service import BaseService
from hiltim.services.base.service_result import ServiceResult
from hiltim.services.booking.booking_pricing_service import BookingPricingService
from hiltim.services.booking.booking_validation_service import BookingValidationService
from hiltim.utils.date_utils import now_utc, today_utc

logger = get_logger(__name__)

# Changing any of these re-quotes the booking unless a price is given
_PRICED_FIELDS = ("room_type", "check_in", "check_out")


def track_performance(operation_name: str):
    """Decorator to track operation performance."""
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            start_time = now_utc()
            try:
                result = func(*args, **kwargs)
                duration = (now_utc() - start_time).total_seconds()
                logger.debug(
                    f"Operation '{operation_name}' completed in {duration:.3f}s",
                    extra={
                        "operation": operation_name,
                        "duration_seconds": duration,
                        "success": result.is_success if isinstance(result, ServiceResult) else True,
                    },
                )
                return result
            except Exception as e:
                duration = (now_utc() - start_time).total_seconds()
                logger.error(
                    f"Operation '{operation_name}' failed after {duration:.3f}s: {e}",
                    extra={"operation": operation_name, "duration_seconds": duration},
                    exc_info=True,
                )
                raise
        return wrapper
    return decorator


class BookingService(BaseService[BookingRecord, BookingRepository]):
    """
    Booking CRUD over the record store.

    Status lifecycle: pending|confirmed --cancel--> cancelled
    --reactivate--> confirmed. Delete removes a booking whatever its status.
    """

    def __init__(
        self,
        repository: BookingRepository,
        validator: Optional[BookingValidationService] = None,
        pricing: Optional[BookingPricingService] = None,
        clock: Optional[Callable[[], date]] = None,
    ):
        super().__init__(repository)
        self.clock = clock or today_utc
        self.validator = validator or BookingValidationService(clock=self.clock)
        self.pricing = pricing or BookingPricingService()

    # -------------------------------------------------------------------------
    # Create
    # -------------------------------------------------------------------------

    @track_performance("create_booking")
    def create_booking(self, data: Union[BookingCreate, Mapping[str, Any]]) -> ServiceResult[BookingRecord]:
        """
        Validate and store a new booking.

        The booking gets the next BK### id and status ``confirmed``; nights,
        guests and (unless supplied) the total price are derived.
        """
        try:
            validation = self.validator.validate(data)
            if not validation.valid:
                return ServiceResult.validation_failure(validation.errors)

            payload = data if isinstance(data, BookingCreate) else BookingCreate.model_validate(data)
            records = self.repository.get_all()
            today = self.clock()

            nights = self.pricing.nights(payload.check_in, payload.check_out)
            total_price = payload.total_price
            if total_price is None:
                total_price = self.pricing.quote(payload.room_type, payload.check_in, payload.check_out)

            booking = BookingRecord(
                id=next_booking_id(r.id for r in records),
                user_id=payload.user_id or "",
                room_type=payload.room_type,
                check_in=payload.check_in,
                check_out=payload.check_out,
                adults=payload.adults,
                children=payload.children or 0,
                guests=self.pricing.guests(payload.adults, payload.children),
                nights=nights,
                total_price=total_price,
                status=BookingStatus.CONFIRMED,
                date_created=today,
                date_modified=today,
                first_name=payload.first_name,
                last_name=payload.last_name,
                email=payload.email,
                phone=payload.phone,
                special_requests=payload.special_requests,
                activity_packages=payload.activity_packages,
                amenity_packages=payload.amenity_packages,
            )

            self.repository.save(records + [booking])
            self._log_operation(
                "Booking created",
                booking.id,
                {"booking_id": booking.id, "user_id": booking.user_id},
            )
            return ServiceResult.success(booking, message="Booking created successfully")
        except Exception as e:
            return self._handle_exception(e, "create booking")

    # -------------------------------------------------------------------------
    # Read
    # -------------------------------------------------------------------------

    def get_booking(self, booking_id: str) -> ServiceResult[BookingRecord]:
        return self.get_by_id(booking_id)

    def list_bookings(self) -> ServiceResult[List[BookingRecord]]:
        try:
            bookings = self.repository.get_all()
            return ServiceResult.success(bookings, metadata={"count": len(bookings)})
        except Exception as e:
            return self._handle_exception(e, "list bookings")

    def get_user_bookings(self, user_id: str) -> ServiceResult[List[BookingRecord]]:
        """Bookings owned by a user; an empty list is still a success."""
        try:
            bookings = self.repository.find_by_user(user_id)
            return ServiceResult.success(bookings, metadata={"count": len(bookings)})
        except Exception as e:
            return self._handle_exception(e, "get user bookings", user_id)

    def get_bookings_by_status(self, status: Union[BookingStatus, str]) -> ServiceResult[List[BookingRecord]]:
        try:
            status = BookingStatus(status)
        except ValueError:
            allowed = ", ".join(s.value for s in BookingStatus)
            return ServiceResult.validation_failure([f"Invalid status '{status}'. Expected one of: {allowed}"])

        try:
            bookings = self.repository.find_by_status(status)
            return ServiceResult.success(bookings, metadata={"count": len(bookings)})
        except Exception as e:
            return self._handle_exception(e, "get bookings by status", status.value)

    # -------------------------------------------------------------------------
    # Update
    # -------------------------------------------------------------------------

    @track_performance("update_booking")
    def update_booking(
        self,
        booking_id: str,
        patch: Union[BookingUpdate, Mapping[str, Any]],
    ) -> ServiceResult[BookingRecord]:
        """
        Merge ``patch`` over an existing booking.

        Only fields present in the patch change. Nights and guests are
        re-derived; the price is re-quoted when the room or dates change and
        no price was given. A new check-in date may not lie in the past.
        """
        try:
            if not isinstance(patch, BookingUpdate):
                patch = BookingUpdate.model_validate(patch)
            changes = {k: v for k, v in patch.model_dump(exclude_unset=True).items() if v is not None}

            try:
                index = self.repository.index_of(booking_id)
            except BookingNotFoundError:
                return ServiceResult.not_found("Booking", booking_id)
            records = self.repository.get_all()
            existing = records[index]

            today = self.clock()
            new_check_in = changes.get("check_in")
            if new_check_in is not None and new_check_in != existing.check_in and new_check_in < today:
                return ServiceResult.validation_failure(["Check-in date cannot be in the past"])

            merged = self._merge(existing, changes)
            merged["date_modified"] = today
            updated = BookingRecord.model_validate(merged)

            records[index] = updated
            self.repository.save(records)
            self._log_operation(
                "Booking updated",
                booking_id,
                {"booking_id": booking_id, "fields": sorted(changes)},
            )
            return ServiceResult.success(updated, message="Booking updated successfully")
        except Exception as e:
            return self._handle_exception(e, "update booking", booking_id)

    def _merge(self, existing: BookingRecord, changes: Dict[str, Any]) -> Dict[str, Any]:
        merged = existing.model_dump()
        merged.update(changes)

        merged["nights"] = self.pricing.nights(merged["check_in"], merged["check_out"])
        merged["guests"] = self.pricing.guests(merged["adults"], merged["children"])

        stay_changed = any(name in changes for name in _PRICED_FIELDS)
        if stay_changed and "total_price" not in changes and merged["nights"] > 0:
            merged["total_price"] = self.pricing.quote(
                merged["room_type"], merged["check_in"], merged["check_out"]
            )
        return merged

    def cancel_booking(self, booking_id: str) -> ServiceResult[BookingRecord]:
        """Soft delete: the booking stays in the store with status cancelled."""
        result = self.update_booking(booking_id, {"status": BookingStatus.CANCELLED})
        if result.is_success:
            result.message = "Booking cancelled successfully"
            self._log_operation("Booking cancelled", booking_id, {"booking_id": booking_id})
        return result

    def reactivate_booking(self, booking_id: str) -> ServiceResult[BookingRecord]:
        result = self.update_booking(booking_id, {"status": BookingStatus.CONFIRMED})
        if result.is_success:
            result.message = "Booking reactivated successfully"
        return result

    # -------------------------------------------------------------------------
    # Delete
    # -------------------------------------------------------------------------

    @track_performance("delete_booking")
    def delete_booking(self, booking_id: str) -> ServiceResult[bool]:
        """Hard delete, regardless of status."""
        try:
            records = self.repository.get_all()
            remaining = [r for r in records if r.id != booking_id]
            if len(remaining) == len(records):
                return ServiceResult.not_found("Booking", booking_id)

            self.repository.save(remaining)
            self._log_operation("Booking permanently deleted", booking_id, {"booking_id": booking_id})
            return ServiceResult.success(True, message="Booking permanently deleted")
        except Exception as e:
            return self._handle_exception(e, "delete booking", booking_id)
