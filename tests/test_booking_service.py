from datetime import datetime, time, timedelta
from decimal import Decimal

from hiltim.core.exceptions import StorageError
from hiltim.schemas.common.enums import BookingStatus, RoomType
from hiltim.services.base.service_result import ErrorCode


def test_create_assigns_monotonic_ids(booking_service, booking_data):
    ids = [booking_service.create_booking(booking_data()).data.id for _ in range(5)]

    assert ids == ["BK001", "BK002", "BK003", "BK004", "BK005"]


def test_create_derives_fields(booking_service, booking_repository, booking_data, today):
    result = booking_service.create_booking(booking_data(status="pending"))

    assert result.is_success
    booking = result.data
    assert booking.status == BookingStatus.CONFIRMED
    assert booking.room_type == RoomType.STANDARD
    assert booking.nights == 3
    assert booking.guests == 3
    assert booking.total_price == Decimal("450")
    assert booking.date_created == today
    assert booking.date_modified == today
    assert booking.activity_packages == ["Ocean Explorer Package"]
    assert booking_repository.get(booking.id) == booking


def test_create_keeps_supplied_price(booking_service, booking_data):
    booking = booking_service.create_booking(booking_data(totalPrice="999.50")).data

    assert booking.total_price == Decimal("999.50")


def test_create_continues_after_highest_id(seeded_booking_repository, clock, booking_data):
    from hiltim.services.booking.booking_service import BookingService

    service = BookingService(seeded_booking_repository, clock=clock)

    assert service.create_booking(booking_data()).data.id == "BK003"


def test_invalid_create_returns_errors_and_stores_nothing(booking_service, booking_repository, booking_data):
    result = booking_service.create_booking(booking_data(email="", checkIn="2020-01-01"))

    assert not result.is_success
    assert result.error_code == ErrorCode.VALIDATION_ERROR
    assert result.errors == ["Missing required fields: email"]
    assert booking_repository.get_all() == []


def test_get_booking(booking_service, booking_data):
    created = booking_service.create_booking(booking_data()).data

    assert booking_service.get_booking(created.id).data == created

    missing = booking_service.get_booking("BK404")
    assert not missing.is_success
    assert missing.error_code == ErrorCode.NOT_FOUND
    assert missing.data is None


def test_user_and_status_queries(booking_service, booking_data):
    booking_service.create_booking(booking_data())
    booking_service.create_booking(booking_data(userId="other"))
    booking_service.cancel_booking("BK002")

    assert [b.id for b in booking_service.get_user_bookings("user123").data] == ["BK001"]
    assert booking_service.get_user_bookings("nobody").data == []
    assert [b.id for b in booking_service.get_bookings_by_status("cancelled").data] == ["BK002"]
    assert booking_service.get_bookings_by_status("archived").error_code == ErrorCode.VALIDATION_ERROR


def test_status_transitions_and_hard_delete(booking_service, booking_data):
    booking_id = booking_service.create_booking(booking_data()).data.id

    cancelled = booking_service.cancel_booking(booking_id)
    assert cancelled.data.status == BookingStatus.CANCELLED
    assert booking_service.get_booking(booking_id).is_success

    restored = booking_service.update_booking(booking_id, {"status": "confirmed"})
    assert restored.data.status == BookingStatus.CONFIRMED

    booking_service.cancel_booking(booking_id)
    assert booking_service.reactivate_booking(booking_id).data.status == BookingStatus.CONFIRMED

    assert booking_service.delete_booking(booking_id).is_success
    assert booking_service.get_booking(booking_id).error_code == ErrorCode.NOT_FOUND
    assert booking_service.delete_booking(booking_id).error_code == ErrorCode.NOT_FOUND


def test_update_merges_patch_and_requotes(booking_service, booking_data, today):
    booking = booking_service.create_booking(booking_data()).data

    result = booking_service.update_booking(booking.id, {"roomType": "doubleKing", "children": 0})

    updated = result.data
    assert updated.room_type == RoomType.DOUBLE_KING
    assert updated.total_price == Decimal("1140")
    assert updated.guests == 2
    assert updated.first_name == booking.first_name
    assert updated.date_created == booking.date_created
    assert updated.date_modified == today


def test_update_rejects_new_past_check_in(booking_service, booking_data, today):
    booking = booking_service.create_booking(booking_data()).data

    result = booking_service.update_booking(booking.id, {"checkIn": (today - timedelta(days=1)).isoformat()})

    assert result.errors == ["Check-in date cannot be in the past"]


def test_update_rejects_check_out_before_check_in(booking_service, booking_data):
    booking = booking_service.create_booking(booking_data()).data

    result = booking_service.update_booking(booking.id, {"checkOut": booking.check_in.isoformat()})

    assert result.error_code == ErrorCode.VALIDATION_ERROR
    assert result.errors == ["Check-out date must be after check-in date"]
    assert booking_service.get_booking(booking.id).data == booking


def test_update_unknown_booking(booking_service):
    assert booking_service.update_booking("BK404", {"phone": "1"}).error_code == ErrorCode.NOT_FOUND


def test_storage_failure_becomes_result(booking_service, booking_repository, booking_data, monkeypatch):
    def broken_write(key, text):
        raise StorageError("disk full", storage="memory", key=key)

    monkeypatch.setattr(booking_repository.storage, "write", broken_write)

    result = booking_service.create_booking(booking_data())

    assert not result.is_success
    assert result.error_code == ErrorCode.STORAGE_ERROR
    assert booking_repository.get_all() == []


def test_failed_backup_copy_keeps_save(booking_service, booking_repository, booking_data):
    class UnwritableBackup:
        def write(self, filename, text):
            raise StorageError("backup volume offline", storage="backup")

    booking_repository.backup = UnwritableBackup()

    result = booking_service.create_booking(booking_data())

    assert result.is_success
    assert [b.id for b in booking_repository.get_all()] == ["BK001"]
    assert "BK001" in booking_repository.storage.read(booking_repository.storage_key)


def test_price_is_text_in_blob_and_number_on_wire(booking_service, booking_repository, booking_data):
    booking = booking_service.create_booking(booking_data(totalPrice="999.50")).data

    assert "999.50" in booking_repository.storage.read(booking_repository.storage_key)
    assert booking.to_wire()["totalPrice"] == 999.5
    assert booking_service.create_booking(booking_data()).data.to_wire()["totalPrice"] == 450


def test_create_accepts_datetime_values(booking_service, booking_data, today):
    check_in = datetime.combine(today + timedelta(days=10), time(15, 0))
    check_out = datetime.combine(today + timedelta(days=12), time(11, 0))

    result = booking_service.create_booking(booking_data(checkIn=check_in, checkOut=check_out))

    assert result.is_success
    assert result.data.check_in == today + timedelta(days=10)
    assert result.data.nights == 2
