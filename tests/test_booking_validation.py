from datetime import date, datetime, time, timedelta

from hiltim.schemas.booking.booking_base import BookingCreate
from hiltim.services.booking.booking_validation_service import BookingValidationService

PAST_STAY = {
    "checkIn": "2020-01-01",
    "checkOut": "2020-01-02",
    "adults": 1,
    "roomType": "standard",
    "firstName": "A",
    "lastName": "B",
    "email": "a@b.com",
}


def test_valid_payload(validator, booking_data):
    result = validator.validate(booking_data())

    assert result.valid
    assert result.errors == []


def test_past_check_in_is_rejected(validator):
    result = validator.validate(PAST_STAY)

    assert not result.valid
    assert "Check-in date cannot be in the past" in result.errors


def test_check_out_before_check_in_is_rejected(validator):
    result = validator.validate({**PAST_STAY, "checkIn": "2020-01-02", "checkOut": "2020-01-01"})

    assert not result.valid
    assert "Check-out date must be after check-in date" in result.errors


def test_check_in_today_is_allowed(validator, today):
    result = validator.validate({**PAST_STAY, "checkIn": today.isoformat(), "checkOut": "2030-01-01"})

    assert result.valid


def test_past_check_in_allowed_when_requested(validator):
    assert validator.validate(PAST_STAY, allow_past_check_in=True).valid


def test_missing_fields_are_aggregated_and_stop_validation(validator):
    result = validator.validate({"checkIn": "2020-01-02", "checkOut": "2020-01-01", "adults": 0})

    assert result.errors == [
        "Missing required fields: adults, roomType, firstName, lastName, email"
    ]


def test_other_checks_accumulate(validator, booking_data):
    result = validator.validate(booking_data(
        checkIn="2030-01-05", checkOut="2030-01-01", adults=-1, roomType="penthouse",
    ))

    assert result.errors == [
        "Check-out date must be after check-in date",
        "At least one adult is required",
        "Unknown room type 'penthouse'",
    ]


def test_unparseable_values(validator, booking_data):
    result = validator.validate(booking_data(checkIn="next tuesday", adults="two"))

    assert "Invalid checkIn" in result.errors
    assert "Invalid adults" in result.errors


def test_snake_case_keys_and_schemas_are_accepted(booking_data):
    validator = BookingValidationService(clock=lambda: date(2025, 6, 1))
    snake = {
        "check_in": "2025-06-10",
        "check_out": "2025-06-12",
        "adults": 1,
        "room_type": "Single King Room",
        "first_name": "A",
        "last_name": "B",
        "email": "a@b.com",
    }

    assert validator.validate(snake).valid
    assert validator.validate(BookingCreate.model_validate(booking_data())).valid


def test_datetime_values_are_compared_as_dates(validator, booking_data, today):
    upcoming = validator.validate(
        booking_data(
            checkIn=datetime.combine(today, time(18, 0)),
            checkOut=datetime.combine(today + timedelta(days=1), time(10, 0)),
        )
    )
    started = validator.validate(booking_data(checkIn=datetime(2025, 5, 31, 23, 59)))

    assert upcoming.valid
    assert started.errors == ["Check-in date cannot be in the past"]
