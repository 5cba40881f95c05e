import pytest

from hiltim.core.exceptions import (
    BaseAppException,
    BookingNotFoundError,
    ConfigurationError,
    CsvFormatError,
    DuplicateEntryError,
    ErrorCode,
    StorageError,
    UserNotFoundError,
)


@pytest.mark.parametrize(
    "exc, code, status",
    [
        (BookingNotFoundError("BK404"), ErrorCode.BOOKING_NOT_FOUND, 404),
        (UserNotFoundError("user404"), ErrorCode.USER_NOT_FOUND, 404),
        (DuplicateEntryError("email", "a@b.com"), ErrorCode.DUPLICATE_ENTRY, 409),
        (StorageError("disk full", storage="file", key="bookings"), ErrorCode.STORAGE_ERROR, 500),
        (CsvFormatError("bad row", row_number=3), ErrorCode.MALFORMED_ROW, 422),
        (ConfigurationError("bad backend", config_key="STORAGE_BACKEND"), ErrorCode.CONFIGURATION_ERROR, 500),
    ],
)
def test_error_codes_and_status(exc, code, status):
    assert isinstance(exc, BaseAppException)
    assert exc.error_code == code
    assert exc.status_code == status


def test_not_found_message_includes_id():
    exc = BookingNotFoundError("BK404")

    assert exc.message == "Booking not found (ID: BK404)"
    assert str(exc) == "BOOKING_NOT_FOUND: Booking not found (ID: BK404)"


def test_to_dict_shape():
    payload = DuplicateEntryError("email", "a@b.com").to_dict()["error"]

    assert payload["code"] == "DUPLICATE_ENTRY"
    assert payload["type"] == "DuplicateEntryError"
    assert payload["details"] == {"field": "email", "value": "a@b.com"}
