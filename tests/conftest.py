"""Shared fixtures: in-memory stores, a fixed clock and prebuilt services."""

from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient

from hiltim.config.settings import Settings
from hiltim.db.storage import MemoryStorage
from hiltim.main import create_app
from hiltim.repositories.booking.booking_repository import BookingRepository
from hiltim.repositories.user.user_repository import UserRepository
from hiltim.services.booking.booking_analytics_service import BookingAnalyticsService
from hiltim.services.booking.booking_import_export_service import BookingImportExportService
from hiltim.services.booking.booking_service import BookingService
from hiltim.services.booking.booking_validation_service import BookingValidationService
from hiltim.services.users.user_account_service import UserAccountService
from hiltim.utils.date_utils import today_utc

TODAY = date(2025, 6, 1)
BOOKINGS_KEY = "test_bookings_csv"
USERS_KEY = "test_users_csv"


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def clock():
    return lambda: TODAY


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def booking_repository(storage):
    return BookingRepository(storage, BOOKINGS_KEY, seed_sample_data=False).open()


@pytest.fixture
def seeded_booking_repository():
    return BookingRepository(MemoryStorage(), BOOKINGS_KEY).open()


@pytest.fixture
def user_repository(storage):
    return UserRepository(storage, USERS_KEY).open()


@pytest.fixture
def validator(clock):
    return BookingValidationService(clock=clock)


@pytest.fixture
def booking_service(booking_repository, clock):
    return BookingService(booking_repository, clock=clock)


@pytest.fixture
def analytics_service(booking_repository):
    return BookingAnalyticsService(booking_repository)


@pytest.fixture
def import_export_service(booking_repository, clock):
    return BookingImportExportService(booking_repository, clock=clock)


@pytest.fixture
def user_service(user_repository, clock):
    return UserAccountService(user_repository, clock=clock)


@pytest.fixture
def booking_data():
    """A valid create payload relative to the fixed clock."""
    def _make(**overrides):
        data = {
            "userId": "user123",
            "roomType": "standard",
            "checkIn": (TODAY + timedelta(days=10)).isoformat(),
            "checkOut": (TODAY + timedelta(days=13)).isoformat(),
            "adults": 2,
            "children": 1,
            "firstName": "Jane",
            "lastName": "Smith",
            "email": "jane.smith@example.com",
            "phone": "+1-555-0199",
            "specialRequests": "Quiet room",
            "activityPackages": ["Ocean Explorer Package"],
            "amenityPackages": [],
        }
        data.update(overrides)
        return data
    return _make


@pytest.fixture
def api_settings(tmp_path):
    return Settings(
        STORAGE_BACKEND="memory",
        SEED_SAMPLE_DATA=True,
        DATA_DIR=str(tmp_path / "data"),
        BACKUP_DIR=str(tmp_path / "backups"),
        ENVIRONMENT="test",
    )


@pytest.fixture
def client(api_settings):
    app = create_app(api_settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def future_stay():
    """Check-in/check-out dates that stay in the future on the real clock."""
    start = today_utc() + timedelta(days=30)
    return start.isoformat(), (start + timedelta(days=2)).isoformat()
