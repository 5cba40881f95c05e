from datetime import date
from decimal import Decimal

import pytest

from hiltim.core.exceptions import (
    BookingNotFoundError,
    DuplicateEntryError,
    StorageError,
    UserNotFoundError,
)
from hiltim.db.storage import BackupWriter, FileStorage, LocalStorage, MemoryStorage
from hiltim.repositories.booking.booking_repository import BookingRepository, next_booking_id
from hiltim.repositories.user.user_repository import UserRepository
from hiltim.schemas.booking.booking_base import BookingRecord
from hiltim.schemas.common.enums import BookingStatus, RoomType

KEY = "bookings"


def _record(booking_id, **overrides):
    values = {
        "id": booking_id,
        "user_id": "user123",
        "room_type": RoomType.STANDARD,
        "check_in": date(2025, 7, 1),
        "check_out": date(2025, 7, 3),
        "adults": 1,
        "nights": 2,
        "guests": 1,
        "total_price": Decimal("300"),
        "first_name": "A",
        "last_name": "B",
        "email": "a@b.com",
    }
    values.update(overrides)
    return BookingRecord(**values)


def test_first_open_seeds_and_persists_sample_bookings():
    storage = MemoryStorage()

    repo = BookingRepository(storage, KEY).open()

    assert [b.id for b in repo.get_all()] == ["BK001", "BK002"]
    assert storage.read(KEY).startswith("id,userId,roomType,checkIn,checkOut")
    assert repo.get("BK002").status == BookingStatus.PENDING


def test_open_without_seeding_persists_header_only_blob():
    storage = MemoryStorage()

    repo = BookingRepository(storage, KEY, seed_sample_data=False).open()

    assert repo.get_all() == []
    assert storage.read(KEY).count("\n") == 1


def test_get_all_opens_lazily():
    storage = MemoryStorage()
    BookingRepository(storage, KEY).open()

    repo = BookingRepository(storage, KEY)

    assert not repo.is_open
    assert len(repo.get_all()) == 2
    assert repo.is_open


def test_empty_store_is_not_reseeded():
    storage = MemoryStorage()
    repo = BookingRepository(storage, KEY).open()
    repo.save([])

    assert BookingRepository(storage, KEY).open().get_all() == []


@pytest.mark.parametrize("backend", ["memory", "file", "local"])
def test_saved_records_survive_reopen(backend, tmp_path):
    if backend == "memory":
        storage = MemoryStorage()
    elif backend == "file":
        storage = FileStorage(str(tmp_path))
    else:
        storage = LocalStorage.from_url(f"sqlite:///{tmp_path / 'store.db'}")

    record = _record(
        "BK007",
        special_requests='Crib, "extra" pillows\nand late checkout',
        activity_packages=["Ocean Explorer Package", "Family Fun Package"],
    )
    BookingRepository(storage, KEY, seed_sample_data=False).save([record])

    reloaded = BookingRepository(storage, KEY).open().get_all()

    assert [r.to_wire() for r in reloaded] == [record.to_wire()]


def test_rows_that_fail_on_load_are_skipped():
    good = BookingRepository.codec.encode([_record("BK001").to_wire()])
    bad_row = "BK002,user123,penthouse" + "," * 17 + "\n"
    short_row = "BK003,user123\n"
    storage = MemoryStorage({KEY: good + bad_row + short_row})

    repo = BookingRepository(storage, KEY).open()

    assert [b.id for b in repo.get_all()] == ["BK001"]


def test_failed_write_keeps_memory_unchanged():
    class BrokenStorage(MemoryStorage):
        def write(self, key, text):
            raise StorageError("disk full", storage="broken", key=key)

    repo = BookingRepository(BrokenStorage({KEY: BookingRepository.codec.encode([])}), KEY).open()

    with pytest.raises(StorageError):
        repo.save([_record("BK001")])
    assert repo.get_all() == []


def test_save_writes_backup_copy(tmp_path):
    backup = BackupWriter(str(tmp_path))
    repo = BookingRepository(MemoryStorage(), KEY, seed_sample_data=False, backup=backup,
                             backup_filename="hiltim_bookings.csv")

    repo.save([_record("BK001")])

    copies = sorted(tmp_path.glob("hiltim_bookings_*.csv"))
    assert copies
    assert "BK001" in copies[-1].read_text()


def test_next_booking_id():
    assert next_booking_id([]) == "BK001"
    assert next_booking_id(["BK001", "BK009", "custom-id"]) == "BK010"
    assert next_booking_id(["BK999"]) == "BK1000"


def test_find_by_user_and_status():
    repo = BookingRepository(MemoryStorage(), KEY).open()

    assert len(repo.find_by_user("user123")) == 2
    assert repo.find_by_user("nobody") == []
    assert [b.id for b in repo.find_by_status(BookingStatus.CONFIRMED)] == ["BK001"]


def test_user_repository_seeds_sample_user_and_finds_by_email():
    repo = UserRepository(MemoryStorage(), "users").open()

    user = repo.get_by_email("  John.Doe@Email.com ")

    assert user is not None
    assert user.id == "user123"
    assert repo.get_by_email("missing@example.com") is None


def test_index_of_follows_store_order():
    repo = BookingRepository(MemoryStorage(), KEY).open()

    assert repo.index_of("BK002") == 1
    assert repo.count() == 2
    with pytest.raises(BookingNotFoundError) as exc:
        repo.index_of("BK404")
    assert exc.value.details["resource_id"] == "BK404"


def test_user_repository_email_availability():
    repo = UserRepository(MemoryStorage(), "users").open()

    repo.ensure_email_available("someone@example.com")
    repo.ensure_email_available("john.doe@email.com", exclude_id="user123")
    with pytest.raises(DuplicateEntryError):
        repo.ensure_email_available("JOHN.DOE@email.com")
    with pytest.raises(UserNotFoundError):
        repo.index_of("user404")
