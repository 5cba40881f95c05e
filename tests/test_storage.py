import pytest

from hiltim.config.settings import Settings
from hiltim.core.exceptions import ConfigurationError
from hiltim.db.storage import (
    BackupWriter,
    FileStorage,
    LocalStorage,
    MemoryStorage,
    create_backup_writer,
    create_storage_backend,
)


def _roundtrip(storage):
    assert storage.read("blob") is None
    assert not storage.exists("blob")

    storage.write("blob", "id\nBK001\n")
    storage.write("blob", "id\nBK002\n")

    assert storage.read("blob") == "id\nBK002\n"
    assert storage.exists("blob")
    assert storage.delete("blob") is True
    assert storage.delete("blob") is False
    assert storage.read("blob") is None


def test_memory_storage():
    _roundtrip(MemoryStorage())


def test_memory_storage_initial_contents():
    assert MemoryStorage({"blob": "x"}).read("blob") == "x"


def test_file_storage(tmp_path):
    storage = FileStorage(str(tmp_path / "data"))
    _roundtrip(storage)


def test_file_storage_uses_filename_map(tmp_path):
    storage = FileStorage(str(tmp_path), filenames={"bookings": "hiltim_bookings.csv"})

    storage.write("bookings", 'a,b\n"x\r\ny",2\n')

    path = tmp_path / "hiltim_bookings.csv"
    assert path.exists()
    assert storage.read("bookings") == 'a,b\n"x\r\ny",2\n'
    assert storage.path_for("other") == tmp_path / "other.csv"


def test_local_storage(tmp_path):
    _roundtrip(LocalStorage.from_url(f"sqlite:///{tmp_path / 'local.db'}"))


def test_local_storage_survives_reopen(tmp_path):
    url = f"sqlite:///{tmp_path / 'reopen.db'}"
    LocalStorage.from_url(url).write("blob", "persisted")

    assert LocalStorage.from_url(url).read("blob") == "persisted"


def test_backup_writer_keeps_timestamped_copies(tmp_path):
    writer = BackupWriter(str(tmp_path / "backups"))

    first = writer.write("hiltim_bookings.csv", "one")
    second = writer.write("hiltim_bookings.csv", "two")

    assert first != second
    assert first.name.startswith("hiltim_bookings_") and first.suffix == ".csv"
    assert first.read_text() == "one"


def test_create_storage_backend_selects_by_setting(tmp_path):
    memory = create_storage_backend(Settings(STORAGE_BACKEND="memory"))
    files = create_storage_backend(Settings(STORAGE_BACKEND="file", DATA_DIR=str(tmp_path)))

    assert isinstance(memory, MemoryStorage)
    assert isinstance(files, FileStorage)


def test_unknown_backend_is_a_configuration_error():
    config = Settings.model_construct(STORAGE_BACKEND="redis")

    with pytest.raises(ConfigurationError):
        create_storage_backend(config)


def test_settings_reject_unknown_backend():
    with pytest.raises(ValueError):
        Settings(STORAGE_BACKEND="redis")


def test_backup_writer_only_when_enabled(tmp_path):
    assert create_backup_writer(Settings(BACKUP_ON_SAVE=False)) is None
    assert isinstance(create_backup_writer(Settings(BACKUP_ON_SAVE=True, BACKUP_DIR=str(tmp_path))), BackupWriter)
