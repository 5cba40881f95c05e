"""
Storage port for the persisted record blobs.

Repositories only ever read and write whole CSV blobs by key, so the
backends are interchangeable:

- MemoryStorage: process-local dict (tests, throwaway sessions)
- LocalStorage: SQLAlchemy key/value table, the server-side stand-in for
  browser local storage
- FileStorage: one CSV file per key in a data directory

BackupWriter keeps timestamped copies of a blob after each save.
"""

import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Mapping, Optional

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from hiltim.config.settings import Settings
from hiltim.core.exceptions import ConfigurationError, StorageError
from hiltim.db.base import Base
from hiltim.db.session import create_session_factory, get_engine, session_scope
from hiltim.models.storage_entry import StorageEntry
from hiltim.utils.date_utils import timestamp_slug

logger = logging.getLogger(__name__)


class StorageBackend(ABC):
    """Whole-blob key/value persistence."""

    name: str = "abstract"

    @abstractmethod
    def read(self, key: str) -> Optional[str]:
        """Return the blob stored under key, or None if nothing is stored."""

    @abstractmethod
    def write(self, key: str, text: str) -> None:
        """Replace the blob stored under key."""

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove the blob; True if something was removed."""

    def exists(self, key: str) -> bool:
        return self.read(key) is not None

    def describe(self) -> str:
        return self.name


class MemoryStorage(StorageBackend):
    """In-process storage; contents are lost when the process exits."""

    name = "memory"

    def __init__(self, initial: Optional[Mapping[str, str]] = None):
        self._blobs: Dict[str, str] = dict(initial or {})

    def read(self, key: str) -> Optional[str]:
        return self._blobs.get(key)

    def write(self, key: str, text: str) -> None:
        self._blobs[key] = text

    def delete(self, key: str) -> bool:
        return self._blobs.pop(key, None) is not None


class LocalStorage(StorageBackend):
    """Blobs kept in the `local_storage` table of a SQLAlchemy database."""

    name = "local"

    def __init__(self, engine: Engine):
        self.engine = engine
        self._session_factory = create_session_factory(engine)
        try:
            Base.metadata.create_all(bind=engine, tables=[StorageEntry.__table__])
        except SQLAlchemyError as e:
            raise StorageError(f"Cannot initialise local storage: {e}", storage=self.name) from e

    @classmethod
    def from_url(cls, database_url: str, echo: bool = False) -> "LocalStorage":
        return cls(get_engine(database_url, echo))

    def read(self, key: str) -> Optional[str]:
        try:
            with session_scope(self._session_factory) as db:
                entry = db.get(StorageEntry, key)
                return entry.value if entry is not None else None
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to read '{key}': {e}", storage=self.name, key=key) from e

    def write(self, key: str, text: str) -> None:
        try:
            with session_scope(self._session_factory) as db:
                entry = db.get(StorageEntry, key)
                if entry is None:
                    db.add(StorageEntry(key=key, value=text))
                else:
                    entry.value = text
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to write '{key}': {e}", storage=self.name, key=key) from e

    def delete(self, key: str) -> bool:
        try:
            with session_scope(self._session_factory) as db:
                entry = db.get(StorageEntry, key)
                if entry is None:
                    return False
                db.delete(entry)
                return True
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to delete '{key}': {e}", storage=self.name, key=key) from e

    def describe(self) -> str:
        return f"{self.name} ({self.engine.url.render_as_string(hide_password=True)})"


class FileStorage(StorageBackend):
    """One CSV file per key inside a directory."""

    name = "file"

    def __init__(
        self,
        directory: str,
        filenames: Optional[Mapping[str, str]] = None,
        encoding: str = "utf-8",
    ):
        self.directory = Path(directory)
        self.filenames = dict(filenames or {})
        self.encoding = encoding

    def path_for(self, key: str) -> Path:
        return self.directory / self.filenames.get(key, f"{key}.csv")

    def read(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            with open(path, "r", encoding=self.encoding, newline="") as f:
                return f.read()
        except OSError as e:
            raise StorageError(f"Failed to read {path}: {e}", storage=self.name, key=key) from e

    def write(self, key: str, text: str) -> None:
        path = self.path_for(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            # Write beside the target then swap, so readers never see half a file
            fd, tmp_path = tempfile.mkstemp(dir=str(self.directory), suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding=self.encoding, newline="") as f:
                    f.write(text)
                os.replace(tmp_path, path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.remove(tmp_path)
                raise
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}", storage=self.name, key=key) from e

    def delete(self, key: str) -> bool:
        path = self.path_for(key)
        if not path.exists():
            return False
        try:
            path.unlink()
            return True
        except OSError as e:
            raise StorageError(f"Failed to delete {path}: {e}", storage=self.name, key=key) from e

    def describe(self) -> str:
        return f"{self.name} ({self.directory})"


class BackupWriter:
    """Writes a timestamped copy of a blob, like a downloaded backup file."""

    def __init__(self, directory: str, encoding: str = "utf-8"):
        self.directory = Path(directory)
        self.encoding = encoding

    def write(self, filename: str, text: str) -> Path:
        stem, _, suffix = filename.rpartition(".")
        if not stem:
            stem, suffix = filename, "csv"
        path = self.directory / f"{stem}_{timestamp_slug()}.{suffix}"
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding=self.encoding, newline="") as f:
                f.write(text)
        except OSError as e:
            raise StorageError(f"Failed to write backup {path}: {e}", storage="backup") from e
        logger.info(f"Database backup written: {path}")
        return path


def create_storage_backend(config: Settings) -> StorageBackend:
    """Build the storage backend selected by STORAGE_BACKEND."""
    backend = (config.STORAGE_BACKEND or "").lower()
    if backend == "memory":
        return MemoryStorage()
    if backend == "local":
        return LocalStorage.from_url(config.DATABASE_URL, config.DATABASE_ECHO)
    if backend == "file":
        return FileStorage(
            config.DATA_DIR,
            filenames={
                config.BOOKINGS_STORAGE_KEY: config.BOOKINGS_CSV_FILENAME,
                config.USERS_STORAGE_KEY: config.USERS_CSV_FILENAME,
            },
        )
    raise ConfigurationError(f"Unknown storage backend '{config.STORAGE_BACKEND}'", "STORAGE_BACKEND")


def create_backup_writer(config: Settings) -> Optional[BackupWriter]:
    """Backup writer when BACKUP_ON_SAVE is enabled."""
    return BackupWriter(config.BACKUP_DIR) if config.BACKUP_ON_SAVE else None
