"""
Base repository over a single CSV blob.

Keeps the authoritative ordered list of records for the running process
and mirrors it into a storage backend. Every mutation is a whole-list
rewrite: callers read with get_all(), build the new list and save() it.
"""

from typing import Callable, ClassVar, Generic, Iterable, Iterator, List, NamedTuple, Optional, Type, TypeVar

from pydantic import ValidationError as PydanticValidationError

from hiltim.config.logging import get_logger
from hiltim.core.exceptions import ResourceNotFoundError, StorageError
from hiltim.db.storage import BackupWriter, StorageBackend
from hiltim.schemas.common.base import BaseSchema, format_validation_errors
from hiltim.utils.csv_utils import CsvCodec

logger = get_logger(__name__)

ModelType = TypeVar("ModelType", bound=BaseSchema)


class ParsedRow(NamedTuple):
    """A data row decoded into a model, or the reason it could not be."""

    row_number: int
    record: Optional[BaseSchema]
    errors: List[str]


class CsvRecordRepository(Generic[ModelType]):
    """
    Ordered record list persisted as one CSV blob.

    Subclasses set ``model``, ``codec`` and ``resource_name`` and may
    override ``sample_records`` to seed an empty store.
    """

    model: ClassVar[Type[BaseSchema]]
    codec: ClassVar[CsvCodec]
    resource_name: ClassVar[str] = "Record"

    def __init__(
        self,
        storage: StorageBackend,
        storage_key: str,
        *,
        seed_sample_data: bool = True,
        backup: Optional[BackupWriter] = None,
        backup_filename: Optional[str] = None,
    ):
        """
        Initialize repository.

        Args:
            storage: Backend holding the persisted blob
            storage_key: Key of the blob inside the backend
            seed_sample_data: Seed sample records when no blob exists yet
            backup: Optional writer receiving a copy of every saved blob
            backup_filename: File name used for backups
        """
        self.storage = storage
        self.storage_key = storage_key
        self.seed_sample_data = seed_sample_data
        self.backup = backup
        self.backup_filename = backup_filename or f"{storage_key}.csv"
        self._records: List[ModelType] = []
        self._opened = False

    # ==================== Lifecycle ====================

    @property
    def is_open(self) -> bool:
        return self._opened

    def open(self) -> "CsvRecordRepository[ModelType]":
        """
        Load the persisted blob into memory.

        When nothing is stored yet the repository seeds itself (if enabled)
        and persists immediately, so the blob exists from first use on.
        """
        text = self.storage.read(self.storage_key)
        if text is None:
            records = self.sample_records() if self.seed_sample_data else []
            self._write(records)
            logger.info(
                f"{self.resource_name} store initialized with {len(records)} sample records",
                extra={"storage": self.storage.describe(), "record_count": len(records)},
            )
        else:
            records = self._decode(text)
            logger.info(
                f"Loaded {len(records)} {self.resource_name.lower()} records from storage",
                extra={"storage": self.storage.describe(), "record_count": len(records)},
            )

        self._records = records
        self._opened = True
        return self

    load = open

    def _ensure_open(self) -> None:
        if not self._opened:
            self.open()

    # ==================== Read ====================

    def get_all(self) -> List[ModelType]:
        """Current records in store order (a copy of the list)."""
        self._ensure_open()
        return list(self._records)

    def get(self, record_id: str) -> Optional[ModelType]:
        return next((r for r in self.get_all() if r.id == record_id), None)

    def index_of(self, record_id: str) -> int:
        """
        Position of a record in store order.

        Raises:
            ResourceNotFoundError: If no record has this id
        """
        for index, record in enumerate(self.get_all()):
            if record.id == record_id:
                return index
        raise self.not_found(record_id)

    def not_found(self, record_id: str) -> ResourceNotFoundError:
        return ResourceNotFoundError(self.resource_name, record_id)

    def filter(self, predicate: Callable[[ModelType], bool]) -> List[ModelType]:
        return [r for r in self.get_all() if predicate(r)]

    def count(self) -> int:
        return len(self.get_all())

    # ==================== Write ====================

    def save(self, records: Iterable[ModelType]) -> None:
        """
        Replace the whole store.

        The in-memory list is only swapped after the blob was written.

        Raises:
            StorageError: If the blob could not be persisted
        """
        records = list(records)
        self._write(records)
        self._records = records
        self._opened = True
        logger.info(
            f"Database saved: {len(records)} {self.resource_name.lower()} records written",
            extra={"record_count": len(records)},
        )

    def _write(self, records: List[ModelType]) -> None:
        try:
            text = self.to_csv(records)
            self.storage.write(self.storage_key, text)
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(
                f"Failed to persist {self.resource_name.lower()} records: {e}",
                storage=self.storage.name,
                key=self.storage_key,
            ) from e

        if self.backup is not None:
            # The stored blob is authoritative; a failed backup copy is only logged
            try:
                self.backup.write(self.backup_filename, text)
            except (StorageError, OSError) as e:
                logger.warning(
                    f"Backup copy of {self.resource_name.lower()} records failed: {e}",
                    extra={"operation": "backup"},
                )

    # ==================== CSV ====================

    def to_csv(self, records: Optional[Iterable[ModelType]] = None) -> str:
        """Serialize records (default: the whole store) to CSV text."""
        if records is None:
            records = self.get_all()
        return self.codec.encode(record.model_dump(by_alias=True) for record in records)

    def parse(self, text: Optional[str]) -> Iterator[ParsedRow]:
        """Decode CSV text into models row by row, reporting bad rows."""
        for row in self.codec.iter_rows(text):
            if not row.ok:
                yield ParsedRow(row.row_number, None, [row.error])
                continue
            try:
                yield ParsedRow(row.row_number, self.row_to_model(row.values), [])
            except PydanticValidationError as e:
                yield ParsedRow(row.row_number, None, format_validation_errors(e))

    def row_to_model(self, values: dict) -> ModelType:
        return self.model.model_validate(values)

    def _decode(self, text: str) -> List[ModelType]:
        records = []
        for parsed in self.parse(text):
            if parsed.record is None:
                logger.warning(
                    f"Skipping unreadable {self.resource_name.lower()} row {parsed.row_number}: "
                    f"{'; '.join(parsed.errors)}"
                )
                continue
            records.append(parsed.record)
        return records

    def sample_records(self) -> List[ModelType]:
        """Records written when the store is first created."""
        return []
