"""
Base service class providing common functionality for all services.
"""

from abc import ABC
from typing import Any, Dict, Generic, Optional, TypeVar

from pydantic import ValidationError

from hiltim.config.logging import get_logger
from hiltim.core.exceptions import (
    CsvFormatError,
    DuplicateEntryError,
    ResourceNotFoundError,
    StorageError,
)
from hiltim.repositories.base.base_repository import CsvRecordRepository
from hiltim.schemas.common.base import format_validation_errors
from hiltim.services.base.service_result import (
    ErrorCode,
    ErrorSeverity,
    ServiceError,
    ServiceResult,
)

TModel = TypeVar("TModel")
TRepo = TypeVar("TRepo", bound=CsvRecordRepository)


class BaseService(ABC, Generic[TModel, TRepo]):
    """
    Base service with common behaviors:
    - Shared logger and repository
    - Consistent error handling via ServiceResult
    - Lookup by id with a not-found result
    """

    def __init__(self, repository: TRepo):
        """
        Initialize base service.

        Args:
            repository: Record repository backing this service
        """
        self.repository: TRepo = repository
        self._logger = get_logger(f"{self.__class__.__module__}.{self.__class__.__name__}")

    # -------------------------------------------------------------------------
    # Exception & Error Handling
    # -------------------------------------------------------------------------

    def _handle_exception(
        self,
        exception: Exception,
        operation: str,
        entity_ref: Optional[Any] = None,
        severity: ErrorSeverity = ErrorSeverity.CRITICAL,
        additional_context: Optional[Dict[str, Any]] = None,
    ) -> ServiceResult:
        """
        Convert exception to a ServiceResult failure with logging.

        Args:
            exception: The caught exception
            operation: Description of the operation that failed
            entity_ref: Reference to the entity involved (ID, email, ...)
            severity: Error severity level
            additional_context: Extra context for logging

        Returns:
            ServiceResult with failure status and error details
        """
        if isinstance(exception, ValidationError):
            errors = format_validation_errors(exception)
            self._logger.warning(f"Validation failed during {operation}: {'; '.join(errors)}")
            return ServiceResult.validation_failure(errors)

        context = {
            "operation": operation,
            "entity_ref": str(entity_ref) if entity_ref is not None else None,
            "exception_type": type(exception).__name__,
        }
        if additional_context:
            context.update(additional_context)

        self._logger.error(
            f"Error during {operation}: {exception}",
            exc_info=True,
            extra=context,
        )

        error_code = self._map_exception_to_error_code(exception)
        message = exception.message if isinstance(exception, (StorageError, CsvFormatError)) else str(exception)

        return ServiceResult.failure(
            ServiceError(
                code=error_code,
                message=f"Failed to {operation}: {message}",
                details={
                    "entity_ref": str(entity_ref) if entity_ref is not None else None,
                    "context": additional_context,
                },
                severity=severity,
            )
        )

    def _map_exception_to_error_code(self, exception: Exception) -> ErrorCode:
        """Map exception types to result error codes."""
        exception_mapping = {
            StorageError: ErrorCode.STORAGE_ERROR,
            CsvFormatError: ErrorCode.INVALID_FORMAT,
            ResourceNotFoundError: ErrorCode.NOT_FOUND,
            DuplicateEntryError: ErrorCode.CONFLICT,
            ValueError: ErrorCode.VALIDATION_ERROR,
            OSError: ErrorCode.STORAGE_ERROR,
        }

        for exc_type, error_code in exception_mapping.items():
            if isinstance(exception, exc_type):
                return error_code

        return ErrorCode.INTERNAL_ERROR

    # -------------------------------------------------------------------------
    # Common lookups
    # -------------------------------------------------------------------------

    def get_by_id(self, entity_id: str) -> ServiceResult[TModel]:
        """
        Retrieve a record by id.

        Returns:
            ServiceResult containing the record, or a NOT_FOUND failure
        """
        try:
            entity = self.repository.get(entity_id)
            if entity is None:
                return ServiceResult.not_found(self.repository.resource_name, entity_id)
            return ServiceResult.success(entity)
        except Exception as e:
            return self._handle_exception(e, f"get {self.repository.resource_name.lower()}", entity_id)

    def _log_operation(
        self,
        operation: str,
        entity_ref: Optional[Any] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Log a completed mutation in a standard format."""
        context = {"operation": operation}
        if extra:
            context.update(extra)
        message = f"{operation}: {entity_ref}" if entity_ref is not None else operation
        self._logger.info(message, extra=context)
