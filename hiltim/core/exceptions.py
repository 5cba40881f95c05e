"""
Custom Exceptions for the hotel booking backend

This module defines custom exception classes used throughout the application
for better error handling and debugging. Services convert these into
ServiceResult failures at their boundary.
"""

from typing import Any, Dict, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Standard error codes for the application"""
    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"

    # Persistence errors
    STORAGE_ERROR = "STORAGE_ERROR"
    MALFORMED_ROW = "MALFORMED_ROW"
    DUPLICATE_ENTRY = "DUPLICATE_ENTRY"

    # Domain lookups
    BOOKING_NOT_FOUND = "BOOKING_NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"

    # Configuration errors
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"


class BaseAppException(Exception):
    """
    Base exception class for all application exceptions.

    Provides consistent error handling across the application with
    structured error information.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format"""
        return {
            "error": {
                "message": self.message,
                "code": self.error_code.value,
                "details": self.details,
                "type": self.__class__.__name__
            }
        }

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}', error_code='{self.error_code.value}')"


# ========================================
# Lookups
# ========================================

class ResourceNotFoundError(BaseAppException):
    """Exception raised when a requested resource is not found"""

    def __init__(
        self,
        resource_type: str,
        resource_id: Optional[str] = None,
        error_code: ErrorCode = ErrorCode.RESOURCE_NOT_FOUND
    ):
        message = f"{resource_type} not found"
        if resource_id:
            message += f" (ID: {resource_id})"
        super().__init__(
            message=message,
            error_code=error_code,
            details={"resource_type": resource_type, "resource_id": resource_id},
            status_code=404
        )


class BookingNotFoundError(ResourceNotFoundError):
    """Exception raised when a booking is not found"""

    def __init__(self, booking_id: Optional[str] = None):
        super().__init__("Booking", booking_id, ErrorCode.BOOKING_NOT_FOUND)


class UserNotFoundError(ResourceNotFoundError):
    """Exception raised when a user account is not found"""

    def __init__(self, user_id: Optional[str] = None):
        super().__init__("User", user_id, ErrorCode.USER_NOT_FOUND)


# ========================================
# Persistence
# ========================================

class StorageError(BaseAppException):
    """Exception raised when the persisted blob cannot be read or written"""

    def __init__(self, message: str, storage: Optional[str] = None, key: Optional[str] = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.STORAGE_ERROR,
            details={"storage": storage, "key": key},
            status_code=500
        )


class CsvFormatError(BaseAppException):
    """Exception raised for a CSV row that cannot be decoded"""

    def __init__(self, message: str, row_number: Optional[int] = None):
        self.row_number = row_number
        super().__init__(
            message=message,
            error_code=ErrorCode.MALFORMED_ROW,
            details={"row_number": row_number},
            status_code=422
        )


class DuplicateEntryError(BaseAppException):
    """Exception raised for duplicate entries"""

    def __init__(self, field: str, value: Any):
        super().__init__(
            message=f"Duplicate entry for {field}: {value}",
            error_code=ErrorCode.DUPLICATE_ENTRY,
            details={"field": field, "value": value},
            status_code=409
        )


# ========================================
# Configuration
# ========================================

class ConfigurationError(BaseAppException):
    """Exception raised for configuration errors"""

    def __init__(self, message: str, config_key: Optional[str] = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.CONFIGURATION_ERROR,
            details={"config_key": config_key} if config_key else {},
            status_code=500
        )
