from hiltim.services.booking.booking_analytics_service import BookingAnalyticsService
from hiltim.services.booking.booking_import_export_service import BookingImportExportService
from hiltim.services.booking.booking_pricing_service import BookingPricingService
from hiltim.services.booking.booking_service import BookingService
from hiltim.services.booking.booking_validation_service import (
    BookingValidationService,
    ValidationResult,
)

__all__ = [
    "BookingAnalyticsService",
    "BookingImportExportService",
    "BookingPricingService",
    "BookingService",
    "BookingValidationService",
    "ValidationResult",
]
