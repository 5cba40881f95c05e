"""
Booking import/export service.

Export serializes the whole store in the persisted blob format; import
replaces the whole store from such a file, keeping valid rows and
reporting invalid ones as warnings.
"""

from datetime import date
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Set, Union

from pydantic import ValidationError as PydanticValidationError

from hiltim.repositories.booking.booking_repository import BookingRepository, next_booking_id
from hiltim.schemas.booking.booking_base import BookingRecord
from hiltim.schemas.booking.booking_response import BookingExport, BookingImportSummary
from hiltim.schemas.common.base import format_validation_errors
from hiltim.schemas.common.enums import BookingStatus
from hiltim.services.base.base_service import BaseService
from hiltim.services.base.service_result import ServiceResult
from hiltim.services.booking.booking_pricing_service import BookingPricingService
from hiltim.services.booking.booking_validation_service import BookingValidationService
from hiltim.utils.date_utils import format_date, today_utc

EXPORT_FILENAME_STEM = "hiltim_bookings"


class BookingImportExportService(BaseService[BookingRecord, BookingRepository]):
    """CSV import (replace-all) and export of the booking store."""

    def __init__(
        self,
        repository: BookingRepository,
        validator: Optional[BookingValidationService] = None,
        pricing: Optional[BookingPricingService] = None,
        clock: Optional[Callable[[], date]] = None,
    ):
        super().__init__(repository)
        self.clock = clock or today_utc
        self.validator = validator or BookingValidationService(clock=self.clock)
        self.pricing = pricing or BookingPricingService()

    # ==================== Export ====================

    def export_filename(self) -> str:
        return f"{EXPORT_FILENAME_STEM}_{format_date(self.clock())}.csv"

    def export_csv(self) -> ServiceResult[BookingExport]:
        """Serialize every booking in the persisted blob format."""
        try:
            bookings = self.repository.get_all()
            csv_data = self.repository.to_csv(bookings)
            export = BookingExport(
                filename=self.export_filename(),
                data=csv_data,
                count=len(bookings),
                size=len(csv_data.encode("utf-8")),
            )
            return ServiceResult.success(export, message=f"Exported {len(bookings)} bookings")
        except Exception as e:
            return self._handle_exception(e, "export bookings")

    def export_to_file(self, directory: Union[str, Path]) -> ServiceResult[Path]:
        """Write the export into ``directory`` and return the file path."""
        result = self.export_csv()
        if not result.is_success:
            return result

        export = result.data
        try:
            target_dir = Path(directory)
            target_dir.mkdir(parents=True, exist_ok=True)
            path = target_dir / export.filename
            with open(path, "w", encoding="utf-8", newline="") as f:
                f.write(export.data)
        except OSError as e:
            return self._handle_exception(e, "write booking export", str(directory))

        self._log_operation("Bookings exported", str(path), {"record_count": export.count})
        return ServiceResult.success(path, message=f"Exported {export.count} bookings to {path}")

    # ==================== Import ====================

    def import_csv(self, text: Optional[str]) -> ServiceResult[BookingImportSummary]:
        """
        Replace the whole store with the bookings in ``text``.

        Rows that fail decoding or validation are skipped and reported as
        "Row N: ..." warnings. The import fails only when no row is valid.
        """
        try:
            bookings: List[BookingRecord] = []
            pending_ids: List[int] = []
            warnings: List[str] = []
            seen_ids: Set[str] = set()
            row_count = 0

            for row in self.repository.codec.iter_rows(text):
                row_count += 1
                if not row.ok:
                    warnings.append(f"Row {row.row_number}: {row.error}")
                    continue

                validation = self.validator.validate(row.values, allow_past_check_in=True)
                if not validation.valid:
                    warnings.append(f"Row {row.row_number}: {'; '.join(validation.errors)}")
                    continue

                try:
                    booking = BookingRecord.model_validate(self._fill_defaults(row.values))
                except PydanticValidationError as e:
                    warnings.append(f"Row {row.row_number}: {'; '.join(format_validation_errors(e))}")
                    continue

                if booking.id:
                    if booking.id in seen_ids:
                        warnings.append(f"Row {row.row_number}: Duplicate booking id {booking.id}")
                        continue
                    seen_ids.add(booking.id)
                else:
                    pending_ids.append(len(bookings))
                bookings.append(booking)

            if row_count == 0:
                return ServiceResult.validation_failure(["No valid booking data found in CSV"])
            if not bookings:
                return ServiceResult.validation_failure(
                    warnings,
                    message="No valid bookings found",
                    metadata={"warnings": warnings},
                )

            # Rows without an id are numbered after the explicit ones
            for index in pending_ids:
                new_id = next_booking_id(seen_ids)
                seen_ids.add(new_id)
                bookings[index] = bookings[index].model_copy(update={"id": new_id})

            self.repository.save(bookings)

            summary = BookingImportSummary(
                imported=len(bookings),
                skipped=len(warnings),
                warnings=warnings,
            )
            self._log_operation(
                "Bookings imported",
                extra={"record_count": len(bookings), "skipped": len(warnings)},
            )
            return ServiceResult.success(
                summary,
                message=f"Successfully imported {len(bookings)} bookings",
                metadata={"warnings": warnings},
            )
        except Exception as e:
            return self._handle_exception(e, "import bookings")

    def import_file(self, path: Union[str, Path]) -> ServiceResult[BookingImportSummary]:
        """Read a CSV file and import it."""
        try:
            with open(path, "r", encoding="utf-8-sig", newline="") as f:
                text = f.read()
        except OSError as e:
            return self._handle_exception(e, "read booking import file", str(path))
        return self.import_csv(text)

    def _fill_defaults(self, values: Dict[str, Any]) -> Dict[str, Any]:
        """Complete a validated row: status, stamps and derived figures."""
        values = dict(values)
        today = self.clock()

        if not str(values.get("status") or "").strip():
            values["status"] = BookingStatus.CONFIRMED.value
        for stamp in ("dateCreated", "dateModified"):
            if not str(values.get(stamp) or "").strip():
                values[stamp] = today

        record = BookingRecord.model_validate(values)
        if not values.get("nights"):
            values["nights"] = self.pricing.nights(record.check_in, record.check_out)
        if not values.get("guests"):
            values["guests"] = self.pricing.guests(record.adults, record.children)
        if not values.get("totalPrice"):
            values["totalPrice"] = self.pricing.quote(record.room_type, record.check_in, record.check_out)
        return values
