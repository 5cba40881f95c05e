"""
Booking endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status

from hiltim.api import deps
from hiltim.api.responses import result_response
from hiltim.schemas.booking.booking_base import BookingCreate, BookingUpdate
from hiltim.services.booking.booking_analytics_service import BookingAnalyticsService
from hiltim.services.booking.booking_import_export_service import BookingImportExportService
from hiltim.services.booking.booking_service import BookingService

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_booking(
    payload: BookingCreate,
    service: BookingService = Depends(deps.get_booking_service),
):
    return result_response(service.create_booking(payload), status.HTTP_201_CREATED)


@router.get("")
async def list_bookings(
    status_filter: Optional[str] = Query(None, alias="status"),
    service: BookingService = Depends(deps.get_booking_service),
):
    if status_filter:
        return result_response(service.get_bookings_by_status(status_filter))
    return result_response(service.list_bookings())


@router.get("/stats")
async def booking_stats(
    service: BookingAnalyticsService = Depends(deps.get_booking_analytics_service),
):
    return result_response(service.get_stats())


@router.get("/export")
async def export_bookings(
    download: bool = Query(False, description="Return the CSV file itself"),
    service: BookingImportExportService = Depends(deps.get_booking_import_export_service),
):
    result = service.export_csv()
    if not download or not result.is_success:
        return result_response(result)
    export = result.data
    return Response(
        content=export.data,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{export.filename}"'},
    )


@router.post("/import")
async def import_bookings(
    request: Request,
    service: BookingImportExportService = Depends(deps.get_booking_import_export_service),
):
    """Replace every booking with the rows of a CSV body."""
    body = await request.body()
    return result_response(service.import_csv(body.decode("utf-8-sig")))


@router.get("/{booking_id}")
async def get_booking(
    booking_id: str,
    service: BookingService = Depends(deps.get_booking_service),
):
    return result_response(service.get_booking(booking_id))


@router.patch("/{booking_id}")
async def update_booking(
    booking_id: str,
    payload: BookingUpdate,
    service: BookingService = Depends(deps.get_booking_service),
):
    return result_response(service.update_booking(booking_id, payload))


@router.post("/{booking_id}/cancel")
async def cancel_booking(
    booking_id: str,
    service: BookingService = Depends(deps.get_booking_service),
):
    return result_response(service.cancel_booking(booking_id))


@router.post("/{booking_id}/reactivate")
async def reactivate_booking(
    booking_id: str,
    service: BookingService = Depends(deps.get_booking_service),
):
    return result_response(service.reactivate_booking(booking_id))


@router.delete("/{booking_id}")
async def delete_booking(
    booking_id: str,
    service: BookingService = Depends(deps.get_booking_service),
):
    return result_response(service.delete_booking(booking_id))
