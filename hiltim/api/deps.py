"""
FastAPI dependency providers.

Repositories and services are built once at application startup and kept
on ``app.state``; these callables hand them to route functions.

Example usage in a router:
    from fastapi import Depends, APIRouter
    from hiltim.api import deps

    router = APIRouter()

    @router.get("/bookings")
    async def list_bookings(service = Depends(deps.get_booking_service)):
        ...
"""

from fastapi import Request

from hiltim.services.booking.booking_analytics_service import BookingAnalyticsService
from hiltim.services.booking.booking_import_export_service import BookingImportExportService
from hiltim.services.booking.booking_service import BookingService
from hiltim.services.users.user_account_service import UserAccountService


def get_booking_service(request: Request) -> BookingService:
    return request.app.state.booking_service


def get_booking_analytics_service(request: Request) -> BookingAnalyticsService:
    return request.app.state.booking_analytics_service


def get_booking_import_export_service(request: Request) -> BookingImportExportService:
    return request.app.state.booking_import_export_service


def get_user_account_service(request: Request) -> UserAccountService:
    return request.app.state.user_account_service
