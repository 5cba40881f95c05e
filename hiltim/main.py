from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from hiltim.api.v1.router import router as api_v1_router
from hiltim.config.logging import get_logger, setup_logging
from hiltim.config.settings import Settings, settings as default_settings
from hiltim.core.exceptions import BaseAppException
from hiltim.db.storage import create_backup_writer, create_storage_backend
from hiltim.repositories.booking.booking_repository import BookingRepository
from hiltim.repositories.user.user_repository import UserRepository
from hiltim.schemas.common.base import format_error_details
from hiltim.services.booking.booking_analytics_service import BookingAnalyticsService
from hiltim.services.booking.booking_import_export_service import BookingImportExportService
from hiltim.services.booking.booking_service import BookingService
from hiltim.services.users.user_account_service import UserAccountService

logger = get_logger(__name__)

# FastAPI prefixes request error locations with where the value came from
REQUEST_LOCATIONS = ("body", "query", "path", "header")


def init_services(app: FastAPI, config: Settings) -> None:
    """Open the record stores and attach repositories and services to app.state."""
    storage = create_storage_backend(config)
    backup = create_backup_writer(config)

    bookings = BookingRepository(
        storage,
        config.BOOKINGS_STORAGE_KEY,
        seed_sample_data=config.SEED_SAMPLE_DATA,
        backup=backup,
        backup_filename=config.BOOKINGS_CSV_FILENAME,
    ).open()
    users = UserRepository(
        storage,
        config.USERS_STORAGE_KEY,
        seed_sample_data=config.SEED_SAMPLE_DATA,
        backup=backup,
        backup_filename=config.USERS_CSV_FILENAME,
    ).open()

    app.state.storage = storage
    app.state.booking_repository = bookings
    app.state.user_repository = users
    app.state.booking_service = BookingService(bookings)
    app.state.booking_analytics_service = BookingAnalyticsService(bookings)
    app.state.booking_import_export_service = BookingImportExportService(bookings)
    app.state.user_account_service = UserAccountService(users)
    logger.info(f"Record stores opened on {storage.describe()}")


def _field_location(loc) -> tuple:
    loc = tuple(loc)
    if loc and loc[0] in REQUEST_LOCATIONS:
        return loc[1:]
    return loc


def create_app(config: Optional[Settings] = None) -> FastAPI:
    """
    Application factory for the FastAPI app.

    - Configures title, version, debug mode from Settings.
    - Registers CORS and the exception handlers (uniform failure body).
    - Includes the versioned API router under /api/v1.
    - Opens the record stores when the application starts.
    """
    config = config or default_settings
    setup_logging(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        init_services(app, config)
        yield

    app = FastAPI(
        lifespan=lifespan,
        title=config.APP_NAME,
        debug=config.DEBUG,
        version=config.API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    app.state.settings = config

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(BaseAppException)
    async def app_exception_handler(request: Request, exc: BaseAppException) -> JSONResponse:
        logger.error(f"Unhandled application error on {request.url.path}: {exc}")
        body = {
            "success": False,
            "message": exc.message,
            "errors": [exc.message],
            "code": exc.error_code.value,
            **exc.to_dict(),
        }
        return JSONResponse(status_code=exc.status_code, content=body)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        details = [{**err, "loc": _field_location(err.get("loc", ()))} for err in exc.errors()]
        errors = format_error_details(details)
        logger.warning(f"Rejected request to {request.url.path}: {'; '.join(errors)}")
        return JSONResponse(
            status_code=422,
            content={
                "success": False,
                "message": "Invalid request",
                "errors": errors,
                "code": "VALIDATION_ERROR",
            },
        )

    app.include_router(api_v1_router, prefix=config.API_V1_STR)

    @app.get("/health", tags=["health"])
    async def health() -> dict:
        return {"status": "ok", "storage": config.STORAGE_BACKEND}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=default_settings.HOST, port=default_settings.PORT)
