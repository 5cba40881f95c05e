"""
API v1 Router - aggregates the v1 endpoints.
"""

from fastapi import APIRouter

from hiltim.api.v1 import bookings, catalog, users

router = APIRouter(
    responses={
        404: {"description": "Not Found"},
        409: {"description": "Conflict"},
        422: {"description": "Validation Error"},
        500: {"description": "Internal Server Error"},
    }
)

router.include_router(bookings.router)
router.include_router(users.router)
router.include_router(catalog.router)
