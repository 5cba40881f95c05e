"""
User account endpoints.
"""

from fastapi import APIRouter, Depends, status

from hiltim.api import deps
from hiltim.api.responses import result_response
from hiltim.schemas.user.user_base import UserCreate, UserSignIn, UserUpdate
from hiltim.services.booking.booking_service import BookingService
from hiltim.services.users.user_account_service import UserAccountService

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def register_user(
    payload: UserCreate,
    service: UserAccountService = Depends(deps.get_user_account_service),
):
    return result_response(service.register(payload), status.HTTP_201_CREATED)


@router.post("/sign-in")
async def sign_in(
    payload: UserSignIn,
    service: UserAccountService = Depends(deps.get_user_account_service),
):
    return result_response(service.sign_in(payload.email))


@router.get("/{user_id}")
async def get_user(
    user_id: str,
    service: UserAccountService = Depends(deps.get_user_account_service),
):
    return result_response(service.get_user(user_id))


@router.patch("/{user_id}")
async def update_user(
    user_id: str,
    payload: UserUpdate,
    service: UserAccountService = Depends(deps.get_user_account_service),
):
    return result_response(service.update_profile(user_id, payload))


@router.get("/{user_id}/bookings")
async def get_user_bookings(
    user_id: str,
    service: BookingService = Depends(deps.get_booking_service),
):
    return result_response(service.get_user_bookings(user_id))
