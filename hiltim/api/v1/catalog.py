"""
Read-only room and package catalogue.
"""

from fastapi import APIRouter
from fastapi.encoders import jsonable_encoder

from hiltim.core.constants import ACTIVITY_PACKAGES, AMENITY_PACKAGES, ROOM_CATALOG

router = APIRouter(prefix="/catalog", tags=["catalog"])


@router.get("/rooms")
async def list_rooms():
    rooms = [
        {
            "roomType": room_type,
            "name": room["name"],
            "nightlyRate": room["nightly_rate"],
            "maxOccupancy": room["max_occupancy"],
            "bedType": room["bed_type"],
            "size": room["size"],
        }
        for room_type, room in ROOM_CATALOG.items()
    ]
    return {"success": True, "data": jsonable_encoder(rooms)}


@router.get("/packages")
async def list_packages():
    return {
        "success": True,
        "data": jsonable_encoder({"activities": ACTIVITY_PACKAGES, "amenities": AMENITY_PACKAGES}),
    }
