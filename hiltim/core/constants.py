from __future__ import annotations

"""
Core application constants.

These values centralize the hotel's catalogue and the booking-record
format so that pricing, validation, the CSV codec and the API all read
from one place:
- Room catalogue and nightly rates.
- Activity and amenity packages.
- Booking and user CSV column layouts.
"""

from decimal import Decimal
from typing import Any, Dict, List

# Booking identifiers look like BK001, BK002, ...
BOOKING_ID_PREFIX: str = "BK"
BOOKING_ID_WIDTH: int = 3

# Room catalogue, keyed by RoomType value
ROOM_CATALOG: Dict[str, Dict[str, Any]] = {
    "standard": {
        "name": "Standard Room",
        "nightly_rate": Decimal("150"),
        "max_occupancy": 2,
        "bed_type": "1 Queen Bed",
        "size": "350 sq ft",
    },
    "singleKing": {
        "name": "Single King Room",
        "nightly_rate": Decimal("220"),
        "max_occupancy": 2,
        "bed_type": "1 King Bed",
        "size": "450 sq ft",
    },
    "doubleKing": {
        "name": "Double King Suite",
        "nightly_rate": Decimal("380"),
        "max_occupancy": 4,
        "bed_type": "2 King Beds",
        "size": "750 sq ft",
    },
}

ACTIVITY_PACKAGES: List[Dict[str, Any]] = [
    {"name": "Diamond Head Adventure Package", "price": Decimal("189"), "duration": "Full Day"},
    {"name": "Ocean Explorer Package", "price": Decimal("299"), "duration": "Full Day"},
    {"name": "Cultural Immersion Package", "price": Decimal("249"), "duration": "Full Day"},
    {"name": "Mountain Explorer Hiking Package", "price": Decimal("225"), "duration": "Full Day"},
    {"name": "Ultimate Beach Day Package", "price": Decimal("199"), "duration": "Full Day"},
    {"name": "Pearl Harbor Historical Package", "price": Decimal("179"), "duration": "Full Day"},
]

AMENITY_PACKAGES: List[Dict[str, Any]] = [
    {"name": "Spa & Wellness Package", "price": Decimal("299"), "duration": "Full Day"},
    {"name": "Fitness & Recreation Package", "price": Decimal("199"), "duration": "Full Day"},
    {"name": "Dining & Culinary Package", "price": Decimal("349"), "duration": "Full Day"},
    {"name": "Business & Conference Package", "price": Decimal("449"), "duration": "Full Day"},
    {"name": "Romance & Couples Package", "price": Decimal("399"), "duration": "Full Day"},
    {"name": "Family Fun Package", "price": Decimal("279"), "duration": "Full Day"},
]

# Persisted booking blob: fixed column order
BOOKING_CSV_HEADERS: List[str] = [
    "id", "userId", "roomType", "checkIn", "checkOut", "adults", "children",
    "guests", "nights", "totalPrice", "status", "dateCreated", "dateModified",
    "firstName", "lastName", "email", "phone", "specialRequests",
    "activityPackages", "amenityPackages",
]
BOOKING_INT_FIELDS = ("adults", "children", "guests", "nights")
BOOKING_DECIMAL_FIELDS = ("totalPrice",)
BOOKING_LIST_FIELDS = ("activityPackages", "amenityPackages")

# Fields that must be present before any other booking check runs
BOOKING_REQUIRED_FIELDS: List[str] = [
    "checkIn", "checkOut", "adults", "roomType", "firstName", "lastName", "email",
]

# Persisted user blob
USER_CSV_HEADERS: List[str] = [
    "id", "email", "firstName", "lastName", "phone", "dateCreated", "preferences",
]

CSV_LIST_SEPARATOR: str = ";"
