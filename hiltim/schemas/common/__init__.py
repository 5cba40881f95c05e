from hiltim.schemas.common.base import BaseSchema
from hiltim.schemas.common.enums import BookingStatus, RoomType

__all__ = ["BaseSchema", "BookingStatus", "RoomType"]
