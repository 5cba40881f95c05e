"""
Booking validation service.

Checks a booking payload before it is accepted:
- Required fields (reported together in one message)
- Check-in not in the past, check-out strictly after check-in
- At least one adult, a known room type
"""

from dataclasses import dataclass, field as dataclass_field
from datetime import date
from typing import Any, Callable, List, Mapping, Optional, Union

from pydantic.alias_generators import to_camel

from hiltim.config.logging import get_logger
from hiltim.core.constants import BOOKING_REQUIRED_FIELDS
from hiltim.schemas.common.base import BaseSchema, parse_optional_date
from hiltim.schemas.common.enums import RoomType
from hiltim.utils.date_utils import today_utc

logger = get_logger(__name__)

BookingPayload = Union[Mapping[str, Any], BaseSchema]


@dataclass
class ValidationResult:
    """Outcome of a validation run."""

    valid: bool
    errors: List[str] = dataclass_field(default_factory=list)

    def __bool__(self) -> bool:
        return self.valid


class BookingValidationService:
    """
    Stateless validator for booking payloads.

    ``clock`` returns "today"; tests inject a fixed date.
    """

    def __init__(self, clock: Optional[Callable[[], date]] = None):
        self.clock = clock or today_utc

    def validate(self, data: BookingPayload, allow_past_check_in: bool = False) -> ValidationResult:
        """
        Validate a booking payload given with camelCase or snake_case keys.

        Missing required fields stop validation with a single aggregated
        error; otherwise every remaining check runs and errors accumulate.
        """
        values = self._normalize(data)

        missing = [name for name in BOOKING_REQUIRED_FIELDS if not values.get(name)]
        if missing:
            return ValidationResult(False, [f"Missing required fields: {', '.join(missing)}"])

        errors: List[str] = []

        check_in = self._parse_date(values["checkIn"], "checkIn", errors)
        check_out = self._parse_date(values["checkOut"], "checkOut", errors)

        if check_in is not None and not allow_past_check_in and check_in < self.clock():
            errors.append("Check-in date cannot be in the past")

        if check_in is not None and check_out is not None and check_out <= check_in:
            errors.append("Check-out date must be after check-in date")

        try:
            if int(values["adults"]) < 1:
                errors.append("At least one adult is required")
        except (TypeError, ValueError):
            errors.append("Invalid adults")

        children = values.get("children")
        if children not in (None, ""):
            try:
                if int(children) < 0:
                    errors.append("Children cannot be negative")
            except (TypeError, ValueError):
                errors.append("Invalid children")

        if RoomType.parse(values["roomType"]) is None:
            errors.append(f"Unknown room type '{values['roomType']}'")

        if errors:
            logger.debug(f"Booking validation failed: {errors}")
        return ValidationResult(not errors, errors)

    @staticmethod
    def _normalize(data: BookingPayload) -> dict:
        if isinstance(data, BaseSchema):
            return data.model_dump(by_alias=True, exclude_none=True)
        # snake_case keys are accepted alongside the wire names
        return {(to_camel(key) if "_" in key else key): value for key, value in data.items()}

    @staticmethod
    def _parse_date(value: Any, name: str, errors: List[str]) -> Optional[date]:
        try:
            parsed = parse_optional_date(value)
        except (TypeError, ValueError):
            parsed = None
        if not isinstance(parsed, date):
            errors.append(f"Invalid {name}")
            return None
        return parsed

