# --- File: hiltim/schemas/common/base.py ---
"""
Base schema classes with common fields and configurations.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any, List, Union

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

__all__ = [
    "BaseSchema",
    "blank_to_none",
    "parse_optional_date",
    "decimal_to_number",
    "format_validation_errors",
    "format_error_details",
]


class BaseSchema(BaseModel):
    """
    Base schema with common Pydantic configuration.

    Field names are snake_case in Python and camelCase on the wire (CSV
    header, JSON bodies); both spellings are accepted on input.
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
        # Keep enums as Enum instances; `.value` is used when serializing.
        use_enum_values=False,
        str_strip_whitespace=True,
        validate_assignment=True,
        extra="ignore",
    )

    def to_wire(self) -> dict[str, Any]:
        """camelCase, JSON-safe dump (dates as ISO strings, amounts as numbers)."""
        return self.model_dump(by_alias=True, mode="json")


def blank_to_none(value: Any) -> Any:
    """Empty CSV cells arrive as '' and mean "not set"."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


def parse_optional_date(value: Any) -> Any:
    value = blank_to_none(value)
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str):
        value = value.strip()
        # Full ISO timestamps keep only their date part
        if len(value) > 10 and value[10] == "T":
            value = value[:10]
        return date.fromisoformat(value)
    return value


def format_validation_errors(exc: ValidationError) -> List[str]:
    """Flatten a pydantic ValidationError into human-readable lines."""
    return format_error_details(exc.errors())


def format_error_details(details: List[dict]) -> List[str]:
    """Same flattening for the error dicts FastAPI collects from a request."""
    messages = []
    for err in details:
        msg = str(err.get("msg", "invalid value")).removeprefix("Value error, ")
        loc = ".".join(str(part) for part in err.get("loc", ()))
        messages.append(f"Invalid {loc}: {msg}" if loc else msg)
    return messages


def decimal_to_number(value: Decimal) -> Union[int, float]:
    """JSON number for an amount; whole amounts stay integers."""
    if value == value.to_integral_value():
        return int(value)
    return float(value)
