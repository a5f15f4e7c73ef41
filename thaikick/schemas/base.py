"""
Field helpers shared by the request and response schemas.
"""
from datetime import time
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
import re
from typing import Any, Optional

from pydantic_core import core_schema

from ..core.constants import TIME_FORMAT

DATE_ONLY_REGEX = re.compile(r"^\d{4}-\d{2}-\d{2}$")
TIME_REGEX = re.compile(r"^(\d{1,2}):(\d{2})(?::\d{2})?$")

CENT = Decimal("0.01")


def ensure_date_only(value: object, field_name: str) -> object:
    """Reject datetimes passed where a calendar date is expected."""
    if not isinstance(value, str):
        return value
    candidate = value.strip()
    if DATE_ONLY_REGEX.fullmatch(candidate) is None:
        raise ValueError(f"{field_name} must be a YYYY-MM-DD date-only string")
    return candidate


def parse_time_string(value: object) -> object:
    """Slot times arrive as "HH:MM" (seconds tolerated and dropped)."""
    if not isinstance(value, str):
        return value
    match = TIME_REGEX.fullmatch(value.strip())
    if match is None:
        raise ValueError(f"Invalid time format: {value}. Expected HH:MM format.")
    return time(int(match.group(1)), int(match.group(2)))


def format_time(value: Optional[time]) -> Optional[str]:
    return None if value is None else value.strftime(TIME_FORMAT)


def _to_money(value: Any) -> Decimal:
    if isinstance(value, bool):
        raise ValueError("Booleans are not amounts")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"Not a monetary amount: {value!r}") from exc
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


class Money(Decimal):
    """Amount or percentage kept at two places, rendered as a JSON number."""

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any) -> core_schema.CoreSchema:
        accepted = core_schema.union_schema(
            [
                core_schema.is_instance_schema(Decimal),
                core_schema.int_schema(),
                core_schema.float_schema(),
                core_schema.str_schema(),
            ]
        )
        return core_schema.no_info_after_validator_function(
            _to_money,
            accepted,
            serialization=core_schema.plain_serializer_function_ser_schema(
                float, return_schema=core_schema.float_schema()
            ),
        )
