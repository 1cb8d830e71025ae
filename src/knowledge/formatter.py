"""
Field value formatting for the business data knowledge base.

Spreadsheet exports store dates as day-count serials; any numeric value in a
date or deadline column is rendered as an ISO date with the serial echoed.
"""

import math
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

FieldValue = Union[str, int, float, None]

NOT_AVAILABLE = "N/A"
SERIAL_EPOCH = datetime(1899, 12, 30, tzinfo=timezone.utc)
DATE_FIELD_MARKERS = ("date", "deadline")


def is_number(value) -> bool:
    # bool is an int subclass but never a serial
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def to_text(value: FieldValue) -> str:
    """Natural string form of a field value; missing values become N/A."""
    if value is None:
        return NOT_AVAILABLE
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def serial_to_iso(serial: Union[int, float]) -> Optional[str]:
    """Convert a day-count serial to YYYY-MM-DD, or None if out of range."""
    if not is_number(serial) or not math.isfinite(serial):
        return None
    try:
        converted = SERIAL_EPOCH + timedelta(milliseconds=serial * 86_400_000)
    except (OverflowError, ValueError):
        return None
    return converted.date().isoformat()


def is_date_field(field_name: str) -> bool:
    lowered = field_name.lower()
    return any(marker in lowered for marker in DATE_FIELD_MARKERS)


def format_value(field_name: str, raw_value: FieldValue) -> str:
    if is_number(raw_value) and is_date_field(field_name):
        iso = serial_to_iso(raw_value)
        if iso is None:
            return NOT_AVAILABLE
        return f"{iso} (serial: {to_text(raw_value)})"

    if raw_value is None or raw_value == "":
        return NOT_AVAILABLE
    return to_text(raw_value)
