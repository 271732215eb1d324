"""Type coercion functions, one per declared attribute type.

Every coercer maps ``None`` to ``None``. Malformed input for the numeric and
time types raises :class:`CoercionError`; the other coercers are total.
"""

from __future__ import annotations

import datetime
import math
import sys
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, List, Optional

from dateutil.parser import ParserError
from dateutil.parser import parse as parse_datetime

from reservoir.core.errors import CoercionError

FALSY_STRINGS = ("false", "0")
TRUTHY_STRINGS = ("true", "1")

# Largest magnitude, in decimal digits, accepted from numeric text.
MAX_INTEGER_DIGITS = getattr(sys, "get_int_max_str_digits", lambda: 4300)() or 4300


def to_string(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    return str(value)


def to_time(value: Any) -> Optional[datetime.datetime]:
    """Parse a time value.

    Accepts datetimes (returned unchanged), dates (promoted to midnight),
    numeric epoch seconds (UTC) and any string dateutil understands.
    """
    if value is None:
        return None
    if isinstance(value, datetime.datetime):
        return value
    if isinstance(value, datetime.date):
        return datetime.datetime.combine(value, datetime.time())
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.datetime.fromtimestamp(value, tz=datetime.timezone.utc)
        except (OverflowError, OSError, ValueError) as exc:
            raise CoercionError("time", value) from exc
    if isinstance(value, str):
        try:
            return parse_datetime(value)
        except (ParserError, OverflowError, ValueError) as exc:
            raise CoercionError("time", value) from exc
    raise CoercionError("time", value)


def to_boolean(value: Any) -> Optional[bool]:
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float, Decimal)):
        return value != 0
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in FALSY_STRINGS:
            return False
        if lowered in TRUTHY_STRINGS:
            return True
    return bool(value)


def to_array(value: Any) -> Optional[List[Any]]:
    if value is None:
        return None
    if isinstance(value, list):
        return value
    if isinstance(value, tuple):
        return list(value)
    return [value]


def _decimal_to_int(value: Any, number: Decimal) -> int:
    if number.is_finite() and number.adjusted() >= MAX_INTEGER_DIGITS:
        raise CoercionError("integer", value)
    return int(number)


def to_integer(value: Any) -> Optional[int]:
    """Parse an integer, truncating toward zero ("12.7" -> 12)."""
    if value is None:
        return None
    if isinstance(value, int):
        return int(value)
    if isinstance(value, (bytes, bytearray)):
        value = bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, float) and not math.isfinite(value):
        raise CoercionError("integer", value)
    try:
        if isinstance(value, str):
            return _decimal_to_int(value, Decimal(value.strip()))
        if isinstance(value, Decimal):
            return _decimal_to_int(value, value)
        return int(value)
    except (InvalidOperation, ValueError, TypeError, OverflowError) as exc:
        raise CoercionError("integer", value) from exc



def to_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        if isinstance(value, str):
            return float(value.strip())
        return float(value)
    except (ValueError, TypeError, OverflowError) as exc:
        raise CoercionError("float", value) from exc


def identity(value: Any) -> Any:
    return value


COERCERS: Dict[str, Callable[[Any], Any]] = {
    "string": to_string,
    "time": to_time,
    "boolean": to_boolean,
    "array": to_array,
    "integer": to_integer,
    "float": to_float,
    "none": identity,
}


def coerce(type_name: str, value: Any) -> Any:
    """Coerce ``value`` to the declared attribute type."""
    try:
        coercer = COERCERS[type_name]
    except KeyError:
        available = ", ".join(sorted(COERCERS))
        raise KeyError(f"Unknown attribute type: {type_name}. Available: {available}") from None
    return coercer(value)


__all__ = [
    "COERCERS",
    "coerce",
    "identity",
    "to_array",
    "to_boolean",
    "to_float",
    "to_integer",
    "to_string",
    "to_time",
]
