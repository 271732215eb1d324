"""Type definitions for the reservoir core."""

from typing import Any, Callable, Literal, Optional, Tuple, TypedDict

AttributeType = Literal["string", "time", "boolean", "array", "integer", "float", "none"]

ATTRIBUTE_TYPES: Tuple[str, ...] = ("string", "time", "boolean", "array", "integer", "float", "none")

# (raw_value, instance) -> coerced value
Parser = Callable[[Any, Any], Any]


class CoverageDict(TypedDict):
    """Plain-dict view of one coverage record."""

    model: str
    attribute: str
    file: Optional[str]
    line: Optional[int]
    hits: int
