from .attribute_registry import AttributeRegistry
from .attribute_spec import AttributeSpec
from .coverage import CoverageRecord, CoverageTracker
from .extraction import Resolution, extract, parse_value, resolve
from .path import SquashPath, lookup

__all__ = [
    "AttributeRegistry",
    "AttributeSpec",
    "CoverageRecord",
    "CoverageTracker",
    "Resolution",
    "SquashPath",
    "extract",
    "lookup",
    "parse_value",
    "resolve",
]
