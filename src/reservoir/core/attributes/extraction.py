"""Resolve, default and coerce the raw value feeding one attribute."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from reservoir.core.coercion import coerce
from reservoir.core.errors import CoercionError

from .attribute_spec import AttributeSpec
from .path import SquashPath, lookup

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resolution:
    """Outcome of locating an attribute's raw value in a document."""

    found: bool
    value: Any = None


def resolve(spec: AttributeSpec, document: Any) -> Resolution:
    """Locate the raw value for ``spec`` (squash > aliases > own name)."""
    if spec.squash:
        found, value = SquashPath.parse(spec.squash).walk(document)
        return Resolution(found, value)
    if spec.aliases:
        for alias in spec.aliases:
            found, value = lookup(document, alias)
            if found:
                return Resolution(True, value)
        return Resolution(False)
    found, value = lookup(document, spec.name)
    return Resolution(found, value)


def parse_value(spec: AttributeSpec, raw: Any, instance: Any) -> Any:
    """Apply the custom parser, or type coercion when there is none."""
    if spec.parser is not None:
        return spec.parser(raw, instance)
    try:
        return coerce(spec.type, raw)
    except CoercionError as exc:
        raise exc.for_attribute(spec.name) from exc


def extract(spec: AttributeSpec, document: Any, instance: Any, *, use_default: bool = True) -> Resolution:
    """Run resolution, default substitution and coercion for one attribute.

    With ``use_default`` off (partial merges), an unresolved attribute is
    reported as not found and left for the caller to keep as is.
    """
    resolution = resolve(spec, document)
    if resolution.found:
        raw = resolution.value
    elif use_default:
        raw = spec.resolve_default()
        if raw is None:
            return Resolution(True, None)
    else:
        return resolution
    logger.debug("Extracted %s from raw %r", spec.name, raw)
    return Resolution(True, parse_value(spec, raw, instance))
