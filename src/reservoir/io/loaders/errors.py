from __future__ import annotations

"""Errors raised while reading schema files and input documents."""

import json
import os
from typing import Any, Iterable, Mapping, Optional, Tuple

import yaml
from pydantic import ValidationError

# Validation locations are reported at most this many at a time.
MAX_REPORTED_ERRORS = 3


class LoaderError(RuntimeError):
    """A schema or document file could not be turned into models or a raw mapping.

    ``line`` is 1-based. When it is not given it is taken from the cause where
    the cause knows its position (YAML marks, JSON decode errors).
    """

    def __init__(
        self,
        file_path: str,
        message: str,
        *,
        line: Optional[int] = None,
        cause: Exception | None = None,
    ):
        self.file_path = file_path
        self.message = message
        self.cause = cause
        self.line = line if line is not None else _line_of(cause)
        super().__init__(self._build_message())

    @property
    def location(self) -> str:
        try:
            path = os.path.relpath(self.file_path)
        except ValueError:  # pragma: no cover - different drive on Windows
            path = self.file_path
        return f"{path}:{self.line}" if self.line is not None else path

    def _build_message(self) -> str:
        base = f"{self.message} ({self.location})"
        if isinstance(self.cause, ValidationError):
            return f"{base}: {describe_validation_errors(self.cause.errors())}"
        if isinstance(self.cause, yaml.MarkedYAMLError) and self.cause.problem:
            return f"{base}: {self.cause.problem}"
        if self.cause:
            return f"{base}: {self.cause}"
        return base

    def __str__(self) -> str:
        return self._build_message()


def _line_of(cause: Optional[Exception]) -> Optional[int]:
    if isinstance(cause, yaml.MarkedYAMLError) and cause.problem_mark is not None:
        return cause.problem_mark.line + 1
    if isinstance(cause, json.JSONDecodeError):
        return cause.lineno
    return None


def describe_validation_errors(errors: Iterable[Mapping[str, Any]]) -> str:
    """One ``location: message`` snippet per schema error, capped."""
    error_list = list(errors)
    snippets = [
        f"{_dotted(err.get('loc', ()))}: {err.get('msg') or err.get('type')}"
        for err in error_list[:MAX_REPORTED_ERRORS]
    ]
    if len(error_list) > MAX_REPORTED_ERRORS:
        snippets.append(f"... ({len(error_list) - MAX_REPORTED_ERRORS} more)")
    return "; ".join(snippets)


def first_attribute(errors: Iterable[Mapping[str, Any]]) -> Optional[str]:
    """Name of the first attribute an ``attributes.<name>...`` error points at."""
    for err in errors:
        loc: Tuple[Any, ...] = tuple(err.get("loc", ()))
        if len(loc) >= 2 and loc[0] == "attributes":
            return str(loc[1])
    return None


def _dotted(loc: Iterable[Any]) -> str:
    return ".".join(str(part) for part in loc) or "<root>"
