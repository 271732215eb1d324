"""Error types raised by model definition, construction and assertions."""

from __future__ import annotations

from typing import Any, Iterable, List


class ModelError(Exception):
    """Base class for reservoir model errors."""


class MissingAttribute(ModelError, ValueError):
    """Raised by ``requires`` when named attributes hold no value."""

    def __init__(self, model_name: str, names: Iterable[str]):
        self.model_name = model_name
        self.names: List[str] = list(names)
        joined = ", ".join(self.names)
        super().__init__(f"{model_name} is missing required attribute(s): {joined}")


class UnknownAttribute(ModelError, KeyError):
    """Raised when an attribute name is not declared on the model type."""

    def __init__(self, model_name: str, name: str, available: Iterable[str]):
        self.model_name = model_name
        self.name = name
        self.available = sorted(available)
        self.message = (
            f"Unknown attribute '{name}' on {model_name}. Available: {', '.join(self.available)}"
        )
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class CoercionError(ModelError, ValueError):
    """Raised when a raw value cannot be coerced to the declared type."""

    def __init__(self, type_name: str, value: Any, *, attribute: str | None = None):
        self.type_name = type_name
        self.value = value
        self.attribute = attribute
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        target = f" for attribute '{self.attribute}'" if self.attribute else ""
        return f"Cannot coerce {self.value!r} to {self.type_name}{target}"

    def for_attribute(self, attribute: str) -> "CoercionError":
        return CoercionError(self.type_name, self.value, attribute=attribute)

    def __str__(self) -> str:
        return self._build_message()


__all__ = ["ModelError", "MissingAttribute", "UnknownAttribute", "CoercionError"]
