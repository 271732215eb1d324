from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional

from pydantic import BaseModel, Field

from .attribute_spec import AttributeSpec

logger = logging.getLogger(__name__)


class AttributeRegistry(BaseModel):
    """Ordered mapping of attribute name to spec for one model type."""

    attributes: Dict[str, AttributeSpec] = Field(default_factory=dict)

    model_config = {"arbitrary_types_allowed": True}

    def register(self, spec: AttributeSpec) -> None:
        # Redeclaring replaces the spec but keeps the original position.
        if spec.name in self.attributes:
            logger.debug("Replacing attribute spec: %s", spec.name)
        self.attributes[spec.name] = spec

    def get(self, name: str) -> AttributeSpec:
        if name not in self.attributes:
            available = ", ".join(sorted(self.attributes.keys()))
            raise KeyError(f"Unknown attribute spec: {name}. Available: {available}")
        return self.attributes[name]

    def all(self) -> Iterable[AttributeSpec]:
        return self.attributes.values()

    def names(self) -> Iterable[str]:
        return list(self.attributes.keys())

    def identity(self) -> Optional[AttributeSpec]:
        for spec in self.attributes.values():
            if spec.identity:
                return spec
        return None

    def copy_for_subclass(self) -> "AttributeRegistry":
        return AttributeRegistry(attributes=dict(self.attributes))

    def __contains__(self, name: object) -> bool:
        return name in self.attributes

    def __len__(self) -> int:
        return len(self.attributes)
