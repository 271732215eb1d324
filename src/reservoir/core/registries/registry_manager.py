from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, Type

from pydantic import BaseModel, Field

from reservoir.core.attributes import CoverageTracker

from .registry_base import NameRegistry

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from reservoir.core.models.introspection import AttributeInfo
    from reservoir.core.models.model import Model

logger = logging.getLogger(__name__)


class ModelTypeRegistry(NameRegistry[Any]):
    pass


class RegistryManager(BaseModel):
    """Owns the model types of one application and their coverage counters."""

    models: ModelTypeRegistry = Field(default_factory=ModelTypeRegistry)
    coverage: CoverageTracker = Field(default_factory=CoverageTracker)

    model_config = {"arbitrary_types_allowed": True}

    def register_model(self, model_cls: Type["Model"]) -> None:
        name = model_cls.model_name
        if name in self.models:
            previous = self.models.get(name)
            if previous.coverage_key == model_cls.coverage_key:
                logger.warning("Replacing model type %s; its coverage records are reset", name)
                self.coverage.forget(model_cls.coverage_key)
            else:
                logger.warning(
                    "Model name %s now refers to %s; %s keeps its own coverage records",
                    name,
                    model_cls.coverage_key,
                    previous.coverage_key,
                )
        self.models.register(name, model_cls, replace=True)
        logger.debug("Registered model type %s", name)

    def get(self, name: str) -> Type["Model"]:
        return self.models.get(name)

    def describe(self, name: str) -> Dict[str, "AttributeInfo"]:
        return self.get(name).describe()

    def validate_references(self) -> None:
        """Raise if any registered model type has definition problems."""
        from .validators import RegistryValidator  # local import to avoid cycles

        errors = RegistryValidator(self).validate_all()
        if errors:
            msg = "Registry validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            raise RuntimeError(msg)


default_registry = RegistryManager()
