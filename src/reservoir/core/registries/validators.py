from __future__ import annotations

from typing import List, Type

from reservoir.core.attributes import AttributeSpec
from reservoir.core.models.model import Model
from reservoir.core.registries.registry_manager import RegistryManager


class RegistryValidator:
    def __init__(self, registries: RegistryManager):
        self.registries = registries

    def validate_all(self) -> List[str]:
        """Return list of definition problems across registered model types."""
        errors: List[str] = []
        for model_cls in self.registries.models.all():
            errors.extend(self._validate_identity(model_cls))
            for spec in model_cls.attribute_registry.all():
                context = f"Model {model_cls.model_name}.{spec.name}"
                errors.extend(self._validate_spec(spec, context))
        return errors

    def _validate_identity(self, model_cls: Type[Model]) -> List[str]:
        identities = [spec.name for spec in model_cls.attribute_registry.all() if spec.identity]
        if not identities:
            return [f"Model {model_cls.model_name} declares no identity attribute"]
        if len(identities) > 1:
            return [f"Model {model_cls.model_name} declares several identities: {', '.join(identities)}"]
        return []

    def _validate_spec(self, spec: AttributeSpec, context: str) -> List[str]:
        errors: List[str] = []
        if spec.squash is not None and any(not segment for segment in spec.squash):
            errors.append(f"{context}: squash path has an empty segment")
        if spec.name in spec.aliases:
            errors.append(f"{context}: alias repeats the attribute's own name")
        if spec.squash is not None and spec.aliases:
            errors.append(f"{context}: aliases are ignored because a squash path is set")
        return errors
