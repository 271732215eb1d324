"""Declarative attribute models built from loosely structured input documents."""

from reservoir.core.attributes import AttributeSpec, CoverageTracker
from reservoir.core.errors import CoercionError, MissingAttribute, ModelError, UnknownAttribute
from reservoir.core.models import AttributeInfo, Model, attribute, define_model, identity
from reservoir.core.registries import RegistryManager, default_registry

__all__ = [
    "AttributeInfo",
    "AttributeSpec",
    "CoercionError",
    "CoverageTracker",
    "MissingAttribute",
    "Model",
    "ModelError",
    "RegistryManager",
    "UnknownAttribute",
    "attribute",
    "default_registry",
    "define_model",
    "identity",
]
