from __future__ import annotations

"""Schema definitions for model YAML files."""

from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from reservoir.core.registries.registry_manager import RegistryManager
from reservoir.core.types import AttributeType
from reservoir.utils.module_loading import import_string

from .model import define_model


class AttributeDefinitionSpec(BaseModel):
    type: Optional[AttributeType] = None
    aliases: Union[str, List[str]] = Field(default_factory=list)
    squash: Union[str, List[str], None] = None
    parser: Optional[str] = None
    default: Any = None

    model_config = ConfigDict(extra="forbid")

    @field_validator("parser")
    @classmethod
    def _parser_path(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and ":" not in v and "." not in v:
            raise ValueError("parser must be an import path like 'package.module:function'")
        return v

    def build_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {
            "type": self.type,
            "aliases": self.aliases,
            "squash": self.squash,
            "default": self.default,
        }
        if self.parser is not None:
            options["parser"] = import_string(self.parser)
        return options


class ModelFileSpec(BaseModel):
    model: str
    identity: Optional[str] = None
    attributes: Dict[str, Optional[AttributeDefinitionSpec]] = Field(default_factory=dict)

    @field_validator("model")
    @classmethod
    def _non_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("model name must be non-empty")
        return v.strip()

    def build_model(
        self,
        registry: RegistryManager,
        sites: Optional[Mapping[str, Tuple[Optional[str], Optional[int]]]] = None,
    ) -> type:
        attributes = {
            name: spec.build_options() if spec is not None else {}
            for name, spec in self.attributes.items()
        }
        return define_model(self.model, attributes, identity=self.identity, registry=registry, sites=sites)


__all__ = ["AttributeDefinitionSpec", "ModelFileSpec"]
