"""Declarative model base class.

Attributes are declared once per model type, either in the class body::

    class Widget(Model):
        id = identity()
        name = attribute(type="string")
        owner_id = attribute(type="integer", squash=["owner", "id"])

or with explicit registration calls after the class exists::

    Widget.define_attribute("label", aliases=["title", "caption"])

Instances are built from loosely structured input documents; every declared
attribute is resolved, defaulted and coerced, and everything else is dropped.
"""

from __future__ import annotations

import copy
import inspect
import keyword
import logging
import types
from typing import Any, ClassVar, Dict, Mapping, Optional, Tuple

from reservoir.core.attributes import AttributeRegistry, AttributeSpec, extract
from reservoir.core.errors import MissingAttribute, UnknownAttribute
from reservoir.core.registries.registry_manager import RegistryManager, default_registry

from .introspection import AttributeInfo

logger = logging.getLogger(__name__)

DefinitionSite = Tuple[Optional[str], Optional[int]]


def _definition_site() -> DefinitionSite:
    """File and line of the first caller outside this module."""
    frame = inspect.currentframe()
    try:
        while frame is not None and frame.f_code.co_filename == __file__:
            frame = frame.f_back
        if frame is None:
            return None, None
        return frame.f_code.co_filename, frame.f_lineno
    finally:
        del frame


class AttributeDeclaration:
    """Class-body placeholder turned into a registered attribute at class creation."""

    def __init__(self, options: Dict[str, Any], *, identity: bool = False):
        self.options = options
        self.identity = identity
        self.site = _definition_site()


def attribute(**options: Any) -> Any:
    return AttributeDeclaration(options)


def identity(**options: Any) -> Any:
    return AttributeDeclaration(options, identity=True)


class AttributeDescriptor:
    """Getter/setter pair installed on the model class for each attribute."""

    def __init__(self, name: str):
        self.name = name

    def __get__(self, instance: Optional["Model"], owner: type) -> Any:
        if instance is None:
            return self
        return instance.read_attribute(self.name)

    def __set__(self, instance: "Model", value: Any) -> None:
        instance.write_attribute(self.name, value)

    def __repr__(self) -> str:
        return f"<attribute {self.name}>"


class Model:
    model_name: ClassVar[str] = "Model"
    coverage_key: ClassVar[str] = "reservoir.Model"
    registry: ClassVar[RegistryManager] = default_registry
    attribute_registry: ClassVar[AttributeRegistry] = AttributeRegistry()
    identity_name: ClassVar[Optional[str]] = None

    def __init_subclass__(
        cls,
        *,
        registry: Optional[RegistryManager] = None,
        model_name: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        super().__init_subclass__(**kwargs)
        cls.model_name = model_name or cls.__name__
        cls.coverage_key = f"{cls.__module__}.{cls.__qualname__}"
        if registry is not None:
            cls.registry = registry
        cls.attribute_registry = cls.attribute_registry.copy_for_subclass()
        cls.registry.register_model(cls)

        for spec in cls.attribute_registry.all():
            cls.registry.coverage.register(
                cls.coverage_key, spec.name, spec.definition_file, spec.definition_line
            )

        declarations = [
            (name, value) for name, value in vars(cls).items() if isinstance(value, AttributeDeclaration)
        ]
        for name, declaration in declarations:
            delattr(cls, name)
            cls.define_attribute(
                name,
                _identity=declaration.identity,
                _site=declaration.site,
                **declaration.options,
            )

    @classmethod
    def define_attribute(
        cls,
        name: str,
        *,
        type: Optional[str] = None,
        aliases: Any = (),
        squash: Any = None,
        parser: Any = None,
        default: Any = None,
        _identity: bool = False,
        _site: Optional[DefinitionSite] = None,
    ) -> AttributeSpec:
        """Register an attribute on this model type and install its accessor."""
        if cls is Model:
            raise TypeError("Attributes must be declared on a Model subclass")
        cls._check_attribute_name(name)

        file, line = _site if _site is not None else _definition_site()
        spec = AttributeSpec(
            name=name,
            type=type,
            aliases=aliases,
            squash=squash,
            parser=parser,
            default=default,
            identity=_identity,
            definition_file=file,
            definition_line=line,
        )
        cls.attribute_registry.register(spec)
        setattr(cls, name, AttributeDescriptor(name))
        cls.registry.coverage.register(cls.coverage_key, name, file, line)
        if _identity:
            cls.identity_name = name
        elif name == cls.identity_name:
            cls.identity_name = None
        logger.debug("Defined attribute %s.%s (type=%s) at %s:%s", cls.model_name, name, spec.type, file, line)
        return spec

    @classmethod
    def define_identity(cls, name: str, **options: Any) -> AttributeSpec:
        return cls.define_attribute(name, _identity=True, **options)

    @classmethod
    def _check_attribute_name(cls, name: str) -> None:
        if not isinstance(name, str) or not name.isidentifier() or keyword.iskeyword(name):
            raise ValueError(f"Invalid attribute name: {name!r}")
        if hasattr(Model, name):
            raise ValueError(f"Attribute name '{name}' would shadow the Model API")
        existing = inspect.getattr_static(cls, name, None)
        if existing is not None and not isinstance(existing, (AttributeDescriptor, AttributeDeclaration)):
            raise ValueError(f"Attribute name '{name}' would shadow {cls.__name__}.{name}")

    @classmethod
    def describe(cls) -> Dict[str, AttributeInfo]:
        """Introspection view of every attribute, in declaration order."""
        info: Dict[str, AttributeInfo] = {}
        for spec in cls.attribute_registry.all():
            record = cls.registry.coverage.records.get((cls.coverage_key, spec.name))
            info[spec.name] = AttributeInfo.build(spec, record)
        return info

    def __init__(self, raw: Optional[Mapping[str, Any]] = None, /, **kwargs: Any):
        if raw is None:
            raw = {}
        if not isinstance(raw, Mapping):
            raise TypeError(f"{self.model_name} expects a mapping, got {type(raw).__name__}")
        document = {**raw, **kwargs}
        self._attributes: Dict[str, Any] = {}
        for spec in self.attribute_registry.all():
            self._attributes[spec.name] = extract(spec, document, self).value

    def merge_attributes(self, raw: Mapping[str, Any]) -> "Model":
        """Overwrite only the attributes ``raw`` supplies; keep the rest."""
        if not isinstance(raw, Mapping):
            raise TypeError(f"{self.model_name} expects a mapping, got {type(raw).__name__}")
        for spec in self.attribute_registry.all():
            resolution = extract(spec, raw, self, use_default=False)
            if resolution.found:
                self._attributes[spec.name] = resolution.value
        return self

    def _check_known(self, name: str) -> None:
        if name not in self.attribute_registry:
            raise UnknownAttribute(self.model_name, name, self.attribute_registry.names())

    def read_attribute(self, name: str) -> Any:
        self._check_known(name)
        value = self._attributes.get(name)
        self.registry.coverage.hit(self.coverage_key, name)
        return value

    def write_attribute(self, name: str, value: Any) -> None:
        self._check_known(name)
        self._attributes[name] = value

    def requires(self, *names: str) -> Dict[str, Any]:
        """Return the named values, raising MissingAttribute if any is None."""
        for name in names:
            self._check_known(name)
        values = {name: self._attributes.get(name) for name in names}
        missing = [name for name, value in values.items() if value is None]
        if missing:
            raise MissingAttribute(self.model_name, missing)
        return values

    def requires_one(self, *names: str) -> Dict[str, Any]:
        """Like ``requires``, but one non-None value among ``names`` is enough."""
        for name in names:
            self._check_known(name)
        values = {name: self._attributes.get(name) for name in names}
        if names and all(value is None for value in values.values()):
            raise MissingAttribute(self.model_name, names)
        return values

    @property
    def attributes(self) -> Dict[str, Any]:
        return dict(self._attributes)

    def dump(self) -> Dict[str, Any]:
        return copy.deepcopy(self._attributes)

    @property
    def identity(self) -> Any:
        if self.identity_name is None:
            return None
        return self.read_attribute(self.identity_name)

    @property
    def new_record(self) -> bool:
        if self.identity_name is None:
            return True
        return self._attributes.get(self.identity_name) is None

    def duplicate(self) -> "Model":
        return self.__deepcopy__({})

    def __copy__(self) -> "Model":
        return self.duplicate()

    def __deepcopy__(self, memo: Dict[int, Any]) -> "Model":
        clone = type(self).__new__(type(self))
        memo[id(self)] = clone
        clone._attributes = copy.deepcopy(self._attributes, memo)
        return clone

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Model):
            return NotImplemented
        return type(self) is type(other) and self._attributes == other._attributes

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        body = ", ".join(f"{name}={value!r}" for name, value in self._attributes.items())
        return f"<{self.model_name} {body}>" if body else f"<{self.model_name}>"


def define_model(
    name: str,
    attributes: Mapping[str, Optional[Mapping[str, Any]]],
    *,
    identity: Optional[str] = None,
    registry: Optional[RegistryManager] = None,
    sites: Optional[Mapping[str, DefinitionSite]] = None,
) -> type:
    """Build and register a Model subclass at runtime."""
    sites = sites or {}
    cls = types.new_class(
        name,
        (Model,),
        {"registry": registry or default_registry, "model_name": name},
        lambda ns: ns.update({"__module__": __name__}),
    )
    if identity is not None and identity not in attributes:
        cls.define_identity(identity, _site=sites.get(identity))
    for attr_name, options in attributes.items():
        cls.define_attribute(
            attr_name,
            _identity=attr_name == identity,
            _site=sites.get(attr_name),
            **dict(options or {}),
        )
    logger.debug("Built model type %s with %d attribute(s)", name, len(cls.attribute_registry))
    return cls
