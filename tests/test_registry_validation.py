import pytest

from reservoir import Model, attribute, define_model, identity
from reservoir.core.attributes import AttributeRegistry, AttributeSpec
from reservoir.core.registries import NameRegistry, RegistryManager
from reservoir.core.registries.validators import RegistryValidator


def test_name_registry_rejects_duplicates():
    registry = NameRegistry[int]()
    registry.register("a", 1)
    with pytest.raises(ValueError):
        registry.register("a", 2)
    registry.register("a", 3, replace=True)
    assert registry.get("a") == 3


def test_name_registry_unknown_lists_available():
    registry = NameRegistry[int]()
    registry.register("a", 1)
    with pytest.raises(KeyError) as exc_info:
        registry.get("b")
    assert "Available: a" in str(exc_info.value)


def test_attribute_registry_keeps_first_position():
    registry = AttributeRegistry()
    registry.register(AttributeSpec(name="a"))
    registry.register(AttributeSpec(name="b"))
    registry.register(AttributeSpec(name="a", type="integer"))
    assert list(registry.names()) == ["a", "b"]
    assert registry.get("a").type == "integer"


def test_models_register_under_class_name(registry):
    class Widget(Model, registry=registry):
        id = identity()

    assert registry.get("Widget") is Widget
    assert list(registry.describe("Widget")) == ["id"]


def test_model_name_keyword(registry):
    class Widget(Model, registry=registry, model_name="widget"):
        id = identity()

    assert registry.get("widget") is Widget
    assert Widget.model_name == "widget"


def test_reregistering_replaces_and_resets_coverage(registry, caplog):
    class Widget(Model, registry=registry):
        id = identity()
        name = attribute()

    Widget(name="a").name
    assert registry.coverage.hits(Widget.coverage_key, "name") == 1
    first_key = Widget.coverage_key

    class Widget(Model, registry=registry):  # noqa: F811
        id = identity()

    assert registry.get("Widget") is Widget
    assert Widget.coverage_key == first_key
    assert (first_key, "name") not in registry.coverage.records
    assert any("Replacing model type Widget" in message for message in caplog.messages)


def _build_user(registry):
    class User(Model, registry=registry):
        id = identity()
        email = attribute(type="string")

    return User


def _build_other_user(registry):
    class User(Model, registry=registry):
        id = identity()
        email = attribute(type="string")

    return User


def test_same_model_name_keeps_separate_coverage(registry, caplog):
    First = _build_user(registry)
    Second = _build_other_user(registry)

    assert registry.get("User") is Second
    assert First.coverage_key != Second.coverage_key
    assert any("keeps its own coverage records" in message for message in caplog.messages)

    First(email="a@x").email
    First(email="b@x").email
    Second(email="c@x").email

    assert First.describe()["email"].coverage_hits == 2
    assert Second.describe()["email"].coverage_hits == 1
    assert registry.coverage.hits(First.coverage_key, "email") == 2


def test_define_model_builds_subclass(registry):
    Widget = define_model(
        "widget",
        {"id": {"type": "integer"}, "label": {"aliases": "title"}, "raw": None},
        identity="id",
        registry=registry,
    )
    widget = Widget(id="4", title="hello", raw={"x": 1})

    assert issubclass(Widget, Model)
    assert registry.get("widget") is Widget
    assert widget.identity == 4
    assert widget.label == "hello"
    assert widget.raw == {"x": 1}


def test_define_model_adds_missing_identity(registry):
    Widget = define_model("widget", {"name": {}}, identity="uuid", registry=registry)
    assert list(Widget.attribute_registry.names()) == ["uuid", "name"]
    assert Widget.attribute_registry.identity().name == "uuid"


class TestRegistryValidator:
    def test_clean_models_pass(self, registry):
        class Widget(Model, registry=registry):
            id = identity()
            name = attribute(aliases="title")

        assert RegistryValidator(registry).validate_all() == []
        registry.validate_references()

    def test_missing_identity(self, registry):
        class Widget(Model, registry=registry):
            name = attribute()

        errors = RegistryValidator(registry).validate_all()
        assert errors == ["Model Widget declares no identity attribute"]

    def test_several_identities(self, registry):
        class Widget(Model, registry=registry):
            id = identity()
            uuid = identity()

        errors = RegistryValidator(registry).validate_all()
        assert any("several identities: id, uuid" in e for e in errors)

    def test_spec_problems(self, registry):
        class Widget(Model, registry=registry):
            id = identity()
            name = attribute(aliases="name")
            owner = attribute(squash=["owner", ""], aliases="boss")

        errors = RegistryValidator(registry).validate_all()
        assert "Model Widget.name: alias repeats the attribute's own name" in errors
        assert "Model Widget.owner: squash path has an empty segment" in errors
        assert "Model Widget.owner: aliases are ignored because a squash path is set" in errors

        with pytest.raises(RuntimeError):
            registry.validate_references()


def test_fresh_managers_are_independent():
    first, second = RegistryManager(), RegistryManager()
    assert first.coverage is not second.coverage
