from .introspection import AttributeInfo
from .model import AttributeDescriptor, Model, attribute, define_model, identity

__all__ = ["AttributeDescriptor", "AttributeInfo", "Model", "attribute", "define_model", "identity"]
