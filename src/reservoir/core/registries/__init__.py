from .registry_base import NameRegistry
from .registry_manager import ModelTypeRegistry, RegistryManager, default_registry

__all__ = ["ModelTypeRegistry", "NameRegistry", "RegistryManager", "default_registry"]
