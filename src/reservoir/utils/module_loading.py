import importlib
from typing import Any


def import_string(dotted_path: str) -> Any:
    """Import ``package.module:name`` or ``package.module.name`` and return ``name``."""
    if ":" in dotted_path:
        module_path, _, name = dotted_path.partition(":")
    else:
        module_path, _, name = dotted_path.rpartition(".")
    if not module_path or not name:
        raise ImportError(f"'{dotted_path}' is not a module path to an attribute")
    module = importlib.import_module(module_path)
    try:
        return getattr(module, name)
    except AttributeError as exc:
        raise ImportError(f"Module '{module_path}' has no attribute '{name}'") from exc
