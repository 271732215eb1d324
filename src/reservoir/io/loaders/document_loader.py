from __future__ import annotations

import json
import os
from typing import Any, Dict

import yaml

from reservoir.io.loaders.errors import LoaderError
from reservoir.utils.logging import log_calls


@log_calls()
def load_document(path: str) -> Dict[str, Any]:
    """Read a raw input document from a JSON or YAML file."""
    if not os.path.exists(path):
        raise LoaderError(path, "Document not found")
    ext = os.path.splitext(path)[1].lower()
    try:
        with open(path, "r", encoding="utf-8") as f:
            if ext == ".json":
                data = json.load(f)
            elif ext in (".yaml", ".yml"):
                data = yaml.safe_load(f)
            else:
                raise LoaderError(path, f"Unsupported document format '{ext}'")
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise LoaderError(path, "Malformed document", cause=exc) from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise LoaderError(path, f"Document root must be a mapping, got {type(data).__name__}")
    return data
