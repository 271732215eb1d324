from __future__ import annotations

import glob
import logging
import os
from typing import Any, Dict, List, Optional, Tuple

import yaml
from pydantic import ValidationError

from reservoir.core.models.file_spec import ModelFileSpec
from reservoir.core.registries.registry_manager import RegistryManager
from reservoir.io.loaders.errors import LoaderError, first_attribute
from reservoir.utils.logging import log_calls

logger = logging.getLogger(__name__)

Site = Tuple[Optional[str], Optional[int]]


def _read_schema(path: str) -> Tuple[Dict[str, Any], Dict[str, Site]]:
    """Parse a schema file, returning its data and the line of each attribute key."""
    with open(path, "r", encoding="utf-8") as f:
        text = f.read()
    data = yaml.safe_load(text) or {}
    return data, _attribute_sites(path, yaml.compose(text, Loader=yaml.SafeLoader))


def _attribute_sites(path: str, root: Optional[yaml.Node]) -> Dict[str, Site]:
    sites: Dict[str, Site] = {}
    if not isinstance(root, yaml.MappingNode):
        return sites
    for key_node, value_node in root.value:
        if key_node.value != "attributes" or not isinstance(value_node, yaml.MappingNode):
            continue
        for attr_key, _attr_value in value_node.value:
            # yaml marks are 0-based
            sites[str(attr_key.value)] = (path, attr_key.start_mark.line + 1)
    return sites


@log_calls()
def load_schemas(path: str, registries: RegistryManager) -> List[type]:
    """Load model types from YAML files in a directory tree.

    Expected format:
    model: widget
    identity: id
    attributes:
      name: {type: string}
      owner_id: {type: integer, squash: [owner, id]}
    """
    if not os.path.exists(path):
        return []
    if os.path.isfile(path):
        files = [path]
    else:
        files = sorted(glob.glob(os.path.join(path, "**", "*.yaml"), recursive=True))
    models: List[type] = []
    for fp in files:
        try:
            data, sites = _read_schema(fp)
        except yaml.YAMLError as exc:
            raise LoaderError(fp, "Invalid YAML", cause=exc) from exc
        try:
            spec = ModelFileSpec.model_validate(data)
        except ValidationError as exc:
            _file, line = sites.get(first_attribute(exc.errors()) or "", (None, None))
            raise LoaderError(fp, "Invalid model definition", line=line, cause=exc) from exc
        try:
            model_cls = spec.build_model(registries, sites)
        except Exception as exc:
            raise LoaderError(fp, f"Failed to build model type '{spec.model}'", cause=exc) from exc
        logger.info("Loaded model type %s from %s", spec.model, fp)
        models.append(model_cls)
    return models
