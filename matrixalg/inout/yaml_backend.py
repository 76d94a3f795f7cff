# matrixalg/inout/yaml_backend.py
from pathlib import Path
from typing import Any, Dict, List, Tuple

import yaml

from matrixalg.core.exceptions import DocumentParseError
from matrixalg.inout.document import DocumentBackend, DocumentNode
from matrixalg.utils.logging_config import get_logger

logger = get_logger(__name__)


def _scalar(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _build(name: str, value: Any) -> DocumentNode:
    """
    Mapping -> node whose scalar values are attributes and whose mapping/list
    values are children. A list under key `k` yields one child named `k` per item.
    """
    if isinstance(value, dict):
        attributes: Dict[str, str] = {}
        children: List[DocumentNode] = []
        for key, item in value.items():
            key = str(key)
            if isinstance(item, dict):
                children.append(_build(key, item))
            elif isinstance(item, list):
                children.extend(_build(key, x) for x in item)
            else:
                attributes[key] = _scalar(item)
        return DocumentNode(name, attributes, None, tuple(children))
    if isinstance(value, list):
        return DocumentNode(name, {}, None, tuple(_build("item", x) for x in value))
    return DocumentNode(name, {}, None if value is None else _scalar(value), ())


class YamlBackend(DocumentBackend):
    name = "yaml"
    doc = ("YAML documents via PyYAML's safe loader. Mapping scalars become "
           "attributes, nested mappings and list items become child nodes.")
    options_schema = {
        "encoding": {"type": "string", "default": "utf-8"},
    }

    def parse(self, filename: str) -> DocumentNode:
        with open(filename, "r", encoding=self.options["encoding"]) as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as exc:
                logger.error("YAML parse error in '%s': %s", filename, exc)
                raise DocumentParseError(f"Malformed YAML in '{filename}': {exc}") from exc

        if isinstance(data, dict) and len(data) == 1:
            (key, value), = data.items()
            if isinstance(value, (dict, list)):
                return _build(str(key), value)
        return _build(Path(filename).stem, data)


BACKEND = YamlBackend
