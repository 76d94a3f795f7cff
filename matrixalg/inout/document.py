# matrixalg/inout/document.py
"""
Document loading for matrixalg.

A document backend parses a file into a generic DocumentNode tree. Backends
are selected by name: built-ins ("yaml", "xml") are imported on demand and
third-party backends are discovered via the 'matrixalg.document_backends'
entry point group. Manual registration is supported as well.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from importlib import import_module
from importlib.metadata import entry_points
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Type

from cerberus import Validator

from matrixalg.core.exceptions import InvalidArgumentError, PluginNotFoundError
from matrixalg.utils.logging_config import get_logger

logger = get_logger(__name__)

ENTRY_POINT_GROUP = "matrixalg.document_backends"

_BUILTIN_BACKENDS: Dict[str, str] = {
    "yaml": "matrixalg.inout.yaml_backend",
    "xml": "matrixalg.inout.xml_backend",
}


@dataclass(frozen=True)
class DocumentNode:
    """
    Immutable node of a parsed document.

    Attributes:
        name: Tag (XML) or key (YAML) of the node.
        attributes: Scalar properties, always as strings.
        text: Character content, or None.
        children: Child nodes in document order.
    """
    name: str
    attributes: Mapping[str, str] = field(default_factory=dict)
    text: Optional[str] = None
    children: Tuple["DocumentNode", ...] = ()

    def __getitem__(self, key: str) -> str:
        return self.attributes[key]

    def __iter__(self) -> Iterator["DocumentNode"]:
        return iter(self.children)

    def __len__(self) -> int:
        return len(self.children)

    def find_all(self, name: str) -> List["DocumentNode"]:
        return [c for c in self.children if c.name == name]

    def child(self, name: str) -> Optional["DocumentNode"]:
        return next((c for c in self.children if c.name == name), None)

    def value(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Attribute `key`, else the text of the first child named `key`."""
        if key in self.attributes:
            return self.attributes[key]
        node = self.child(key)
        if node is not None and node.text is not None:
            return node.text
        return default


class DocumentBackend(ABC):
    """
    Base class for document backends.

    Subclasses define a unique `name`, a human-readable `doc` string and,
    optionally, a cerberus `options_schema` for their constructor options.
    """
    name: str = ""
    doc: str = ""
    options_schema: Dict[str, Any] = {}

    def __init__(self, options: Optional[Mapping[str, Any]] = None):
        validator = Validator(self.options_schema)
        if not validator.validate(dict(options or {})):
            logger.error("Invalid options for backend '%s': %s", self.name, validator.errors)
            raise InvalidArgumentError(
                f"Invalid options for backend '{self.name}': {validator.errors}"
            )
        self.options: Dict[str, Any] = validator.document

    @abstractmethod
    def parse(self, filename: str) -> DocumentNode:
        """
        Parse the file into a tree.

        Raises:
            DocumentParseError: If the content is malformed.
            OSError: If the file cannot be read.
        """
        pass


class DocumentLoader:
    """
    Name-selected document parser.

    Loading a backend is process-wide and idempotent per name; a loader
    instance is bound to one backend for its lifetime.
    """
    _registry: Dict[str, Type[DocumentBackend]] = {}

    def __init__(self, name: str, options: Optional[Mapping[str, Any]] = None):
        backend_cls = self.get_plugin(name)
        self._backend = backend_cls(options)

    @property
    def backend(self) -> DocumentBackend:
        return self._backend

    def parse(self, filename: str) -> DocumentNode:
        return self._backend.parse(str(filename))

    @classmethod
    def register(cls, backend_cls: Type[DocumentBackend]) -> None:
        """
        Manually register a backend class.
        The class must define a non-empty string `name`.
        """
        if not (isinstance(backend_cls, type) and issubclass(backend_cls, DocumentBackend)):
            raise InvalidArgumentError(f"Cannot register non-DocumentBackend class: {backend_cls}")
        name = getattr(backend_cls, "name", None)
        if not isinstance(name, str) or not name:
            raise InvalidArgumentError(f"Backend class {backend_cls} lacks a valid `name` attribute.")
        cls._registry[name.lower()] = backend_cls
        logger.debug("Registered document backend '%s'", name.lower())

    @classmethod
    def load_plugin(cls, name: str) -> None:
        """
        Make the backend `name` available. Built-ins are imported first, then
        entry points are searched.

        Raises:
            PluginNotFoundError: If no backend matches.
        """
        if not isinstance(name, str):
            raise PluginNotFoundError(f"Backend name must be a string, got {name!r}.")
        key = name.lower()
        if key in cls._registry:
            return

        module_name = _BUILTIN_BACKENDS.get(key)
        if module_name is not None:
            module = import_module(module_name)
            cls.register(module.BACKEND)
            return

        for ep in entry_points(group=ENTRY_POINT_GROUP):
            if ep.name.lower() != key:
                continue
            backend_cls = ep.load()
            cls.register(backend_cls)
            if key in cls._registry:
                logger.info("Loaded document backend '%s' from %s", key, ep.value)
                return

        raise PluginNotFoundError(f"Unknown document backend: '{name}'")

    @classmethod
    def get_plugin(cls, name: str) -> Type[DocumentBackend]:
        cls.load_plugin(name)
        return cls._registry[name.lower()]

    @classmethod
    def doc(cls, name: str) -> str:
        """Description registered by the backend `name`."""
        return cls.get_plugin(name).doc

    @classmethod
    def has_plugin(cls, name: str) -> bool:
        try:
            cls.load_plugin(name)
        except PluginNotFoundError:
            return False
        return True
