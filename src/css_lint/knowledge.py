"""CSS property and at-rule knowledge base."""

from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Protocol, Union

import yaml

from .utils.errors import KnowledgeBaseError
from .utils.logging_config import LoggerMixin

DEFAULT_DATA_PATH = Path(__file__).parent / "data" / "css_data.yaml"


class KnowledgeBase(Protocol):
    """Lookups the linter needs about CSS names."""

    def is_known_property(self, name: str) -> bool: ...

    def is_standard_property(self, name: str) -> bool: ...

    def get_at_directive(self, name: str) -> Optional[Dict[str, Any]]: ...


class CSSDataManager(LoggerMixin):
    """Knowledge base backed by property and at-directive data entries.

    Each property entry is a mapping with a ``name`` and an optional
    ``status`` (``standard``, ``experimental``, ``nonstandard`` or
    ``obsolete``). At-directive entries only need a ``name``.
    """

    def __init__(
        self,
        properties: Optional[Iterable[Dict[str, Any]]] = None,
        at_directives: Optional[Iterable[Dict[str, Any]]] = None,
    ):
        self._properties: Dict[str, Dict[str, Any]] = {}
        self._at_directives: Dict[str, Dict[str, Any]] = {}
        self.add_data(properties or [], at_directives or [])

    def add_data(
        self,
        properties: Iterable[Dict[str, Any]],
        at_directives: Iterable[Dict[str, Any]],
    ) -> None:
        for entry in properties:
            self._properties[self._entry_name(entry, "property")] = dict(entry)
        for entry in at_directives:
            self._at_directives[self._entry_name(entry, "at-directive")] = dict(entry)

    @staticmethod
    def _entry_name(entry: Any, kind: str) -> str:
        if not isinstance(entry, dict) or not isinstance(entry.get("name"), str):
            raise KnowledgeBaseError(
                f"Invalid {kind} entry: {entry!r}", details={"entry": entry}
            )
        return entry["name"].lower()

    def is_known_property(self, name: str) -> bool:
        return name.lower() in self._properties

    def is_standard_property(self, name: str) -> bool:
        entry = self._properties.get(name.lower()) if name else None
        if entry is None:
            return False
        status = entry.get("status")
        return not status or status == "standard"

    def get_at_directive(self, name: str) -> Optional[Dict[str, Any]]:
        return self._at_directives.get(name.lower())

    @property
    def property_names(self) -> List[str]:
        return sorted(self._properties)

    @property
    def at_directive_names(self) -> List[str]:
        return sorted(self._at_directives)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "CSSDataManager":
        manager = cls()
        manager.load_yaml(path)
        return manager

    @classmethod
    def default(cls, custom_data: Optional[Union[str, Path]] = None) -> "CSSDataManager":
        """Bundled data, optionally extended with a custom data file."""
        manager = cls.from_yaml(DEFAULT_DATA_PATH)
        if custom_data:
            manager.load_yaml(custom_data)
        return manager

    def load_yaml(self, path: Union[str, Path]) -> None:
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise KnowledgeBaseError(f"Failed to load CSS data from {path}: {e}")

        if not isinstance(data, dict):
            raise KnowledgeBaseError(f"CSS data in {path} must be a mapping")

        properties = data.get("properties") or []
        at_directives = data.get("atDirectives") or []
        self.add_data(properties, at_directives)
        self.logger.debug(
            f"Loaded {len(properties)} properties and {len(at_directives)} at-directives from {path}"
        )
