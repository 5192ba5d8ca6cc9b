"""
Landmark registry.

An immutable, ordered catalog of entity definitions with lookup indices
built once at construction. The registry is validated up front so that
ambiguous catalogs fail at start-up instead of producing order-dependent
matches later.
"""

from __future__ import annotations

import logging
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterable, Iterator, List, Mapping, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from .core.models import EntityDefinition
from .core.normalize import normalize

logger = logging.getLogger(__name__)

BUNDLED_CATALOG = "landmarks.yaml"


class RegistryError(ValueError):
    """Raised when a registry catalog is malformed."""


class _LandmarkEntry(BaseModel):
    name: str
    alternative_names: List[str] = Field(default_factory=list)
    keywords: List[str] = Field(default_factory=list)


class _Catalog(BaseModel):
    landmarks: List[_LandmarkEntry] = Field(default_factory=list)


class EntityRegistry:
    """
    Read-only landmark catalog.

    Usage:
        registry = EntityRegistry.bundled()
        definition = registry.lookup_exact("Eiffel Tower")
        definition = registry.lookup_alternative("Tour Eiffel")
    """

    def __init__(self, definitions: Iterable[EntityDefinition]) -> None:
        ordered = tuple(definitions)
        by_primary: dict[str, EntityDefinition] = {}
        by_alternative: dict[str, EntityDefinition] = {}

        for definition in ordered:
            key = definition.canonical_id
            if not key:
                raise RegistryError(f"Landmark definition has an empty primary name: {definition!r}")
            if key in by_primary:
                raise RegistryError(
                    f"Duplicate landmark '{definition.primary_name}' "
                    f"(already defined as '{by_primary[key].primary_name}')"
                )
            by_primary[key] = definition

        for definition in ordered:
            for alternative in sorted(definition.alternative_names):
                alt_key = normalize(alternative)
                if not alt_key:
                    continue
                owner = by_alternative.get(alt_key)
                if owner is not None and owner is not definition:
                    raise RegistryError(
                        f"Alternative name '{alternative}' is claimed by both "
                        f"'{owner.primary_name}' and '{definition.primary_name}'"
                    )
                by_alternative[alt_key] = definition

        self._definitions = ordered
        self._by_primary = MappingProxyType(by_primary)
        self._by_alternative = MappingProxyType(by_alternative)

    @property
    def definitions(self) -> tuple[EntityDefinition, ...]:
        return self._definitions

    def __len__(self) -> int:
        return len(self._definitions)

    def __iter__(self) -> Iterator[EntityDefinition]:
        return iter(self._definitions)

    def __contains__(self, canonical_id: object) -> bool:
        return isinstance(canonical_id, str) and canonical_id in self._by_primary

    def get(self, canonical_id: str) -> Optional[EntityDefinition]:
        return self._by_primary.get(canonical_id)

    def lookup_exact(self, label: str) -> Optional[EntityDefinition]:
        token = normalize(label)
        if not token:
            return None
        return self._by_primary.get(token)

    def lookup_alternative(self, label: str) -> Optional[EntityDefinition]:
        token = normalize(label)
        if not token:
            return None
        return self._by_alternative.get(token)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "EntityRegistry":
        """
        Build a registry from a parsed catalog document.

        Expected shape:
            landmarks:
              - name: Eiffel Tower
                alternative_names: [Tour Eiffel]
                keywords: [eiffel, tower, paris]
        """
        try:
            catalog = _Catalog.model_validate(data or {})
        except ValidationError as exc:
            raise RegistryError(f"Invalid landmark catalog: {exc}") from exc
        definitions = [
            EntityDefinition(
                primary_name=entry.name.strip(),
                alternative_names=frozenset(alt.strip() for alt in entry.alternative_names if alt.strip()),
                keywords=tuple(kw.strip() for kw in entry.keywords if kw.strip()),
            )
            for entry in catalog.landmarks
        ]
        return cls(definitions)

    @classmethod
    def load(cls, path: Path) -> "EntityRegistry":
        try:
            with path.open("r", encoding="utf-8") as fh:
                raw = yaml.safe_load(fh)
        except OSError as exc:
            raise RegistryError(f"Cannot read landmark catalog {path}: {exc}") from exc
        except yaml.YAMLError as exc:
            raise RegistryError(f"Cannot parse landmark catalog {path}: {exc}") from exc
        registry = cls.from_mapping(raw)
        logger.info("Loaded %d landmark(s) from %s", len(registry), path)
        return registry

    @classmethod
    def bundled(cls) -> "EntityRegistry":
        source = resources.files("landmark_resolver.data").joinpath(BUNDLED_CATALOG)
        try:
            raw = yaml.safe_load(source.read_text(encoding="utf-8"))
        except yaml.YAMLError as exc:  # pragma: no cover - packaged data
            raise RegistryError(f"Cannot parse bundled landmark catalog: {exc}") from exc
        registry = cls.from_mapping(raw)
        logger.debug("Loaded %d bundled landmark(s)", len(registry))
        return registry

    @classmethod
    def from_settings(cls, path: Optional[Path]) -> "EntityRegistry":
        if path is None:
            return cls.bundled()
        return cls.load(path)
