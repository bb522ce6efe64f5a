"""In-memory scene: entities with facets, classes and names.

This is the reference host used by the CLI and the tests.  Every mutation
publishes a :class:`~ecss.events.CapabilityChanged` for each capability it
affects, which is what the selector matcher listens to.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from typing import Any, Iterable

from ecss.errors import RegistrationError
from ecss.events import CapabilityChanged, EntityDespawned, EntitySpawned, EventBus
from ecss.property.facets import DEFAULT_COMPONENT_SELECTORS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssetHandle:
    """Reference to an asset requested by a property (font, image)."""

    path: str


class World:
    def __init__(
        self,
        bus: EventBus | None = None,
        *,
        component_selectors: dict[str, type] | None = None,
    ) -> None:
        self.bus = bus or EventBus()
        self._ids = itertools.count(1)
        self._facets: dict[int, dict[type, Any]] = {}
        self._classes: dict[int, set[str]] = {}
        self._names: dict[int, str] = {}
        self._selectors: dict[str, type] = {}
        self.assets: dict[str, AssetHandle] = {}
        selectors = DEFAULT_COMPONENT_SELECTORS if component_selectors is None else component_selectors
        for name, facet_type in selectors.items():
            self.register_component_selector(name, facet_type)

    # ---- component selectors ----

    def register_component_selector(self, name: str, facet_type: type) -> None:
        """Make entities carrying a *facet_type* facet addressable by the type selector *name*."""
        current = self._selectors.get(name)
        if current is not None and current is not facet_type:
            raise RegistrationError(
                f"Component selector {name!r} already maps to {current.__name__}"
            )
        self._selectors[name] = facet_type
        for entity, facets in self._facets.items():
            if facet_type in facets:
                self._changed(name, entity)

    def component_selectors(self) -> dict[str, type]:
        return dict(self._selectors)

    # ---- entities ----

    def spawn(
        self,
        *facets: Any,
        name: str | None = None,
        classes: Iterable[str] = (),
    ) -> int:
        entity = next(self._ids)
        self._facets[entity] = {}
        self._classes[entity] = set()
        self.bus.emit(EntitySpawned(entity))
        for facet in facets:
            self.insert_facet(entity, facet)
        for cls in classes:
            self.add_class(entity, cls)
        if name is not None:
            self.set_name(entity, name)
        return entity

    def despawn(self, entity: int) -> None:
        capabilities = self.capabilities(entity)
        self._facets.pop(entity, None)
        self._classes.pop(entity, None)
        self._names.pop(entity, None)
        for capability in sorted(capabilities):
            self._changed(capability, entity)
        self.bus.emit(EntityDespawned(entity))

    def entities(self) -> set[int]:
        return set(self._facets)

    def __contains__(self, entity: object) -> bool:
        return entity in self._facets

    # ---- facets ----

    def insert_facet(self, entity: int, facet: Any) -> None:
        """Attach *facet*, replacing any facet of the same type."""
        facets = self._require(entity)
        is_new = type(facet) not in facets
        facets[type(facet)] = facet
        if is_new:
            for name in self._selector_names(type(facet)):
                self._changed(name, entity)

    def remove_facet(self, entity: int, facet_type: type) -> Any | None:
        facet = self._require(entity).pop(facet_type, None)
        if facet is not None:
            for name in self._selector_names(facet_type):
                self._changed(name, entity)
        return facet

    def get_facet(self, entity: int, facet_type: type) -> Any | None:
        return self._facets.get(entity, {}).get(facet_type)

    def facets(self, entity: int) -> list[Any]:
        return list(self._facets.get(entity, {}).values())

    # ---- classes and names ----

    def add_class(self, entity: int, cls: str) -> None:
        classes = self._classes_of(entity)
        if cls not in classes:
            classes.add(cls)
            self._changed(f".{cls}", entity)

    def remove_class(self, entity: int, cls: str) -> None:
        classes = self._classes_of(entity)
        if cls in classes:
            classes.discard(cls)
            self._changed(f".{cls}", entity)

    def set_name(self, entity: int, name: str | None) -> None:
        self._require(entity)
        previous = self._names.pop(entity, None)
        if previous is not None:
            self._changed(f"#{previous}", entity)
        if name is not None:
            self._names[entity] = name
            self._changed(f"#{name}", entity)

    def name_of(self, entity: int) -> str | None:
        return self._names.get(entity)

    def classes_of(self, entity: int) -> set[str]:
        return set(self._classes.get(entity, ()))

    # ---- capability index ----

    def capabilities(self, entity: int) -> set[str]:
        """Every capability *entity* carries, in selector notation."""
        facets = self._facets.get(entity, {})
        result = {name for name, facet_type in self._selectors.items() if facet_type in facets}
        result |= {f".{cls}" for cls in self._classes.get(entity, ())}
        if entity in self._names:
            result.add(f"#{self._names[entity]}")
        return result

    def entities_with(self, capability: str) -> set[int]:
        if capability.startswith("."):
            cls = capability[1:]
            return {e for e, classes in self._classes.items() if cls in classes}
        if capability.startswith("#"):
            name = capability[1:]
            return {e for e, n in self._names.items() if n == name}
        facet_type = self._selectors.get(capability)
        if facet_type is None:
            return set()
        return {e for e, facets in self._facets.items() if facet_type in facets}

    # ---- assets ----

    def load_asset(self, path: str) -> AssetHandle:
        handle = self.assets.get(path)
        if handle is None:
            logger.debug("Loading asset %s", path)
            handle = self.assets[path] = AssetHandle(path)
        return handle

    # ---- internals ----

    def _require(self, entity: int) -> dict[type, Any]:
        facets = self._facets.get(entity)
        if facets is None:
            raise KeyError(f"Unknown entity {entity}")
        return facets

    def _classes_of(self, entity: int) -> set[str]:
        self._require(entity)
        return self._classes[entity]

    def _selector_names(self, facet_type: type) -> list[str]:
        return [name for name, t in self._selectors.items() if t is facet_type]

    def _changed(self, capability: str, entity: int) -> None:
        self.bus.emit(CapabilityChanged(capability, entity))
