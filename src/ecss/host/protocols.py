"""Collaborator boundaries between the style pipeline and the host scene."""

from __future__ import annotations

from typing import Any, Protocol


class CapabilityIndex(Protocol):
    """Answers which entities currently carry a capability.

    Capability names follow selector notation: ``button`` for a component
    type, ``.title`` for a class and ``#root`` for an entity name.
    """

    def entities_with(self, capability: str) -> set[int]: ...

    def entities(self) -> set[int]: ...


class FacetStore(Protocol):
    """Fetches and attaches typed facets on entities."""

    def get_facet(self, entity: int, facet_type: type) -> Any | None: ...

    def insert_facet(self, entity: int, facet: Any) -> None: ...


class Scene(CapabilityIndex, FacetStore, Protocol):
    """A host exposing both collaborator interfaces."""
