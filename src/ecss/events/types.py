"""Event types exchanged between the host scene and the style pipeline."""

from __future__ import annotations

from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Published by the host
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CapabilityChanged:
    """*capability* was attached to or removed from *entity*."""

    capability: str
    entity: int


@dataclass(frozen=True)
class EntitySpawned:
    entity: int


@dataclass(frozen=True)
class EntityDespawned:
    entity: int


# ---------------------------------------------------------------------------
# Published by the pipeline
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DocumentAttached:
    path: str
    hash: int


@dataclass(frozen=True)
class DocumentReplaced:
    path: str
    old_hash: int
    new_hash: int


@dataclass(frozen=True)
class DocumentDetached:
    path: str
    hash: int


@dataclass(frozen=True)
class PropertyParseFailed:
    """A declaration failed its interpreter; reported once per (hash, selector, property)."""

    property_name: str
    selector: str
    document_hash: int
    error: str


@dataclass(frozen=True)
class CycleCompleted:
    cycle: int
    selectors_refreshed: int
    entities_styled: int
