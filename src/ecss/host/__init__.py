"""Host-side collaborators: capability index and facet store protocols, plus an in-memory world."""

from ecss.host.protocols import CapabilityIndex, FacetStore, Scene
from ecss.host.world import AssetHandle, World

__all__ = ["AssetHandle", "CapabilityIndex", "FacetStore", "Scene", "World"]
