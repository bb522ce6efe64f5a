"""Event system: bus and event types for scene changes and pipeline progress."""

from ecss.events.bus import EventBus
from ecss.events.types import (
    CapabilityChanged,
    CycleCompleted,
    DocumentAttached,
    DocumentDetached,
    DocumentReplaced,
    EntityDespawned,
    EntitySpawned,
    PropertyParseFailed,
)

__all__ = [
    "EventBus",
    "CapabilityChanged",
    "CycleCompleted",
    "DocumentAttached",
    "DocumentDetached",
    "DocumentReplaced",
    "EntityDespawned",
    "EntitySpawned",
    "PropertyParseFailed",
]
