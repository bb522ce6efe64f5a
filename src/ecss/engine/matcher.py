"""Selector matching over a changing entity population.

The matcher keeps three layers of state:

- ``tracked``: capability -> entity ids, mirrored from the host's
  :class:`~ecss.host.CapabilityIndex` and refreshed only for capabilities
  reported as changed.  ``*`` tracks every entity.
- selections: (document path, selector) -> entity ids, the intersection of
  the tracked sets of the selector's atoms.  Recomputed only when one of
  those atoms changed or the document is new.
- ``matched``: the per-cycle scratch handed to the apply phase, holding
  only the selections scheduled for this cycle.  Cleared by :meth:`cleanup`.

Change notifications arriving while a cycle is being applied are queued
and only take effect at the next :meth:`detect_changes`.
"""

from __future__ import annotations

import logging
from typing import Mapping

from ecss.events import CapabilityChanged, EntityDespawned, EntitySpawned, EventBus
from ecss.host.protocols import CapabilityIndex
from ecss.stylesheet.model import StyleSheetDocument
from ecss.stylesheet.selector import Selector

logger = logging.getLogger(__name__)

ANY = "*"

MatchedObjects = dict[str, dict[Selector, frozenset[int]]]


class SelectorMatcher:
    def __init__(self, index: CapabilityIndex, bus: EventBus | None = None) -> None:
        self.index = index
        self.tracked: dict[str, set[int]] = {}
        self.matched: MatchedObjects = {}
        self._selections: dict[tuple[str, Selector], frozenset[int]] = {}
        self._dirty: set[str] = set()
        if bus is not None:
            bus.subscribe(CapabilityChanged, self.on_capability_changed)
            bus.subscribe(EntitySpawned, self.on_entity_spawned)
            bus.subscribe(EntityDespawned, self.on_entity_despawned)

    # ---- change notifications ----

    def on_capability_changed(self, event: CapabilityChanged) -> None:
        self._dirty.add(event.capability)

    def on_entity_spawned(self, event: EntitySpawned) -> None:
        self._dirty.add(ANY)

    def on_entity_despawned(self, event: EntityDespawned) -> None:
        self._dirty.add(ANY)
        for capability, entities in self.tracked.items():
            if event.entity in entities:
                self._dirty.add(capability)

    def mark_dirty(self, *capabilities: str) -> None:
        """Force *capabilities* (all tracked ones if none given) to be re-read next cycle."""
        self._dirty.update(capabilities or self.tracked)

    # ---- phases ----

    def detect_changes(
        self,
        documents: Mapping[str, StyleSheetDocument],
        fresh: set[str] | frozenset[str] = frozenset(),
        *,
        reapply_all: bool = False,
    ) -> MatchedObjects:
        """Refresh selections and schedule the ones the apply phase must push.

        A selection is scheduled when it was recomputed this cycle, i.e. its
        document is in *fresh* or one of its atoms changed.  With
        *reapply_all* every non-empty selection is scheduled.
        """
        dirty, self._dirty = self._dirty, set()

        # Step 1: refresh tracked capabilities that changed
        for capability in dirty & set(self.tracked):
            self.tracked[capability] = self._query(capability)

        # Step 2: recompute selections that depend on them
        self.matched = {}
        for path, document in documents.items():
            for selector in document.selectors():
                key = (path, selector)
                atoms = selector.capabilities() or [ANY]
                stale = (
                    path in fresh
                    or key not in self._selections
                    or any(atom in dirty for atom in atoms)
                )
                if stale:
                    self._selections[key] = self._select(atoms)
                if (stale or reapply_all) and self._selections[key]:
                    self.matched.setdefault(path, {})[selector] = self._selections[key]
        return self.matched

    def cleanup(self) -> None:
        """Drop the per-cycle scratch; selections and tracked sets persist."""
        self.matched = {}

    def forget(self, path: str) -> None:
        """Discard every selection of the document at *path*."""
        for key in [k for k in self._selections if k[0] == path]:
            del self._selections[key]

    def selection(self, path: str, selector: Selector) -> frozenset[int]:
        return self._selections.get((path, selector), frozenset())

    def refreshed_count(self) -> int:
        return sum(len(s) for s in self.matched.values())

    # ---- internals ----

    def _query(self, capability: str) -> set[int]:
        if capability == ANY:
            return set(self.index.entities())
        return set(self.index.entities_with(capability))

    def _tracked(self, capability: str) -> set[int]:
        entities = self.tracked.get(capability)
        if entities is None:
            entities = self.tracked[capability] = self._query(capability)
            logger.debug("Tracking %s (%d entities)", capability, len(entities))
        return entities

    def _select(self, atoms: list[str]) -> frozenset[int]:
        sets = sorted((self._tracked(atom) for atom in atoms), key=len)
        result = set(sets[0])
        for other in sets[1:]:
            result &= other
            if not result:
                break
        return frozenset(result)
