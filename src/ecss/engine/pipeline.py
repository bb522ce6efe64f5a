"""The styling cycle: Prepare -> Change detection -> Apply -> Cleanup."""

from __future__ import annotations

import logging
from typing import Any, Callable

from ecss.config import EcssConfig
from ecss.engine.matcher import SelectorMatcher
from ecss.errors import EcssError, UnsupportedProperty
from ecss.events import (
    CycleCompleted,
    DocumentAttached,
    DocumentDetached,
    DocumentReplaced,
    EventBus,
    PropertyParseFailed,
)
from ecss.host.protocols import Scene
from ecss.model.diagnostic import Diagnostic, Severity
from ecss.property.contract import ApplyContext, PropertyCache, PropertyContract
from ecss.property.impls import register_default_properties
from ecss.property.registry import PropertyRegistry
from ecss.stylesheet.model import StyleSheetDocument
from ecss.stylesheet.selector import Selector

logger = logging.getLogger(__name__)


class StylePipeline:
    """Applies live style sheet documents to a host scene, one cycle at a time.

    The pipeline owns all mutable styling state: the live documents, the
    selector matcher and one :class:`PropertyCache` per registered contract.
    The host owns the scene and decides when :meth:`run_cycle` (or the
    individual phases) run.
    """

    def __init__(
        self,
        scene: Scene,
        registry: PropertyRegistry | None = None,
        *,
        config: EcssConfig | None = None,
        bus: EventBus | None = None,
        load_asset: Callable[[str], Any] | None = None,
    ) -> None:
        self.scene = scene
        if registry is None:
            registry = register_default_properties(PropertyRegistry())
        self.registry = registry
        self.config = config or EcssConfig()
        self.bus = bus or getattr(scene, "bus", None) or EventBus()
        self.matcher = SelectorMatcher(scene, self.bus)
        self.load_asset = load_asset or getattr(scene, "load_asset", None)
        self.diagnostics: list[Diagnostic] = []
        self.cycle = 0
        self._documents: dict[str, StyleSheetDocument] = {}
        self._fresh: set[str] = set()
        self._caches: dict[str, PropertyCache] = {}
        self._contracts: list[PropertyContract] = []
        self._checked_hashes: set[int] = set()

    # ---- documents ----

    def add_document(self, document: StyleSheetDocument) -> None:
        """Attach *document*, replacing any live document with the same path."""
        previous = self._documents.get(document.path)
        self._documents[document.path] = document
        self._fresh.add(document.path)
        self.matcher.forget(document.path)
        if previous is None:
            logger.info("Attached style sheet %s", document.path or "<anonymous>")
            self.bus.emit(DocumentAttached(document.path, document.hash))
        else:
            logger.info("Replaced style sheet %s", document.path or "<anonymous>")
            self.bus.emit(DocumentReplaced(document.path, previous.hash, document.hash))

    replace_document = add_document

    def remove_document(self, path: str) -> StyleSheetDocument | None:
        document = self._documents.pop(path, None)
        if document is None:
            return None
        self._fresh.discard(path)
        self.matcher.forget(path)
        logger.info("Detached style sheet %s", path or "<anonymous>")
        self.bus.emit(DocumentDetached(path, document.hash))
        return document

    def documents(self) -> list[StyleSheetDocument]:
        return list(self._documents.values())

    def document(self, path: str) -> StyleSheetDocument | None:
        return self._documents.get(path)

    # ---- caches ----

    def cache(self, name: str) -> PropertyCache | None:
        """The parse cache of the contract registered as *name*, if it has run."""
        return self._caches.get(name)

    def evict_stale_caches(self) -> int:
        """Drop parse cache entries of document hashes no live document carries."""
        live = {document.hash for document in self._documents.values()}
        dropped = sum(cache.evict(live) for cache in self._caches.values())
        if dropped:
            logger.debug("Evicted %d stale cache entries", dropped)
        return dropped

    # ---- phases ----

    def prepare(self) -> None:
        """Resolve the contract order and check new documents against the registry."""
        self._contracts = self.registry.ordered()
        for contract in self._contracts:
            cache = self._caches.get(contract.name)
            if cache is None or cache.contract is not contract:
                self._caches[contract.name] = PropertyCache(contract)

        for path in sorted(self._fresh):
            document = self._documents[path]
            if document.hash in self._checked_hashes:
                continue
            self._checked_hashes.add(document.hash)
            self._check_supported(document)

    def detect_changes(self) -> int:
        """Refresh matches; return how many selectors were scheduled for this cycle."""
        self.matcher.detect_changes(
            self._documents,
            self._fresh,
            reapply_all=self.config.reapply_every_cycle,
        )
        self._fresh.clear()
        return self.matcher.refreshed_count()

    def apply(self) -> int:
        """Push cached values onto matched entities; return how many entities were touched."""
        ctx = ApplyContext(self.load_asset)
        styled: set[int] = set()
        for contract in self._contracts:
            cache = self._caches[contract.name]
            for path, selections in self.matcher.matched.items():
                document = self._documents[path]
                for selector, entities in selections.items():
                    state = cache.get_or_parse(document, selector, self._report_parse_failure)
                    if not state.is_ok:
                        continue
                    logger.debug(
                        'Applying property "%s" from sheet "%s" (%s)',
                        contract.name,
                        document.path,
                        selector,
                    )
                    for entity in sorted(entities):
                        target = self._target(entity, contract.facet_type)
                        if target is None:
                            continue
                        ctx.entity = entity
                        contract.apply(state.value, target, ctx)
                        styled.add(entity)
        ctx.entity = None

        # Deferred facet insertions become visible to matching next cycle.
        for entity, facet in ctx.drain():
            if entity in self.scene.entities():
                self.scene.insert_facet(entity, facet)
        return len(styled)

    def cleanup(self) -> None:
        self.matcher.cleanup()

    def run_cycle(self) -> CycleCompleted:
        """Run all four phases once."""
        self.cycle += 1
        self.prepare()
        refreshed = self.detect_changes()
        styled = self.apply()
        self.cleanup()
        event = CycleCompleted(cycle=self.cycle, selectors_refreshed=refreshed, entities_styled=styled)
        self.bus.emit(event)
        return event

    # ---- internals ----

    def _target(self, entity: int, facet_type: type | tuple[type, ...] | None) -> Any | None:
        if facet_type is None:
            return entity
        if isinstance(facet_type, tuple):
            facets = tuple(self.scene.get_facet(entity, t) for t in facet_type)
            return facets if any(f is not None for f in facets) else None
        return self.scene.get_facet(entity, facet_type)

    def _check_supported(self, document: StyleSheetDocument) -> None:
        reported: set[str] = set()
        for rule in document:
            for name in rule.properties:
                if name in self.registry or name in reported:
                    continue
                reported.add(name)
                error = UnsupportedProperty(name)
                self.diagnostics.append(
                    Diagnostic(
                        rule="unsupported_property",
                        severity=Severity.WARNING,
                        message=str(error),
                        selector=str(rule.selector),
                        property_name=name,
                        line=rule.line,
                    )
                )
                if self.config.warn_unsupported_properties:
                    logger.warning("%s: %s", document.path or "<style sheet>", error)

    def _report_parse_failure(
        self,
        document: StyleSheetDocument,
        selector: Selector,
        contract: PropertyContract,
        error: EcssError,
    ) -> None:
        self.diagnostics.append(
            Diagnostic(
                rule="invalid_property_value",
                severity=Severity.ERROR,
                message=str(error),
                selector=str(selector),
                property_name=contract.name,
            )
        )
        self.bus.emit(PropertyParseFailed(contract.name, str(selector), document.hash, str(error)))
