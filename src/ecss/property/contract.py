"""Property contracts and the per-contract parse cache.

A contract ties one declaration name (``width``, ``background-color``...) to
a cached value type, a ``parse`` step from raw tokens to that type, and an
``apply`` step pushing the value onto a facet of a matched entity.

Parsing is expensive relative to applying, and the same declaration is
applied to many entities on many cycles, so every contract owns a
:class:`PropertyCache` keyed by ``document hash -> selector``.  Each entry
is parsed at most once:

    NOT_ATTEMPTED --parse ok--> OK(value)
    NOT_ATTEMPTED --parse error--> ERROR

Neither ``OK`` nor ``ERROR`` ever changes again for the same document hash;
an edited document has a new hash and therefore fresh entries.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Generic, Iterable, TypeVar

from ecss.errors import EcssError, InvalidPropertyValue
from ecss.stylesheet.model import StyleSheetDocument
from ecss.stylesheet.selector import Selector
from ecss.stylesheet.tokens import PropertyValues

logger = logging.getLogger(__name__)

T = TypeVar("T")

__all__ = [
    "ApplyContext",
    "CacheState",
    "CacheStatus",
    "PropertyCache",
    "PropertyContract",
]


# ---------------------------------------------------------------------------
# Side effects available while applying
# ---------------------------------------------------------------------------


def _load_by_path(path: str) -> Any:
    return path


class ApplyContext:
    """Side-effect channel handed to :meth:`PropertyContract.apply`.

    Besides mutating the facet it was given, a contract may queue a facet
    to be inserted on the entity (flushed by the pipeline once every
    contract has run) and resolve asset paths through the host's loader.
    """

    def __init__(self, load_asset: Callable[[str], Any] | None = None) -> None:
        self.entity: int | None = None
        self._load_asset = load_asset or _load_by_path
        self._pending: list[tuple[int, Any]] = []

    def insert_facet(self, facet: Any, entity: int | None = None) -> None:
        """Queue *facet* for insertion on *entity* (default: the entity being styled)."""
        target = self.entity if entity is None else entity
        if target is None:
            raise ValueError("insert_facet called outside of an apply pass")
        self._pending.append((target, facet))

    def load_asset(self, path: str) -> Any:
        return self._load_asset(path)

    def drain(self) -> list[tuple[int, Any]]:
        """Return and forget the queued insertions, in queue order."""
        pending, self._pending = self._pending, []
        return pending


# ---------------------------------------------------------------------------
# Contract
# ---------------------------------------------------------------------------


class PropertyContract(ABC, Generic[T]):
    """One style property: a name, a value type, a parse step and an apply step.

    ``facet_type`` selects what :meth:`apply` receives as its target:

    - a type: that facet of the entity; entities without it are skipped
    - a tuple of types: a tuple with each facet or ``None``; skipped only
      when the entity has none of them
    - ``None``: the entity id itself
    """

    name: str = ""
    value_type: Any = object
    facet_type: type | tuple[type, ...] | None = None

    @abstractmethod
    def parse(self, values: PropertyValues) -> T:
        """Convert raw tokens into the cached value; raise :class:`InvalidPropertyValue` if they do not fit."""

    @abstractmethod
    def apply(self, value: T, target: Any, ctx: ApplyContext) -> None:
        """Push *value* onto *target*. Must be a pure overwrite."""

    def invalid(self) -> InvalidPropertyValue:
        return InvalidPropertyValue(self.name)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"


# ---------------------------------------------------------------------------
# Cache
# ---------------------------------------------------------------------------


class CacheStatus(Enum):
    NOT_ATTEMPTED = "not_attempted"
    OK = "ok"
    ERROR = "error"


@dataclass(frozen=True)
class CacheState(Generic[T]):
    status: CacheStatus
    value: T | None = None
    error: str | None = field(default=None, compare=False)

    @classmethod
    def not_attempted(cls) -> CacheState[T]:
        return cls(CacheStatus.NOT_ATTEMPTED)

    @classmethod
    def ok(cls, value: T) -> CacheState[T]:
        return cls(CacheStatus.OK, value)

    @classmethod
    def failed(cls, error: str) -> CacheState[T]:
        return cls(CacheStatus.ERROR, error=error)

    @property
    def is_ok(self) -> bool:
        return self.status is CacheStatus.OK

    @property
    def is_error(self) -> bool:
        return self.status is CacheStatus.ERROR


_NOT_ATTEMPTED: CacheState[Any] = CacheState.not_attempted()

ParseFailureHook = Callable[[StyleSheetDocument, Selector, PropertyContract, EcssError], None]


class PropertyCache(Generic[T]):
    """``document hash -> selector -> CacheState`` for a single contract.

    Entries for hashes no longer in use are kept until :meth:`evict` is
    called explicitly.
    """

    def __init__(self, contract: PropertyContract[T]) -> None:
        self.contract = contract
        self._entries: dict[int, dict[Selector, CacheState[T]]] = {}

    def state(self, document_hash: int, selector: Selector) -> CacheState[T]:
        """Current state without attempting a parse."""
        return self._entries.get(document_hash, {}).get(selector, _NOT_ATTEMPTED)

    def get_or_parse(
        self,
        document: StyleSheetDocument,
        selector: Selector,
        on_error: ParseFailureHook | None = None,
    ) -> CacheState[T]:
        """Return the cached state for *selector* in *document*, parsing on first use.

        A selector whose rule does not declare this property stays
        ``NOT_ATTEMPTED``; since the document cannot change under its hash,
        that answer is remembered too.
        """
        per_selector = self._entries.setdefault(document.hash, {})
        cached = per_selector.get(selector)
        if cached is not None:
            return cached

        values = document.get_properties(selector, self.contract.name)
        if values is None:
            state: CacheState[T] = _NOT_ATTEMPTED
        else:
            try:
                state = CacheState.ok(self.contract.parse(values))
            except EcssError as e:
                logger.error("Failed to parse property %s. Error: %s", self.contract.name, e)
                state = CacheState.failed(str(e))
                if on_error is not None:
                    on_error(document, selector, self.contract, e)
        per_selector[selector] = state
        return state

    def hashes(self) -> set[int]:
        return set(self._entries)

    def evict(self, keep: Iterable[int]) -> int:
        """Drop entries for every document hash not in *keep*; return how many hashes were dropped."""
        keep = set(keep)
        stale = [h for h in self._entries if h not in keep]
        for h in stale:
            del self._entries[h]
        return len(stale)

    def __len__(self) -> int:
        return sum(len(v) for v in self._entries.values())
