"""Stylesheet model: StyleRule and StyleSheetDocument dataclasses."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from typing import Iterator

from ecss.model.diagnostic import Diagnostic
from ecss.stylesheet.selector import Selector
from ecss.stylesheet.tokens import PropertyValues


def content_hash(content: str) -> int:
    """Deterministic 64-bit fingerprint of style sheet source text."""
    digest = hashlib.blake2b(content.encode("utf-8"), digest_size=8).digest()
    return int.from_bytes(digest, "big")


@dataclass(frozen=True)
class StyleRule:
    """A single rule pairing a selector with property declarations.

    Holds raw tokens only; typed values are produced by property contracts
    the first time they are applied.
    """

    selector: Selector
    properties: dict[str, PropertyValues]
    line: int | None = field(default=None, compare=False)

    def __hash__(self) -> int:
        return hash((self.selector, frozenset(self.properties.items())))


@dataclass(frozen=True)
class StyleSheetDocument:
    """An immutable parsed style sheet.

    ``hash`` is derived from the source text only, so re-parsing identical
    text yields an equal hash and every parse cache entry stays valid.  An
    edit produces a new document with a new hash; documents are never
    patched in place.
    """

    path: str
    hash: int
    rules: tuple[StyleRule, ...] = ()
    diagnostics: tuple[Diagnostic, ...] = field(default=(), compare=False)

    @classmethod
    def parse(cls, path: str, content: str) -> StyleSheetDocument:
        """Parse *content* into a document. *path* is kept for diagnostics only."""
        from ecss.stylesheet.parser import parse_stylesheet

        return parse_stylesheet(content, path=path)

    def get_properties(self, selector: Selector, name: str) -> PropertyValues | None:
        """Return the raw values of *name* for *selector*.

        Only the first rule carrying *selector* is consulted; later rules with
        the same selector are shadowed.
        """
        for rule in self.rules:
            if rule.selector == selector:
                return rule.properties.get(name)
        return None

    def selectors(self) -> list[Selector]:
        """Distinct selectors, in source order."""
        seen: dict[Selector, None] = {}
        for rule in self.rules:
            seen.setdefault(rule.selector, None)
        return list(seen)

    def property_names(self) -> set[str]:
        return {name for rule in self.rules for name in rule.properties}

    def __iter__(self) -> Iterator[StyleRule]:
        return iter(self.rules)
