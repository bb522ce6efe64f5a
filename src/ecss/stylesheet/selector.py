"""Selectors: flat conjunctive match conditions over entity capabilities.

A selector is the set of atoms an entity must carry simultaneously:

    *                  every tracked entity (the empty conjunction)
    button             entities with the ``button`` component
    .title             entities with the ``title`` class
    #root              the entity named ``root``
    button.primary     both of the above at once

Selector text is parsed with a Lark grammar (``selector.lark``) and turned
into :class:`Selector` values by :class:`SelectorTransformer`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from pathlib import Path

from lark import Lark, Token, Transformer
from lark.exceptions import UnexpectedInput, VisitError

from ecss.errors import EcssError, InvalidSelector, UnsupportedSelector

GRAMMAR_PATH = Path(__file__).parent / "selector.lark"


class ElementKind(Enum):
    """What an atom of a selector refers to."""

    COMPONENT = "component"
    CLASS = "class"
    NAME = "name"


_PREFIX = {
    ElementKind.COMPONENT: "",
    ElementKind.CLASS: ".",
    ElementKind.NAME: "#",
}


@dataclass(frozen=True)
class SelectorElement:
    """A single atom of a selector; doubles as the capability key it is tracked under."""

    kind: ElementKind
    value: str

    @property
    def capability(self) -> str:
        """Capability name as understood by a capability index: ``button``, ``.title`` or ``#root``."""
        return _PREFIX[self.kind] + self.value

    def __str__(self) -> str:
        return self.capability


@dataclass(frozen=True)
class Selector:
    """A conjunction of :class:`SelectorElement` atoms.

    Two selectors are equal iff their atom sets are equal, so ``.a.b`` and
    ``.b.a`` share cache entries.  The empty conjunction is the universal
    selector ``*``.
    """

    elements: frozenset[SelectorElement] = frozenset()
    text: str = field(default="", compare=False)

    @classmethod
    def universal(cls) -> Selector:
        return cls(frozenset(), "*")

    @classmethod
    def of(cls, *elements: SelectorElement) -> Selector:
        return cls(frozenset(elements), "".join(_ordered_text(elements)))

    @classmethod
    def parse(cls, text: str) -> Selector:
        """Parse a single selector; raises on lists, unsupported or invalid syntax."""
        selectors = parse_selector_list(text)
        if len(selectors) != 1:
            raise UnsupportedSelector(text)
        return selectors[0]

    @property
    def is_universal(self) -> bool:
        return not self.elements

    def capabilities(self) -> list[str]:
        """The capability names this selector depends on, sorted."""
        return sorted(e.capability for e in self.elements)

    def __str__(self) -> str:
        if self.text:
            return self.text
        if self.is_universal:
            return "*"
        return "".join(_ordered_text(self.elements))


def _ordered_text(elements) -> list[str]:
    # Component atom first, as it must be written in selector syntax.
    ordered = sorted(elements, key=lambda e: (e.kind is not ElementKind.COMPONENT, e.kind.value, e.value))
    return [e.capability for e in ordered]


class _Unsupported:
    """Marker returned for atoms the matcher cannot evaluate."""

    def __init__(self, text: str) -> None:
        self.text = text

    def __str__(self) -> str:
        return self.text


class SelectorTransformer(Transformer):  # type: ignore[type-arg]
    """Transform a Lark parse tree of a selector list into :class:`Selector` values."""

    # ---- atoms ----

    def component(self, items: list[Token]) -> SelectorElement:
        return SelectorElement(ElementKind.COMPONENT, str(items[0]))

    def universal(self, items: list[Token]) -> None:
        return None

    def class_name(self, items: list[Token]) -> SelectorElement:
        return SelectorElement(ElementKind.CLASS, str(items[0]))

    def name(self, items: list[Token]) -> SelectorElement:
        return SelectorElement(ElementKind.NAME, str(items[0])[1:])

    def pseudo_class(self, items: list[Token]) -> _Unsupported:
        return _Unsupported(f":{items[0]}")

    def pseudo_element(self, items: list[Token]) -> _Unsupported:
        return _Unsupported(f"::{items[0]}")

    def attribute(self, items: list[Token]) -> _Unsupported:
        return _Unsupported(str(items[0]))

    # ---- structural ----

    def compound(self, items: list[object]) -> Selector:
        elements: list[SelectorElement] = []
        for item in items:
            if isinstance(item, _Unsupported):
                raise UnsupportedSelector(str(item))
            if item is not None:
                elements.append(item)  # type: ignore[arg-type]
        text = "*" if not elements else "".join(str(i) for i in items if i is not None)
        return Selector(frozenset(elements), text)

    def combinator(self, items: list[Token]) -> str:
        return "".join(str(t) for t in items).strip() or " "

    def simple(self, items: list[Selector]) -> Selector:
        return items[0]

    def complex(self, items: list[object]) -> Selector:
        raise UnsupportedSelector(" ".join(str(i) for i in items))

    def start(self, items: list[Selector]) -> list[Selector]:
        return list(items)


@lru_cache(maxsize=None)
def _parser() -> Lark:
    return Lark(GRAMMAR_PATH.read_text(), parser="lalr", start="start")


def parse_selector_list(text: str) -> list[Selector]:
    """Parse the prelude of a style rule into one or more selectors.

    Raises :class:`InvalidSelector` for unparseable text and
    :class:`UnsupportedSelector` for recognized but unrepresentable syntax.
    """
    source = text.strip()
    if not source:
        raise InvalidSelector(text)
    try:
        tree = _parser().parse(source)
    except UnexpectedInput as e:
        raise InvalidSelector(source, cause=e) from e
    try:
        return SelectorTransformer().transform(tree)
    except VisitError as e:
        if isinstance(e.orig_exc, EcssError):
            raise e.orig_exc from None
        raise
