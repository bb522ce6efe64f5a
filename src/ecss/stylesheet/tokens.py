"""Property value tokens: the classified output of the tokenizer.

A declaration such as ``margin: 10px 5%;`` is stored as a
:class:`PropertyValues` holding ``(Dimension(10.0), Percentage(5.0))``.  Tokens
carry no meaning beyond their lexical class; value interpreters in
:mod:`ecss.property.values` give them one.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Iterator, Union, overload


@dataclass(frozen=True)
class Percentage:
    """A percent value like ``100%`` (stored as ``100.0``)."""

    value: float


@dataclass(frozen=True)
class Dimension:
    """A length like ``10px`` or ``35em``; any unit other than the viewport/grid ones."""

    value: float


@dataclass(frozen=True)
class VMin:
    value: float


@dataclass(frozen=True)
class VMax:
    value: float


@dataclass(frozen=True)
class Vh:
    value: float


@dataclass(frozen=True)
class Vw:
    value: float


@dataclass(frozen=True)
class Fr:
    """A grid fraction like ``1fr``."""

    value: float


@dataclass(frozen=True)
class Number:
    """A unitless number like ``31.1`` or ``43``."""

    value: float


@dataclass(frozen=True)
class Identifier:
    """A plain identifier like ``none`` or ``center``."""

    value: str


@dataclass(frozen=True)
class Hash:
    """An identifier prefixed by a hash, like ``#001122`` (stored without the ``#``)."""

    value: str


@dataclass(frozen=True)
class String:
    """A quoted string, unquoted."""

    value: str


@dataclass(frozen=True)
class Function:
    """A function call like ``repeat(2, 1fr)`` with already-tokenized arguments."""

    name: str
    args: tuple[PropertyToken, ...] = ()


@dataclass(frozen=True)
class Slash:
    """A literal ``/``."""


PropertyToken = Union[
    Percentage,
    Dimension,
    VMin,
    VMax,
    Vh,
    Vw,
    Fr,
    Number,
    Identifier,
    Hash,
    String,
    Function,
    Slash,
]


@dataclass(frozen=True)
class PropertyValues(Sequence):
    """The ordered tokens of a single declaration. Never mutated after parse."""

    tokens: tuple[PropertyToken, ...] = ()

    @classmethod
    def of(cls, *tokens: PropertyToken) -> PropertyValues:
        return cls(tuple(tokens))

    @overload
    def __getitem__(self, index: int) -> PropertyToken: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[PropertyToken, ...]: ...

    def __getitem__(self, index):
        return self.tokens[index]

    def __len__(self) -> int:
        return len(self.tokens)

    def __iter__(self) -> Iterator[PropertyToken]:
        return iter(self.tokens)

    def __str__(self) -> str:
        return " ".join(format_token(t) for t in self.tokens)


_UNIT_SUFFIX = {
    Percentage: "%",
    Dimension: "px",
    VMin: "vmin",
    VMax: "vmax",
    Vh: "vh",
    Vw: "vw",
    Fr: "fr",
}


def format_token(token: PropertyToken) -> str:
    """Render a token back into style sheet notation (for diagnostics and ``ecss inspect``)."""
    if isinstance(token, Function):
        return f"{token.name}({', '.join(format_token(a) for a in token.args)})"
    if isinstance(token, Slash):
        return "/"
    if isinstance(token, Hash):
        return f"#{token.value}"
    if isinstance(token, String):
        return f'"{token.value}"'
    if isinstance(token, Identifier):
        return token.value
    suffix = _UNIT_SUFFIX.get(type(token), "")
    return f"{token.value:g}{suffix}"
