"""Tokenizer: style sheet text to classified property tokens.

The raw lexing is done by a Lark basic lexer built from ``tokens.lark``.
:func:`fold` then makes a single forward pass over the raw lexemes, nesting
function arguments recursively and classifying numeric suffixes.  Lexemes
without a meaning at this layer (whitespace, commas, stray delimiters) are
dropped rather than reported.
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from pathlib import Path
from typing import Iterable, Iterator

from lark import Lark, Token

from ecss.stylesheet.tokens import (
    Dimension,
    Fr,
    Function,
    Hash,
    Identifier,
    Number,
    Percentage,
    PropertyToken,
    Slash,
    String,
    VMax,
    VMin,
    Vh,
    Vw,
)

logger = logging.getLogger(__name__)

GRAMMAR_PATH = Path(__file__).parent / "tokens.lark"

_NUMERIC_RE = re.compile(r"[+-]?(?:\d+\.\d+|\.\d+|\d+)(?:[eE][+-]?\d+)?(?![eE][+-]?\d)")
_ESCAPE_RE = re.compile(r"\\(.)")

# Unit suffixes with their own token class; anything else is a plain Dimension.
_UNITS: dict[str, type] = {
    "vmin": VMin,
    "vmax": VMax,
    "vh": Vh,
    "vw": Vw,
    "fr": Fr,
}

# Lexemes dropped without a trace.
_SILENT = frozenset({"WS", "COMMA"})


@lru_cache(maxsize=None)
def _lexer() -> Lark:
    return Lark(GRAMMAR_PATH.read_text(), parser="lalr", lexer="basic")


def lex(text: str) -> Iterator[Token]:
    """Yield raw lexemes (Lark tokens, whitespace included, comments excluded)."""
    return _lexer().lex(text)


def tokenize(text: str) -> Iterator[PropertyToken]:
    """Lazily turn *text* into property tokens. Single pass, not restartable."""
    return fold(lex(text))


def fold(lexemes: Iterable[Token]) -> Iterator[PropertyToken]:
    """Classify raw lexemes, grouping ``name(...)`` calls into :class:`Function` tokens."""
    return _fold(iter(lexemes), nested=False)


def _fold(lexemes: Iterator[Token], nested: bool) -> Iterator[PropertyToken]:
    for lexeme in lexemes:
        if lexeme.type == "FUNCTION":
            # The inner generator consumes the shared iterator up to the matching ")".
            args = tuple(_fold(lexemes, nested=True))
            yield Function(str(lexeme)[:-1], args)
        elif lexeme.type == "RPAR" and nested:
            return
        else:
            token = classify(lexeme)
            if token is not None:
                yield token


def classify(lexeme: Token) -> PropertyToken | None:
    """Map one raw lexeme to a property token, or ``None`` if it has no token class."""
    kind = lexeme.type
    text = str(lexeme)
    if kind == "DIMENSION":
        match = _NUMERIC_RE.match(text)
        if match is None:  # pragma: no cover - the lexer guarantees a numeric prefix
            return None
        value = float(match.group())
        unit = text[match.end():]
        return _UNITS.get(unit, Dimension)(value)
    if kind == "PERCENTAGE":
        return Percentage(float(text[:-1]))
    if kind == "NUMBER":
        return Number(float(text))
    if kind == "IDENT":
        return Identifier(text)
    if kind == "HASH":
        return Hash(text[1:])
    if kind == "STRING":
        return String(_ESCAPE_RE.sub(r"\1", text[1:-1]))
    if kind == "SLASH":
        return Slash()
    if kind not in _SILENT:
        logger.debug("Dropping unexpected lexeme %r (%s) at line %s", text, kind, lexeme.line)
    return None
