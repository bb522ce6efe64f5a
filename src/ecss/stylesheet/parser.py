"""Hand-written rule parser for style sheets.

Syntax example:
    * { color: white; }
    button.primary { width: 10px; margin: 4px 8px; }
    .title, #header { font-size: 24; text-content: "Hello"; }

The source is lexed once (see :mod:`ecss.stylesheet.lexer`) and the lexemes
are grouped into rules: a prelude up to ``{``, then a block up to the
matching ``}``.  Problems are isolated -- a malformed rule or declaration is
recorded as a :class:`~ecss.model.diagnostic.Diagnostic` on the document
and skipped, and parsing continues with the next one.
"""

from __future__ import annotations

import logging

from lark import Token

from ecss.errors import EcssError, UnexpectedToken
from ecss.model.diagnostic import Diagnostic, Severity
from ecss.stylesheet.lexer import fold, lex
from ecss.stylesheet.model import StyleRule, StyleSheetDocument, content_hash
from ecss.stylesheet.selector import parse_selector_list
from ecss.stylesheet.tokens import PropertyValues

__all__ = ["parse_stylesheet"]

logger = logging.getLogger(__name__)

_OPEN = {"LBRACE": "RBRACE", "LPAR": "RPAR", "LSQB": "RSQB"}
_CLOSE = frozenset(_OPEN.values())


def _text(lexemes: list[Token]) -> str:
    return "".join(str(t) for t in lexemes).strip()


def _strip_ws(lexemes: list[Token]) -> list[Token]:
    start, end = 0, len(lexemes)
    while start < end and lexemes[start].type == "WS":
        start += 1
    while end > start and lexemes[end - 1].type == "WS":
        end -= 1
    return lexemes[start:end]


def _strip_important(lexemes: list[Token]) -> list[Token]:
    """Drop a trailing ``!important``; priority is not modelled."""
    body = _strip_ws(lexemes)
    if (
        len(body) >= 2
        and body[-1].type == "IDENT"
        and str(body[-1]).lower() == "important"
    ):
        head = _strip_ws(body[:-1])
        if head and head[-1].type == "DELIM" and str(head[-1]) == "!":
            return head[:-1]
    return lexemes


class _RuleReader:
    """Cursor over the lexemes of one document."""

    def __init__(self, source: str, path: str) -> None:
        self._lexemes = list(lex(source))
        self._pos = 0
        self._path = path
        self.rules: list[StyleRule] = []
        self.diagnostics: list[Diagnostic] = []

    # ---- cursor ----

    def _peek(self) -> Token | None:
        if self._pos < len(self._lexemes):
            return self._lexemes[self._pos]
        return None

    def _next(self) -> Token | None:
        lexeme = self._peek()
        if lexeme is not None:
            self._pos += 1
        return lexeme

    def _skip_ws(self) -> None:
        while (lexeme := self._peek()) is not None and lexeme.type == "WS":
            self._pos += 1

    # ---- diagnostics ----

    def _report(
        self,
        rule: str,
        error: EcssError,
        *,
        selector: str | None = None,
        property_name: str | None = None,
        line: int | None = None,
    ) -> None:
        diagnostic = Diagnostic(
            rule=rule,
            severity=Severity.ERROR,
            message=str(error),
            selector=selector,
            property_name=property_name,
            line=line,
        )
        logger.warning("%s: dropped: %s", self._path or "<style sheet>", diagnostic)
        self.diagnostics.append(diagnostic)

    # ---- grammar ----

    def read(self) -> None:
        while True:
            self._skip_ws()
            if self._peek() is None:
                return
            self._rule()

    def _rule(self) -> None:
        prelude: list[Token] = []
        while (lexeme := self._next()) is not None:
            if lexeme.type == "LBRACE":
                block = self._block()
                self._build_rule(prelude, block, line=(prelude or [lexeme])[0].line)
                return
            if lexeme.type in ("SEMICOLON", "RBRACE"):
                # A statement without a block (e.g. "@import x;") or a stray "}".
                text = _text(prelude + [lexeme])
                self._report(
                    "parse_rule",
                    UnexpectedToken(text, line=lexeme.line, column=lexeme.column),
                    line=lexeme.line,
                )
                return
            prelude.append(lexeme)
        if _strip_ws(prelude):
            first = _strip_ws(prelude)[0]
            self._report(
                "parse_rule",
                UnexpectedToken(_text(prelude), line=first.line, column=first.column),
                selector=_text(prelude),
                line=first.line,
            )

    def _block(self) -> list[Token]:
        """Collect lexemes up to the ``}`` matching an already consumed ``{``.

        An unterminated block is closed by the end of input.
        """
        block: list[Token] = []
        depth = 0
        while (lexeme := self._next()) is not None:
            if lexeme.type == "LBRACE":
                depth += 1
            elif lexeme.type == "RBRACE":
                if depth == 0:
                    return block
                depth -= 1
            block.append(lexeme)
        return block

    def _build_rule(self, prelude: list[Token], block: list[Token], line: int | None) -> None:
        selector_text = _text(prelude)
        try:
            selectors = parse_selector_list(selector_text)
        except EcssError as exc:
            self._report("parse_selector", exc, selector=selector_text, line=line)
            return
        properties = self._declarations(block, selector_text)
        for selector in selectors:
            self.rules.append(StyleRule(selector=selector, properties=properties, line=line))

    def _declarations(self, block: list[Token], selector: str) -> dict[str, PropertyValues]:
        properties: dict[str, PropertyValues] = {}
        for chunk in _split_declarations(block):
            chunk = _strip_ws(chunk)
            if not chunk:
                continue
            head = chunk[0]
            if head.type != "IDENT":
                self._report(
                    "parse_declaration",
                    UnexpectedToken(str(head), line=head.line, column=head.column),
                    selector=selector,
                    line=head.line,
                )
                continue
            name = str(head)
            rest = _strip_ws(chunk[1:])
            if not rest or rest[0].type != "COLON":
                found = rest[0] if rest else head
                self._report(
                    "parse_declaration",
                    UnexpectedToken(str(found), line=found.line, column=found.column),
                    selector=selector,
                    property_name=name,
                    line=found.line,
                )
                continue
            raw = _strip_important(rest[1:])
            nested = next((t for t in raw if t.type == "LBRACE"), None)
            if nested is not None:
                self._report(
                    "parse_declaration",
                    UnexpectedToken(str(nested), line=nested.line, column=nested.column),
                    selector=selector,
                    property_name=name,
                    line=nested.line,
                )
                continue
            # Last declaration of a name wins.
            properties[name] = PropertyValues(tuple(fold(raw)))
        return properties


def _split_declarations(block: list[Token]) -> list[list[Token]]:
    """Split a block on top-level ``;`` (brackets and nested blocks are kept whole)."""
    chunks: list[list[Token]] = [[]]
    depth = 0
    for lexeme in block:
        if lexeme.type in _OPEN or lexeme.type == "FUNCTION":
            depth += 1
        elif lexeme.type in _CLOSE:
            depth = max(depth - 1, 0)
        elif lexeme.type == "SEMICOLON" and depth == 0:
            chunks.append([])
            continue
        chunks[-1].append(lexeme)
    return chunks


def parse_stylesheet(source: str, path: str = "") -> StyleSheetDocument:
    """Parse style sheet text into a :class:`StyleSheetDocument`.

    Never raises for malformed input: rules in source order, plus a
    diagnostic for everything that was dropped.
    """
    reader = _RuleReader(source, path)
    reader.read()
    return StyleSheetDocument(
        path=path,
        hash=content_hash(source),
        rules=tuple(reader.rules),
        diagnostics=tuple(reader.diagnostics),
    )
