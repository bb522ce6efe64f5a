"""Tests for the style sheet rule parser."""

from ecss.model.diagnostic import Severity
from ecss.stylesheet import StyleSheetDocument, parse_stylesheet
from ecss.stylesheet.selector import ElementKind, Selector, SelectorElement
from ecss.stylesheet.tokens import (
    Dimension,
    Fr,
    Function,
    Identifier,
    Number,
    Percentage,
    PropertyValues,
)


def _sel(text):
    return Selector.parse(text)


# ---------------------------------------------------------------------------
# Rules and declarations
# ---------------------------------------------------------------------------


class TestRules:
    def test_two_rules(self):
        doc = parse_stylesheet("a { width: 10px; } .b { width: 50%; }")
        assert len(doc.rules) == 2
        assert doc.rules[0].selector == Selector.of(SelectorElement(ElementKind.COMPONENT, "a"))
        assert doc.rules[0].properties == {"width": PropertyValues.of(Dimension(10.0))}
        assert doc.rules[1].selector == _sel(".b")
        assert doc.rules[1].properties == {"width": PropertyValues.of(Percentage(50.0))}

    def test_declaration_order_is_kept(self):
        doc = parse_stylesheet("a { height: 1px; width: 2px; margin: 0; }")
        assert list(doc.rules[0].properties) == ["height", "width", "margin"]

    def test_last_declaration_wins(self):
        doc = parse_stylesheet("a { width: 1px; width: 2px; }")
        assert doc.rules[0].properties["width"] == PropertyValues.of(Dimension(2.0))

    def test_missing_final_semicolon(self):
        doc = parse_stylesheet("a { width: 1px; height: 2px }")
        assert set(doc.rules[0].properties) == {"width", "height"}

    def test_function_values(self):
        doc = parse_stylesheet("a { grid-template-columns: repeat(2, 1fr) 100px; }")
        assert doc.rules[0].properties["grid-template-columns"] == PropertyValues.of(
            Function("repeat", (Number(2.0), Fr(1.0))), Dimension(100.0)
        )

    def test_important_is_ignored(self):
        doc = parse_stylesheet("a { width: 1px !important; }")
        assert doc.rules[0].properties["width"] == PropertyValues.of(Dimension(1.0))

    def test_comma_list_shares_declarations(self):
        doc = parse_stylesheet("a, .b { display: none; }")
        assert [r.selector for r in doc.rules] == [_sel("a"), _sel(".b")]
        assert doc.rules[0].properties == doc.rules[1].properties
        assert doc.rules[0].properties["display"] == PropertyValues.of(Identifier("none"))

    def test_line_numbers(self):
        doc = parse_stylesheet("a {}\n.b { width: 1px; }")
        assert doc.rules[1].line == 2

    def test_empty_document(self):
        doc = parse_stylesheet("")
        assert doc.rules == ()
        assert doc.diagnostics == ()

    def test_comments(self):
        doc = parse_stylesheet("/* header */ a { /* inner */ width: 1px; }")
        assert doc.rules[0].properties == {"width": PropertyValues.of(Dimension(1.0))}


# ---------------------------------------------------------------------------
# Content hash
# ---------------------------------------------------------------------------


class TestHash:
    def test_identical_text_identical_hash(self):
        source = "a { width: 10px; }"
        assert parse_stylesheet(source).hash == parse_stylesheet(source).hash

    def test_path_does_not_affect_hash(self):
        source = "a { width: 10px; }"
        assert parse_stylesheet(source, "x.css").hash == parse_stylesheet(source, "y.css").hash

    def test_edit_changes_hash(self):
        assert parse_stylesheet("a { width: 10px; }").hash != parse_stylesheet("a { width: 11px; }").hash

    def test_hash_fits_u64(self):
        assert 0 <= parse_stylesheet("a {}").hash < 2**64


# ---------------------------------------------------------------------------
# Error isolation
# ---------------------------------------------------------------------------


class TestMalformedRules:
    def test_invalid_selector_skips_only_that_rule(self):
        doc = parse_stylesheet("a { width: 1px; } %%% { x: y; } .b { height: 2px; }")
        assert [r.selector for r in doc.rules] == [_sel("a"), _sel(".b")]
        assert len(doc.diagnostics) == 1
        assert doc.diagnostics[0].rule == "parse_selector"
        assert doc.diagnostics[0].severity is Severity.ERROR
        assert doc.diagnostics[0].message.startswith("Invalid selector")

    def test_unsupported_selector_skips_only_that_rule(self):
        doc = parse_stylesheet("a:hover { width: 1px; } b { width: 2px; }")
        assert [r.selector for r in doc.rules] == [_sel("b")]
        assert doc.diagnostics[0].message == "Unsupported selector: :hover"

    def test_bad_declarations_are_skipped(self):
        doc = parse_stylesheet("a { 10px: 3; width: 1px; color red; }")
        assert doc.rules[0].properties == {"width": PropertyValues.of(Dimension(1.0))}
        assert [d.rule for d in doc.diagnostics] == ["parse_declaration", "parse_declaration"]
        assert doc.diagnostics[0].message == "Unexpected token: 10px"

    def test_stray_closing_brace(self):
        doc = parse_stylesheet("} a { width: 1px; }")
        assert [r.selector for r in doc.rules] == [_sel("a")]
        assert doc.diagnostics[0].rule == "parse_rule"

    def test_statement_without_block(self):
        doc = parse_stylesheet('@import "x.css"; a { width: 1px; }')
        assert [r.selector for r in doc.rules] == [_sel("a")]
        assert doc.diagnostics[0].rule == "parse_rule"

    def test_unterminated_block(self):
        doc = parse_stylesheet("a { width: 1px")
        assert doc.rules[0].properties == {"width": PropertyValues.of(Dimension(1.0))}

    def test_trailing_prelude(self):
        doc = parse_stylesheet("a { width: 1px; } b")
        assert len(doc.rules) == 1
        assert doc.diagnostics[0].selector == "b"

    def test_parse_never_raises(self):
        doc = parse_stylesheet("{{{ ;;; }}} @@@ ::: ((( ")
        assert isinstance(doc, StyleSheetDocument)


# ---------------------------------------------------------------------------
# Document API
# ---------------------------------------------------------------------------


class TestDocument:
    def test_parse_classmethod(self):
        doc = StyleSheetDocument.parse("ui.css", "a { width: 1px; }")
        assert doc.path == "ui.css"
        assert len(doc.rules) == 1

    def test_first_rule_for_selector_wins(self):
        doc = parse_stylesheet("a { width: 1px; } a { width: 2px; height: 3px; }")
        assert doc.get_properties(_sel("a"), "width") == PropertyValues.of(Dimension(1.0))
        assert doc.get_properties(_sel("a"), "height") is None

    def test_get_properties_missing(self):
        doc = parse_stylesheet("a { width: 1px; }")
        assert doc.get_properties(_sel(".b"), "width") is None

    def test_selectors_distinct_in_order(self):
        doc = parse_stylesheet(".b {} a {} .b {} *{}")
        assert doc.selectors() == [_sel(".b"), _sel("a"), Selector.universal()]

    def test_iteration_and_truthiness(self):
        doc = parse_stylesheet("")
        assert list(doc) == []
        assert doc

    def test_property_names(self):
        doc = parse_stylesheet("a { width: 1px; } b { height: 1px; width: 2px; }")
        assert doc.property_names() == {"width", "height"}

    def test_rules_and_documents_are_hashable(self):
        source = "a { width: 1px; height: 2px; }\na { height: 2px; width: 1px; }"
        doc = parse_stylesheet(source)
        first, second = doc.rules
        assert first == second
        assert hash(first) == hash(second)
        assert len({first, second}) == 1
        assert hash(doc) == hash(parse_stylesheet(source))
