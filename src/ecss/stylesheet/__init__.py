from ecss.stylesheet.lexer import tokenize
from ecss.stylesheet.loader import StyleSheetLoader
from ecss.stylesheet.model import StyleRule, StyleSheetDocument, content_hash
from ecss.stylesheet.parser import parse_stylesheet
from ecss.stylesheet.selector import ElementKind, Selector, SelectorElement, parse_selector_list
from ecss.stylesheet.tokens import PropertyToken, PropertyValues

__all__ = [
    "tokenize",
    "parse_stylesheet",
    "parse_selector_list",
    "StyleSheetLoader",
    "StyleSheetDocument",
    "StyleRule",
    "Selector",
    "SelectorElement",
    "ElementKind",
    "PropertyToken",
    "PropertyValues",
    "content_hash",
]
