"""Validation rules for style sheet documents.

Each rule is a function taking a document and the property registry it
will be applied with, and returning a list of Diagnostic objects
describing any issues found.
"""

from __future__ import annotations

from ecss.errors import EcssError, UnsupportedProperty
from ecss.model.diagnostic import Diagnostic, Severity
from ecss.property.registry import PropertyRegistry
from ecss.stylesheet.model import StyleSheetDocument
from ecss.stylesheet.selector import Selector

# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


def check_parse_errors(document: StyleSheetDocument, registry: PropertyRegistry) -> list[Diagnostic]:
    """Rules and declarations the parser had to drop."""
    return list(document.diagnostics)


def check_property_values(
    document: StyleSheetDocument, registry: PropertyRegistry
) -> list[Diagnostic]:
    """Every declaration of a registered property must parse."""
    diagnostics: list[Diagnostic] = []
    for rule in document:
        for name, values in rule.properties.items():
            contract = registry.get(name)
            if contract is None:
                continue
            try:
                contract.parse(values)
            except EcssError as e:
                diagnostics.append(
                    Diagnostic(
                        rule="check_property_values",
                        severity=Severity.ERROR,
                        message=f"{e} (got '{values}')",
                        selector=str(rule.selector),
                        property_name=name,
                        line=rule.line,
                    )
                )
    return diagnostics


# ---------------------------------------------------------------------------
# Warnings
# ---------------------------------------------------------------------------


def check_unsupported_properties(
    document: StyleSheetDocument, registry: PropertyRegistry
) -> list[Diagnostic]:
    """Declarations no registered contract handles are ignored at apply time."""
    diagnostics: list[Diagnostic] = []
    for rule in document:
        for name in rule.properties:
            if name not in registry:
                diagnostics.append(
                    Diagnostic(
                        rule="check_unsupported_properties",
                        severity=Severity.WARNING,
                        message=str(UnsupportedProperty(name)),
                        selector=str(rule.selector),
                        property_name=name,
                        line=rule.line,
                    )
                )
    return diagnostics


def check_duplicate_selectors(
    document: StyleSheetDocument, registry: PropertyRegistry
) -> list[Diagnostic]:
    """Only the first rule of a selector is consulted; later ones are dead."""
    first_seen: dict[Selector, int | None] = {}
    diagnostics: list[Diagnostic] = []
    for rule in document:
        if rule.selector not in first_seen:
            first_seen[rule.selector] = rule.line
            continue
        where = first_seen[rule.selector]
        diagnostics.append(
            Diagnostic(
                rule="check_duplicate_selectors",
                severity=Severity.WARNING,
                message=(
                    f"Rule for '{rule.selector}' is shadowed by an earlier rule"
                    + (f" at line {where}" if where is not None else "")
                    + " and will never be applied."
                ),
                selector=str(rule.selector),
                line=rule.line,
                fix="Merge the declarations into the first rule for this selector.",
            )
        )
    return diagnostics


# ---------------------------------------------------------------------------
# Info
# ---------------------------------------------------------------------------


def check_empty_rules(document: StyleSheetDocument, registry: PropertyRegistry) -> list[Diagnostic]:
    return [
        Diagnostic(
            rule="check_empty_rules",
            severity=Severity.INFO,
            message=f"Rule for '{rule.selector}' declares no properties.",
            selector=str(rule.selector),
            line=rule.line,
        )
        for rule in document
        if not rule.properties
    ]


ALL_RULES = [
    check_parse_errors,
    check_property_values,
    check_unsupported_properties,
    check_duplicate_selectors,
    check_empty_rules,
]
