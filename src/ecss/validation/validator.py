"""Document validator: runs all validation rules and reports diagnostics."""

from __future__ import annotations

from typing import Callable

from ecss.errors import EcssError
from ecss.model.diagnostic import Diagnostic
from ecss.property.impls import register_default_properties
from ecss.property.registry import PropertyRegistry
from ecss.stylesheet.model import StyleSheetDocument
from ecss.validation.rules import ALL_RULES


class ValidationError(EcssError):
    """Raised when validation produces ERROR-severity diagnostics."""

    def __init__(self, diagnostics: list[Diagnostic]) -> None:
        self.diagnostics = diagnostics
        messages = [str(d) for d in diagnostics if d.is_error]
        super().__init__(
            f"Validation failed with {len(messages)} error(s): " + "; ".join(messages)
        )


RuleFunc = Callable[[StyleSheetDocument, PropertyRegistry], list[Diagnostic]]


def validate(
    document: StyleSheetDocument,
    registry: PropertyRegistry | None = None,
    extra_rules: list[RuleFunc] | None = None,
) -> list[Diagnostic]:
    """Run all validation rules against *document*.

    Properties are checked against *registry*, or the built-in property set
    when none is given.  Returns the full list of diagnostics (errors,
    warnings, info).
    """
    if registry is None:
        registry = register_default_properties(PropertyRegistry())
    rules: list[RuleFunc] = list(ALL_RULES)
    if extra_rules:
        rules.extend(extra_rules)
    diagnostics: list[Diagnostic] = []
    for rule in rules:
        diagnostics.extend(rule(document, registry))
    return diagnostics


def validate_or_raise(
    document: StyleSheetDocument,
    registry: PropertyRegistry | None = None,
    extra_rules: list[RuleFunc] | None = None,
) -> list[Diagnostic]:
    """Run validation; raises :class:`ValidationError` if any ERROR diagnostics exist.

    Returns the non-error diagnostics (warnings/info) when no errors are found.
    """
    diagnostics = validate(document, registry, extra_rules=extra_rules)
    errors = [d for d in diagnostics if d.is_error]
    if errors:
        raise ValidationError(errors)
    return diagnostics
