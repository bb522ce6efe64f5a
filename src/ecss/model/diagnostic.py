"""Diagnostic model: structured findings about a style sheet."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Severity(Enum):
    """Severity level for a diagnostic message."""

    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"


@dataclass(frozen=True)
class Diagnostic:
    """A single finding about a style sheet document.

    Attributes:
        rule: Identifier for the check (or parser stage) that produced this diagnostic.
        severity: How serious the issue is.
        message: Human-readable description of the problem.
        selector: The selector text of the rule involved, if applicable.
        property_name: The property name involved, if applicable.
        line: 1-based source line, if known.
        fix: Suggested remediation, if available.
    """

    rule: str
    severity: Severity
    message: str
    selector: str | None = None
    property_name: str | None = None
    line: int | None = None
    fix: str | None = None

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    @property
    def is_warning(self) -> bool:
        return self.severity is Severity.WARNING

    def __str__(self) -> str:
        location = ""
        if self.selector and self.property_name:
            location = f" [{self.selector} {{ {self.property_name} }}]"
        elif self.selector:
            location = f" [{self.selector}]"
        elif self.property_name:
            location = f" [property={self.property_name}]"
        if self.line is not None:
            location += f" (line {self.line})"
        return f"{self.severity.value}{location}: {self.message}"
