"""ecss model layer -- public type re-exports."""

from ecss.model.diagnostic import Diagnostic, Severity

__all__ = [
    "Severity",
    "Diagnostic",
]
