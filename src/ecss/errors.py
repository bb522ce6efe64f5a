"""Error hierarchy for ecss.

Every error raised while reading a style sheet or resolving a property value
derives from :class:`EcssError`.  None of them is fatal to a styling cycle:
the parser and the apply engine catch them at rule/declaration granularity
and record a diagnostic instead.  :class:`RegistrationError` is the exception
-- it signals a programming error on the host side.
"""

from __future__ import annotations


class EcssError(Exception):
    """Base error for all ecss errors."""

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


# ---------------------------------------------------------------------------
# Style sheet errors
# ---------------------------------------------------------------------------


class UnsupportedSelector(EcssError):
    """The selector syntax was recognized but cannot be represented."""

    def __init__(self, selector: str = "", **kwargs) -> None:
        self.selector = selector
        message = "Unsupported selector"
        if selector:
            message += f": {selector}"
        super().__init__(message, **kwargs)


class InvalidSelector(EcssError):
    """The selector text could not be parsed."""

    def __init__(self, selector: str = "", **kwargs) -> None:
        self.selector = selector
        message = "Invalid selector"
        if selector:
            message += f": {selector}"
        super().__init__(message, **kwargs)


class UnsupportedProperty(EcssError):
    """A declaration names a property no registered contract handles."""

    def __init__(self, name: str, **kwargs) -> None:
        self.name = name
        super().__init__(f"Unsupported property: {name}", **kwargs)


class InvalidPropertyValue(EcssError):
    """A declaration's tokens do not have the shape its property expects."""

    def __init__(self, name: str, **kwargs) -> None:
        self.name = name
        super().__init__(f"Invalid property value: {name}", **kwargs)


class UnexpectedToken(EcssError):
    """The parser met a token it did not expect at that position."""

    def __init__(
        self,
        text: str,
        line: int | None = None,
        column: int | None = None,
        **kwargs,
    ) -> None:
        self.text = text
        self.line = line
        self.column = column
        super().__init__(f"Unexpected token: {text}", **kwargs)


# ---------------------------------------------------------------------------
# Host-side errors
# ---------------------------------------------------------------------------


class RegistrationError(EcssError):
    """A property contract registration is inconsistent (programming error)."""


class StyleSheetLoaderError(EcssError):
    """A style sheet source could not be read, decoded or preprocessed."""

    def __init__(self, message: str, *, path: str = "", **kwargs) -> None:
        self.path = path
        super().__init__(message, **kwargs)
