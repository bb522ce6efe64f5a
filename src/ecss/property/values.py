"""Value interpreters: pure functions from raw declaration tokens to typed values.

Every interpreter takes a :class:`~ecss.stylesheet.tokens.PropertyValues`
and returns either the typed value or ``None`` when the tokens do not have
the expected shape.  They never raise and never log above DEBUG; turning a
``None`` into an :class:`~ecss.errors.InvalidPropertyValue` is the job of
the property contract calling them.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Sequence

from ecss.property.colors import parse_hex_color, parse_named_color
from ecss.property.types import (
    BorderRadius,
    Color,
    GridPlacement,
    GridTrack,
    GridTrackRepetition,
    RepeatedGridTrack,
    RepetitionKind,
    SizingKind,
    TrackSizing,
    UiRect,
    Val,
)
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
    Vh,
    VMax,
    VMin,
    Vw,
)

logger = logging.getLogger(__name__)

__all__ = [
    "OptionalNumber",
    "string",
    "color",
    "identifier",
    "length",
    "number",
    "optional_number",
    "rect",
    "border_radius",
    "grid_template",
    "grid_placement",
]


@dataclass(frozen=True)
class OptionalNumber:
    """Result of :func:`optional_number`: a number, or ``None`` for the ``none`` keyword."""

    value: float | None


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------


def _finite(token: PropertyToken) -> bool:
    """False for a numeric token whose literal overflowed to infinity."""
    value = getattr(token, "value", None)
    return not isinstance(value, float) or math.isfinite(value)


def string(values: Sequence[PropertyToken]) -> str | None:
    """First non-empty quoted string."""
    for token in values:
        if isinstance(token, String) and token.value:
            return token.value
    return None


def color(values: Sequence[PropertyToken]) -> Color | None:
    """A single named color or hex literal.

    Functional notation such as ``rgba(255, 0, 0, 1)`` is not supported.
    """
    if len(values) != 1:
        return None
    token = values[0]
    if isinstance(token, Identifier):
        return parse_named_color(token.value)
    if isinstance(token, Hash):
        return parse_hex_color(token.value)
    return None


def identifier(values: Sequence[PropertyToken]) -> str | None:
    """First non-empty identifier."""
    for token in values:
        if isinstance(token, Identifier) and token.value:
            return token.value
    return None


def _to_val(token: PropertyToken) -> Val | None:
    if not _finite(token):
        return None
    if isinstance(token, Percentage):
        return Val.percent(token.value)
    if isinstance(token, Dimension):
        return Val.px(token.value)
    if isinstance(token, VMin):
        return Val.vmin(token.value)
    if isinstance(token, VMax):
        return Val.vmax(token.value)
    if isinstance(token, Vh):
        return Val.vh(token.value)
    if isinstance(token, Vw):
        return Val.vw(token.value)
    if isinstance(token, Identifier) and token.value == "auto":
        return Val.auto()
    # A unitless zero is a valid length.
    if isinstance(token, Number) and token.value == 0:
        return Val.px(0)
    return None


def length(values: Sequence[PropertyToken]) -> Val | None:
    """First token that reads as a length: a dimension, percentage, viewport unit or ``auto``."""
    for token in values:
        val = _to_val(token)
        if val is not None:
            return val
    return None


def number(values: Sequence[PropertyToken]) -> float | None:
    """First numeric token; units are ignored."""
    for token in values:
        if isinstance(token, (Percentage, Dimension, Number)):
            return token.value if _finite(token) else None
    return None


def optional_number(values: Sequence[PropertyToken]) -> OptionalNumber | None:
    """A numeric token, or the identifier ``none``.

    Returns ``OptionalNumber(None)`` for ``none`` and ``None`` when neither
    is present.
    """
    for token in values:
        if isinstance(token, (Percentage, Dimension, Number)):
            return OptionalNumber(token.value) if _finite(token) else None
        if isinstance(token, Identifier) and token.value == "none":
            return OptionalNumber(None)
    return None


# ---------------------------------------------------------------------------
# Rectangles
# ---------------------------------------------------------------------------

_SIDES = ("top", "right", "bottom", "left")


def rect(values: Sequence[PropertyToken]) -> UiRect | None:
    """Four sides from one to four lengths.

    A single value sets every side.  Otherwise lengths are assigned in
    ``top, right, bottom, left`` order; sides left unassigned stay at zero
    and tokens past the fourth length are ignored.
    """
    if len(values) == 1:
        val = length(values)
        return UiRect.all(val) if val is not None else None
    sides: dict[str, Val] = {}
    for token in values:
        val = _to_val(token)
        if val is None:
            continue
        if len(sides) < len(_SIDES):
            sides[_SIDES[len(sides)]] = val
    if not sides:
        return None
    return UiRect(**sides)


def border_radius(values: Sequence[PropertyToken]) -> BorderRadius | None:
    """One radius for every corner, or four clockwise from the top-left."""
    vals = [_to_val(token) for token in values]
    if any(v is None for v in vals):
        return None
    if len(vals) == 1:
        return BorderRadius.all(vals[0])  # type: ignore[arg-type]
    if len(vals) == 4:
        return BorderRadius(*vals)  # type: ignore[arg-type]
    return None


# ---------------------------------------------------------------------------
# Grid
# ---------------------------------------------------------------------------

_KEYWORD_SIZING = {
    "min-content": SizingKind.MIN_CONTENT,
    "max-content": SizingKind.MAX_CONTENT,
    "auto": SizingKind.AUTO,
}

_UNIT_SIZING = {
    Number: SizingKind.PX,
    Dimension: SizingKind.PX,
    Percentage: SizingKind.PERCENT,
    VMin: SizingKind.VMIN,
    VMax: SizingKind.VMAX,
    Vh: SizingKind.VH,
    Vw: SizingKind.VW,
}


def _sizing(token: PropertyToken, *, allow_fraction: bool) -> TrackSizing | None:
    if not _finite(token):
        return None
    kind = _UNIT_SIZING.get(type(token))
    if kind is not None:
        return TrackSizing(kind, token.value)  # type: ignore[union-attr]
    if isinstance(token, Fr) and allow_fraction:
        return TrackSizing(SizingKind.FRACTION, token.value)
    if isinstance(token, Identifier) and token.value in _KEYWORD_SIZING:
        return TrackSizing(_KEYWORD_SIZING[token.value])
    logger.debug("Not a track sizing function: %r", token)
    return None


def _repetition(token: PropertyToken) -> GridTrackRepetition | None:
    if isinstance(token, Number) and _finite(token) and token.value >= 1:
        return GridTrackRepetition.of(int(token.value))
    if isinstance(token, Identifier) and token.value == "auto-fill":
        return GridTrackRepetition.auto_fill()
    if isinstance(token, Identifier) and token.value == "auto-fit":
        return GridTrackRepetition.auto_fit()
    logger.debug("First argument to repeat must be a count, auto-fill or auto-fit: %r", token)
    return None


def _track(token: PropertyToken) -> GridTrack | None:
    """A single, non-repeated track."""
    if not _finite(token):
        return None
    if isinstance(token, Percentage):
        return GridTrack.percent(token.value)
    if isinstance(token, Dimension):
        return GridTrack.px(token.value)
    if isinstance(token, Fr):
        return GridTrack.fr(token.value)
    if isinstance(token, Identifier) and token.value == "auto":
        return GridTrack.auto()
    if isinstance(token, Function) and token.name == "fit-content":
        if len(token.args) != 1:
            return None
        arg = token.args[0]
        if not _finite(arg):
            return None
        if isinstance(arg, Dimension):
            return GridTrack.fit_content_px(arg.value)
        if isinstance(arg, Percentage):
            return GridTrack.fit_content_percent(arg.value)
        return None
    if isinstance(token, Function) and token.name == "minmax":
        if len(token.args) != 2:
            return None
        low = _sizing(token.args[0], allow_fraction=False)
        high = _sizing(token.args[1], allow_fraction=True)
        if low is None or high is None:
            return None
        return GridTrack.minmax(low, high)
    return None


def _is_flexible(track: GridTrack) -> bool:
    return track.max.kind is SizingKind.FRACTION or track == GridTrack.auto()


def _repeated(token: PropertyToken) -> RepeatedGridTrack | None:
    if isinstance(token, Function) and token.name == "repeat":
        if len(token.args) != 2:
            logger.debug("Expected 2 arguments to repeat, got %d", len(token.args))
            return None
        repetition = _repetition(token.args[0])
        track = _track(token.args[1])
        if repetition is None or track is None:
            return None
        # auto-fill/auto-fit need a definite track size.
        if repetition.kind is not RepetitionKind.COUNT and _is_flexible(track):
            logger.debug("fr and auto repeats must have a count, not %s", repetition.kind.value)
            return None
        return RepeatedGridTrack(repetition, (track,))
    track = _track(token)
    return RepeatedGridTrack.single(track) if track is not None else None


def grid_template(values: Sequence[PropertyToken]) -> list[RepeatedGridTrack] | None:
    """A track list such as ``100px repeat(2, 1fr) minmax(10px, auto)``.

    Returns ``None`` if the list is empty or any entry is not a track.
    """
    tracks: list[RepeatedGridTrack] = []
    for token in values:
        repeated = _repeated(token)
        if repeated is None:
            return None
        tracks.append(repeated)
    return tracks or None


def _line(token: PropertyToken) -> int | None:
    if isinstance(token, Number) and _finite(token):
        return int(token.value)
    return None


def _is_ident(token: PropertyToken, value: str) -> bool:
    return isinstance(token, Identifier) and token.value == value


def _placement(tokens: Sequence[PropertyToken]) -> GridPlacement | None:
    n = len(tokens)
    slash = n >= 2 and isinstance(tokens[1], Slash)

    if n == 1 and _line(tokens[0]) is not None:
        return GridPlacement.start_line(_line(tokens[0]))  # type: ignore[arg-type]
    if n == 1 and _is_ident(tokens[0], "auto"):
        return GridPlacement.auto()
    if n == 2 and _is_ident(tokens[0], "span") and _line(tokens[1]) is not None:
        return GridPlacement.span_of(_line(tokens[1]))  # type: ignore[arg-type]
    if n == 3 and slash:
        start, end = tokens[0], tokens[2]
        if _line(start) is not None and _line(end) is not None:
            return GridPlacement.start_end(_line(start), _line(end))  # type: ignore[arg-type]
        if _is_ident(start, "auto") and _line(end) is not None:
            return GridPlacement.end_line(_line(end))  # type: ignore[arg-type]
        if _line(start) is not None and _is_ident(end, "auto"):
            return GridPlacement.start_line(_line(start))  # type: ignore[arg-type]
        if _is_ident(start, "auto") and _is_ident(end, "auto"):
            return GridPlacement.auto()
        return None
    if n == 4 and _is_ident(tokens[0], "span") and isinstance(tokens[2], Slash):
        span, end = _line(tokens[1]), _line(tokens[3])
        if span is not None and end is not None:
            return GridPlacement.end_span(end, span)
        return None
    if n == 4 and slash and _is_ident(tokens[2], "span"):
        start, span = _line(tokens[0]), _line(tokens[3])
        if start is not None and span is not None:
            return GridPlacement.start_span(start, span)
    return None


def grid_placement(values: Sequence[PropertyToken]) -> GridPlacement | None:
    """Grid line placement: ``N``, ``auto``, ``span N``, ``start / end`` and mixes thereof."""
    try:
        return _placement(tuple(values))
    except ValueError as e:
        logger.debug("Invalid grid placement: %s", e)
        return None
