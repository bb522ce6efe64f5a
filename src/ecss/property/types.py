"""Typed property values produced by the value interpreters.

These mirror a small UI layout model: lengths (:class:`Val`), four-sided
rectangles, colors, grid tracks and placements, and the keyword
enumerations of the layout facet.  All of them are immutable so a parsed
value can be cached once and pushed onto any number of entities.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# ---------------------------------------------------------------------------
# Lengths
# ---------------------------------------------------------------------------


class ValKind(Enum):
    AUTO = "auto"
    PX = "px"
    PERCENT = "%"
    VMIN = "vmin"
    VMAX = "vmax"
    VH = "vh"
    VW = "vw"


@dataclass(frozen=True)
class Val:
    """A length: ``auto``, fixed pixels, percent of the parent, or a viewport fraction."""

    kind: ValKind = ValKind.AUTO
    value: float = 0.0

    @classmethod
    def auto(cls) -> Val:
        return cls(ValKind.AUTO)

    @classmethod
    def px(cls, value: float) -> Val:
        return cls(ValKind.PX, float(value))

    @classmethod
    def percent(cls, value: float) -> Val:
        return cls(ValKind.PERCENT, float(value))

    @classmethod
    def vmin(cls, value: float) -> Val:
        return cls(ValKind.VMIN, float(value))

    @classmethod
    def vmax(cls, value: float) -> Val:
        return cls(ValKind.VMAX, float(value))

    @classmethod
    def vh(cls, value: float) -> Val:
        return cls(ValKind.VH, float(value))

    @classmethod
    def vw(cls, value: float) -> Val:
        return cls(ValKind.VW, float(value))

    def __str__(self) -> str:
        if self.kind is ValKind.AUTO:
            return "auto"
        return f"{self.value:g}{self.kind.value}"


ZERO = Val.px(0)


@dataclass(frozen=True)
class UiRect:
    """Four lengths, one per side. Unset sides are zero pixels."""

    top: Val = ZERO
    right: Val = ZERO
    bottom: Val = ZERO
    left: Val = ZERO

    @classmethod
    def all(cls, val: Val) -> UiRect:
        return cls(val, val, val, val)


@dataclass(frozen=True)
class BorderRadius:
    """Corner radii, clockwise from the top-left corner."""

    top_left: Val = ZERO
    top_right: Val = ZERO
    bottom_right: Val = ZERO
    bottom_left: Val = ZERO

    @classmethod
    def all(cls, val: Val) -> BorderRadius:
        return cls(val, val, val, val)


# ---------------------------------------------------------------------------
# Color
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Color:
    """An sRGB color with components in ``0.0..=1.0``."""

    r: float = 1.0
    g: float = 1.0
    b: float = 1.0
    a: float = 1.0

    @classmethod
    def rgba_u8(cls, r: int, g: int, b: int, a: int = 255) -> Color:
        return cls(r / 255.0, g / 255.0, b / 255.0, a / 255.0)

    def to_hex(self) -> str:
        channels = [round(c * 255) for c in (self.r, self.g, self.b, self.a)]
        text = "".join(f"{c:02x}" for c in channels)
        return "#" + (text[:6] if channels[3] == 255 else text)


WHITE = Color()
TRANSPARENT = Color(0.0, 0.0, 0.0, 0.0)


# ---------------------------------------------------------------------------
# Grid
# ---------------------------------------------------------------------------


class SizingKind(Enum):
    PX = "px"
    PERCENT = "percent"
    VMIN = "vmin"
    VMAX = "vmax"
    VH = "vh"
    VW = "vw"
    MIN_CONTENT = "min-content"
    MAX_CONTENT = "max-content"
    AUTO = "auto"
    FRACTION = "fr"
    FIT_CONTENT_PX = "fit-content-px"
    FIT_CONTENT_PERCENT = "fit-content-percent"


# Only valid as the upper bound of a track.
MAX_ONLY_SIZING = frozenset(
    {SizingKind.FRACTION, SizingKind.FIT_CONTENT_PX, SizingKind.FIT_CONTENT_PERCENT}
)


@dataclass(frozen=True)
class TrackSizing:
    """One bound of a grid track's sizing function."""

    kind: SizingKind
    value: float = 0.0


_AUTO_SIZING = TrackSizing(SizingKind.AUTO)


@dataclass(frozen=True)
class GridTrack:
    """A single grid track, sized between ``min`` and ``max``."""

    min: TrackSizing = _AUTO_SIZING
    max: TrackSizing = _AUTO_SIZING

    @classmethod
    def px(cls, value: float) -> GridTrack:
        sizing = TrackSizing(SizingKind.PX, float(value))
        return cls(sizing, sizing)

    @classmethod
    def percent(cls, value: float) -> GridTrack:
        sizing = TrackSizing(SizingKind.PERCENT, float(value))
        return cls(sizing, sizing)

    @classmethod
    def fr(cls, value: float) -> GridTrack:
        return cls(_AUTO_SIZING, TrackSizing(SizingKind.FRACTION, float(value)))

    @classmethod
    def auto(cls) -> GridTrack:
        return cls(_AUTO_SIZING, _AUTO_SIZING)

    @classmethod
    def fit_content_px(cls, value: float) -> GridTrack:
        return cls(_AUTO_SIZING, TrackSizing(SizingKind.FIT_CONTENT_PX, float(value)))

    @classmethod
    def fit_content_percent(cls, value: float) -> GridTrack:
        return cls(_AUTO_SIZING, TrackSizing(SizingKind.FIT_CONTENT_PERCENT, float(value)))

    @classmethod
    def minmax(cls, min: TrackSizing, max: TrackSizing) -> GridTrack:
        if min.kind in MAX_ONLY_SIZING:
            raise ValueError(f"{min.kind.value} is not a valid minimum track size")
        return cls(min, max)


class RepetitionKind(Enum):
    COUNT = "count"
    AUTO_FILL = "auto-fill"
    AUTO_FIT = "auto-fit"


@dataclass(frozen=True)
class GridTrackRepetition:
    kind: RepetitionKind
    count: int = 0

    @classmethod
    def of(cls, count: int) -> GridTrackRepetition:
        return cls(RepetitionKind.COUNT, count)

    @classmethod
    def auto_fill(cls) -> GridTrackRepetition:
        return cls(RepetitionKind.AUTO_FILL)

    @classmethod
    def auto_fit(cls) -> GridTrackRepetition:
        return cls(RepetitionKind.AUTO_FIT)


@dataclass(frozen=True)
class RepeatedGridTrack:
    """A run of tracks; a literal track is a run of one."""

    repetition: GridTrackRepetition
    tracks: tuple[GridTrack, ...]

    @classmethod
    def single(cls, track: GridTrack) -> RepeatedGridTrack:
        return cls(GridTrackRepetition.of(1), (track,))


@dataclass(frozen=True)
class GridPlacement:
    """Where an item sits on one grid axis.

    Any two of ``start`` line, ``end`` line and ``span`` may be set; lines
    are 1-based (negative lines count from the end) and never zero.
    """

    start: int | None = None
    span: int | None = 1
    end: int | None = None

    def __post_init__(self) -> None:
        if self.start == 0 or self.end == 0:
            raise ValueError("grid lines are 1-based and cannot be zero")
        if self.span is not None and self.span < 1:
            raise ValueError("grid span must be at least 1")

    @classmethod
    def auto(cls) -> GridPlacement:
        return cls()

    @classmethod
    def start_line(cls, start: int) -> GridPlacement:
        return cls(start=start)

    @classmethod
    def end_line(cls, end: int) -> GridPlacement:
        return cls(end=end)

    @classmethod
    def span_of(cls, span: int) -> GridPlacement:
        return cls(span=span)

    @classmethod
    def start_end(cls, start: int, end: int) -> GridPlacement:
        return cls(start=start, span=None, end=end)

    @classmethod
    def start_span(cls, start: int, span: int) -> GridPlacement:
        return cls(start=start, span=span)

    @classmethod
    def end_span(cls, end: int, span: int) -> GridPlacement:
        return cls(span=span, end=end)


# ---------------------------------------------------------------------------
# Layout keywords
# ---------------------------------------------------------------------------


class Display(Enum):
    FLEX = "flex"
    GRID = "grid"
    NONE = "none"


class PositionType(Enum):
    RELATIVE = "relative"
    ABSOLUTE = "absolute"


class Direction(Enum):
    INHERIT = "inherit"
    LEFT_TO_RIGHT = "left-to-right"
    RIGHT_TO_LEFT = "right-to-left"


class FlexDirection(Enum):
    ROW = "row"
    COLUMN = "column"
    ROW_REVERSE = "row-reverse"
    COLUMN_REVERSE = "column-reverse"


class FlexWrap(Enum):
    NO_WRAP = "no-wrap"
    WRAP = "wrap"
    WRAP_REVERSE = "wrap-reverse"


class AlignItems(Enum):
    DEFAULT = "default"
    FLEX_START = "flex-start"
    FLEX_END = "flex-end"
    CENTER = "center"
    BASELINE = "baseline"
    STRETCH = "stretch"


class AlignSelf(Enum):
    AUTO = "auto"
    FLEX_START = "flex-start"
    FLEX_END = "flex-end"
    CENTER = "center"
    BASELINE = "baseline"
    STRETCH = "stretch"


class AlignContent(Enum):
    DEFAULT = "default"
    FLEX_START = "flex-start"
    FLEX_END = "flex-end"
    CENTER = "center"
    STRETCH = "stretch"
    SPACE_BETWEEN = "space-between"
    SPACE_AROUND = "space-around"


class JustifyContent(Enum):
    DEFAULT = "default"
    FLEX_START = "flex-start"
    FLEX_END = "flex-end"
    CENTER = "center"
    SPACE_BETWEEN = "space-between"
    SPACE_AROUND = "space-around"
    SPACE_EVENLY = "space-evenly"


class OverflowAxis(Enum):
    VISIBLE = "visible"
    CLIP = "clip"


class JustifyText(Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
