"""Built-in property contracts.

Most style properties differ only in their name, their interpreter and the
facet field they write, so they are expressed as data: a handful of
generic contract classes (:class:`FieldProperty`, :class:`EnumProperty`,
:class:`SectionProperty`) instantiated from tables.  The few properties
with bespoke behaviour (several target facets, deferred insertion, asset
loading) get their own small class.
"""

from __future__ import annotations

from dataclasses import FrozenInstanceError, replace
from enum import Enum
from typing import Any, Callable, Sequence

from ecss.property import values as interpret
from ecss.property.contract import ApplyContext, PropertyContract, T
from ecss.property.facets import (
    BackgroundColor,
    BorderColor,
    RoundedCorners,
    Style,
    Text,
    UiImage,
    ZIndex,
)
from ecss.property.registry import PropertyRegistry
from ecss.property.types import (
    AlignContent,
    AlignItems,
    AlignSelf,
    BorderRadius,
    Color,
    Direction,
    Display,
    FlexDirection,
    FlexWrap,
    GridPlacement,
    JustifyContent,
    JustifyText,
    OverflowAxis,
    PositionType,
    UiRect,
    Val,
)
from ecss.stylesheet.tokens import PropertyValues

Interpreter = Callable[[Sequence[Any]], Any]


def assign(obj: Any, path: str, value: Any) -> Any:
    """Set the dotted attribute *path* on *obj* and return the (possibly new) object.

    Frozen intermediate values (e.g. ``margin`` in ``margin.top``) are
    rebuilt with :func:`dataclasses.replace` and stored back on their parent.
    """
    head, _, rest = path.partition(".")
    if rest:
        value = assign(getattr(obj, head), rest, value)
    try:
        setattr(obj, head, value)
    except FrozenInstanceError:
        return replace(obj, **{head: value})
    return obj


# ---------------------------------------------------------------------------
# Generic families
# ---------------------------------------------------------------------------


class InterpretedProperty(PropertyContract[T]):
    """A contract whose parse step is a value interpreter."""

    def __init__(
        self,
        name: str,
        interpreter: Interpreter,
        value_type: Any,
        *,
        convert: Callable[[Any], T] | None = None,
    ) -> None:
        self.name = name
        self.interpreter = interpreter
        self.value_type = value_type
        self.convert = convert

    def parse(self, values: PropertyValues) -> T:
        raw = self.interpreter(values)
        if raw is None:
            raise self.invalid()
        return self.convert(raw) if self.convert is not None else raw


class FieldProperty(InterpretedProperty[T]):
    """Writes the interpreted value to one field of a facet."""

    def __init__(
        self,
        name: str,
        path: str,
        interpreter: Interpreter,
        value_type: Any,
        *,
        facet_type: type = Style,
        convert: Callable[[Any], T] | None = None,
    ) -> None:
        super().__init__(name, interpreter, value_type, convert=convert)
        self.path = path
        self.facet_type = facet_type

    def apply(self, value: T, target: Any, ctx: ApplyContext) -> None:
        if isinstance(value, list):
            value = list(value)  # type: ignore[assignment]
        assign(target, self.path, value)


class EnumProperty(PropertyContract[Enum]):
    """Maps a single keyword onto an enum member stored in one facet field."""

    def __init__(
        self,
        name: str,
        path: str,
        keywords: dict[str, Enum],
        *,
        facet_type: type = Style,
    ) -> None:
        self.name = name
        self.path = path
        self.keywords = keywords
        self.value_type = type(next(iter(keywords.values())))
        self.facet_type = facet_type

    def parse(self, values: PropertyValues) -> Enum:
        keyword = interpret.identifier(values)
        if keyword is None or keyword not in self.keywords:
            raise self.invalid()
        return self.keywords[keyword]

    def apply(self, value: Enum, target: Any, ctx: ApplyContext) -> None:
        assign(target, self.path, value)


class SectionProperty(InterpretedProperty[T]):
    """Writes the interpreted value into every section of a :class:`Text` facet."""

    facet_type = Text

    def __init__(
        self,
        name: str,
        path: str,
        interpreter: Interpreter,
        value_type: Any,
        *,
        asset: bool = False,
    ) -> None:
        super().__init__(name, interpreter, value_type)
        self.path = path
        self.asset = asset

    def apply(self, value: T, target: Text, ctx: ApplyContext) -> None:
        resolved = ctx.load_asset(value) if self.asset else value  # type: ignore[arg-type]
        for section in target.sections:
            assign(section, self.path, resolved)


# ---------------------------------------------------------------------------
# Bespoke contracts
# ---------------------------------------------------------------------------


class BackgroundColorProperty(PropertyContract[Color]):
    """Tints the background of nodes and images alike."""

    name = "background-color"
    value_type = Color
    facet_type = (BackgroundColor, UiImage)

    def parse(self, values: PropertyValues) -> Color:
        color = interpret.color(values)
        if color is None:
            raise self.invalid()
        return color

    def apply(self, value: Color, target: tuple, ctx: ApplyContext) -> None:
        background, image = target
        if background is not None:
            background.color = value
        if image is not None:
            image.color = value


class BorderColorProperty(PropertyContract[Color]):
    """Inserts (or replaces) a :class:`BorderColor` facet on every matched entity."""

    name = "border-color"
    value_type = Color
    facet_type = None

    def parse(self, values: PropertyValues) -> Color:
        color = interpret.color(values)
        if color is None:
            raise self.invalid()
        return color

    def apply(self, value: Color, target: int, ctx: ApplyContext) -> None:
        ctx.insert_facet(BorderColor(value), entity=target)


class ImageProperty(PropertyContract[str]):
    name = "image-path"
    value_type = str
    facet_type = UiImage

    def parse(self, values: PropertyValues) -> str:
        path = interpret.string(values)
        if path is None:
            raise self.invalid()
        return path

    def apply(self, value: str, target: UiImage, ctx: ApplyContext) -> None:
        target.texture = ctx.load_asset(value)


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------

LENGTH_FIELDS = [
    ("left", "left"),
    ("right", "right"),
    ("top", "top"),
    ("bottom", "bottom"),
    ("width", "width"),
    ("height", "height"),
    ("min-width", "min_width"),
    ("min-height", "min_height"),
    ("max-width", "max_width"),
    ("max-height", "max_height"),
    ("flex-basis", "flex_basis"),
    ("row-gap", "row_gap"),
    ("column-gap", "column_gap"),
]

RECT_FIELDS = ["margin", "padding", "border"]

EDGES = ["top", "bottom", "left", "right"]


def _keywords(enum: type[Enum], table: dict[str, str]) -> dict[str, Enum]:
    return {keyword: enum[member] for keyword, member in table.items()}


ENUM_FIELDS: list[tuple[str, str, dict[str, Enum]]] = [
    ("display", "display", _keywords(Display, {"flex": "FLEX", "grid": "GRID", "none": "NONE"})),
    (
        "position-type",
        "position_type",
        _keywords(PositionType, {"absolute": "ABSOLUTE", "relative": "RELATIVE"}),
    ),
    (
        "direction",
        "direction",
        _keywords(
            Direction,
            {
                "inherit": "INHERIT",
                "left-to-right": "LEFT_TO_RIGHT",
                "right-to-left": "RIGHT_TO_LEFT",
            },
        ),
    ),
    (
        "flex-direction",
        "flex_direction",
        _keywords(
            FlexDirection,
            {
                "row": "ROW",
                "column": "COLUMN",
                "row-reverse": "ROW_REVERSE",
                "column-reverse": "COLUMN_REVERSE",
            },
        ),
    ),
    (
        "flex-wrap",
        "flex_wrap",
        _keywords(FlexWrap, {"no-wrap": "NO_WRAP", "wrap": "WRAP", "wrap-reverse": "WRAP_REVERSE"}),
    ),
    (
        "align-items",
        "align_items",
        _keywords(
            AlignItems,
            {
                "flex-start": "FLEX_START",
                "flex-end": "FLEX_END",
                "center": "CENTER",
                "baseline": "BASELINE",
                "stretch": "STRETCH",
            },
        ),
    ),
    (
        "align-self",
        "align_self",
        _keywords(
            AlignSelf,
            {
                "auto": "AUTO",
                "flex-start": "FLEX_START",
                "flex-end": "FLEX_END",
                "center": "CENTER",
                "baseline": "BASELINE",
                "stretch": "STRETCH",
            },
        ),
    ),
    (
        "align-content",
        "align_content",
        _keywords(
            AlignContent,
            {
                "flex-start": "FLEX_START",
                "flex-end": "FLEX_END",
                "center": "CENTER",
                "stretch": "STRETCH",
                "space-between": "SPACE_BETWEEN",
                "space-around": "SPACE_AROUND",
            },
        ),
    ),
    (
        "justify-content",
        "justify_content",
        _keywords(
            JustifyContent,
            {
                "flex-start": "FLEX_START",
                "flex-end": "FLEX_END",
                "center": "CENTER",
                "space-between": "SPACE_BETWEEN",
                "space-around": "SPACE_AROUND",
                "space-evenly": "SPACE_EVENLY",
            },
        ),
    ),
    ("overflow-x", "overflow.x", _keywords(OverflowAxis, {"visible": "VISIBLE", "hidden": "CLIP"})),
    ("overflow-y", "overflow.y", _keywords(OverflowAxis, {"visible": "VISIBLE", "hidden": "CLIP"})),
]


def default_properties() -> list[tuple[PropertyContract, str | None]]:
    """Every built-in contract paired with the property it must be applied after."""
    contracts: list[tuple[PropertyContract, str | None]] = []

    for name, path in LENGTH_FIELDS:
        contracts.append((FieldProperty(name, path, interpret.length, Val), None))

    contracts.append((FieldProperty("flex-grow", "flex_grow", interpret.number, float), None))
    contracts.append((FieldProperty("flex-shrink", "flex_shrink", interpret.number, float), None))
    contracts.append(
        (
            FieldProperty(
                "aspect-ratio",
                "aspect_ratio",
                interpret.optional_number,
                (float, type(None)),
                convert=lambda optional: optional.value,
            ),
            None,
        )
    )

    for name in ("grid-template-columns", "grid-template-rows"):
        contracts.append(
            (FieldProperty(name, name.replace("-", "_"), interpret.grid_template, list), None)
        )
    for name in ("grid-row", "grid-column"):
        contracts.append(
            (FieldProperty(name, name.replace("-", "_"), interpret.grid_placement, GridPlacement), None)
        )

    for name in RECT_FIELDS:
        contracts.append((FieldProperty(name, name, interpret.rect, UiRect), None))
        for edge in EDGES:
            contracts.append(
                (FieldProperty(f"{name}-{edge}", f"{name}.{edge}", interpret.length, Val), name)
            )

    for name, path, keywords in ENUM_FIELDS:
        contracts.append((EnumProperty(name, path, keywords), None))

    # Text
    contracts.append((SectionProperty("color", "style.color", interpret.color, Color), None))
    contracts.append((SectionProperty("font", "style.font", interpret.string, str, asset=True), None))
    contracts.append((SectionProperty("font-size", "style.font_size", interpret.number, float), None))
    contracts.append((SectionProperty("text-content", "value", interpret.string, str), None))
    contracts.append(
        (
            EnumProperty(
                "text-align",
                "justify",
                _keywords(JustifyText, {"left": "LEFT", "center": "CENTER", "right": "RIGHT"}),
                facet_type=Text,
            ),
            None,
        )
    )

    # Appearance
    contracts.append((BackgroundColorProperty(), None))
    contracts.append((BorderColorProperty(), None))
    contracts.append((ImageProperty(), None))
    contracts.append(
        (
            FieldProperty(
                "border-radius",
                "radius",
                interpret.border_radius,
                BorderRadius,
                facet_type=RoundedCorners,
            ),
            None,
        )
    )
    contracts.append(
        (FieldProperty("z-index", "value", interpret.number, int, facet_type=ZIndex, convert=int), None)
    )
    return contracts


def register_default_properties(registry: PropertyRegistry) -> PropertyRegistry:
    """Register every built-in contract on *registry* and return it."""
    for contract, after in default_properties():
        registry.register(contract, after=after)
    return registry
