"""Reference facets the built-in properties write to.

A host is free to use its own facet classes and register its own
contracts; these records are what :mod:`ecss.property.impls` targets and
what the in-memory :class:`~ecss.host.World` stores.  Facets are mutable:
contracts overwrite their fields in place.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ecss.property.types import (
    TRANSPARENT,
    WHITE,
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
    RepeatedGridTrack,
    UiRect,
    Val,
)


@dataclass(frozen=True)
class Overflow:
    x: OverflowAxis = OverflowAxis.VISIBLE
    y: OverflowAxis = OverflowAxis.VISIBLE


@dataclass
class Style:
    """Layout of a UI node."""

    display: Display = Display.FLEX
    position_type: PositionType = PositionType.RELATIVE
    direction: Direction = Direction.INHERIT
    overflow: Overflow = field(default_factory=Overflow)

    left: Val = field(default_factory=Val.auto)
    right: Val = field(default_factory=Val.auto)
    top: Val = field(default_factory=Val.auto)
    bottom: Val = field(default_factory=Val.auto)

    width: Val = field(default_factory=Val.auto)
    height: Val = field(default_factory=Val.auto)
    min_width: Val = field(default_factory=Val.auto)
    min_height: Val = field(default_factory=Val.auto)
    max_width: Val = field(default_factory=Val.auto)
    max_height: Val = field(default_factory=Val.auto)
    aspect_ratio: float | None = None

    align_items: AlignItems = AlignItems.DEFAULT
    align_self: AlignSelf = AlignSelf.AUTO
    align_content: AlignContent = AlignContent.DEFAULT
    justify_content: JustifyContent = JustifyContent.DEFAULT

    margin: UiRect = field(default_factory=UiRect)
    padding: UiRect = field(default_factory=UiRect)
    border: UiRect = field(default_factory=UiRect)

    flex_direction: FlexDirection = FlexDirection.ROW
    flex_wrap: FlexWrap = FlexWrap.NO_WRAP
    flex_grow: float = 0.0
    flex_shrink: float = 1.0
    flex_basis: Val = field(default_factory=Val.auto)
    row_gap: Val = field(default_factory=lambda: Val.px(0))
    column_gap: Val = field(default_factory=lambda: Val.px(0))

    grid_template_rows: list[RepeatedGridTrack] = field(default_factory=list)
    grid_template_columns: list[RepeatedGridTrack] = field(default_factory=list)
    grid_row: GridPlacement = field(default_factory=GridPlacement.auto)
    grid_column: GridPlacement = field(default_factory=GridPlacement.auto)


@dataclass
class TextStyle:
    font: Any = None
    font_size: float = 24.0
    color: Color = WHITE


@dataclass
class TextSection:
    value: str = ""
    style: TextStyle = field(default_factory=TextStyle)


@dataclass
class Text:
    """Text content of a UI node; text properties apply to every section."""

    sections: list[TextSection] = field(default_factory=lambda: [TextSection()])
    justify: JustifyText = JustifyText.LEFT


@dataclass
class BackgroundColor:
    color: Color = TRANSPARENT


@dataclass
class BorderColor:
    color: Color = Color(0.0, 0.0, 0.0, 1.0)


@dataclass
class UiImage:
    color: Color = WHITE
    texture: Any = None


@dataclass
class RoundedCorners:
    radius: BorderRadius = field(default_factory=BorderRadius)


@dataclass
class ZIndex:
    value: int = 0


@dataclass
class Node:
    """Marker: the entity is laid out as a UI node."""


@dataclass
class Button:
    """Marker: the entity is a button."""


class InteractionState(Enum):
    NONE = "none"
    HOVERED = "hovered"
    PRESSED = "pressed"


@dataclass
class Interaction:
    state: InteractionState = InteractionState.NONE


# Facet types addressable as type selectors out of the box.
DEFAULT_COMPONENT_SELECTORS: dict[str, type] = {
    "background-color": BackgroundColor,
    "text": Text,
    "button": Button,
    "node": Node,
    "style": Style,
    "ui-image": UiImage,
    "interaction": Interaction,
}

FACET_TYPES: dict[str, type] = {
    cls.__name__: cls
    for cls in (
        Style,
        Text,
        BackgroundColor,
        BorderColor,
        UiImage,
        RoundedCorners,
        ZIndex,
        Node,
        Button,
        Interaction,
    )
}
