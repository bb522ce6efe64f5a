"""Tests for the value interpreters."""

import pytest

from ecss.property import values as interpret
from ecss.property.colors import parse_hex_color, parse_named_color
from ecss.property.types import (
    ZERO,
    BorderRadius,
    Color,
    GridPlacement,
    GridTrack,
    GridTrackRepetition,
    RepeatedGridTrack,
    SizingKind,
    TrackSizing,
    UiRect,
    Val,
)
from ecss.property.values import OptionalNumber
from ecss.stylesheet import tokenize
from ecss.stylesheet.tokens import PropertyValues


def _v(text):
    return PropertyValues(tuple(tokenize(text)))


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------


class TestLength:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("10px", Val.px(10)),
            ("50%", Val.percent(50)),
            ("auto", Val.auto()),
            ("5vw", Val.vw(5)),
            ("5vh", Val.vh(5)),
            ("2vmin", Val.vmin(2)),
            ("2vmax", Val.vmax(2)),
            ("0", Val.px(0)),
            ("3em", Val.px(3)),
        ],
    )
    def test_single(self, text, expected):
        assert interpret.length(_v(text)) == expected

    def test_first_convertible_token(self):
        assert interpret.length(_v("red 10px 20px")) == Val.px(10)

    def test_unitless_nonzero_is_not_a_length(self):
        assert interpret.length(_v("5")) is None

    def test_empty(self):
        assert interpret.length(_v("")) is None


class TestNumber:
    def test_number(self):
        assert interpret.number(_v("1.5")) == 1.5

    def test_units_ignored(self):
        assert interpret.number(_v("10px")) == 10.0
        assert interpret.number(_v("30%")) == 30.0

    def test_no_number(self):
        assert interpret.number(_v("big")) is None

    def test_optional_number(self):
        assert interpret.optional_number(_v("1.5")) == OptionalNumber(1.5)
        assert interpret.optional_number(_v("none")) == OptionalNumber(None)
        assert interpret.optional_number(_v("wide")) is None


class TestStringAndIdentifier:
    def test_string(self):
        assert interpret.string(_v('"hello world"')) == "hello world"

    def test_empty_string_skipped(self):
        assert interpret.string(_v('"" "b"')) == "b"
        assert interpret.string(_v('""')) is None

    def test_identifier(self):
        assert interpret.identifier(_v("10px center")) == "center"
        assert interpret.identifier(_v("10px")) is None


class TestColor:
    def test_named(self):
        assert interpret.color(_v("red")) == Color(1.0, 0.0, 0.0, 1.0)

    def test_name_and_hash_agree(self):
        assert interpret.color(_v("red")) == interpret.color(_v("#ff0000"))

    def test_functional_notation_unsupported(self):
        assert interpret.color(_v("rgba(255, 0, 0, 1)")) is None

    def test_named_case_insensitive(self):
        assert parse_named_color("DarkGreen") == parse_named_color("darkgreen")

    def test_hex(self):
        assert interpret.color(_v("#fff")) == Color(1.0, 1.0, 1.0, 1.0)
        assert interpret.color(_v("#00000000")) == Color(0.0, 0.0, 0.0, 0.0)
        assert interpret.color(_v("#ff000080")).a == pytest.approx(128 / 255)

    def test_short_hex_with_alpha(self):
        assert parse_hex_color("f008") == Color.rgba_u8(255, 0, 0, 136)

    def test_transparent(self):
        assert interpret.color(_v("transparent")).a == 0.0

    @pytest.mark.parametrize("text", ["red blue", "10px", "notacolor", "#12", "#ggg", ""])
    def test_invalid(self, text):
        assert interpret.color(_v(text)) is None

    def test_to_hex(self):
        assert Color.rgba_u8(255, 0, 0).to_hex() == "#ff0000"
        assert Color.rgba_u8(255, 0, 0, 0).to_hex() == "#ff000000"


# ---------------------------------------------------------------------------
# Rectangles
# ---------------------------------------------------------------------------


class TestRect:
    def test_single_value_sets_all_sides(self):
        assert interpret.rect(_v("10px")) == UiRect.all(Val.px(10))

    def test_two_values(self):
        assert interpret.rect(_v("10px 5%")) == UiRect(
            top=Val.px(10), right=Val.percent(5), bottom=ZERO, left=ZERO
        )

    def test_four_values(self):
        assert interpret.rect(_v("1px 2px 3px 4px")) == UiRect(
            Val.px(1), Val.px(2), Val.px(3), Val.px(4)
        )

    def test_four_mixed_values(self):
        assert interpret.rect(_v("10px 5% 2px 1px")) == UiRect(
            top=Val.px(10), right=Val.percent(5), bottom=Val.px(2), left=Val.px(1)
        )

    def test_extra_values_ignored(self):
        assert interpret.rect(_v("1px 2px 3px 4px 5px")) == UiRect(
            Val.px(1), Val.px(2), Val.px(3), Val.px(4)
        )

    def test_non_lengths_skipped(self):
        assert interpret.rect(_v("1px red 2px")) == UiRect(top=Val.px(1), right=Val.px(2))

    def test_auto(self):
        assert interpret.rect(_v("auto")) == UiRect.all(Val.auto())

    def test_nothing_convertible(self):
        assert interpret.rect(_v("red")) is None
        assert interpret.rect(_v("red blue")) is None


class TestBorderRadius:
    def test_one_value(self):
        assert interpret.border_radius(_v("4px")) == BorderRadius.all(Val.px(4))

    def test_four_values(self):
        assert interpret.border_radius(_v("1px 2px 3px 50%")) == BorderRadius(
            Val.px(1), Val.px(2), Val.px(3), Val.percent(50)
        )

    @pytest.mark.parametrize("text", ["1px 2px", "1px 2px 3px", "red", ""])
    def test_invalid(self, text):
        assert interpret.border_radius(_v(text)) is None


# ---------------------------------------------------------------------------
# Grid
# ---------------------------------------------------------------------------


class TestGridTemplate:
    def test_literal_tracks(self):
        assert interpret.grid_template(_v("100px 50% 1fr auto")) == [
            RepeatedGridTrack.single(GridTrack.px(100)),
            RepeatedGridTrack.single(GridTrack.percent(50)),
            RepeatedGridTrack.single(GridTrack.fr(1)),
            RepeatedGridTrack.single(GridTrack.auto()),
        ]

    def test_repeat_count(self):
        assert interpret.grid_template(_v("100px repeat(2, 1fr)")) == [
            RepeatedGridTrack.single(GridTrack.px(100)),
            RepeatedGridTrack(GridTrackRepetition.of(2), (GridTrack.fr(1),)),
        ]

    def test_repeat_auto_fill(self):
        assert interpret.grid_template(_v("repeat(auto-fill, 100px)")) == [
            RepeatedGridTrack(GridTrackRepetition.auto_fill(), (GridTrack.px(100),)),
        ]

    @pytest.mark.parametrize(
        "text",
        ["repeat(auto-fit, 1fr)", "repeat(auto-fill, auto)", "repeat(2)", "repeat(0, 10px)"],
    )
    def test_invalid_repeat(self, text):
        assert interpret.grid_template(_v(text)) is None

    def test_minmax(self):
        assert interpret.grid_template(_v("minmax(10px, 1fr)")) == [
            RepeatedGridTrack.single(
                GridTrack(TrackSizing(SizingKind.PX, 10), TrackSizing(SizingKind.FRACTION, 1))
            )
        ]

    def test_minmax_keywords(self):
        (track,) = interpret.grid_template(_v("minmax(min-content, max-content)"))
        assert track.tracks[0].min.kind is SizingKind.MIN_CONTENT
        assert track.tracks[0].max.kind is SizingKind.MAX_CONTENT

    def test_minmax_fraction_minimum_rejected(self):
        assert interpret.grid_template(_v("minmax(1fr, 10px)")) is None

    def test_fit_content(self):
        assert interpret.grid_template(_v("fit-content(20%) fit-content(40px)")) == [
            RepeatedGridTrack.single(GridTrack.fit_content_percent(20)),
            RepeatedGridTrack.single(GridTrack.fit_content_px(40)),
        ]

    def test_any_invalid_track_invalidates_the_list(self):
        assert interpret.grid_template(_v("100px red")) is None

    def test_empty(self):
        assert interpret.grid_template(_v("")) is None

    def test_minmax_rejects_max_only_minimum(self):
        with pytest.raises(ValueError):
            GridTrack.minmax(TrackSizing(SizingKind.FRACTION, 1), TrackSizing(SizingKind.AUTO))


class TestGridPlacement:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("2", GridPlacement.start_line(2)),
            ("-1", GridPlacement.start_line(-1)),
            ("auto", GridPlacement.auto()),
            ("span 3", GridPlacement.span_of(3)),
            ("1 / 3", GridPlacement.start_end(1, 3)),
            ("auto / 3", GridPlacement.end_line(3)),
            ("auto / 4", GridPlacement(start=None, span=1, end=4)),
            ("2 / auto", GridPlacement.start_line(2)),
            ("auto / auto", GridPlacement.auto()),
            ("span 2 / 5", GridPlacement.end_span(5, 2)),
            ("1 / span 2", GridPlacement.start_span(1, 2)),
        ],
    )
    def test_valid(self, text, expected):
        assert interpret.grid_placement(_v(text)) == expected

    @pytest.mark.parametrize("text", ["0", "span 0", "0 / 2", "a b c", "", "1 2"])
    def test_invalid(self, text):
        assert interpret.grid_placement(_v(text)) is None

    def test_zero_line_rejected_by_type(self):
        with pytest.raises(ValueError):
            GridPlacement(start=0)


# ---------------------------------------------------------------------------
# Literals that overflow to infinity
# ---------------------------------------------------------------------------


class TestOverflowingLiterals:
    @pytest.mark.parametrize(
        "interpreter, text",
        [
            (interpret.length, "1e999px"),
            (interpret.number, "1e999"),
            (interpret.optional_number, "1e999"),
            (interpret.rect, "1e999px"),
            (interpret.border_radius, "1e999px"),
            (interpret.grid_template, "repeat(1e999, 10px)"),
            (interpret.grid_template, "minmax(1e999px, auto)"),
            (interpret.grid_template, "fit-content(1e999px)"),
            (interpret.grid_placement, "1e999"),
            (interpret.grid_placement, "span 1e999"),
            (interpret.grid_placement, "1 / 1e999"),
        ],
    )
    def test_rejected(self, interpreter, text):
        assert interpreter(_v(text)) is None

    def test_finite_large_literal_kept(self):
        assert interpret.number(_v("1e300")) == 1e300
