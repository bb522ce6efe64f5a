"""Tests for property contracts and the per-contract parse cache."""

import logging

import pytest

from ecss.errors import InvalidPropertyValue
from ecss.property import values as interpret
from ecss.property.contract import (
    ApplyContext,
    CacheState,
    CacheStatus,
    PropertyCache,
    PropertyContract,
)
from ecss.property.types import Val
from ecss.stylesheet import Selector, parse_stylesheet


class CountingWidth(PropertyContract[Val]):
    name = "width"
    value_type = Val
    facet_type = None

    def __init__(self):
        self.calls = 0

    def parse(self, values):
        self.calls += 1
        val = interpret.length(values)
        if val is None:
            raise self.invalid()
        return val

    def apply(self, value, target, ctx):
        pass


@pytest.fixture
def contract():
    return CountingWidth()


@pytest.fixture
def cache(contract):
    return PropertyCache(contract)


# ---------------------------------------------------------------------------
# Parse at most once
# ---------------------------------------------------------------------------


class TestGetOrParse:
    def test_parses_once(self, cache, contract):
        doc = parse_stylesheet("a { width: 10px; }")
        a = Selector.parse("a")
        first = cache.get_or_parse(doc, a)
        second = cache.get_or_parse(doc, a)
        assert first == CacheState.ok(Val.px(10))
        assert second is first
        assert contract.calls == 1

    def test_error_is_sticky(self, cache, contract):
        doc = parse_stylesheet("a { width: red; }")
        a = Selector.parse("a")
        assert cache.get_or_parse(doc, a).is_error
        assert cache.get_or_parse(doc, a).is_error
        assert contract.calls == 1

    def test_error_logged_once(self, cache, caplog):
        doc = parse_stylesheet("a { width: red; }")
        a = Selector.parse("a")
        with caplog.at_level(logging.ERROR, logger="ecss.property.contract"):
            cache.get_or_parse(doc, a)
            cache.get_or_parse(doc, a)
        messages = [r.getMessage() for r in caplog.records]
        assert messages == ["Failed to parse property width. Error: Invalid property value: width"]

    def test_error_hook(self, cache):
        doc = parse_stylesheet("a { width: red; }")
        a = Selector.parse("a")
        seen = []
        cache.get_or_parse(doc, a, lambda d, s, c, e: seen.append((d.hash, s, c.name, type(e))))
        cache.get_or_parse(doc, a, lambda d, s, c, e: seen.append("again"))
        assert seen == [(doc.hash, a, "width", InvalidPropertyValue)]

    def test_absent_property_not_attempted(self, cache, contract):
        doc = parse_stylesheet("a { height: 10px; }")
        state = cache.get_or_parse(doc, Selector.parse("a"))
        assert state.status is CacheStatus.NOT_ATTEMPTED
        assert contract.calls == 0

    def test_same_text_same_entries(self, cache, contract):
        a = Selector.parse("a")
        cache.get_or_parse(parse_stylesheet("a { width: 1px; }", "x.css"), a)
        cache.get_or_parse(parse_stylesheet("a { width: 1px; }", "y.css"), a)
        assert contract.calls == 1

    def test_new_hash_parses_again(self, cache, contract):
        a = Selector.parse("a")
        cache.get_or_parse(parse_stylesheet("a { width: 1px; }"), a)
        state = cache.get_or_parse(parse_stylesheet("a { width: 2px; }"), a)
        assert state.value == Val.px(2)
        assert contract.calls == 2

    def test_state_does_not_parse(self, cache, contract):
        doc = parse_stylesheet("a { width: 1px; }")
        assert cache.state(doc.hash, Selector.parse("a")).status is CacheStatus.NOT_ATTEMPTED
        assert contract.calls == 0


# ---------------------------------------------------------------------------
# Eviction
# ---------------------------------------------------------------------------


class TestEvict:
    def test_evict_keeps_live_hashes(self, cache):
        a = Selector.parse("a")
        old = parse_stylesheet("a { width: 1px; }")
        new = parse_stylesheet("a { width: 2px; }")
        cache.get_or_parse(old, a)
        cache.get_or_parse(new, a)
        assert cache.hashes() == {old.hash, new.hash}
        assert cache.evict([new.hash]) == 1
        assert cache.hashes() == {new.hash}
        assert len(cache) == 1

    def test_entries_kept_without_evict(self, cache):
        a = Selector.parse("a")
        for width in range(3):
            cache.get_or_parse(parse_stylesheet(f"a {{ width: {width}px; }}"), a)
        assert len(cache.hashes()) == 3


# ---------------------------------------------------------------------------
# Apply context
# ---------------------------------------------------------------------------


class TestApplyContext:
    def test_insert_defaults_to_current_entity(self):
        ctx = ApplyContext()
        ctx.entity = 7
        ctx.insert_facet("facet")
        ctx.insert_facet("other", entity=3)
        assert ctx.drain() == [(7, "facet"), (3, "other")]
        assert ctx.drain() == []

    def test_insert_outside_apply(self):
        with pytest.raises(ValueError):
            ApplyContext().insert_facet("facet")

    def test_load_asset(self):
        assert ApplyContext().load_asset("font.ttf") == "font.ttf"
        assert ApplyContext(lambda p: p.upper()).load_asset("font.ttf") == "FONT.TTF"

    def test_invalid_message(self, contract):
        assert str(contract.invalid()) == "Invalid property value: width"
