"""Tests for the property registry and apply ordering."""

import logging

import pytest

from ecss.errors import RegistrationError
from ecss.property import values as interpret
from ecss.property.impls import FieldProperty, default_properties, register_default_properties
from ecss.property.registry import PropertyRegistry
from ecss.property.types import UiRect, Val


def _length(name):
    return FieldProperty(name, name.replace("-", "_"), interpret.length, Val)


def _names(registry):
    return [c.name for c in registry.ordered()]


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------


class TestRegister:
    def test_lookup(self):
        registry = PropertyRegistry()
        contract = _length("width")
        registry.register(contract)
        assert registry.get("width") is contract
        assert "width" in registry
        assert "height" not in registry
        assert len(registry) == 1
        assert registry.names() == {"width"}

    def test_empty_name(self):
        with pytest.raises(RegistrationError):
            PropertyRegistry().register(FieldProperty("", "x", interpret.length, Val))

    def test_replace_same_type_warns(self, caplog):
        registry = PropertyRegistry()
        registry.register(_length("width"))
        replacement = _length("width")
        with caplog.at_level(logging.WARNING, logger="ecss.property.registry"):
            registry.register(replacement)
        assert registry.get("width") is replacement
        assert "Replacing contract for property 'width'" in caplog.text

    def test_conflicting_value_type(self):
        registry = PropertyRegistry()
        registry.register(_length("margin"))
        with pytest.raises(RegistrationError, match="already registered"):
            registry.register(FieldProperty("margin", "margin", interpret.rect, UiRect))


# ---------------------------------------------------------------------------
# Ordering
# ---------------------------------------------------------------------------


class TestOrdered:
    def test_registration_order_is_stable(self):
        registry = PropertyRegistry()
        for name in ("width", "height", "left"):
            registry.register(_length(name))
        assert _names(registry) == ["width", "height", "left"]

    def test_after_constraint(self):
        registry = PropertyRegistry()
        registry.register(_length("margin-top"), after="margin")
        registry.register(FieldProperty("margin", "margin", interpret.rect, UiRect))
        registry.register(_length("width"))
        names = _names(registry)
        assert names.index("margin") < names.index("margin-top")
        assert registry.predecessor("margin-top") == "margin"

    def test_unknown_predecessor(self):
        registry = PropertyRegistry()
        registry.register(_length("margin-top"), after="margin")
        with pytest.raises(RegistrationError, match="unregistered property 'margin'"):
            registry.ordered()

    def test_cycle(self):
        registry = PropertyRegistry()
        registry.register(_length("a"), after="b")
        registry.register(_length("b"), after="a")
        with pytest.raises(RegistrationError, match="Cyclic"):
            registry.ordered()

    def test_reregister_without_after_drops_constraint(self):
        registry = PropertyRegistry()
        registry.register(_length("b"))
        registry.register(_length("a"), after="b")
        registry.register(_length("a"))
        assert registry.predecessor("a") is None
        assert _names(registry) == ["b", "a"]

    def test_order_invalidated_by_register(self):
        registry = PropertyRegistry()
        registry.register(_length("width"))
        assert _names(registry) == ["width"]
        registry.register(_length("height"))
        assert _names(registry) == ["width", "height"]


# ---------------------------------------------------------------------------
# Built-in contracts
# ---------------------------------------------------------------------------


class TestDefaults:
    def test_every_edge_after_its_composite(self):
        registry = register_default_properties(PropertyRegistry())
        names = _names(registry)
        for composite in ("margin", "padding", "border"):
            for edge in ("top", "bottom", "left", "right"):
                assert names.index(composite) < names.index(f"{composite}-{edge}")

    def test_names_are_unique(self):
        names = [contract.name for contract, _ in default_properties()]
        assert len(names) == len(set(names))

    @pytest.mark.parametrize(
        "name",
        [
            "width",
            "flex-grow",
            "aspect-ratio",
            "grid-template-columns",
            "grid-row",
            "display",
            "overflow-x",
            "color",
            "font",
            "text-content",
            "text-align",
            "background-color",
            "border-color",
            "image-path",
            "border-radius",
            "z-index",
        ],
    )
    def test_registered(self, name):
        assert name in register_default_properties(PropertyRegistry())
