"""Property contracts, typed values, interpreters and the built-in property set."""

from ecss.property.contract import (
    ApplyContext,
    CacheState,
    CacheStatus,
    PropertyCache,
    PropertyContract,
)
from ecss.property.impls import (
    EnumProperty,
    FieldProperty,
    InterpretedProperty,
    SectionProperty,
    register_default_properties,
)
from ecss.property.registry import PropertyRegistry

__all__ = [
    "ApplyContext",
    "CacheState",
    "CacheStatus",
    "PropertyCache",
    "PropertyContract",
    "PropertyRegistry",
    "InterpretedProperty",
    "FieldProperty",
    "EnumProperty",
    "SectionProperty",
    "register_default_properties",
]
