from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import (
    Any,
    Callable,
    NamedTuple,
    Protocol,
    Sequence,
    runtime_checkable,
)

__all__ = [
    "Kind",
    "MapEntry",
    "PropertyDescriptor",
    "PropertyIntrospector",
    "BypassAllocator",
    "TEXT_LIKE_TYPES",
    "NUMERIC_KINDS",
]


# ----------------------------- Classification --------------------------------

class Kind(Enum):
    """Rendering category of a runtime value. Closed: one member per category."""
    NULL = "null"
    TEXT = "text"
    INT = "int"
    LONG = "long"
    BYTE = "byte"
    SHORT = "short"
    BOOLEAN = "boolean"
    CHARACTER = "character"
    FLOAT = "float"
    DOUBLE = "double"
    BIG_INTEGER = "big-integer"
    ENUM = "enum"
    TYPE = "type"
    ARRAY = "array"
    SET = "set"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    MAP_ENTRY = "map-entry"
    COMPLEX = "complex"


NUMERIC_KINDS = frozenset({
    Kind.INT, Kind.LONG, Kind.BYTE, Kind.SHORT,
    Kind.FLOAT, Kind.DOUBLE, Kind.BIG_INTEGER,
})

# Parameter types treated as textual by the single-parameter tie-break.
TEXT_LIKE_TYPES: tuple[type, ...] = (str, bytes, bytearray)


class MapEntry(NamedTuple):
    """One key/value pair of a mapping, rendered as ``key -> value``."""
    key: Any
    value: Any


# ----------------------------- Introspection ---------------------------------

@dataclass(frozen=True)
class PropertyDescriptor:
    """
    Raw output of a Property Introspector: one named, typed attribute of a class.
    ``getter`` reads the attribute from an instance; it must be side-effect free.
    """
    name: str
    type: Any
    is_writeable: bool
    getter: Callable[[Any], Any]


@runtime_checkable
class PropertyIntrospector(Protocol):
    """
    Enumerates the externally observable attributes of a class, inherited ones
    included. Names are unique across the returned sequence.
    """

    def list_properties(self, cls: type) -> Sequence[PropertyDescriptor]:
        ...


@runtime_checkable
class BypassAllocator(Protocol):
    """Produces an instance of ``cls`` without running any constructor."""

    def __call__(self, cls: type) -> Any:
        ...
