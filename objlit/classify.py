# objlit/classify.py
from __future__ import annotations

from collections.abc import Iterable, Mapping, Set
from enum import Enum
from typing import Any, Optional

import numpy as np

from .errors import UnclassifiedArrayElementError
from .typing_defs import Kind, MapEntry

__all__ = ["classify", "classify_int", "array_element_kind", "is_array"]

INT32_MIN, INT32_MAX = -(2 ** 31), 2 ** 31 - 1
INT64_MIN, INT64_MAX = -(2 ** 63), 2 ** 63 - 1

_SIGNED_BY_SIZE = {1: Kind.BYTE, 2: Kind.SHORT, 4: Kind.INT, 8: Kind.LONG}


def classify_int(value: int) -> Kind:
    """Plain Python ints are classified by the narrowest signed width holding them."""
    if INT32_MIN <= value <= INT32_MAX:
        return Kind.INT
    if INT64_MIN <= value <= INT64_MAX:
        return Kind.LONG
    return Kind.BIG_INTEGER


def _classify_numpy_scalar(value: np.generic) -> Optional[Kind]:
    if isinstance(value, np.bool_):
        return Kind.BOOLEAN
    if isinstance(value, np.signedinteger):
        return _SIGNED_BY_SIZE.get(value.dtype.itemsize) or classify_int(int(value))
    if isinstance(value, np.unsignedinteger):
        return classify_int(int(value))
    if isinstance(value, np.floating):
        return Kind.FLOAT if value.dtype.itemsize <= 4 else Kind.DOUBLE
    return None


def is_array(value: Any) -> bool:
    return isinstance(value, (np.ndarray, bytes, bytearray))


def classify(value: Any) -> Kind:
    """
    Return the rendering category of ``value``. Total and side-effect free.

    Order matters:
      - enum members before ints/strings (IntEnum, StrEnum),
      - arrays before any collection protocol,
      - Mapping before Set before the generic Iterable.
    """
    if value is None:
        return Kind.NULL
    if isinstance(value, MapEntry):
        return Kind.MAP_ENTRY
    if isinstance(value, Enum):
        return Kind.ENUM
    if isinstance(value, type):
        return Kind.TYPE
    if isinstance(value, bool):
        return Kind.BOOLEAN
    if isinstance(value, np.generic):
        kind = _classify_numpy_scalar(value)
        if kind is not None:
            return kind
    if isinstance(value, int):
        return classify_int(value)
    if isinstance(value, float):
        return Kind.DOUBLE
    if isinstance(value, str):
        return Kind.TEXT
    if is_array(value):
        return Kind.ARRAY
    if isinstance(value, Mapping):
        return Kind.MAPPING
    if isinstance(value, Set):
        return Kind.SET
    if isinstance(value, Iterable):
        return Kind.SEQUENCE
    return Kind.COMPLEX


def array_element_kind(array: Any) -> Optional[Kind]:
    """
    Fixed per-kind dispatch for array elements.

    Returns the element kind, or ``None`` for object arrays whose elements are
    classified one by one. Multi-dimensional arrays have ``ARRAY`` elements.

    Raises
    ------
    UnclassifiedArrayElementError
        For element types outside the dispatch (unsigned, complex, datetime, ...).
    """
    if isinstance(array, (bytes, bytearray)):
        return Kind.BYTE
    if array.ndim > 1:
        return Kind.ARRAY
    dt = array.dtype
    if dt.kind == "b":
        return Kind.BOOLEAN
    if dt.kind == "i" and dt.itemsize in _SIGNED_BY_SIZE:
        return _SIGNED_BY_SIZE[dt.itemsize]
    if dt.kind == "f" and dt.itemsize == 4:
        return Kind.FLOAT
    if dt.kind == "f" and dt.itemsize == 8:
        return Kind.DOUBLE
    if dt.kind == "U":
        return Kind.CHARACTER if dt.itemsize == 4 else Kind.TEXT
    if dt.kind == "S":
        return Kind.CHARACTER if dt.itemsize == 1 else Kind.TEXT
    if dt.kind == "O":
        return None
    raise UnclassifiedArrayElementError(dt)
