# tests/test_classify.py
from enum import Enum, IntEnum

import numpy as np
import pytest

from objlit.classify import array_element_kind, classify, classify_int
from objlit.errors import UnclassifiedArrayElementError
from objlit.typing_defs import Kind, MapEntry


class Color(Enum):
    RED = "red"


class Level(IntEnum):
    LOW = 1


class Plain:
    pass


@pytest.mark.parametrize(
    "value, kind",
    [
        (None, Kind.NULL),
        ("text", Kind.TEXT),
        (True, Kind.BOOLEAN),
        (np.bool_(False), Kind.BOOLEAN),
        (7, Kind.INT),
        (-(2 ** 31), Kind.INT),
        (2 ** 31, Kind.LONG),
        (2 ** 70, Kind.BIG_INTEGER),
        (np.int8(1), Kind.BYTE),
        (np.int16(1), Kind.SHORT),
        (np.int32(1), Kind.INT),
        (np.int64(1), Kind.LONG),
        (np.float32(1.5), Kind.FLOAT),
        (np.float64(1.5), Kind.DOUBLE),
        (1.5, Kind.DOUBLE),
        (Color.RED, Kind.ENUM),
        (Level.LOW, Kind.ENUM),
        (Plain, Kind.TYPE),
        (np.array([1, 2]), Kind.ARRAY),
        (b"ab", Kind.ARRAY),
        (bytearray(b"ab"), Kind.ARRAY),
        ({1}, Kind.SET),
        (frozenset({1}), Kind.SET),
        ({"a": 1}.items(), Kind.SET),
        ([1], Kind.SEQUENCE),
        ((1,), Kind.SEQUENCE),
        ({"a": 1}, Kind.MAPPING),
        (MapEntry("a", 1), Kind.MAP_ENTRY),
        (Plain(), Kind.COMPLEX),
        (object(), Kind.COMPLEX),
    ],
)
def test_classify_categories(value, kind):
    assert classify(value) is kind


def test_int_enum_is_member_not_number():
    # IntEnum members are ints too; the enum check must win
    assert classify(Level.LOW) is Kind.ENUM


def test_classify_int_boundaries():
    assert classify_int(2 ** 31 - 1) is Kind.INT
    assert classify_int(-(2 ** 63)) is Kind.LONG
    assert classify_int(2 ** 63) is Kind.BIG_INTEGER


@pytest.mark.parametrize(
    "array, kind",
    [
        (np.array([True]), Kind.BOOLEAN),
        (np.array([1], dtype=np.int8), Kind.BYTE),
        (np.array([1], dtype=np.int16), Kind.SHORT),
        (np.array([1], dtype=np.int32), Kind.INT),
        (np.array([1], dtype=np.int64), Kind.LONG),
        (np.array([1.0], dtype=np.float32), Kind.FLOAT),
        (np.array([1.0], dtype=np.float64), Kind.DOUBLE),
        (np.array(["a", "b"]), Kind.CHARACTER),
        (np.array(["ab"]), Kind.TEXT),
        (np.array([b"a"]), Kind.CHARACTER),
        (np.array([[1, 2]], dtype=np.int32), Kind.ARRAY),
        (b"xy", Kind.BYTE),
    ],
)
def test_array_element_kind(array, kind):
    assert array_element_kind(array) is kind


def test_object_array_elements_are_classified_individually():
    assert array_element_kind(np.array([Plain(), 1], dtype=object)) is None


@pytest.mark.parametrize("dtype", [np.uint16, np.complex128, "datetime64[s]"])
def test_unsupported_array_elements_raise(dtype):
    with pytest.raises(UnclassifiedArrayElementError):
        array_element_kind(np.zeros(2, dtype=dtype))
