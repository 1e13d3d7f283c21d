# tests/test_render_values.py
from enum import Enum

import numpy as np
import pytest

from objlit.errors import UnclassifiedArrayElementError
from objlit.generator import LiteralGenerator, RenderPolicy, render
from objlit.normalize import qualified_name
from objlit.render import object_expression, scalar_text
from objlit.typing_defs import Kind, MapEntry


class Color(Enum):
    RED = "red"
    GREEN = "green"


class Marker:
    pass


# --- Scalars -----------------------------------------------------------------

@pytest.mark.parametrize(
    "value, text",
    [
        (None, "null"),
        ("Alice", '"Alice"'),
        ('say "hi"', '"say "hi""'),  # no escaping
        (42, "42"),
        (-3, "-3"),
        (2 ** 40, "1099511627776L"),
        (2 ** 70, f"{2 ** 70}bi"),
        (np.int8(3), "3"),
        (np.int16(7), "7 as short"),
        (np.int32(9), "9"),
        (np.int64(9), "9L"),
        (1.5, "1.5d"),
        (1.0, "1.0d"),
        (np.float64(2.5), "2.5d"),
        (np.float32(0.1), "0.1f"),
        (True, "true"),
        (False, "false"),
        (Color.RED, "Color.RED"),
        (int, "int"),
    ],
)
def test_scalar_literals(value, text):
    assert render(value) == text


def test_type_reference_is_fully_qualified():
    assert render(Marker) == f"{Marker.__module__}.Marker"


def test_scalar_text_rejects_non_scalar_kind():
    with pytest.raises(ValueError):
        scalar_text(Kind.SEQUENCE, [1])


# --- Collections ---------------------------------------------------------------

@pytest.mark.parametrize(
    "value, text",
    [
        ([1, 2, 3], "#[1, 2, 3]"),
        ((1, "a"), '#[1, "a"]'),
        ([], "#[]"),
        ([[1], [2]], "#[#[1], #[2]]"),
        ({5}, "#{5}"),
        ({"a": 1, "b": 2}, '#{"a" -> 1, "b" -> 2}'),
        ({}, "#{}"),
        (MapEntry("k", Color.GREEN), '"k" -> Color.GREEN'),
        ({"xs": [1, 2]}, '#{"xs" -> #[1, 2]}'),
    ],
)
def test_collection_literals(value, text):
    assert render(value) == text


def test_set_order_is_not_assumed():
    assert render({1, 2}) in ("#{1, 2}", "#{2, 1}")


# --- Arrays ------------------------------------------------------------------

@pytest.mark.parametrize(
    "value, text",
    [
        (np.array([1, 2], dtype=np.int32), "#[1, 2]"),
        (np.array([1, 2], dtype=np.int64), "#[1L, 2L]"),
        (np.array([4], dtype=np.int16), "#[4 as short]"),
        (np.array([1.5], dtype=np.float32), "#[1.5f]"),
        (np.array([0.25], dtype=np.float64), "#[0.25d]"),
        (np.array([True, False]), "#[true, false]"),
        (np.array(["a", "b"]), "#['a', 'b']"),
        (np.array(["ab", "cd"]), '#["ab", "cd"]'),
        (np.array([[1, 2], [3, 4]], dtype=np.int32), "#[#[1, 2], #[3, 4]]"),
        (np.array([None, "x"], dtype=object), '#[null, "x"]'),
        (b"\x01\x02", "#[1, 2]"),
        (np.array(5, dtype=np.int64), "5L"),
    ],
)
def test_array_literals(value, text):
    assert render(value) == text


def test_unsupported_array_element_type_is_an_error():
    with pytest.raises(UnclassifiedArrayElementError):
        render(np.array([1], dtype=np.uint16))


# --- Syntax assembly -----------------------------------------------------------

def test_object_expression_forms():
    assert object_expression("T") == "new T"
    assert object_expression("T", ["1", "2"]) == "new T(1, 2)"
    assert object_expression("T", [], ["a = 1", "b = 2"]) == "new T => [\n    a = 1\n    b = 2\n]"
    assert object_expression("TBuilder", ['"x"'], builder=True) == '(new TBuilder("x")).build()'
    assert object_expression("TBuilder", builder=True) == "(new TBuilder).build()"


def test_object_expression_reindents_nested_clauses():
    inner = object_expression("B", [], ["x = 1"])
    outer = object_expression("A", [], [f"b = {inner}"], indent="  ")
    assert outer == "new A => [\n  b = new B => [\n      x = 1\n  ]\n]"


def test_qualified_enum_names():
    gen = LiteralGenerator(RenderPolicy(short_name=qualified_name))
    assert gen.render(Color.RED) == f"{Color.__module__}.Color.RED"


def test_rendering_is_deterministic():
    value = {"a": [1, 2.5, "x"], "b": (Color.RED, None)}
    assert render(value) == render(value)
