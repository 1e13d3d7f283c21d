# objlit/render.py
from __future__ import annotations

from typing import Any, Callable, Iterable, Sequence
import logging
import textwrap

import numpy as np

from .classify import array_element_kind, classify
from .normalize import float_text, qualified_name, short_name
from .typing_defs import Kind, MapEntry

__all__ = ["Renderer", "object_expression", "scalar_text", "DEFAULT_INDENT"]

log = logging.getLogger("objlit.render")

DEFAULT_INDENT = "    "


def _char_text(value: Any) -> str:
    if isinstance(value, bytes):
        return value.decode("latin-1")
    return str(value)


def scalar_text(kind: Kind, value: Any) -> str:
    """
    Literal text for a scalar of the given kind. Suffixes are fixed per kind:
    ``L`` (64-bit), `` as short`` (16-bit), ``f``/``d`` (32/64-bit float), ``bi``.
    Text is quoted verbatim, without escaping.
    """
    if kind is Kind.TEXT:
        return f'"{_char_text(value)}"'
    if kind is Kind.CHARACTER:
        return f"'{_char_text(value)}'"
    if kind is Kind.BOOLEAN:
        return "true" if bool(value) else "false"
    if kind in (Kind.INT, Kind.BYTE):
        return str(int(value))
    if kind is Kind.SHORT:
        return f"{int(value)} as short"
    if kind is Kind.LONG:
        return f"{int(value)}L"
    if kind is Kind.BIG_INTEGER:
        return f"{int(value)}bi"
    if kind is Kind.FLOAT:
        return float_text(value, single=True) + "f"
    if kind is Kind.DOUBLE:
        return float_text(value) + "d"
    raise ValueError(f"not a scalar kind: {kind}")


_SCALAR_KINDS = frozenset({
    Kind.TEXT, Kind.CHARACTER, Kind.BOOLEAN, Kind.INT, Kind.BYTE, Kind.SHORT,
    Kind.LONG, Kind.BIG_INTEGER, Kind.FLOAT, Kind.DOUBLE,
})


def object_expression(
    type_name: str,
    args: Sequence[str] = (),
    clauses: Sequence[str] = (),
    *,
    builder: bool = False,
    indent: str = DEFAULT_INDENT,
) -> str:
    """
    Assemble ``new T``, ``new T(a, b)`` and the optional ``=> [ ... ]`` block
    (one clause per line), wrapped in ``( ... ).build()`` for builders.
    """
    expr = f"new {type_name}"
    if args:
        expr += f"({', '.join(args)})"
    if clauses:
        body = textwrap.indent("\n".join(clauses), indent)
        expr += f" => [\n{body}\n]"
    if builder:
        expr = f"({expr}).build()"
    return expr


class Renderer:
    """
    Recursive value-to-text dispatcher. Complex objects are handed to
    ``complex_renderer`` (the generator), which calls back into ``render`` for
    nested values.
    """

    def __init__(
        self,
        complex_renderer: Callable[[Any], str],
        *,
        name_of: Callable[[type], str] = short_name,
    ) -> None:
        self._complex = complex_renderer
        self._name_of = name_of

    def render(self, value: Any) -> str:
        kind = classify(value)
        if kind is Kind.NULL:
            return "null"
        if kind in _SCALAR_KINDS:
            return scalar_text(kind, value)
        if kind is Kind.ENUM:
            return f"{self._name_of(type(value))}.{value.name}"
        if kind is Kind.TYPE:
            return qualified_name(value)
        if kind is Kind.ARRAY:
            return self._array(value)
        if kind is Kind.SET:
            return self._items("#{", value, "}")
        if kind is Kind.SEQUENCE:
            return self._items("#[", value, "]")
        if kind is Kind.MAPPING:
            return self._items("#{", (MapEntry(k, v) for k, v in value.items()), "}")
        if kind is Kind.MAP_ENTRY:
            return f"{self.render(value.key)} -> {self.render(value.value)}"
        log.debug("rendering %s as object expression", type(value).__qualname__)
        return self._complex(value)

    def _items(self, opening: str, items: Iterable[Any], closing: str) -> str:
        return opening + ", ".join(self.render(x) for x in items) + closing

    def _array(self, value: Any) -> str:
        if isinstance(value, np.ndarray) and value.ndim == 0:
            return self.render(value[()])
        kind = array_element_kind(value)
        if kind is None or kind is Kind.ARRAY:
            return self._items("#[", value, "]")
        return "#[" + ", ".join(scalar_text(kind, x) for x in value) + "]"
