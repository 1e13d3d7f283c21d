from __future__ import annotations
from typing import Any

import numpy as np


def float_text(value: Any, *, single: bool = False) -> str:
    """Shortest decimal text that reads back to the same double (or float32 with ``single``).

    Positional notation with at least one fractional digit: ``1.0``, ``0.1``.
    """
    scalar = np.float32(value) if single else np.float64(value)
    return np.format_float_positional(scalar, unique=True, trim="0")


def qualified_name(cls: type) -> str:
    """``module.QualName`` for a class; builtins keep their bare name."""
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


def short_name(cls: type) -> str:
    return cls.__name__
