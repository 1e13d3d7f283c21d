# objlit/rt.py
from __future__ import annotations
from typing import Any
import importlib

from .errors import TargetResolutionError


def resolve_attr(fq: str) -> Any:
    """
    Resolve a fully-qualified attribute: 'pkg.mod:NAME', 'pkg.mod.NAME' or
    'pkg.mod.Class.attr'. Imports the longest module prefix and getattr through
    the remainder.
    """
    if ":" in fq:
        mod_name, _, rest_txt = fq.partition(":")
        try:
            obj = importlib.import_module(mod_name)
        except ImportError as exc:
            raise TargetResolutionError(f"Cannot import module {mod_name!r}: {exc}") from exc
        rest = [p for p in rest_txt.split(".") if p]
    else:
        parts = fq.split(".")
        for i in range(len(parts), 0, -1):
            mod_name = ".".join(parts[:i])
            try:
                obj = importlib.import_module(mod_name)
                rest = parts[i:]
                break
            except ImportError:
                continue
        else:
            raise TargetResolutionError(f"Cannot import any prefix of {fq!r}")
    for name in rest:
        try:
            obj = getattr(obj, name)
        except AttributeError as exc:
            raise TargetResolutionError(f"Cannot resolve {fq!r}: {exc}") from exc
    return obj


def allocate(cls: type) -> Any:
    """
    Create an instance of ``cls`` without calling ``__init__``. Attributes that
    ``__init__`` would have set are simply absent. Errors propagate unchanged.
    """
    return cls.__new__(cls)
