from __future__ import annotations
from typing import Any, Mapping, Optional
import inspect
import logging
import sys

log = logging.getLogger("objlit.targets")

DEFAULT_BUILDER_SUFFIX = "Builder"


def find_type(module_name: str, qualname: str) -> Optional[type]:
    """
    Optional lookup of ``qualname`` (dotted for nested classes) inside an
    already-imported module. Returns None when any segment is missing.
    """
    owner: Any = sys.modules.get(module_name)
    if owner is None:
        return None
    for name in qualname.split("."):
        owner = inspect.getattr_static(owner, name, None)
        if owner is None:
            return None
    return owner if inspect.isclass(owner) else None


def enclosing_type(cls: type) -> Optional[type]:
    """The class lexically containing ``cls`` ('Outer.Inner' -> Outer), if any."""
    qual = cls.__qualname__
    if "." not in qual or "<locals>" in qual:
        return None
    return find_type(cls.__module__, qual.rsplit(".", 1)[0])


def _has_instance_operation(cls: type) -> bool:
    for klass in cls.__mro__:
        if klass is object:
            continue
        for name, raw in vars(klass).items():
            if name.startswith("_"):
                continue
            if isinstance(raw, (staticmethod, classmethod)):
                continue
            if inspect.isfunction(raw):
                return True
    return False


def is_builder_type(candidate: Optional[type]) -> bool:
    """
    A candidate qualifies as a builder when it can be instantiated (a concrete
    class) and exposes at least one public instance method not inherited from
    ``object``.
    """
    if candidate is None or not inspect.isclass(candidate):
        return False
    if inspect.isabstract(candidate):
        return False
    return _has_instance_operation(candidate)


def builder_candidate(cls: type, suffix: str = DEFAULT_BUILDER_SUFFIX) -> Optional[type]:
    outer = enclosing_type(cls)
    if outer is not None and outer.__name__.endswith(suffix):
        return outer
    return find_type(cls.__module__, cls.__qualname__ + suffix)


def resolve_target_type(
    value: Any,
    *,
    builders: Optional[Mapping[type, type]] = None,
    suffix: str = DEFAULT_BUILDER_SUFFIX,
) -> type:
    """
    Decide which type renders ``value``: an explicitly registered builder, a
    builder found by naming convention, or the value's own type.

    Resolution order
    ----------------
    1) ``builders[type(value)]`` when present (not validated: the caller chose it),
    2) the enclosing class when its name ends with ``suffix``,
    3) a sibling named ``<qualname><suffix>`` in the same module/class,
    4) ``type(value)``.

    Candidates from 2) and 3) must pass :func:`is_builder_type`.
    """
    cls = type(value)
    if builders and cls in builders:
        log.debug("explicit builder for %s: %s", cls.__qualname__, builders[cls].__qualname__)
        return builders[cls]

    candidate = builder_candidate(cls, suffix)
    if candidate is not None and candidate is not cls and is_builder_type(candidate):
        log.debug("builder for %s: %s", cls.__qualname__, candidate.__qualname__)
        return candidate
    if candidate is not None:
        log.debug("rejected builder candidate %s for %s", candidate.__qualname__, cls.__qualname__)
    return cls


def uses_builder(value: Any, target: type) -> bool:
    return target is not type(value)
