# objlit/properties.py
from __future__ import annotations

from collections.abc import Collection, Mapping
from dataclasses import InitVar, dataclass
from operator import attrgetter
from typing import Any, Callable, ClassVar, Dict, Iterable, List, Optional, get_origin
import inspect
import logging

import numpy as np

from .rt import allocate
from .typing_defs import BypassAllocator, PropertyDescriptor, PropertyIntrospector, TEXT_LIKE_TYPES

__all__ = [
    "Property",
    "PythonPropertyIntrospector",
    "values_equal",
    "is_collection_type",
    "collect_properties",
    "make_blank_instance",
    "index_by_type",
]

log = logging.getLogger("objlit.properties")


# ------------------------------ Equality helpers ------------------------------

def values_equal(current: Any, default: Any) -> bool:
    """
    Default-value comparison: both None, or both non-None and equal. Arrays are
    compared element-wise (shape included).
    """
    if current is None or default is None:
        return current is None and default is None
    if isinstance(current, np.ndarray) or isinstance(default, np.ndarray):
        return bool(np.array_equal(current, default))
    return bool(current == default)


def is_collection_type(tp: Any) -> bool:
    """True for declared list/set/tuple-like types; text, mappings and arrays are not collections."""
    origin = get_origin(tp) or tp
    if not isinstance(origin, type):
        return False
    if issubclass(origin, TEXT_LIKE_TYPES + (Mapping, np.ndarray)):
        return False
    return issubclass(origin, Collection)


# ------------------------------ Property model --------------------------------

@dataclass(frozen=True)
class Property:
    """
    One discoverable attribute of a rendered value, paired with the value held
    by a blank instance of the target type.

    ``value_function`` is re-invoked on every access to ``value``.
    """
    name: str
    type: Any
    is_writeable: bool
    value_function: Callable[[], Any]
    default_value: Any = None

    @property
    def value(self) -> Any:
        return self.value_function()

    @property
    def has_default_value(self) -> bool:
        return values_equal(self.value, self.default_value)

    @property
    def is_collection(self) -> bool:
        return is_collection_type(self.type)


# ------------------------------ Introspection ---------------------------------

def _own_annotations(klass: type) -> Dict[str, Any]:
    try:
        return dict(inspect.get_annotations(klass, eval_str=True))
    except Exception:
        # unresolvable forward references: keep the raw strings
        return dict(inspect.get_annotations(klass))


def _is_classvar(tp: Any) -> bool:
    if tp is ClassVar or get_origin(tp) is ClassVar:
        return True
    return isinstance(tp, str) and tp.replace("typing.", "").startswith("ClassVar")


def _slot_names(klass: type) -> List[str]:
    slots = klass.__dict__.get("__slots__", ())
    if isinstance(slots, str):
        return [slots]
    return list(slots)


def _property_type(prop: property) -> Any:
    if prop.fget is None:
        return Any
    try:
        return inspect.signature(prop.fget, eval_str=True).return_annotation
    except Exception:
        return Any


class PythonPropertyIntrospector:
    """
    Enumerate properties from class metadata only (no instance needed):

      - public annotated attributes and dataclass fields (ClassVar/InitVar skipped),
      - ``property`` descriptors (settable iff they define a setter),
      - public ``__slots__`` entries.

    The MRO is walked base-first so subclasses override inherited entries by name.
    Undeclared types are reported as ``typing.Any``.
    """

    def list_properties(self, cls: type) -> List[PropertyDescriptor]:
        params = getattr(cls, "__dataclass_params__", None)
        frozen = bool(params is not None and params.frozen)
        found: Dict[str, PropertyDescriptor] = {}

        for klass in reversed(cls.__mro__):
            if klass is object:
                continue
            hints = _own_annotations(klass)
            for name, tp in hints.items():
                if name.startswith("_") or _is_classvar(tp) or isinstance(tp, InitVar):
                    continue
                found[name] = PropertyDescriptor(name, tp, not frozen, attrgetter(name))
            for name, attr in vars(klass).items():
                if name.startswith("_") or not isinstance(attr, property):
                    continue
                found[name] = PropertyDescriptor(
                    name, _property_type(attr), attr.fset is not None, attrgetter(name)
                )
            for name in _slot_names(klass):
                if name.startswith("_") or name in hints:
                    continue
                found[name] = PropertyDescriptor(name, Any, True, attrgetter(name))

        log.debug("properties of %s: %s", cls.__qualname__, list(found))
        return list(found.values())


# ------------------------------ Assembly --------------------------------------

def make_blank_instance(
    cls: type,
    has_no_arg_constructor: bool,
    allocator: Optional[BypassAllocator] = None,
) -> Any:
    """
    Obtain an instance of ``cls`` carrying only default values: through ``cls()``
    when it can be called without arguments, otherwise through the bypass
    allocator. Exceptions from either path propagate unchanged.
    """
    if has_no_arg_constructor and not inspect.isabstract(cls):
        return cls()
    log.debug("no usable no-arg constructor for %s; bypass allocation", cls.__qualname__)
    return (allocator or allocate)(cls)


def _read_default(desc: PropertyDescriptor, blank: Any) -> Any:
    try:
        return desc.getter(blank)
    except AttributeError:
        # attribute never initialised on the blank instance
        return None


def _readable(subject: Any, name: str) -> bool:
    try:
        getattr(subject, name)
    except AttributeError:
        return False
    return True


def _instance_attributes(subject: Any, known: set) -> List[PropertyDescriptor]:
    state = getattr(subject, "__dict__", None)
    if not isinstance(state, dict):
        return []
    return [
        PropertyDescriptor(name, Any, True, attrgetter(name))
        for name in state
        if not name.startswith("_") and name not in known
    ]


def collect_properties(
    subject: Any,
    target: type,
    blank: Any,
    introspector: PropertyIntrospector,
) -> List[Property]:
    """
    Wrap the target type's property descriptors into ``Property`` objects whose
    values are read from ``subject``. When ``target`` is a builder type, values
    are read from the subject by name. Properties the subject cannot read are
    not discoverable and are dropped.

    On the subject's own type, public instance attributes missing from the
    class metadata (plain ``self.x = x`` in ``__init__``) are added as
    settable properties of type ``Any``.
    """
    own = target is type(subject)
    descriptors = list(introspector.list_properties(target))
    if own:
        descriptors = descriptors + _instance_attributes(subject, {d.name for d in descriptors})
    out: List[Property] = []
    for desc in descriptors:
        if not _readable(subject, desc.name):
            continue
        if own:
            fn = (lambda g=desc.getter: g(subject))
        else:
            fn = (lambda n=desc.name: getattr(subject, n))
        out.append(Property(
            name=desc.name,
            type=desc.type,
            is_writeable=desc.is_writeable,
            value_function=fn,
            default_value=_read_default(desc, blank),
        ))
    return out


def index_by_type(properties: Iterable[Property]) -> Dict[Any, List[Property]]:
    out: Dict[Any, List[Property]] = {}
    for p in properties:
        try:
            out.setdefault(p.type, []).append(p)
        except TypeError:
            # unhashable annotation object: cannot take part in by-type matching
            continue
    return out
