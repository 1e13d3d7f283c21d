# objlit/constructors.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Mapping, MutableMapping, Optional, Sequence, Tuple, get_origin
import inspect
import logging
import typing

from .errors import (
    MissingParameterMetadataError,
    ResolutionAmbiguityError,
    ResolutionExhaustionError,
)
from .properties import Property
from .typing_defs import TEXT_LIKE_TYPES

__all__ = [
    "Parameter",
    "ConstructorCandidate",
    "Suitability",
    "ResolvedBinding",
    "constructors_of",
    "accepts_no_arguments",
    "classify_constructor",
    "resolve_constructor",
]

log = logging.getLogger("objlit.constructors")

Binding = List[Tuple["Parameter", Property]]


def _type_name(tp: Any) -> str:
    if tp is Any:
        return "Any"
    if isinstance(tp, type) and get_origin(tp) is None:
        return tp.__qualname__
    return str(tp).replace("typing.", "")


@dataclass(frozen=True)
class Parameter:
    name: str
    type: Any = Any

    def __str__(self) -> str:
        return f"{self.name}: {_type_name(self.type)}"


@dataclass(frozen=True)
class ConstructorCandidate:
    """One way of constructing ``owner``: an ``__init__`` signature or one of its overloads."""
    owner: type
    parameters: Tuple[Parameter, ...] = ()

    @property
    def arity(self) -> int:
        return len(self.parameters)

    def __str__(self) -> str:
        return f"{self.owner.__qualname__}({', '.join(str(p) for p in self.parameters)})"


class Suitability(Enum):
    BY_NAME = "by-name"
    BY_TYPE = "by-type"
    UNSUITABLE = "unsuitable"


@dataclass(frozen=True)
class ResolvedBinding:
    """Selected constructor plus the property bound to each of its parameters, in order."""
    constructor: ConstructorCandidate
    arguments: Tuple[Tuple[Parameter, Property], ...] = ()

    @property
    def properties(self) -> List[Property]:
        return [prop for _param, prop in self.arguments]


# ------------------------------ Candidate discovery ---------------------------

def _signature(obj: Any) -> inspect.Signature:
    try:
        return inspect.signature(obj, eval_str=True)
    except NameError:
        return inspect.signature(obj)


def _parameters(cls: type, sig: inspect.Signature, *, drop_first: bool) -> Tuple[Parameter, ...]:
    params = list(sig.parameters.values())
    if drop_first and params:
        params = params[1:]
    out: List[Parameter] = []
    for p in params:
        if p.kind in (p.VAR_POSITIONAL, p.VAR_KEYWORD):
            continue
        if p.kind is p.POSITIONAL_ONLY:
            raise MissingParameterMetadataError(cls, f"positional-only parameter {p.name!r}")
        tp = Any if p.annotation is p.empty else p.annotation
        out.append(Parameter(p.name, tp))
    return tuple(out)


def constructors_of(cls: type) -> List[ConstructorCandidate]:
    """
    List the constructors of ``cls``.

    Each ``typing.overload`` registered for ``__init__`` is a separate
    constructor; without overloads the class signature is the only one.
    ``*args``/``**kwargs`` are not bindable and are ignored.

    Raises
    ------
    MissingParameterMetadataError
        When a signature is unavailable or has positional-only parameters.
    """
    init = cls.__init__
    if init is object.__init__ and cls.__new__ is object.__new__:
        return [ConstructorCandidate(cls)]

    overloads = typing.get_overloads(init) if inspect.isfunction(init) else []
    if overloads:
        return [
            ConstructorCandidate(cls, _parameters(cls, _signature(fn), drop_first=True))
            for fn in overloads
        ]
    try:
        sig = _signature(cls)
    except (ValueError, TypeError) as exc:
        raise MissingParameterMetadataError(cls, str(exc)) from exc
    return [ConstructorCandidate(cls, _parameters(cls, sig, drop_first=False))]


def _binds_without_arguments(sig: inspect.Signature) -> bool:
    try:
        sig.bind()
    except TypeError:
        return False
    return True


def accepts_no_arguments(cls: type, constructors: Sequence[ConstructorCandidate] = ()) -> bool:
    """
    True when ``cls()`` is a valid call: some constructor has no parameters,
    or every parameter of some signature carries a default.
    """
    if any(c.arity == 0 for c in constructors):
        return True
    init = cls.__init__
    overloads = typing.get_overloads(init) if inspect.isfunction(init) else []
    try:
        if overloads:
            sigs = []
            for fn in overloads:
                sig = inspect.signature(fn)
                sigs.append(sig.replace(parameters=list(sig.parameters.values())[1:]))
        else:
            sigs = [inspect.signature(cls)]
    except (ValueError, TypeError):
        return False
    return any(_binds_without_arguments(sig) for sig in sigs)


# ------------------------------ Matching --------------------------------------

def _types_match(param_type: Any, prop_type: Any) -> bool:
    if param_type is Any or prop_type is Any:
        return True
    return param_type == prop_type


def _bind_by_name(
    ctor: ConstructorCandidate, by_name: Mapping[str, Property], skip_defaults: bool
) -> Optional[Binding]:
    out: Binding = []
    for param in ctor.parameters:
        prop = by_name.get(param.name)
        if prop is None or not _types_match(param.type, prop.type):
            return None
        if skip_defaults and prop.has_default_value:
            return None
        out.append((param, prop))
    return out


def _bind_by_type(
    ctor: ConstructorCandidate, by_type: Mapping[Any, Sequence[Property]], skip_defaults: bool
) -> Optional[Binding]:
    out: Binding = []
    used: set[str] = set()
    for param in ctor.parameters:
        if param.type is Any:
            return None
        try:
            matches = list(by_type.get(param.type, ()))
        except TypeError:
            return None
        if skip_defaults:
            matches = [p for p in matches if not p.has_default_value]
        if len(matches) != 1 or matches[0].name in used:
            return None
        used.add(matches[0].name)
        out.append((param, matches[0]))
    return out


def classify_constructor(
    ctor: ConstructorCandidate,
    by_name: Mapping[str, Property],
    by_type: Mapping[Any, Sequence[Property]],
    *,
    skip_defaults: bool = True,
) -> Tuple[Suitability, Optional[Binding]]:
    binding = _bind_by_name(ctor, by_name, skip_defaults)
    if binding is not None:
        return Suitability.BY_NAME, binding
    binding = _bind_by_type(ctor, by_type, skip_defaults)
    if binding is not None:
        return Suitability.BY_TYPE, binding
    return Suitability.UNSUITABLE, None


def _gather(
    ctors: Sequence[ConstructorCandidate],
    by_name: Mapping[str, Property],
    by_type: Mapping[Any, Sequence[Property]],
    skip_defaults: bool,
) -> List[Tuple[ConstructorCandidate, Binding]]:
    named: List[Tuple[ConstructorCandidate, Binding]] = []
    typed: List[Tuple[ConstructorCandidate, Binding]] = []
    for ctor in ctors:
        kind, binding = classify_constructor(ctor, by_name, by_type, skip_defaults=skip_defaults)
        if kind is Suitability.BY_NAME:
            named.append((ctor, binding))
        elif kind is Suitability.BY_TYPE:
            typed.append((ctor, binding))
    return named or typed


def _is_text_like(tp: Any) -> bool:
    origin = get_origin(tp) or tp
    return isinstance(origin, type) and issubclass(origin, TEXT_LIKE_TYPES)


def _union_tie_break(
    pool: List[Tuple[ConstructorCandidate, Binding]]
) -> List[Tuple[ConstructorCandidate, Binding]]:
    """Of two single-parameter constructors, one textual and one not, keep the non-textual one."""
    if len(pool) != 2 or any(c.arity != 1 for c, _ in pool):
        return pool
    textual = [e for e in pool if _is_text_like(e[0].parameters[0].type)]
    other = [e for e in pool if not _is_text_like(e[0].parameters[0].type)]
    if len(textual) == 1 and len(other) == 1:
        return other
    return pool


def resolve_constructor(
    target: type,
    properties_by_name: MutableMapping[str, Property],
    properties_by_type: Mapping[Any, Sequence[Property]],
    constructors: Optional[Sequence[ConstructorCandidate]] = None,
) -> ResolvedBinding:
    """
    Select the constructor of ``target`` to render and bind properties to it.

    Algorithm
    ---------
    1) Pass A: constructors whose every parameter binds a *non-default*
       property, by name (name + type) or, failing any by-name match, by type.
    2) Pass B: if pass A finds nothing, the same search allowing default values.
    3) Keep the candidates with the most parameters.
    4) Ties go through the text/non-text single-parameter tie-break.

    Bound properties are removed from ``properties_by_name``.

    Raises
    ------
    ResolutionExhaustionError
        No constructor can be satisfied.
    ResolutionAmbiguityError
        Several constructors remain equally qualified.
    MissingParameterMetadataError
        A constructor's parameter names are unavailable.
    """
    ctors = list(constructors) if constructors is not None else constructors_of(target)

    pool = _gather(ctors, properties_by_name, properties_by_type, skip_defaults=True)
    if not pool:
        log.debug("%s: no constructor binds non-default properties; retrying with defaults",
                  target.__qualname__)
        pool = _gather(ctors, properties_by_name, properties_by_type, skip_defaults=False)
    if not pool:
        raise ResolutionExhaustionError(target, ctors, properties_by_name.keys())

    top = max(c.arity for c, _ in pool)
    best = [e for e in pool if e[0].arity == top]
    if len(best) > 1:
        best = _union_tie_break(best)
    if len(best) != 1:
        raise ResolutionAmbiguityError(target, [c for c, _ in best], properties_by_name.keys())

    ctor, binding = best[0]
    for _param, prop in binding:
        properties_by_name.pop(prop.name, None)
    log.debug("%s: selected %s", target.__qualname__, ctor)
    return ResolvedBinding(ctor, tuple(binding))
