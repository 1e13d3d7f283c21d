# objlit/generator.py
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Iterable, List, Mapping, Optional, Tuple
import logging

from .constructors import accepts_no_arguments, constructors_of, resolve_constructor
from .normalize import short_name
from .properties import (
    Property,
    PythonPropertyIntrospector,
    collect_properties,
    index_by_type,
    make_blank_instance,
)
from .render import DEFAULT_INDENT, Renderer, object_expression
from .targets import DEFAULT_BUILDER_SUFFIX, resolve_target_type, uses_builder
from .typing_defs import BypassAllocator, PropertyIntrospector

__all__ = ["RenderPolicy", "LiteralGenerator", "render", "default_assignment_operator"]

log = logging.getLogger("objlit.generator")


def _keep_all(target: type, prop: Property) -> bool:
    return True


def _no_extra_properties(value: Any, target: type) -> Iterable[Tuple[str, Any]]:
    return ()


def _no_extra_initialization(value: Any, target: type) -> Optional[str]:
    return None


def default_assignment_operator(prop: Property) -> str:
    """Read-only collections are appended to, everything else is assigned."""
    return "+=" if prop.is_collection and not prop.is_writeable else "="


@dataclass(frozen=True)
class RenderPolicy:
    """
    Strategy hooks applied while assembling an object expression.

    property_filter       keep a remaining (non-constructor) property?
    extra_properties      synthetic ``(name, value)`` clauses appended after the real ones
    extra_initialization  free-form text appended as the last clause
    assignment_operator   operator text for a property clause
    short_name            how a type is named in ``new <T>`` and ``<T>.<MEMBER>``
    """
    property_filter: Callable[[type, Property], bool] = _keep_all
    extra_properties: Callable[[Any, type], Iterable[Tuple[str, Any]]] = _no_extra_properties
    extra_initialization: Callable[[Any, type], Optional[str]] = _no_extra_initialization
    assignment_operator: Callable[[Property], str] = default_assignment_operator
    short_name: Callable[[type], str] = short_name


class LiteralGenerator:
    """
    Render arbitrary (acyclic) object graphs as literal-expression text.

    Parameters
    ----------
    policy : RenderPolicy, optional
        Hooks used for every type without an entry in ``overrides``.
    overrides : Mapping[type, RenderPolicy], optional
        Per-type hooks, keyed by the rendered value's own type.
    builders : Mapping[type, type], optional
        Explicit builder types, bypassing the naming-convention lookup. This is
        the remedy for ambiguous or unsatisfiable constructors.
    introspector : PropertyIntrospector, optional
        Source of property metadata (defaults to :class:`PythonPropertyIntrospector`).
    allocator : BypassAllocator, optional
        Produces blank instances of types lacking a no-argument constructor.
    builder_suffix : str
        Naming convention for companion builder types.
    indent : str
        Indentation of clauses inside ``=> [ ... ]``.

    Generators hold no per-call state; metadata is re-derived on every call.
    """

    def __init__(
        self,
        policy: Optional[RenderPolicy] = None,
        *,
        overrides: Optional[Mapping[type, RenderPolicy]] = None,
        builders: Optional[Mapping[type, type]] = None,
        introspector: Optional[PropertyIntrospector] = None,
        allocator: Optional[BypassAllocator] = None,
        builder_suffix: str = DEFAULT_BUILDER_SUFFIX,
        indent: str = DEFAULT_INDENT,
    ) -> None:
        self.policy = policy or RenderPolicy()
        self.overrides = MappingProxyType(dict(overrides or {}))
        self.builders = MappingProxyType(dict(builders or {}))
        self.introspector = introspector or PythonPropertyIntrospector()
        self.allocator = allocator
        self.builder_suffix = builder_suffix
        self.indent = indent
        self._renderer = Renderer(self._render_object, name_of=self._type_name)

    def _type_name(self, cls: type) -> str:
        return self.policy_for(cls).short_name(cls)

    def policy_for(self, cls: type) -> RenderPolicy:
        return self.overrides.get(cls, self.policy)

    def render(self, value: Any) -> str:
        return self._renderer.render(value)

    def _render_object(self, value: Any) -> str:
        policy = self.policy_for(type(value))
        target = resolve_target_type(value, builders=self.builders, suffix=self.builder_suffix)

        ctors = constructors_of(target)
        blank = make_blank_instance(target, accepts_no_arguments(target, ctors), self.allocator)
        props = collect_properties(value, target, blank, self.introspector)

        by_name = {p.name: p for p in props}
        binding = resolve_constructor(target, by_name, index_by_type(props), ctors)

        remaining: List[Property] = [
            p for p in by_name.values()
            if (p.is_writeable or p.is_collection) and not p.has_default_value
        ]
        remaining = [p for p in remaining if policy.property_filter(target, p)]

        args = [self.render(p.value) for p in binding.properties]
        clauses = [f"{p.name} {policy.assignment_operator(p)} {self.render(p.value)}" for p in remaining]
        for name, extra in policy.extra_properties(value, target):
            clauses.append(f"{name} = {self.render(extra)}")
        init = policy.extra_initialization(value, target)
        if init:
            clauses.append(init)

        log.debug("%s via %s: %d argument(s), %d clause(s)",
                  type(value).__qualname__, target.__qualname__, len(args), len(clauses))
        return object_expression(
            policy.short_name(target),
            args,
            clauses,
            builder=uses_builder(value, target),
            indent=self.indent,
        )


def render(value: Any, **kwargs: Any) -> str:
    """One-shot convenience: ``LiteralGenerator(**kwargs).render(value)``."""
    return LiteralGenerator(**kwargs).render(value)
