# tests/test_targets.py
import abc
from typing import Optional

from objlit.targets import (
    builder_candidate,
    enclosing_type,
    find_type,
    is_builder_type,
    resolve_target_type,
    uses_builder,
)


# --- Test fixtures -----------------------------------------------------------

class Thing:
    label: Optional[str] = None


class ThingBuilder:
    """No instance operation: not a usable builder."""
    label: Optional[str] = None


class Lamp:
    pass


class LampBuilder:
    def build(self) -> Lamp:
        return Lamp()


class Gizmo:
    pass


class GizmoFactory:
    def make(self) -> Gizmo:
        return Gizmo()


class Crate:
    pass


class CrateBuilder(abc.ABC):
    @abc.abstractmethod
    def build(self) -> Crate:
        ...


class Token:
    pass


class TokenBuilder:
    @staticmethod
    def build() -> Token:
        return Token()


class PlanBuilder:
    class Plan:
        pass

    def build(self) -> "PlanBuilder.Plan":
        return PlanBuilder.Plan()


class Outer:
    class Inner:
        pass

    class InnerBuilder:
        def build(self) -> "Outer.Inner":
            return Outer.Inner()


# --- Lookup ------------------------------------------------------------------

def test_find_type_is_an_optional_lookup():
    assert find_type(__name__, "Lamp") is Lamp
    assert find_type(__name__, "Outer.Inner") is Outer.Inner
    assert find_type(__name__, "NoSuchBuilder") is None
    assert find_type("no.such.module", "Lamp") is None
    assert find_type(__name__, "test_find_type_is_an_optional_lookup") is None


def test_enclosing_type():
    assert enclosing_type(PlanBuilder.Plan) is PlanBuilder
    assert enclosing_type(Lamp) is None


def test_builder_candidates():
    assert builder_candidate(Lamp) is LampBuilder
    assert builder_candidate(PlanBuilder.Plan) is PlanBuilder
    assert builder_candidate(Outer.Inner) is Outer.InnerBuilder
    assert builder_candidate(Gizmo) is None
    assert builder_candidate(Gizmo, "Factory") is GizmoFactory


# --- Validation --------------------------------------------------------------

def test_is_builder_type():
    assert is_builder_type(LampBuilder)
    assert not is_builder_type(ThingBuilder)
    assert not is_builder_type(CrateBuilder)
    assert not is_builder_type(TokenBuilder)
    assert not is_builder_type(None)


# --- Resolution --------------------------------------------------------------

def test_resolve_uses_convention_builder():
    lamp = Lamp()
    target = resolve_target_type(lamp)
    assert target is LampBuilder
    assert uses_builder(lamp, target)


def test_resolve_falls_back_to_own_type():
    for value in (Thing(), Crate(), Token(), Gizmo()):
        target = resolve_target_type(value)
        assert target is type(value)
        assert not uses_builder(value, target)


def test_resolve_nested_and_enclosing_builders():
    assert resolve_target_type(PlanBuilder.Plan()) is PlanBuilder
    assert resolve_target_type(Outer.Inner()) is Outer.InnerBuilder


def test_custom_suffix():
    assert resolve_target_type(Gizmo(), suffix="Factory") is GizmoFactory


def test_explicit_builder_wins():
    assert resolve_target_type(Thing(), builders={Thing: GizmoFactory}) is GizmoFactory
    assert resolve_target_type(Lamp(), builders={Thing: GizmoFactory}) is LampBuilder
