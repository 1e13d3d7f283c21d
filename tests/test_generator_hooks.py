# tests/test_generator_hooks.py
from enum import Enum
from typing import Optional

from objlit.generator import LiteralGenerator, RenderPolicy, default_assignment_operator
from objlit.normalize import qualified_name


class Profile:
    user: Optional[str] = None
    secret: Optional[str] = None


class Badge:
    label: Optional[str] = None


class Level(Enum):
    LOW = 1


class Tone(Enum):
    SOFT = 1


def _profile():
    p = Profile()
    p.user, p.secret = "u", "s"
    return p


def _hide_secret(target, prop):
    return prop.name != "secret"


def test_default_policy_renders_every_changed_property():
    assert LiteralGenerator().render(_profile()) == (
        'new Profile => [\n    user = "u"\n    secret = "s"\n]'
    )


def test_filter_extras_and_initialization_are_applied_in_order():
    policy = RenderPolicy(
        property_filter=_hide_secret,
        extra_properties=lambda value, target: [("checksum", 7)],
        extra_initialization=lambda value, target: "validate()",
    )
    gen = LiteralGenerator(overrides={Profile: policy})
    assert gen.render(_profile()) == (
        'new Profile => [\n    user = "u"\n    checksum = 7\n    validate()\n]'
    )


def test_extras_alone_open_a_clause_block():
    policy = RenderPolicy(extra_properties=lambda value, target: [("tags", ["a"])])
    assert LiteralGenerator(policy).render(Badge()) == 'new Badge => [\n    tags = #["a"]\n]'


def test_empty_extra_initialization_adds_nothing():
    policy = RenderPolicy(extra_initialization=lambda value, target: "")
    assert LiteralGenerator(policy).render(Badge()) == "new Badge"


def test_overrides_apply_only_to_their_type():
    gen = LiteralGenerator(overrides={Profile: RenderPolicy(property_filter=_hide_secret)})
    b = Badge()
    b.label = "x"
    assert gen.render(b) == 'new Badge => [\n    label = "x"\n]'
    assert gen.policy_for(Badge) is gen.policy


def test_custom_assignment_operator():
    def arrow(prop):
        return ":=" if prop.name == "label" else default_assignment_operator(prop)

    b = Badge()
    b.label = "x"
    gen = LiteralGenerator(RenderPolicy(assignment_operator=arrow))
    assert gen.render(b) == 'new Badge => [\n    label := "x"\n]'


def test_qualified_type_names():
    gen = LiteralGenerator(RenderPolicy(short_name=qualified_name))
    assert gen.render(Badge()) == f"new {__name__}.Badge"
    assert gen.render(Level.LOW) == f"{__name__}.Level.LOW"


def test_custom_indent():
    b = Badge()
    b.label = "x"
    assert LiteralGenerator(indent="\t").render(b) == 'new Badge => [\n\tlabel = "x"\n]'


def test_generator_is_reusable():
    gen = LiteralGenerator()
    b = Badge()
    b.label = "x"
    first = gen.render(b)
    assert gen.render(Badge()) == "new Badge"
    assert gen.render(b) == first


def test_enum_names_follow_per_type_overrides():
    gen = LiteralGenerator(overrides={Level: RenderPolicy(short_name=qualified_name)})
    assert gen.render(Level.LOW) == f"{__name__}.Level.LOW"
    assert gen.render(Tone.SOFT) == "Tone.SOFT"
    assert gen.render([Level.LOW, Tone.SOFT]) == f"#[{__name__}.Level.LOW, Tone.SOFT]"
