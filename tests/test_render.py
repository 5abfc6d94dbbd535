import pytest

from statusbar_keyboard.events import PromptContext
from statusbar_keyboard.kb_layout import (
    ActionEntry,
    KeyEntry,
    LabeledKeyEntry,
    LayoutError,
    ModifierEntry,
    RangeEntry,
    ShiftPairEntry,
    TemplateRef,
)
from statusbar_keyboard.key_types import Modifier
from statusbar_keyboard.modifier_state import new_modifier_states
from statusbar_keyboard.render import (
    ARMED,
    ActionSpec,
    CallAction,
    KeysAction,
    RegionRenderer,
    escape_label,
    key_label,
    unescape_label,
)


def _noop(ctx):
    return ()


def make_renderer(actions=None):
    states = new_modifier_states()
    toggles = {mod: _noop for mod in Modifier}
    return RegionRenderer(states, toggles, actions or {}), states


def test_plain_keys_emit_themselves():
    renderer, _ = make_renderer()
    regions = renderer.render([KeyEntry(ord("a")), KeyEntry("left")])
    assert [r.label for r in regions] == ["a", "left"]
    assert regions[0].action == KeysAction((ord("a"),))
    assert regions[1].action == KeysAction(("left",))


def test_control_range_keys_are_labelled_symbolically():
    assert key_label(1) == "C-a"
    assert key_label(32) == "SPC"
    assert key_label(ord("%")) == "%"


def test_percent_labels_are_escaped():
    renderer, _ = make_renderer()
    (region,) = renderer.render([KeyEntry(ord("%"))])
    assert region.label == "%%"
    assert unescape_label(region.label) == "%"
    assert escape_label("100%") == "100%%"


def test_shift_pair_gives_two_regions():
    renderer, _ = make_renderer()
    regions = renderer.render([ShiftPairEntry(ord("1"), ord("!"))])
    assert [r.label for r in regions] == ["1", "!"]
    assert [r.action for r in regions] == [KeysAction((ord("1"),)), KeysAction((ord("!"),))]


def test_range_renders_one_region_per_code_point():
    renderer, _ = make_renderer()
    regions = renderer.render([RangeEntry(ord("x"), ord("z"))])
    assert [r.label for r in regions] == ["x", "y", "z"]


def test_modifier_region_is_highlighted_while_armed():
    renderer, states = make_renderer()
    entry = ModifierEntry(Modifier.control, "C-")
    (region,) = renderer.render([entry])
    assert region.highlight is None
    assert isinstance(region.action, CallAction)
    assert region.action.fn is _noop

    states[Modifier.control].armed = True
    (region,) = renderer.render([entry])
    assert region.highlight == ARMED

    # other modifiers are unaffected
    (other,) = renderer.render([ModifierEntry(Modifier.meta, "M-")])
    assert other.highlight is None


def test_labeled_key_shows_upper_case_and_follows_shift():
    renderer, states = make_renderer()
    entry = LabeledKeyEntry(ord("b"), "b")
    ctx = PromptContext()

    (region,) = renderer.render([entry])
    assert region.label == "B"
    assert isinstance(region.action, CallAction)
    assert region.action.fn(ctx) == (ord("b"),)

    states[Modifier.shift].armed = True
    (region,) = renderer.render([entry])
    assert region.label == "B"
    assert region.action.fn(ctx) == (ord("B"),)


def test_labeled_key_without_case_is_a_plain_key():
    renderer, states = make_renderer()
    states[Modifier.shift].armed = True
    (region,) = renderer.render([LabeledKeyEntry(13, "RET")])
    assert region.label == "RET"
    assert region.action == KeysAction((13,))


def test_action_entry_uses_layout_or_action_label():
    actions = {"greet": ActionSpec(lambda ctx: (ord("h"),), label=lambda: "1/3")}
    renderer, _ = make_renderer(actions)
    default, custom = renderer.render([ActionEntry("greet"), ActionEntry("greet", "hi")])
    assert default.label == "1/3"
    assert custom.label == "hi"
    assert default.action.name == "greet"
    assert default.action.fn(PromptContext()) == (ord("h"),)


def test_unknown_action_is_a_layout_error():
    renderer, _ = make_renderer()
    with pytest.raises(LayoutError):
        renderer.render([ActionEntry("missing")])


def test_template_reference_must_be_flattened_first():
    renderer, _ = make_renderer()
    with pytest.raises(LayoutError):
        renderer.render([TemplateRef("letters")])
