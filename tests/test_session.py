from conftest import FakeHost

from statusbar_keyboard.kb_layout import ContentLine, KeyEntry, Layout
from statusbar_keyboard.key_types import Modifier, Surface
from statusbar_keyboard.modifier_state import new_modifier_states
from statusbar_keyboard.render import RegionRenderer
from statusbar_keyboard.session import Session


def make_session(host, layout=None):
    states = new_modifier_states()
    renderer = RegionRenderer(states, {mod: (lambda ctx: ()) for mod in Modifier})
    return Session(host, layout or status_only(), renderer, states)


def status_only():
    return Layout({
        Surface.status: [ContentLine([KeyEntry(ord("a"))]), ContentLine([KeyEntry(ord("b"))])],
    })


def test_show_saves_and_hide_restores():
    host = FakeHost()
    session = make_session(host)
    session.show()
    assert session.visible
    assert host.labels(Surface.status) == ["a"]
    # a surface without content lines is left alone
    assert host.content[Surface.title] == "title text"

    session.hide()
    assert not session.visible
    assert host.content[Surface.status] == "status text"
    assert host.snapshots[-1][Surface.status] == "status text"


def test_show_starts_at_first_line_and_disarms():
    host = FakeHost()
    session = make_session(host)
    session.lines[Surface.status].step()
    session.modifiers[Modifier.control].armed = True
    session.show()
    assert session.lines[Surface.status].index == 0
    assert not session.modifiers[Modifier.control].armed


def test_hide_disarms_modifiers():
    host = FakeHost()
    session = make_session(host)
    session.show()
    session.modifiers[Modifier.shift].armed = True
    session.hide()
    assert not session.modifiers[Modifier.shift].armed


def test_show_and_hide_are_idempotent():
    host = FakeHost()
    session = make_session(host)
    session.show()
    session.show()
    session.hide()
    session.hide()
    assert host.content[Surface.status] == "status text"


def test_refresh_renders_current_line():
    host = FakeHost()
    session = make_session(host)
    session.show()
    session.lines[Surface.status].step()
    session.refresh()
    assert host.labels(Surface.status) == ["b"]


def test_refresh_while_hidden_only_redraws():
    host = FakeHost()
    session = make_session(host)
    session.refresh()
    assert host.content[Surface.status] == "status text"
    assert host.redraws == 1

