import os
import sys
from collections import deque

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from statusbar_keyboard.events import RawEvent
from statusbar_keyboard.kb_layout import (
    ActionEntry,
    ContentLine,
    KeyEntry,
    LabeledKeyEntry,
    Layout,
    ModifierEntry,
    ShiftPairEntry,
)
from statusbar_keyboard.key_types import Modifier, Surface
from statusbar_keyboard.keyboard import VirtualKeyboard

ROWS = {Surface.title: 0, Surface.status: 1}

# index of each region on the first status line of ``small_layout``
CTRL, META, SHIFT, NEXT_STATUS, KEY_A, KEY_B, KEY_1, KEY_BANG = range(8)
# first title line
NEXT_TITLE, HIDE, BACKSPACE = range(3)


class FakeHost:
    """Display, input source and position resolver in one.

    Regions are laid out one per column, so a region's x coordinate is its
    index in the surface's content.
    """

    def __init__(self, events=()):
        self.events = deque(events)
        self.content = {Surface.status: "status text", Surface.title: "title text"}
        self.redraws = 0
        self.snapshots = []

    def feed(self, *events):
        for event in events:
            if isinstance(event, (list, tuple)):
                self.events.extend(event)
            else:
                self.events.append(event)

    def get_content(self, surface):
        return self.content[surface]

    def set_content(self, surface, content):
        self.content[surface] = content

    def force_redraw(self):
        self.redraws += 1
        self.snapshots.append({s: self._describe(s) for s in Surface})

    def _describe(self, surface):
        content = self.content[surface]
        if isinstance(content, list):
            return [(r.label, r.highlight) for r in content]
        return content

    def read_next(self, ctx):
        if not self.events:
            raise AssertionError("test ran out of scripted input")
        return self.events.popleft()

    def resolve(self, event):
        for surface, row in ROWS.items():
            if event.y != row:
                continue
            content = self.content[surface]
            if isinstance(content, list) and 0 <= event.x < len(content):
                return surface, content[event.x]
            return surface, None
        return None

    def labels(self, surface):
        return [r.label for r in self.content[surface]]


def tap(surface, index, button=1, clicks=1):
    """Press and release events for one tap on a region."""
    row = ROWS[surface]
    return [RawEvent.press(button, index, row, clicks), RawEvent.release(button, index, row, clicks)]


def key(k):
    return RawEvent.key_event(ord(k) if isinstance(k, str) and len(k) == 1 else k)


def small_layout():
    status = [
        ContentLine([
            ModifierEntry(Modifier.control, "C-"),
            ModifierEntry(Modifier.meta, "M-"),
            ModifierEntry(Modifier.shift, "S-"),
            ActionEntry("next_status_line"),
            KeyEntry(ord("a")),
            LabeledKeyEntry(ord("b"), "b"),
            ShiftPairEntry(ord("1"), ord("!")),
        ]),
        ContentLine([ActionEntry("next_status_line"), KeyEntry("left")]),
    ]
    title = [
        ContentLine([ActionEntry("next_title_line"), ActionEntry("hide_keyboard"), KeyEntry("backspace")]),
        ContentLine([ActionEntry("next_title_line"), KeyEntry(ord("z"))]),
    ]
    return Layout({Surface.status: status, Surface.title: title})


@pytest.fixture
def host():
    return FakeHost()


@pytest.fixture
def make_keyboard(host):
    def _make(**kwargs):
        kb = VirtualKeyboard(small_layout(), host, host, host, **kwargs)
        kb.show()
        return kb

    return _make
