from __future__ import annotations

from enum import Enum, auto
from typing import Union

# A key is either a code point (with modifier bits above CHAR_MASK) or a
# symbolic name such as "backspace" or "C-M-left".
KeyCode = Union[int, str]

CHAR_BITS = 22
CHAR_MASK = (1 << CHAR_BITS) - 1


#Authoritative list of modifiers. The bit and prefix tables below must cover every member.
class Modifier(str, Enum):
    def _generate_next_value_(name, *_):
        return name

    alt     = auto()
    super   = auto()
    hyper   = auto()
    shift   = auto()
    control = auto()
    meta    = auto()

    @property
    def bit(self) -> int:
        return _MODIFIER_BITS[self]

    @property
    def prefix(self) -> str:
        """Prefix used when modifying a symbolic key, e.g. ``"C-"``."""
        return _MODIFIER_PREFIXES[self]

    @classmethod
    def from_prefix(cls, prefix: str) -> "Modifier | None":
        for mod, text in _MODIFIER_PREFIXES.items():
            if text == prefix:
                return mod
        return None


_MODIFIER_BITS = {
    Modifier.alt:     1 << 22,
    Modifier.super:   1 << 23,
    Modifier.hyper:   1 << 24,
    Modifier.shift:   1 << 25,
    Modifier.control: 1 << 26,
    Modifier.meta:    1 << 27,
}

# case matters: "S-" is shift, "s-" is super
_MODIFIER_PREFIXES = {
    Modifier.alt:     "A-",
    Modifier.super:   "s-",
    Modifier.hyper:   "H-",
    Modifier.shift:   "S-",
    Modifier.control: "C-",
    Modifier.meta:    "M-",
}

MODIFIER_MASK = sum(_MODIFIER_BITS.values())


#Symbolic keys, named after pynput's Key attributes so they can be sent to the OS as-is
class SpecialKey(str, Enum):
    def _generate_next_value_(name, *_):
        return name

    backspace  = auto()
    delete     = auto()
    down       = auto()
    end        = auto()
    enter      = auto()
    esc        = auto()
    f1  = auto();  f2  = auto();  f3  = auto();  f4  = auto();  f5  = auto()
    f6  = auto();  f7  = auto();  f8  = auto();  f9  = auto();  f10 = auto()
    f11 = auto();  f12 = auto();  f13 = auto();  f14 = auto();  f15 = auto()
    f16 = auto();  f17 = auto();  f18 = auto();  f19 = auto();  f20 = auto()
    home = auto(); left = auto(); page_down = auto(); page_up = auto(); right = auto()
    space = auto(); tab = auto(); up = auto()
    insert = auto(); menu = auto(); pause = auto(); print_screen = auto()

    def to_os_key(self):
        """Return the matching :class:`pynput.keyboard.Key` or ``None``."""
        from pynput.keyboard import Key as OSKey
        try:
            return getattr(OSKey, self.value)
        except AttributeError:
            return None


class Surface(str, Enum):
    """The two display areas the keyboard takes over."""

    status = "status"
    title = "title"
