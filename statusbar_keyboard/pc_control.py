from __future__ import annotations

import logging

from .key_types import KeyCode, Modifier, SpecialKey
from .modifiers import split_key, symbolic_modifiers

logger = logging.getLogger(__name__)

# pynput Key attribute pressed for each modifier; hyper has no OS key
_OS_MODIFIERS = {
    Modifier.control: "ctrl",
    Modifier.meta: "alt",
    Modifier.alt: "alt_gr",
    Modifier.shift: "shift",
    Modifier.super: "cmd",
}

_NAMED_CODES = {
    9: SpecialKey.tab,
    13: SpecialKey.enter,
    27: SpecialKey.esc,
    32: SpecialKey.space,
    127: SpecialKey.backspace,
}


class PCController:
    """Send synthesized keys to the operating system through pynput."""

    def __init__(self, kb=None, os_keys=None) -> None:
        if kb is None:
            from pynput.keyboard import Controller
            kb = Controller()
        if os_keys is None:
            from pynput.keyboard import Key as os_keys
        self.kb = kb
        self.os_keys = os_keys

    def _tap(self, k) -> None:
        self.kb.press(k)
        self.kb.release(k)

    def on_key(self, key: KeyCode) -> None:
        modifiers, payload = self._decompose(key)
        held = []
        for mod in Modifier:
            if mod not in modifiers:
                continue
            name = _OS_MODIFIERS.get(mod)
            if name is None:
                logger.warning("no OS key for %s; sending %r without it", mod.value, key)
                continue
            held.append(getattr(self.os_keys, name))

        for k in held:
            self.kb.press(k)
        try:
            self._tap(payload)
        finally:
            for k in reversed(held):
                self.kb.release(k)

    def _decompose(self, key: KeyCode):
        """Split ``key`` into its modifiers and the pynput key or character to tap."""
        if isinstance(key, str):
            modifiers, name = symbolic_modifiers(key)
            if name not in SpecialKey.__members__:
                raise ValueError(f"cannot send unknown key {key!r}")
            return set(modifiers), getattr(self.os_keys, name)

        base, bits = split_key(key)
        modifiers = {mod for mod in Modifier if bits & mod.bit}
        if base in _NAMED_CODES:
            return modifiers, getattr(self.os_keys, _NAMED_CODES[base].value)
        if 1 <= base <= 26:
            modifiers.add(Modifier.control)
            return modifiers, chr(base + ord("a") - 1)
        return modifiers, chr(base)
