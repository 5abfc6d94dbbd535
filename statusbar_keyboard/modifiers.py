"""Apply modifier keys to key codes.

Numeric keys carry their modifiers as bits above :data:`CHAR_MASK`.  Two
combinations are special-cased, following the usual terminal conventions:

* control on a Latin letter folds into the ``1``-``26`` control range;
* shift on a character that has case yields its uppercase form.

Symbolic keys (``"left"``, ``"C-backspace"``) are modified by prefixing the
modifier's text.  Prefixes are prepended in the order modifiers are applied,
so ``control`` then ``meta`` gives ``"M-C-left"`` while ``meta`` then
``control`` gives ``"C-M-left"``.  Both spellings are kept distinct;
callers that need a canonical form should use :func:`symbolic_modifiers`.
"""

from __future__ import annotations

from .key_types import CHAR_MASK, KeyCode, Modifier

_A = ord("a")
_Z = ord("z")

# order used by describe_key, matching the customary "A-C-H-M-S-s-" spelling
_DESCRIBE_ORDER = (
    Modifier.alt,
    Modifier.control,
    Modifier.hyper,
    Modifier.meta,
    Modifier.shift,
    Modifier.super,
)

_NAMED_CODES = {
    0: "C-@",
    9: "TAB",
    13: "RET",
    27: "ESC",
    32: "SPC",
    127: "DEL",
}


class UnsupportedModifier(ValueError):
    """Raised when asked to apply something that is not a known modifier."""


def as_modifier(modifier: Modifier | str) -> Modifier:
    """Return ``modifier`` as a :class:`Modifier` or raise :class:`UnsupportedModifier`."""
    if isinstance(modifier, Modifier):
        return modifier
    try:
        return Modifier(modifier)
    except ValueError:
        raise UnsupportedModifier(f"unsupported modifier {modifier!r}") from None


def split_key(code: int) -> tuple[int, int]:
    """Split a numeric key into ``(base, modifier_bits)``."""
    return code & CHAR_MASK, code & ~CHAR_MASK


def _case_forms(base: int) -> tuple[int, int] | None:
    """Return ``(lower, upper)`` code points when ``base`` is a cased character."""
    try:
        ch = chr(base)
    except (ValueError, OverflowError):
        return None
    lower, upper = ch.lower(), ch.upper()
    if len(lower) != 1 or len(upper) != 1 or lower == upper:
        return None
    return ord(lower), ord(upper)


def symbolic_modifiers(name: str) -> tuple[frozenset[Modifier], str]:
    """Return the modifiers spelled at the front of ``name`` and the bare name."""
    found = set()
    rest = name
    while len(rest) > 2 and rest[1] == "-":
        mod = Modifier.from_prefix(rest[:2])
        if mod is None:
            break
        found.add(mod)
        rest = rest[2:]
    return frozenset(found), rest


def apply_modifier(key: KeyCode, modifier: Modifier | str) -> KeyCode:
    """Return ``key`` with ``modifier`` applied."""
    mod = as_modifier(modifier)
    if isinstance(key, bool) or not isinstance(key, (int, str)):
        raise TypeError(f"key must be an int or str, got {type(key).__name__}")

    if isinstance(key, str):
        present, _ = symbolic_modifiers(key)
        if mod in present:
            return key
        return mod.prefix + key

    base, bits = split_key(key)
    if mod is Modifier.control:
        forms = _case_forms(base)
        if forms is not None and _A <= forms[0] <= _Z:
            return (forms[0] - _A + 1) | bits
        return key | mod.bit
    if mod is Modifier.shift:
        forms = _case_forms(base)
        if forms is not None:
            return forms[1] | bits
        return key | mod.bit
    return key | mod.bit


def key_modifiers(key: KeyCode) -> frozenset[Modifier]:
    """Modifiers carried by ``key``, counting the control range as control."""
    if isinstance(key, str):
        return symbolic_modifiers(key)[0]
    base, bits = split_key(key)
    mods = {mod for mod in Modifier if bits & mod.bit}
    if 1 <= base <= 26 and base not in _NAMED_CODES:
        mods.add(Modifier.control)
    return frozenset(mods)


def describe_key(key: KeyCode) -> str:
    """Return a readable name for ``key`` such as ``"C-M-a"`` or ``"s-left"``."""
    if isinstance(key, str):
        return key
    base, bits = split_key(key)
    prefix = "".join(mod.prefix for mod in _DESCRIBE_ORDER if bits & mod.bit)
    if base in _NAMED_CODES:
        return prefix + _NAMED_CODES[base]
    if 1 <= base <= 26:
        # fold the control range back into C-<letter>, keeping prefix order
        mods = [mod for mod in _DESCRIBE_ORDER if bits & mod.bit or mod is Modifier.control]
        return "".join(mod.prefix for mod in mods) + chr(base + _A - 1)
    try:
        return prefix + chr(base)
    except ValueError:
        return f"{prefix}#{base}"
