import json
from importlib import resources
from pathlib import Path
from typing import Any, Iterable

from .kb_layout import (
    BUILTIN_ACTIONS,
    ActionEntry,
    KeyEntry,
    LabeledKeyEntry,
    Layout,
    LayoutError,
    ModifierEntry,
    RangeEntry,
    ShiftPairEntry,
    TemplateEntry,
    TemplateRef,
)
from .key_types import KeyCode, Modifier, SpecialKey, Surface
from .modifiers import symbolic_modifiers
from .templates import TemplateSet

DEFAULT_LAYOUT = 'default.json'
LAYOUT_PACKAGE = 'statusbar_keyboard.resources.layouts'

_SURFACE_KEYS = {Surface.status: 'status_lines', Surface.title: 'title_lines'}


def list_layouts() -> list[Path]:
    """Return the layout files bundled with the package."""
    files = []
    for entry in resources.files(LAYOUT_PACKAGE).iterdir():
        if entry.name.endswith('.json'):
            files.append(Path(str(entry)))
    return sorted(files)


def load_layout(path: str | None = None, actions: Iterable[str] = BUILTIN_ACTIONS) -> Layout:
    """Load a :class:`Layout` from ``path`` or the packaged default.

    Raises ``FileNotFoundError``, ``json.JSONDecodeError`` or :class:`LayoutError`.
    """
    if path:
        with open(path, 'r', encoding='utf-8') as file:
            blueprint = json.load(file)
    else:
        with resources.files(LAYOUT_PACKAGE).joinpath(DEFAULT_LAYOUT).open('r', encoding='utf-8') as file:
            blueprint = json.load(file)
    return parse_layout(blueprint, actions)


def parse_layout(blueprint: Any, actions: Iterable[str] = BUILTIN_ACTIONS) -> Layout:
    if not isinstance(blueprint, dict):
        raise LayoutError("layout must be a JSON object")
    known_actions = frozenset(actions)

    raw_templates = blueprint.get('templates', {})
    if not isinstance(raw_templates, dict):
        raise LayoutError("templates must be an object")
    templates = TemplateSet()
    for name, entries in raw_templates.items():
        templates.define(name, [parse_entry(raw, known_actions) for raw in _as_list(entries, name)])
    templates.check()

    lines = {}
    for surface, key in _SURFACE_KEYS.items():
        line_objects = []
        for index, line in enumerate(_as_list(blueprint.get(key, []), key)):
            entries = [parse_entry(raw, known_actions) for raw in _as_list(line, f"{key}[{index}]")]
            line_objects.append(templates.content_line(entries))
        lines[surface] = line_objects

    return Layout(lines)


def parse_entry(raw: Any, actions: frozenset = BUILTIN_ACTIONS) -> TemplateEntry:
    """Turn one JSON entry into a template entry."""
    if isinstance(raw, (int, str)) and not isinstance(raw, bool):
        return KeyEntry(parse_key(raw))
    if not isinstance(raw, dict):
        raise LayoutError(f"unrecognised layout entry {raw!r}")

    if 'ref' in raw:
        return TemplateRef(str(raw['ref']))
    if 'range' in raw:
        start, end = _pair(raw['range'], 'range')
        return RangeEntry(_code_point(start), _code_point(end))
    if 'shift_pair' in raw:
        base, shifted = _pair(raw['shift_pair'], 'shift_pair')
        return ShiftPairEntry(parse_key(base), parse_key(shifted))
    if 'modifier' in raw:
        try:
            modifier = Modifier(raw['modifier'])
        except ValueError:
            raise LayoutError(f"unknown modifier {raw['modifier']!r}") from None
        return ModifierEntry(modifier, str(raw.get('label', modifier.prefix)))
    if 'action' in raw:
        name = str(raw['action'])
        if name not in actions:
            raise LayoutError(f"unknown action {name!r}")
        label = raw.get('label')
        return ActionEntry(name, None if label is None else str(label))
    if 'key' in raw:
        key = parse_key(raw['key'])
        if 'label' in raw:
            return LabeledKeyEntry(key, str(raw['label']))
        return KeyEntry(key)
    raise LayoutError(f"unrecognised layout entry {raw!r}")


def parse_key(raw: Any) -> KeyCode:
    """A key is a code point, a single character, or a special key name with optional prefixes."""
    if isinstance(raw, int) and not isinstance(raw, bool):
        if raw < 0:
            raise LayoutError(f"negative key code {raw}")
        return raw
    if isinstance(raw, str) and len(raw) == 1:
        return ord(raw)
    if isinstance(raw, str) and raw:
        _, name = symbolic_modifiers(raw)
        if name in SpecialKey.__members__:
            return raw
    raise LayoutError(f"unknown key {raw!r}")


def _code_point(raw: Any) -> int:
    key = parse_key(raw)
    if not isinstance(key, int):
        raise LayoutError(f"range bounds must be characters, got {raw!r}")
    return key


def _pair(raw: Any, what: str) -> tuple:
    if not isinstance(raw, list) or len(raw) != 2:
        raise LayoutError(f"{what} needs exactly two values, got {raw!r}")
    return raw[0], raw[1]


def _as_list(raw: Any, what: str) -> list:
    if not isinstance(raw, list):
        raise LayoutError(f"{what} must be a list")
    return raw
