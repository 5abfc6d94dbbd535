"""Turn flattened layout entries into clickable regions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Iterable, Mapping, Optional, Union

from .events import Input, PromptContext
from .kb_layout import (
    ActionEntry,
    KeyEntry,
    LabeledKeyEntry,
    LayoutError,
    ModifierEntry,
    PrimitiveEntry,
    RangeEntry,
    ShiftPairEntry,
)
from .key_types import KeyCode, Modifier
from .modifiers import apply_modifier, describe_key, split_key

if TYPE_CHECKING:
    from .modifier_state import ModifierState

ARMED = "armed"  # highlight attribute of a modifier waiting for its key

ActionFn = Callable[[PromptContext], "tuple[Input, ...]"]


@dataclass(frozen=True)
class KeysAction:
    """Emit these keys as-is."""
    keys: tuple[KeyCode, ...]


@dataclass(frozen=True)
class CallAction:
    """Run ``fn`` with the prompt context; it returns the keys to emit."""
    fn: ActionFn
    name: str = ""


Action = Union[KeysAction, CallAction]


@dataclass(frozen=True)
class Region:
    label: str
    action: Action
    highlight: Optional[str] = None


@dataclass(frozen=True)
class ActionSpec:
    """A named custom action plus the label shown when the layout gives none."""
    fn: ActionFn
    label: Union[str, Callable[[], str]] = ""

    def current_label(self) -> str:
        return self.label() if callable(self.label) else self.label


def escape_label(text: str) -> str:
    """Escape percent signs; surfaces treat ``%`` as a format character."""
    return text.replace("%", "%%")


def unescape_label(text: str) -> str:
    return text.replace("%%", "%")


def key_label(key: KeyCode) -> str:
    """Printable form of a key as shown on its region."""
    if isinstance(key, int):
        base, bits = split_key(key)
        if not bits and base > 32 and base != 127:
            try:
                return chr(base)
            except ValueError:
                pass
    return describe_key(key)


class RegionRenderer:
    """Render entries against live modifier state.

    Nothing is cached: highlight and case depend on the modifier states at
    the moment :meth:`render` is called, so callers re-render after every
    state change.
    """

    def __init__(
        self,
        states: Mapping[Modifier, "ModifierState"],
        toggles: Mapping[Modifier, ActionFn],
        actions: Mapping[str, ActionSpec] | None = None,
    ) -> None:
        self.states = states
        self.toggles = toggles
        self.actions = actions if actions is not None else {}

    def render(self, entries: Iterable[PrimitiveEntry]) -> list[Region]:
        regions: list[Region] = []
        for entry in entries:
            regions.extend(self._render_entry(entry))
        return regions

    def _render_entry(self, entry: PrimitiveEntry) -> list[Region]:
        if isinstance(entry, KeyEntry):
            return [self._plain(entry.key)]
        if isinstance(entry, LabeledKeyEntry):
            return [self._labeled(entry)]
        if isinstance(entry, RangeEntry):
            return [self._plain(code) for code in range(entry.start, entry.end + 1)]
        if isinstance(entry, ShiftPairEntry):
            return [self._plain(entry.base), self._plain(entry.shifted)]
        if isinstance(entry, ModifierEntry):
            state = self.states[entry.modifier]
            action = CallAction(self.toggles[entry.modifier], name=entry.modifier.value)
            highlight = ARMED if state.armed else None
            return [Region(escape_label(entry.label), action, highlight)]
        if isinstance(entry, ActionEntry):
            try:
                spec = self.actions[entry.name]
            except KeyError:
                raise LayoutError(f"unknown action {entry.name!r}") from None
            label = entry.label if entry.label is not None else spec.current_label()
            return [Region(escape_label(label), CallAction(spec.fn, name=entry.name))]
        raise LayoutError(f"cannot render {entry!r}; flatten templates first")

    def _plain(self, key: KeyCode) -> Region:
        return Region(escape_label(key_label(key)), KeysAction((key,)))

    def _labeled(self, entry: LabeledKeyEntry) -> Region:
        label = entry.label
        if label.upper() == label:
            return Region(escape_label(label), KeysAction((entry.key,)))
        # shown upper case, like a physical keycap; the tap asks the live shift state
        return Region(escape_label(label.upper()), CallAction(self._case_follower(entry.key), name=label))

    def _shift_armed(self) -> bool:
        state = self.states.get(Modifier.shift)
        return bool(state and state.armed)

    def _case_follower(self, key: KeyCode) -> ActionFn:
        def emit(ctx: PromptContext) -> tuple[Input, ...]:
            if self._shift_armed():
                return (apply_modifier(key, Modifier.shift),)
            return (key,)

        return emit
