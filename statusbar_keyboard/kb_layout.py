from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Iterable, List, Mapping, Optional, Union

from .key_types import KeyCode, Modifier, Surface

# custom actions every keyboard provides; hosts may register more
BUILTIN_ACTIONS = frozenset({"next_status_line", "next_title_line", "hide_keyboard"})


class LayoutError(ValueError):
    """A layout description that cannot be turned into a keyboard."""


@dataclass(frozen=True, slots=True)
class KeyEntry:
    key: KeyCode


@dataclass(frozen=True, slots=True)
class LabeledKeyEntry:
    key: KeyCode
    label: str


@dataclass(frozen=True, slots=True)
class RangeEntry:
    """Every code point from ``start`` to ``end``, both included."""
    start: int
    end: int

    def __post_init__(self):
        if self.start > self.end:
            raise LayoutError(f"empty character range {self.start}..{self.end}")


@dataclass(frozen=True, slots=True)
class ShiftPairEntry:
    base: KeyCode
    shifted: KeyCode


@dataclass(frozen=True, slots=True)
class ModifierEntry:
    modifier: Modifier
    label: str


@dataclass(frozen=True, slots=True)
class ActionEntry:
    name: str
    label: Optional[str] = None  # None: ask the action for its label at render time


@dataclass(frozen=True, slots=True)
class TemplateRef:
    name: str


PrimitiveEntry = Union[KeyEntry, LabeledKeyEntry, RangeEntry, ShiftPairEntry, ModifierEntry, ActionEntry]
TemplateEntry = Union[PrimitiveEntry, TemplateRef]


class ContentLine(Sequence[PrimitiveEntry]):
    """One alternate keyboard for a surface, already flattened."""

    def __init__(self, entries: Iterable[PrimitiveEntry]):
        entries = list(entries)
        if not entries:
            raise LayoutError("ContentLine must contain at least one entry")
        for entry in entries:
            if isinstance(entry, TemplateRef):
                raise LayoutError(f"unexpanded template reference {entry.name!r}")
        self._entries = entries

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index):
        return self._entries[index]

    def __repr__(self) -> str:
        return f"ContentLine({self._entries!r})"


class Layout:
    """Content lines for each managed surface."""

    def __init__(self, lines: Mapping[Surface, List[ContentLine]]):
        self.lines = {Surface(s): list(v) for s, v in lines.items() if v}
        if not self.lines:
            raise LayoutError("Layout must contain at least one content line")

    def surfaces(self) -> list[Surface]:
        return [s for s in Surface if s in self.lines]

    def __getitem__(self, surface: Surface) -> List[ContentLine]:
        return self.lines.get(surface, [])
