from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Union

from .key_types import KeyCode


class EventKind(Enum):
    KEY = auto()
    PRESS = auto()     # pointer button went down
    RELEASE = auto()   # pointer button came up (a click)
    MOTION = auto()


@dataclass(frozen=True)
class RawEvent:
    """One event as delivered by the host's input source."""

    kind: EventKind
    key: Optional[KeyCode] = None
    button: Optional[int] = None
    clicks: int = 1  # 1, 2, 3 for single/double/triple variants of a button
    x: int = 0
    y: int = 0
    synthetic: bool = False  # produced by the keyboard, not read from the host

    @classmethod
    def key_event(cls, key: KeyCode, *, synthetic: bool = False) -> "RawEvent":
        return cls(EventKind.KEY, key=key, synthetic=synthetic)

    @classmethod
    def press(cls, button: int, x: int, y: int, clicks: int = 1) -> "RawEvent":
        return cls(EventKind.PRESS, button=button, clicks=clicks, x=x, y=y)

    @classmethod
    def release(cls, button: int, x: int, y: int, clicks: int = 1) -> "RawEvent":
        return cls(EventKind.RELEASE, button=button, clicks=clicks, x=x, y=y)

    @classmethod
    def motion(cls, x: int, y: int) -> "RawEvent":
        return cls(EventKind.MOTION, x=x, y=y)

    @property
    def is_pointer(self) -> bool:
        return self.kind is not EventKind.KEY


@dataclass(frozen=True)
class PromptContext:
    """What the host was doing when it asked for a key; handed to every action."""

    prompt: Optional[str] = None


# What a read hands back to the host: a key, or a pointer event the keyboard does not own.
Input = Union[KeyCode, RawEvent]
