"""Recognise taps on keyboard regions and run their actions.

Pointer transports usually report a tap twice, once when the button goes
down and once when it comes up.  Only the release produces a key: a
qualifying press is swallowed and the reader goes on to the next event.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable, Iterable, Optional, Union

from .events import EventKind, Input, PromptContext, RawEvent
from .interfaces import PositionResolver, RawInputSource
from .key_types import Surface
from .render import Action, CallAction, KeysAction, Region

if TYPE_CHECKING:
    from .reader import KeyReader

logger = logging.getLogger(__name__)


class Swallow(Enum):
    SWALLOW = "swallow"


# returned by Dispatcher.translate for a press: drop it and read again
SWALLOW = Swallow.SWALLOW

Translation = Union[tuple, Swallow, None]


@dataclass(frozen=True)
class Tap:
    """A press or release on a keyboard region."""

    event: RawEvent
    surface: Surface
    region: Region

    @property
    def is_press(self) -> bool:
        return self.event.kind is EventKind.PRESS

    @property
    def action(self) -> Action:
        return self.region.action

    def matches(self, other: "Tap") -> bool:
        """True when ``other`` is the release that ends this press."""
        return (
            other.event.kind is EventKind.RELEASE
            and other.event.button == self.event.button
            and other.surface is self.surface
            and other.region.label == self.region.label
        )


class EventClassifier:
    """Decide whether a raw event is a tap on one of the keyboard's regions."""

    def __init__(
        self,
        resolver: PositionResolver,
        button: int = 1,
        surfaces: Iterable[Surface] = (Surface.status, Surface.title),
    ) -> None:
        self.resolver = resolver
        self.button = button
        self.surfaces = frozenset(surfaces)

    def classify(self, event: RawEvent) -> Optional[Tap]:
        if event.kind not in (EventKind.PRESS, EventKind.RELEASE):
            return None
        if event.button != self.button or event.clicks not in (1, 2, 3):
            return None
        hit = self.resolver.resolve(event)
        if hit is None:
            return None
        surface, region = hit
        if surface not in self.surfaces or region is None:
            return None
        return Tap(event, surface, region)


class Dispatcher:
    def __init__(self, classifier: EventClassifier, redraw: Callable[[], None]) -> None:
        self.classifier = classifier
        self.redraw = redraw

    def translate(self, event: RawEvent, ctx: PromptContext) -> Translation:
        """Return the keys a tap produces, :data:`SWALLOW` for a press, or ``None``."""
        tap = self.classifier.classify(event)
        if tap is None:
            return None
        if tap.is_press:
            logger.debug("swallowed press on %s %r", tap.surface.value, tap.region.label)
            return SWALLOW
        logger.debug("tap on %s %r", tap.surface.value, tap.region.label)
        return self.dispatch(tap.action, ctx)

    def dispatch(self, action: Optional[Action], ctx: PromptContext) -> Optional[tuple[Input, ...]]:
        if action is None:
            return None
        if isinstance(action, KeysAction):
            return tuple(action.keys)
        if isinstance(action, CallAction):
            result = tuple(action.fn(ctx))
            # armed highlights and line indicators may have changed
            self.redraw()
            return result
        raise TypeError(f"unknown action type {type(action).__name__}")


class MouseTransportAdapter:
    """Input source wrapper for hosts that decode mouse events on their own.

    When the wrapped source delivers a press on a keyboard region, the
    adapter reads the following event itself.  If that is the matching
    release the release is returned in place of the press; anything else is
    pushed back to the reader and the press is returned, to be swallowed by
    the dispatcher as usual.
    """

    def __init__(self, source: RawInputSource, classifier: EventClassifier) -> None:
        self.source = source
        self.classifier = classifier
        self.reader: Optional["KeyReader"] = None
        self._pushed: deque[RawEvent] = deque()

    def attach(self, reader: "KeyReader") -> None:
        self.reader = reader

    def read_next(self, ctx: PromptContext) -> RawEvent:
        event = self._pushed.popleft() if self._pushed else self.source.read_next(ctx)
        press = self.classifier.classify(event)
        if press is None or not press.is_press:
            return event

        follow = self._read_following(ctx)
        release = self.classifier.classify(follow)
        if release is not None and press.matches(release):
            logger.debug("press/release pair on %s %r", press.surface.value, press.region.label)
            return follow
        if self.reader is not None:
            self.reader.unread(follow)
        else:
            self._pushed.append(follow)
        return event

    def _read_following(self, ctx: PromptContext) -> RawEvent:
        if self.reader is not None:
            return self.reader.read_event(ctx)
        event = self.source.read_next(ctx)
        while event.kind is EventKind.MOTION:
            event = self.source.read_next(ctx)
        return event
