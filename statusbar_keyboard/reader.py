"""Blocking key reads with pointer motion filtered out.

This is the only place the keyboard waits for input.  Actions that need
"the next real key" call :meth:`KeyReader.read_key`, which may run another
action, which may read again: nesting is plain recursion and is bounded only
by how many modifier or line-step taps the user makes before a key.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from typing import Callable, Optional

from .dispatch import SWALLOW, Dispatcher
from .events import EventKind, Input, PromptContext, RawEvent
from .interfaces import RawInputSource

logger = logging.getLogger(__name__)


class KeyReader:
    def __init__(
        self,
        source: RawInputSource,
        dispatcher: Optional[Dispatcher] = None,
        redraw: Callable[[], None] = lambda: None,
    ) -> None:
        self.source = source
        self.dispatcher = dispatcher
        self.redraw = redraw
        self.depth = 0
        # whether the last key read_key returned was produced by the keyboard
        self.last_synthesized = False
        self.reads = 0        # keys returned so far, nested reads included
        self._last_key: Optional[Input] = None
        self._pending: deque[RawEvent] = deque()
        self._owner = threading.get_ident()

    def _check_thread(self) -> None:
        if threading.get_ident() != self._owner:
            raise RuntimeError("keyboard state must only be used from the thread that created it")

    def unread(self, *events: RawEvent) -> None:
        """Queue ``events`` to be read before anything new from the source."""
        self._pending.extend(events)

    def read_event(self, ctx: PromptContext) -> RawEvent:
        """Return the next event that is not pointer motion."""
        self._check_thread()
        if self._pending:
            return self._pending.popleft()
        self.redraw()
        while True:
            event = self.source.read_next(ctx)
            if event.kind is not EventKind.MOTION:
                return event

    def read_key(self, ctx: Optional[PromptContext] = None) -> Input:
        """Return the next key, running the action of any keyboard tap on the way.

        Pointer events that are not taps on the keyboard come back unchanged.
        """
        ctx = ctx or PromptContext()
        self.depth += 1
        try:
            while True:
                event = self.read_event(ctx)
                if event.kind is EventKind.KEY:
                    return self._deliver(event.key, event.synthetic)
                reads_before = self.reads
                keys = self.dispatcher.translate(event, ctx) if self.dispatcher else None
                if keys is None:
                    return self._deliver(event, False)
                if keys is SWALLOW:
                    continue
                if not keys:
                    logger.debug("tap produced no keys at depth %d", self.depth)
                    continue
                first, rest = keys[0], keys[1:]
                # the rest of a multi-key result comes before anything already queued
                self._pending.extendleft(reversed([self._as_event(k) for k in rest]))
                if isinstance(first, RawEvent):
                    return self._deliver(first, False)
                if self.reads != reads_before and first == self._last_key:
                    # an action handed back what its own read returned, e.g. a
                    # cancelled modifier or a line step followed by a typed key
                    return self._deliver(first, self.last_synthesized)
                return self._deliver(first, True)
        finally:
            self.depth -= 1

    def _deliver(self, item: Input, synthesized: bool) -> Input:
        self.reads += 1
        self._last_key = item
        self.last_synthesized = synthesized
        return item

    @staticmethod
    def _as_event(item: Input) -> RawEvent:
        if isinstance(item, RawEvent):
            return item
        return RawEvent.key_event(item, synthetic=True)
