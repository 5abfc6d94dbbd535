from __future__ import annotations

import logging
from typing import Callable, Optional, Union

from .dispatch import Dispatcher, EventClassifier, MouseTransportAdapter
from .events import Input, PromptContext
from .interfaces import DisplaySurface, PositionResolver, RawInputSource
from .kb_layout import Layout
from .key_types import Modifier, Surface
from .line_stepper import HIDE
from .modifier_state import ModifierToggle, new_modifier_states
from .reader import KeyReader
from .render import ActionFn, ActionSpec, RegionRenderer
from .session import Session

logger = logging.getLogger(__name__)


class VirtualKeyboard:
    """Show a layout on the status and title surfaces and read keys through it."""

    def __init__(
        self,
        layout: Layout,
        display: DisplaySurface,
        source: RawInputSource,
        resolver: PositionResolver,
        *,
        button: int = 1,
        hide_on_last_line: bool = False,
        wrap_transport: bool = False,
    ) -> None:
        self.hide_on_last_line = hide_on_last_line
        self.states = new_modifier_states()
        self.classifier = EventClassifier(resolver, button=button)

        self.transport: Optional[MouseTransportAdapter] = None
        if wrap_transport:
            self.transport = MouseTransportAdapter(source, self.classifier)
            source = self.transport

        self.dispatcher = Dispatcher(self.classifier, redraw=self.refresh)
        self.reader = KeyReader(source, self.dispatcher, redraw=self.refresh)
        if self.transport is not None:
            self.transport.attach(self.reader)

        self.toggles = {
            mod: ModifierToggle(mod, self.states[mod], self.reader.read_key) for mod in Modifier
        }
        self.actions: dict[str, ActionSpec] = {
            "next_status_line": ActionSpec(
                self._line_step(Surface.status), self._line_label(Surface.status)
            ),
            "next_title_line": ActionSpec(
                self._line_step(Surface.title), self._line_label(Surface.title)
            ),
            "hide_keyboard": ActionSpec(self._hide_action, "hide"),
        }
        self.renderer = RegionRenderer(self.states, self.toggles, self.actions)
        self.session = Session(display, layout, self.renderer, self.states)

    # ───────── public control API ──────────────────────────────────────────
    @property
    def visible(self) -> bool:
        return self.session.visible

    def show(self) -> None:
        self.session.show()

    def hide(self) -> None:
        self.session.hide()

    def toggle(self) -> None:
        if self.visible:
            self.hide()
        else:
            self.show()

    def refresh(self) -> None:
        self.session.refresh()

    def register_action(
        self, name: str, fn: ActionFn, label: Union[str, Callable[[], str]] = ""
    ) -> None:
        """Make ``name`` usable in ``{"action": name}`` layout entries."""
        self.actions[name] = ActionSpec(fn, label)

    def read_key(self, ctx: Optional[PromptContext] = None) -> Input:
        """Read the next key, with taps on the keyboard turned into keys."""
        return self.reader.read_key(ctx)

    # ───────── built-in actions ───────────────────────────────────────────
    def _line_step(self, surface: Surface) -> ActionFn:
        def step(ctx: PromptContext):
            lines = self.session.lines.get(surface)
            if lines is None:
                logger.debug("no %s lines to step through", surface.value)
            elif self.hide_on_last_line:
                if lines.step_or_hide() is HIDE:
                    self.hide()
            else:
                lines.step()
            self.refresh()
            return (self.reader.read_key(ctx),)

        return step

    def _line_label(self, surface: Surface) -> Callable[[], str]:
        def label() -> str:
            lines = self.session.lines.get(surface)
            return lines.indicator() if lines is not None else "-"

        return label

    def _hide_action(self, ctx: PromptContext):
        self.hide()
        return (self.reader.read_key(ctx),)
