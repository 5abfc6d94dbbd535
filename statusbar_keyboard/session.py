from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

from .interfaces import DisplaySurface
from .kb_layout import Layout
from .key_types import Modifier, Surface
from .line_stepper import ContentLineSet
from .modifier_state import ModifierState, new_modifier_states
from .render import Region, RegionRenderer

logger = logging.getLogger(__name__)


class Session:
    """Keyboard state for one display: modifier states, line sets and saved surfaces."""

    def __init__(
        self,
        display: DisplaySurface,
        layout: Layout,
        renderer: RegionRenderer,
        states: Optional[Mapping[Modifier, ModifierState]] = None,
    ) -> None:
        self.display = display
        self.layout = layout
        self.renderer = renderer
        self.modifiers: Mapping[Modifier, ModifierState] = (
            states if states is not None else new_modifier_states()
        )
        self.lines: Dict[Surface, ContentLineSet] = {
            surface: ContentLineSet(surface, layout[surface]) for surface in layout.surfaces()
        }
        self.saved: Dict[Surface, Any] = {}
        self.visible = False

    def show(self) -> None:
        """Take over the surfaces, starting every surface at its first line."""
        if self.visible:
            return
        for surface in self.lines:
            self.saved[surface] = self.display.get_content(surface)
            self.lines[surface].reset()
        for state in self.modifiers.values():
            state.armed = False
        self.visible = True
        logger.debug("keyboard shown on %s", ", ".join(s.value for s in self.lines))
        self.refresh()

    def hide(self) -> None:
        """Give the surfaces back their saved content and drop pending modifiers."""
        if not self.visible:
            return
        self.visible = False
        for surface, content in self.saved.items():
            self.display.set_content(surface, content)
        self.saved.clear()
        # toggles still on the stack restore their own top_level flag
        for state in self.modifiers.values():
            state.armed = False
        logger.debug("keyboard hidden")
        self.display.force_redraw()

    def render(self, surface: Surface) -> list[Region]:
        return self.renderer.render(self.lines[surface].current)

    def refresh(self) -> None:
        """Re-render both surfaces from the current state and redraw."""
        if self.visible:
            for surface in self.lines:
                self.display.set_content(surface, self.render(surface))
        self.display.force_redraw()
