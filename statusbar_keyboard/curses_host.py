"""A curses screen hosting the keyboard on its first and last rows.

Row 0 is the title line and the last row is the status line; the rows in
between form a scratch pane the command line demo echoes keys into.
"""

from __future__ import annotations

import curses
import logging
from typing import Any, Optional, Tuple

from .events import PromptContext, RawEvent
from .key_types import SpecialKey, Surface
from .render import ARMED, Region, unescape_label

logger = logging.getLogger(__name__)

_SPECIAL_KEYS = {
    curses.KEY_BACKSPACE: SpecialKey.backspace,
    curses.KEY_DC: SpecialKey.delete,
    curses.KEY_IC: SpecialKey.insert,
    curses.KEY_UP: SpecialKey.up,
    curses.KEY_DOWN: SpecialKey.down,
    curses.KEY_LEFT: SpecialKey.left,
    curses.KEY_RIGHT: SpecialKey.right,
    curses.KEY_HOME: SpecialKey.home,
    curses.KEY_END: SpecialKey.end,
    curses.KEY_PPAGE: SpecialKey.page_up,
    curses.KEY_NPAGE: SpecialKey.page_down,
    curses.KEY_ENTER: SpecialKey.enter,
}
_SPECIAL_KEYS.update({curses.KEY_F0 + n: SpecialKey(f"f{n}") for n in range(1, 13)})

_REPORT_MOTION = getattr(curses, "REPORT_MOUSE_POSITION", 0)

# button -> (pressed, released, clicked, double clicked, triple clicked) masks
_BUTTON_STATES = {
    button: tuple(
        getattr(curses, f"BUTTON{button}_{what}", 0)
        for what in ("PRESSED", "RELEASED", "CLICKED", "DOUBLE_CLICKED", "TRIPLE_CLICKED")
    )
    for button in (1, 2, 3)
}


class CursesHost:
    """Display surface, input source and position resolver over one curses window."""

    def __init__(self, stdscr, title: str = "statusbar-keyboard", status: str = "C-q quits") -> None:
        self.stdscr = stdscr
        self.content: dict[Surface, Any] = {Surface.title: title, Surface.status: status}
        self.scratch: list[str] = [""]
        self._spans: dict[Surface, list[Tuple[int, int, Region]]] = {s: [] for s in Surface}

        try:
            curses.curs_set(0)
        except curses.error:
            pass  # not every terminal can hide the cursor
        stdscr.keypad(True)
        curses.mousemask(curses.ALL_MOUSE_EVENTS | _REPORT_MOTION)
        # report presses and releases separately instead of synthesizing clicks
        curses.mouseinterval(0)

    def _row(self, surface: Surface) -> int:
        rows, _ = self.stdscr.getmaxyx()
        return 0 if surface is Surface.title else rows - 1

    def _put(self, row: int, col: int, text: str, attr: int = curses.A_NORMAL) -> None:
        try:
            self.stdscr.addstr(row, col, text, attr)
        except curses.error:
            pass  # addstr raises after drawing into the bottom-right cell

    # ───────── display surface ─────────────────────────────────────────────
    def get_content(self, surface: Surface) -> Any:
        return self.content[surface]

    def set_content(self, surface: Surface, content: Any) -> None:
        self.content[surface] = content

    def force_redraw(self) -> None:
        rows, cols = self.stdscr.getmaxyx()
        self.stdscr.erase()
        for surface in Surface:
            self._draw_surface(surface, cols)
        visible = self.scratch[-max(rows - 2, 0):] if rows > 2 else []
        for offset, line in enumerate(visible):
            self._put(1 + offset, 0, line[:cols])
        self.stdscr.refresh()

    def _draw_surface(self, surface: Surface, cols: int) -> None:
        row = self._row(surface)
        content = self.content[surface]
        spans = []
        if isinstance(content, str):
            self._put(row, 0, content[:cols], curses.A_BOLD)
        else:
            col = 0
            for region in content:
                text = unescape_label(region.label)
                if col + len(text) > cols:
                    break
                attr = curses.A_REVERSE if region.highlight == ARMED else curses.A_UNDERLINE
                self._put(row, col, text, attr)
                spans.append((col, col + len(text), region))
                col += len(text) + 1
        self._spans[surface] = spans

    def echo(self, text: str) -> None:
        """Append ``text`` to the scratch pane."""
        if text == "RET":
            self.scratch.append("")
            return
        line = self.scratch[-1]
        self.scratch[-1] = f"{line} {text}" if line else text

    # ───────── raw input source ────────────────────────────────────────────
    def read_next(self, ctx: PromptContext) -> RawEvent:
        while True:
            try:
                ch = self.stdscr.get_wch()
            except curses.error:
                continue  # interrupted by a signal
            if isinstance(ch, str):
                code = ord(ch)
                return RawEvent.key_event(13 if code == 10 else code)
            if ch == curses.KEY_MOUSE:
                event = self._mouse_event()
                if event is not None:
                    return event
                continue
            if ch == curses.KEY_RESIZE:
                self.force_redraw()
                continue
            special = _SPECIAL_KEYS.get(ch)
            if special is not None:
                return RawEvent.key_event(special.value)
            logger.debug("ignoring curses key %r", curses.keyname(ch))

    def _mouse_event(self) -> Optional[RawEvent]:
        try:
            _, x, y, _, bstate = curses.getmouse()
        except curses.error:
            return None
        if bstate & _REPORT_MOTION:
            return RawEvent.motion(x, y)
        for button, (pressed, released, clicked, double, triple) in _BUTTON_STATES.items():
            if bstate & pressed:
                return RawEvent.press(button, x, y)
            if bstate & released:
                return RawEvent.release(button, x, y)
            if bstate & clicked:
                return RawEvent.release(button, x, y, clicks=1)
            if bstate & double:
                return RawEvent.release(button, x, y, clicks=2)
            if bstate & triple:
                return RawEvent.release(button, x, y, clicks=3)
        return None

    # ───────── position resolver ───────────────────────────────────────────
    def resolve(self, event: RawEvent) -> Optional[Tuple[Surface, Optional[Region]]]:
        for surface in Surface:
            if event.y != self._row(surface):
                continue
            for start, end, region in self._spans[surface]:
                if start <= event.x < end:
                    return surface, region
            return surface, None
        return None
