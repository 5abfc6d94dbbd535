"""Command line entry point for the status bar keyboard demo."""

from __future__ import annotations

import argparse
import json
import locale
import logging

from . import logging as log_setup
from .config import EMIT_MODES, load_config
from .events import PromptContext, RawEvent
from .interfaces import KeyReceiver
from .kb_layout import LayoutError
from .kb_layout_io import list_layouts, load_layout
from .keyboard import VirtualKeyboard
from .modifiers import describe_key

logger = logging.getLogger(__name__)

QUIT_KEY = 17     # C-q
TOGGLE_KEY = 20   # C-t


def main(argv: list[str] | None = None) -> None:
    """Run a curses scratch pad with the keyboard on its title and status lines."""
    cfg = load_config()
    parser = argparse.ArgumentParser(
        description="Operate a terminal program by tapping a keyboard drawn on its status lines",
    )
    parser.add_argument(
        "--layout",
        default=cfg.layout,
        help="Path to keyboard layout JSON",
    )
    parser.add_argument(
        "--button",
        type=int,
        default=cfg.button,
        help="Pointer button that taps keys",
    )
    parser.add_argument(
        "--hide-on-last-line",
        action="store_true",
        default=cfg.hide_on_last_line,
        help="Hide the keyboard instead of wrapping past the last content line",
    )
    parser.add_argument(
        "--emit",
        choices=EMIT_MODES,
        default=cfg.emit,
        help="Echo tapped keys into the scratch pane or send them to the OS",
    )
    parser.add_argument(
        "--log-level",
        default=cfg.log_level,
        help="Log level for ~/.statusbar_keyboard.log",
    )
    parser.add_argument(
        "--list-layouts",
        action="store_true",
        help="Print the bundled layouts and exit",
    )
    args = parser.parse_args(argv)

    if args.list_layouts:
        for path in list_layouts():
            print(path)
        return

    try:
        layout = load_layout(args.layout)
    except FileNotFoundError:
        parser.error(f"Layout file '{args.layout}' not found")
    except json.JSONDecodeError as exc:
        parser.error(f"Invalid JSON in layout file '{args.layout}': {exc.msg}")
    except LayoutError as exc:
        parser.error(f"Invalid layout '{args.layout or 'default'}': {exc}")

    emitter: KeyReceiver | None = None
    if args.emit == "os":
        from .pc_control import PCController
        emitter = PCController()

    log_setup.setup(args.log_level, console=False)

    import curses

    locale.setlocale(locale.LC_ALL, "")
    curses.wrapper(_run, layout, args, emitter)


def _run(stdscr, layout, args, emitter) -> None:
    from .curses_host import CursesHost

    host = CursesHost(stdscr, status="C-q quits, C-t toggles the keyboard")
    keyboard = VirtualKeyboard(
        layout,
        host,
        host,
        host,
        button=args.button,
        hide_on_last_line=args.hide_on_last_line,
        wrap_transport=True,
    )
    keyboard.show()
    ctx = PromptContext()

    while True:
        key = keyboard.read_key(ctx)
        if isinstance(key, RawEvent):
            logger.debug("unhandled pointer event %r", key)
            continue
        if key == QUIT_KEY:
            break
        if key == TOGGLE_KEY:
            keyboard.toggle()
            continue
        if emitter is not None and keyboard.reader.last_synthesized:
            emitter.on_key(key)
        else:
            host.echo(describe_key(key))


if __name__ == "__main__":  # pragma: no cover - manual entry point
    main()
