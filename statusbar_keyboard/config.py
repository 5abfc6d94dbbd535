from dataclasses import dataclass, fields
import json
import logging
import os

logger = logging.getLogger(__name__)

EMIT_MODES = ("echo", "os")


@dataclass
class KeyboardConfig:
    layout: str | None = None      # None: the packaged default layout
    button: int = 1                # pointer button that taps keys
    hide_on_last_line: bool = False
    emit: str = "echo"             # "echo" into the scratch pane or "os" via pynput
    log_level: str = "INFO"


CONFIG_DIR = os.path.join(os.path.expanduser("~"), ".statusbar_keyboard")
CONFIG_FILE = os.path.join(CONFIG_DIR, "config.json")
LAYOUT_ENV = "STATUSBAR_KEYBOARD_LAYOUT"


def load_config(path: str = CONFIG_FILE) -> KeyboardConfig:
    """Return saved keyboard settings, or defaults if unavailable.

    The file is only ever read; settings changed on the command line are not
    written back.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        data = {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", path, exc)
        data = {}

    if not isinstance(data, dict):
        logger.warning("ignoring config %s: expected a JSON object", path)
        data = {}

    known = {f.name for f in fields(KeyboardConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        logger.warning("ignoring unknown config keys: %s", ", ".join(unknown))
    config = KeyboardConfig(**{k: v for k, v in data.items() if k in known})

    if config.emit not in EMIT_MODES:
        logger.warning("unknown emit mode %r, using 'echo'", config.emit)
        config.emit = "echo"

    env_layout = os.getenv(LAYOUT_ENV)
    if env_layout:
        config.layout = env_layout
    return config
