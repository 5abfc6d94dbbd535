"""Virtual keyboard drawn on a program's status and title lines."""

from .events import EventKind, PromptContext, RawEvent
from .kb_layout import Layout, LayoutError
from .kb_layout_io import load_layout
from .key_types import Modifier, SpecialKey, Surface
from .keyboard import VirtualKeyboard
from .modifiers import UnsupportedModifier, apply_modifier, describe_key
from .templates import CyclicTemplateReference, UnresolvedTemplateReference

__version__ = "0.1.0"

__all__ = [
    "CyclicTemplateReference",
    "EventKind",
    "Layout",
    "LayoutError",
    "Modifier",
    "PromptContext",
    "RawEvent",
    "SpecialKey",
    "Surface",
    "UnresolvedTemplateReference",
    "UnsupportedModifier",
    "VirtualKeyboard",
    "apply_modifier",
    "describe_key",
    "load_layout",
]
