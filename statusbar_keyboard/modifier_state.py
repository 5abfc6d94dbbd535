from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from .events import Input, PromptContext
from .key_types import Modifier
from .modifiers import apply_modifier

logger = logging.getLogger(__name__)


@dataclass
class ModifierState:
    top_level: bool = True  # no toggle of this modifier is waiting for a key
    armed: bool = False     # the next key read gets this modifier

    def reset(self) -> None:
        self.top_level = True
        self.armed = False


def new_modifier_states() -> dict[Modifier, ModifierState]:
    """One independent state per modifier kind."""
    return {mod: ModifierState() for mod in Modifier}


class ModifierToggle:
    """Action bound to a modifier's label.

    The first tap arms the modifier and blocks reading the next key.  Taps on
    the same label while that read is pending flip ``armed`` so the pending
    key is delivered with or without the modifier.  Other modifiers have
    their own toggle and state, so tapping several labels stacks them.
    """

    def __init__(
        self,
        modifier: Modifier,
        state: ModifierState,
        read_key: Callable[[PromptContext], Input],
    ) -> None:
        self.modifier = modifier
        self.state = state
        self.read_key = read_key

    def __call__(self, ctx: PromptContext) -> tuple[Input, ...]:
        state = self.state
        if not state.top_level:
            state.armed = not state.armed
            logger.debug("%s %s", self.modifier.value, "re-armed" if state.armed else "cancelled")
            return (self.read_key(ctx),)

        state.top_level = False
        state.armed = True
        logger.debug("%s armed", self.modifier.value)
        try:
            key = self.read_key(ctx)
            armed = state.armed
        finally:
            state.top_level = True
            state.armed = False

        if not armed:
            return (key,)
        # toggles nest, so a modifier tapped later has already been applied to
        # ``key``: tapping A, B then k gives apply(apply(k, B), A), not
        # apply(apply(k, A), B). For symbolic keys the two spellings differ.
        if isinstance(key, (int, str)):
            return (apply_modifier(key, self.modifier),)
        # pointer events the keyboard does not own go through unmodified
        logger.debug("%s not applied to %r", self.modifier.value, key)
        return (key,)
