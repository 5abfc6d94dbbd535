from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Union

from .kb_layout import ContentLine
from .key_types import Surface

logger = logging.getLogger(__name__)


class HideSignal(Enum):
    HIDE = "hide"


# returned by ContentLineSet.step_or_hide instead of wrapping to the first line
HIDE = HideSignal.HIDE


@dataclass
class ContentLineSet:
    """The alternate keyboards configured for one surface and which one is shown."""

    surface: Surface
    lines: List[ContentLine]
    index: int = 0

    def __post_init__(self):
        if not self.lines:
            raise ValueError(f"no content lines configured for the {self.surface.value} line")

    @property
    def current(self) -> ContentLine:
        return self.lines[self.index]

    def reset(self) -> None:
        self.index = 0

    def step(self) -> int:
        """Advance to the next line, wrapping to the first; return the new index."""
        self.index = (self.index + 1) % len(self.lines)
        logger.debug("%s line %s", self.surface.value, self.indicator())
        return self.index

    def step_or_hide(self) -> Union[int, HideSignal]:
        """Like :meth:`step`, but return :data:`HIDE` instead of wrapping around."""
        if self.index + 1 >= len(self.lines):
            return HIDE
        return self.step()

    def indicator(self) -> str:
        """``"current/total"``, counting from one."""
        return f"{self.index + 1}/{len(self.lines)}"
