"""Interface definitions for the host collaborators the keyboard relies on."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional, Protocol, Tuple, runtime_checkable

from .events import PromptContext, RawEvent
from .key_types import KeyCode, Surface

if TYPE_CHECKING:
    from .render import Region


@runtime_checkable
class DisplaySurface(Protocol):
    """Shows content on the status and title surfaces."""

    def get_content(self, surface: Surface) -> Any:
        """Return whatever the surface shows now, for restoring later."""
        ...

    def set_content(self, surface: Surface, content: Any) -> None:
        """Show ``content``: a list of regions, or something saved by :meth:`get_content`."""
        ...

    def force_redraw(self) -> None:
        ...


@runtime_checkable
class RawInputSource(Protocol):
    """Blocking source of raw input events."""

    def read_next(self, ctx: PromptContext) -> RawEvent:
        ...


@runtime_checkable
class PositionResolver(Protocol):
    """Map a pointer event to the surface and region under it."""

    def resolve(self, event: RawEvent) -> Optional[Tuple[Surface, Optional["Region"]]]:
        """Return ``None`` when the event is not on a managed surface."""
        ...


@runtime_checkable
class KeyReceiver(Protocol):
    """Object capable of handling a synthesized key."""

    def on_key(self, key: KeyCode) -> None:
        ...
