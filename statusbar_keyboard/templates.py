"""Expand named layout templates into flat entry lists."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Iterable, Iterator

from .kb_layout import (
    ContentLine,
    KeyEntry,
    LayoutError,
    PrimitiveEntry,
    RangeEntry,
    TemplateEntry,
    TemplateRef,
)

logger = logging.getLogger(__name__)

_END = object()


class UnresolvedTemplateReference(LayoutError):
    def __init__(self, name: str, chain: tuple[str, ...] = ()):
        self.name = name
        self.chain = chain
        where = f" (inside {' -> '.join(chain)})" if chain else ""
        super().__init__(f"unknown template {name!r}{where}")


class CyclicTemplateReference(LayoutError):
    def __init__(self, chain: tuple[str, ...]):
        self.chain = chain
        super().__init__(f"template cycle: {' -> '.join(chain)}")


class TemplateSet(Mapping[str, tuple]):
    """Named, reusable entry sequences referenced with :class:`TemplateRef`."""

    def __init__(self, templates: Mapping[str, Iterable[TemplateEntry]] | None = None):
        self._templates: dict[str, tuple[TemplateEntry, ...]] = {}
        for name, entries in (templates or {}).items():
            self.define(name, entries)

    def define(self, name: str, entries: Iterable[TemplateEntry]) -> None:
        self._templates[name] = tuple(entries)

    def __getitem__(self, name: str) -> tuple[TemplateEntry, ...]:
        return self._templates[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._templates)

    def __len__(self) -> int:
        return len(self._templates)

    def flatten(self, entries: Iterable[TemplateEntry]) -> list[PrimitiveEntry]:
        return flatten(entries, self)

    def content_line(self, entries: Iterable[TemplateEntry]) -> ContentLine:
        return ContentLine(self.flatten(entries))

    def check(self) -> None:
        """Expand every template once so bad references fail now rather than on a tap."""
        for name in self._templates:
            self.flatten([TemplateRef(name)])


def flatten(
    entries: Iterable[TemplateEntry],
    templates: Mapping[str, Iterable[TemplateEntry]] | None = None,
) -> list[PrimitiveEntry]:
    """Return ``entries`` with references spliced in and ranges spelled out.

    Expansion is depth first and keeps the left to right order of the
    original entries.  ``RangeEntry`` items become one ``KeyEntry`` per code
    point.
    """
    templates = templates or {}
    out: list[PrimitiveEntry] = []
    # (template name or None for the top level, iterator over its entries)
    stack: list[tuple[str | None, Iterator[TemplateEntry]]] = [(None, iter(entries))]
    active: list[str] = []

    while stack:
        name, pending = stack[-1]
        entry = next(pending, _END)
        if entry is _END:
            stack.pop()
            if name is not None:
                active.pop()
            continue

        if isinstance(entry, TemplateRef):
            if entry.name in active:
                start = active.index(entry.name)
                raise CyclicTemplateReference(tuple(active[start:]) + (entry.name,))
            try:
                body = templates[entry.name]
            except KeyError:
                raise UnresolvedTemplateReference(entry.name, tuple(active)) from None
            active.append(entry.name)
            stack.append((entry.name, iter(body)))
        elif isinstance(entry, RangeEntry):
            out.extend(KeyEntry(code) for code in range(entry.start, entry.end + 1))
        else:
            out.append(entry)

    logger.debug("flattened to %d entries", len(out))
    return out
