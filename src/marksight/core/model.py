from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any

Category = str


@dataclass(frozen=True, order=True)
class Span:
    start: int  # byte offsets into the source, half-open
    end: int

    @property
    def empty(self) -> bool:
        return self.end <= self.start


@dataclass(frozen=True)
class Highlight:
    span: Span
    category: Category
    feature: str  # name of the feature that painted this run


@dataclass(frozen=True)
class OutlineEntry:
    name: str
    span: Span  # span of the heading section, usable as a fold range
    depth: int = 1


@dataclass(frozen=True)
class Outline:
    group: str
    entries: tuple[OutlineEntry, ...] = ()

    def names(self) -> list[str]:
        return [e.name for e in self.entries]


@dataclass(frozen=True)
class DocumentTrees:
    """
    Snapshot of one document as produced by the external parser.

    The roots are owned by the host; nothing here mutates or caches them.
    """
    block_root: Any
    inline_root: Any
    source: bytes = b""
    inline_regions: tuple[Span, ...] = field(default=())
