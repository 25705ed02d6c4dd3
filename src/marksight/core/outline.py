"""Heading outline extraction for navigation and folding."""

from __future__ import annotations
import logging
from collections.abc import Iterable
from typing import Iterator

from .errors import TreesNotReadyError
from .model import Outline, OutlineEntry, Span
from .ports import SyntaxNode
from .tree import first_named_child, node_text, walk

logger = logging.getLogger(__name__)

HEADINGS_GROUP = "Headings"
HEADING_MARKER_TYPES: frozenset[str] = frozenset({"atx_heading"})
HEADING_CONTENT_FIELD = "heading_content"


def is_heading_section(
    node: SyntaxNode, heading_types: Iterable[str] = HEADING_MARKER_TYPES
) -> bool:
    """True if the node's first named child is a heading marker."""
    child = first_named_child(node)
    return child is not None and child.type in frozenset(heading_types)


def heading_name(node: SyntaxNode) -> str | None:
    """
    Display name of a heading section.

    Returns None when there is no marker child, or when the marker has no
    content field or no text in it. A heading whose title is blank gives
    "" so it stays distinguishable from "no heading here".
    """
    marker = first_named_child(node)
    if marker is None:
        return None
    text = node_text(marker.child_by_field_name(HEADING_CONTENT_FIELD))
    if text is None:
        return None
    return text.strip()


def outline_entries(
    block_root: SyntaxNode | None,
    heading_types: Iterable[str] = HEADING_MARKER_TYPES,
) -> Iterator[OutlineEntry]:
    if block_root is None:
        raise TreesNotReadyError("The block tree is required to build an outline")
    types = frozenset(heading_types)
    for node, _parent in walk(block_root):
        if not is_heading_section(node, types):
            continue
        name = heading_name(node)
        if name is None:
            continue
        yield OutlineEntry(name=name, span=Span(node.start_byte, node.end_byte))


def build_outline(
    block_root: SyntaxNode | None,
    heading_types: Iterable[str] = HEADING_MARKER_TYPES,
    group: str = HEADINGS_GROUP,
) -> Outline:
    """Collect every heading section of the block tree in document order."""
    entries = tuple(outline_entries(block_root, heading_types))
    logger.debug("outline: %d heading(s)", len(entries))
    return Outline(group=group, entries=entries)
