"""
In-memory syntax trees and their YAML snapshot format.

A snapshot is a nested mapping::

    type: section
    start: 0
    end: 8
    children:
      - type: atx_heading
        start: 0
        end: 8
        children:
          - {type: atx_h1_marker, start: 0, end: 1}
          - {type: inline, start: 1, end: 7, field: heading_content}

Optional keys: ``named`` (default true), ``field`` (the field under which
the parent holds this child) and ``text``. Without ``text``, a node's text
is sliced out of the ``source`` given to ``load_tree``. Offsets are byte
offsets into the UTF-8 encoded source, the unit tree-sitter reports.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any

import yaml

from ..core.errors import TreeFormatError
from ..core.ports import SyntaxNode


@dataclass(eq=False)
class TreeNode:
    type: str
    start_byte: int
    end_byte: int
    children: tuple["TreeNode", ...] = ()
    is_named: bool = True
    field: str | None = None
    literal: str | None = None
    source: bytes | None = None  # UTF-8; offsets index bytes, as in tree-sitter

    def __post_init__(self) -> None:
        if isinstance(self.source, str):
            self.source = self.source.encode("utf-8")

    @property
    def named_children(self) -> tuple["TreeNode", ...]:
        return tuple(c for c in self.children if c.is_named)

    @property
    def text(self) -> str | None:
        if self.literal is not None:
            return self.literal
        if self.source is None:
            return None
        return self.source[self.start_byte:self.end_byte].decode("utf-8", errors="replace")

    def child_by_field_name(self, name: str) -> "TreeNode | None":
        for child in self.children:
            if child.field == name:
                return child
        return None


def _build(data: Any, source: bytes | None, path: str) -> TreeNode:
    if not isinstance(data, dict):
        raise TreeFormatError(f"{path}: expected a mapping, got {type(data).__name__}")
    try:
        node_type = data["type"]
        start = int(data["start"])
        end = int(data["end"])
    except KeyError as exc:
        raise TreeFormatError(f"{path}: missing key {exc.args[0]!r}") from exc
    except (TypeError, ValueError) as exc:
        raise TreeFormatError(f"{path}: start/end must be integers") from exc
    if end < start:
        raise TreeFormatError(f"{path}: end {end} before start {start}")

    raw_children = data.get("children") or []
    if not isinstance(raw_children, list):
        raise TreeFormatError(f"{path}: children must be a list")
    children = tuple(
        _build(child, source, f"{path}/{i}") for i, child in enumerate(raw_children)
    )
    text = data.get("text")
    return TreeNode(
        type=str(node_type),
        start_byte=start,
        end_byte=end,
        children=children,
        is_named=bool(data.get("named", True)),
        field=data.get("field"),
        literal=None if text is None else str(text),
        source=source,
    )


def _encoded(source: str | bytes | None) -> bytes | None:
    if isinstance(source, str):
        return source.encode("utf-8")
    return source


def tree_from_dict(data: Any, source: str | bytes | None = None) -> TreeNode:
    return _build(data, _encoded(source), "$")


def load_tree(text: str, source: str | bytes | None = None) -> TreeNode:
    """Parse a YAML snapshot into a TreeNode."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise TreeFormatError(f"Invalid YAML tree: {exc}") from exc
    return tree_from_dict(data, source)


def load_trees(text: str) -> tuple[TreeNode, TreeNode, str]:
    """
    Parse a two-tree document snapshot.

    The document has keys ``source``, ``block`` and ``inline``.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise TreeFormatError(f"Invalid YAML tree: {exc}") from exc
    if not isinstance(data, dict):
        raise TreeFormatError("Snapshot must be a mapping with block and inline trees")
    source = data.get("source")
    if source is not None:
        source = str(source)
    for key in ("block", "inline"):
        if key not in data:
            raise TreeFormatError(f"Snapshot is missing the {key!r} tree")
    raw = _encoded(source)
    return (
        _build(data["block"], raw, "$.block"),
        _build(data["inline"], raw, "$.inline"),
        source or "",
    )


def _field_of(parent: SyntaxNode, index: int, child: SyntaxNode) -> str | None:
    lookup = getattr(parent, "field_name_for_child", None)
    if lookup is not None:
        return lookup(index)
    return getattr(child, "field", None)


def tree_to_dict(node: SyntaxNode) -> dict[str, Any]:
    """Serialize any SyntaxNode (tree-sitter nodes included) to a mapping."""
    out: dict[str, Any] = {
        "type": node.type,
        "start": node.start_byte,
        "end": node.end_byte,
    }
    if not node.is_named:
        out["named"] = False
    children = []
    for i, child in enumerate(node.children or ()):
        item = tree_to_dict(child)
        name = _field_of(node, i, child)
        if name:
            item["field"] = name
        children.append(item)
    if children:
        out["children"] = children
    return out


def dump_tree(node: SyntaxNode) -> str:
    return yaml.safe_dump(tree_to_dict(node), sort_keys=False, allow_unicode=True)


def dump_trees(block: SyntaxNode, inline: SyntaxNode, source: str | bytes) -> str:
    """Serialize a two-tree document snapshot that ``load_trees`` reads back."""
    if isinstance(source, bytes):
        source = source.decode("utf-8")
    data = {
        "source": source,
        "block": tree_to_dict(block),
        "inline": tree_to_dict(inline),
    }
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
