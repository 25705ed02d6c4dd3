"""Traversal helpers shared by the rule engine and the outline extractor."""

from typing import Iterator

from .ports import SyntaxNode


def walk(root: SyntaxNode) -> Iterator[tuple[SyntaxNode, SyntaxNode | None]]:
    """
    Yield ``(node, parent)`` pairs in pre-order (document order).

    Anonymous nodes are included. The walk is iterative so deeply nested
    documents do not hit the recursion limit.
    """
    stack: list[tuple[SyntaxNode, SyntaxNode | None]] = [(root, None)]
    while stack:
        node, parent = stack.pop()
        yield node, parent
        children = list(node.children or ())
        for child in reversed(children):
            stack.append((child, node))


def first_named_child(node: SyntaxNode | None) -> SyntaxNode | None:
    if node is None:
        return None
    named = node.named_children or ()
    return named[0] if len(named) else None


def node_text(node: SyntaxNode | None) -> str | None:
    """Return the node's source text as str, or None if it has none."""
    if node is None:
        return None
    raw = node.text
    if raw is None:
        return None
    if isinstance(raw, bytes):
        return raw.decode("utf-8", errors="replace")
    return str(raw)


def same_node(a: SyntaxNode, b: SyntaxNode) -> bool:
    return (
        a.type == b.type
        and a.start_byte == b.start_byte
        and a.end_byte == b.end_byte
    )
