"""
Tree patterns as plain data, interpreted by one generic matcher.

A pattern is tested against a single node together with its direct parent.
Every pattern either matches or does not: a missing parent, child or field
is simply a non-match.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Union

from .ports import SyntaxNode
from .tree import same_node


@dataclass(frozen=True)
class NodeType:
    """Match a node whose type is any of ``types``."""
    types: frozenset[str]

    @classmethod
    def of(cls, *types: str) -> "NodeType":
        return cls(frozenset(types))


@dataclass(frozen=True)
class Child:
    """
    Match a node matching ``child`` whose direct parent matches ``parent``.

    The matched (captured) node is the child. With ``field`` set, the child
    must also sit in that field of the parent.
    """
    parent: NodeType
    child: NodeType
    field: str | None = None


@dataclass(frozen=True)
class Either:
    """Match if any of the alternatives matches."""
    alternatives: tuple["Pattern", ...]


Pattern = Union[NodeType, Child, Either]


def matches(pattern: Pattern, node: SyntaxNode, parent: SyntaxNode | None = None) -> bool:
    if isinstance(pattern, NodeType):
        return node.type in pattern.types
    if isinstance(pattern, Child):
        if parent is None or node.type not in pattern.child.types:
            return False
        if parent.type not in pattern.parent.types:
            return False
        if pattern.field is None:
            return True
        held = parent.child_by_field_name(pattern.field)
        return held is not None and same_node(held, node)
    if isinstance(pattern, Either):
        return any(matches(alt, node, parent) for alt in pattern.alternatives)
    raise TypeError(f"Unknown pattern variant: {type(pattern).__name__}")


def node_types(pattern: Pattern) -> frozenset[str]:
    """Every node type the pattern can capture; used to pre-filter nodes."""
    if isinstance(pattern, NodeType):
        return pattern.types
    if isinstance(pattern, Child):
        return pattern.child.types
    if isinstance(pattern, Either):
        out: frozenset[str] = frozenset()
        for alt in pattern.alternatives:
            out |= node_types(alt)
        return out
    raise TypeError(f"Unknown pattern variant: {type(pattern).__name__}")
