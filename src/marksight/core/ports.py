from typing import Protocol, Sequence, runtime_checkable

from .model import DocumentTrees


@runtime_checkable
class SyntaxNode(Protocol):
    """
    Read-only view of a node in either tree.

    tree-sitter's ``Node`` satisfies this as-is. ``text`` may be bytes
    (tree-sitter) or str (in-memory trees), or None when the source is
    not attached.
    """

    type: str
    start_byte: int
    end_byte: int
    is_named: bool

    @property
    def children(self) -> Sequence["SyntaxNode"]:
        pass

    @property
    def named_children(self) -> Sequence["SyntaxNode"]:
        pass

    @property
    def text(self) -> bytes | str | None:
        pass

    def child_by_field_name(self, name: str) -> "SyntaxNode | None":
        pass


class TreeProvider(Protocol):
    """
    Host-side dual-grammar parser. Owns the trees; hands out snapshots.
    """

    @property
    def ready(self) -> bool:
        pass

    def parse(self, text: str | bytes) -> DocumentTrees:
        pass
