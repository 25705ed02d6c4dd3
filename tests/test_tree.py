"""Tests for traversal helpers."""

from dataclasses import dataclass

from marksight.adapters.yaml_tree import TreeNode
from marksight.core.tree import first_named_child, node_text, walk


@dataclass
class BytesNode:
    """Stand-in for a tree-sitter node, whose text is bytes."""
    text: bytes | None


def test_walk_is_preorder(headings_doc):
    block, _inline, _source = headings_doc
    types = [node.type for node, _parent in walk(block)]

    assert types[:4] == ["document", "section", "atx_heading", "atx_h1_marker"]
    assert types.index("paragraph") < types.index("atx_h2_marker")


def test_walk_reports_parents():
    child = TreeNode("paragraph", 0, 1)
    root = TreeNode("block_quote", 0, 1, children=(child,))
    assert list(walk(root)) == [(root, None), (child, root)]


def test_first_named_child():
    assert first_named_child(None) is None
    assert first_named_child(TreeNode("section", 0, 0)) is None


def test_node_text_decodes_bytes():
    assert node_text(BytesNode(" Caf\xc3\xa9 ".encode("latin-1"))) == " Café "
    assert node_text(BytesNode(None)) is None
    assert node_text(None) is None
