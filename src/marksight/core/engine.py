"""
Highlight rule engine.

Evaluation runs in three passes over the two tree snapshots:

1. match: every enabled rule is tested against every node of its tree;
2. resolve: a node hit by several rules keeps one assignment (override
   first, then the last rule in declaration order);
3. paint: assignments claim their spans from highest to lowest rank, and
   lower-ranked ones keep only what is still unclaimed.

Nothing is retained between calls.
"""

from __future__ import annotations
import logging
from bisect import bisect_right
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Iterator

from .errors import TreesNotReadyError
from .model import Highlight, Span
from .patterns import matches, node_types
from .ports import SyntaxNode
from .rules import BLOCK, INLINE, MARKDOWN_FEATURES, Feature, HighlightRule, select_features
from .tree import walk

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Assignment:
    span: Span
    category: str
    feature: str
    override: bool
    rank: int  # position of the rule in declaration order
    visit: int  # pre-order index of the node within its tree

    @property
    def priority(self) -> tuple[bool, int, int]:
        return (self.override, self.rank, self.visit)


class _Canvas:
    """Sorted, non-overlapping claimed intervals."""

    def __init__(self) -> None:
        self._starts: list[int] = []
        self._ends: list[int] = []

    def inside(self, pos: int) -> bool:
        i = bisect_right(self._starts, pos) - 1
        return i >= 0 and self._starts[i] < pos < self._ends[i]

    def claim(self, start: int, end: int) -> list[tuple[int, int]]:
        """Claim [start, end) and return the parts that were still free."""
        free: list[tuple[int, int]] = []
        i = bisect_right(self._ends, start)
        j = i
        cursor = start
        while j < len(self._starts) and self._starts[j] < end:
            if self._starts[j] > cursor:
                free.append((cursor, self._starts[j]))
            cursor = max(cursor, self._ends[j])
            j += 1
        if cursor < end:
            free.append((cursor, end))

        new_start = min(start, self._starts[i]) if i < j else start
        new_end = max(end, self._ends[j - 1]) if i < j else end
        self._starts[i:j] = [new_start]
        self._ends[i:j] = [new_end]
        return free


def _rule_index(
    features: tuple[Feature, ...], tree: str
) -> dict[str, list[tuple[int, Feature, HighlightRule]]]:
    index: dict[str, list[tuple[int, Feature, HighlightRule]]] = {}
    rank = 0
    for feature in features:
        for rule in feature.rules:
            rank += 1
            if rule.tree != tree:
                continue
            for node_type in node_types(rule.pattern):
                index.setdefault(node_type, []).append((rank, feature, rule))
    return index


def _match_tree(
    root: SyntaxNode, tree: str, features: tuple[Feature, ...]
) -> dict[tuple, _Assignment]:
    index = _rule_index(features, tree)
    resolved: dict[tuple, _Assignment] = {}
    if not index:
        return resolved

    for visit, (node, parent) in enumerate(walk(root)):
        candidates = index.get(node.type)
        if not candidates:
            continue
        for rank, feature, rule in candidates:
            if not matches(rule.pattern, node, parent):
                continue
            found = _Assignment(
                span=Span(node.start_byte, node.end_byte),
                category=rule.category,
                feature=feature.name,
                override=feature.override,
                rank=rank,
                visit=visit,
            )
            key = (tree, node.start_byte, node.end_byte, node.type)
            held = resolved.get(key)
            if held is None or found.priority > held.priority:
                resolved[key] = found
    return resolved


def _paint(assignments: Iterable[_Assignment]) -> list[Highlight]:
    canvas = _Canvas()
    out: list[Highlight] = []
    for a in sorted(assignments, key=lambda a: a.priority, reverse=True):
        if a.span.empty:
            # Zero-width runs hold no characters; keep them unless buried.
            if not canvas.inside(a.span.start):
                out.append(Highlight(a.span, a.category, a.feature))
            continue
        for start, end in canvas.claim(a.span.start, a.span.end):
            out.append(Highlight(Span(start, end), a.category, a.feature))
    out.sort(key=lambda h: (h.span.start, h.span.end))
    return out


class HighlightEngine:
    """
    Evaluate a feature table against a block tree and an inline tree.

    ``enabled`` fixes the default feature set at construction time; each
    call may still pass its own set.
    """

    def __init__(
        self,
        features: tuple[Feature, ...] = MARKDOWN_FEATURES,
        enabled: Iterable[str] | None = None,
    ):
        self.features = tuple(features)
        self.enabled = frozenset(
            f.name for f in select_features(
                self.features, None if enabled is None else frozenset(enabled)
            )
        )

    def iter_highlights(
        self,
        block_root: SyntaxNode | None,
        inline_root: SyntaxNode | None,
        enabled: Iterable[str] | None = None,
    ) -> Iterator[Highlight]:
        if block_root is None or inline_root is None:
            raise TreesNotReadyError("Both the block tree and the inline tree are required")

        active = select_features(
            self.features, self.enabled if enabled is None else frozenset(enabled)
        )
        assignments = list(_match_tree(block_root, BLOCK, active).values())
        assignments.extend(_match_tree(inline_root, INLINE, active).values())
        highlights = _paint(assignments)
        logger.debug(
            "features=%s matched=%d painted=%d",
            ",".join(f.name for f in active), len(assignments), len(highlights),
        )
        yield from highlights

    def evaluate(
        self,
        block_root: SyntaxNode | None,
        inline_root: SyntaxNode | None,
        enabled: Iterable[str] | None = None,
    ) -> list[Highlight]:
        return list(self.iter_highlights(block_root, inline_root, enabled))


def evaluate(
    block_root: SyntaxNode | None,
    inline_root: SyntaxNode | None,
    enabled_features: Iterable[str] | None = None,
) -> list[Highlight]:
    """Evaluate the Markdown rule table with the given features enabled."""
    return HighlightEngine().evaluate(block_root, inline_root, enabled_features)


def category_at(highlights: Iterable[Highlight], offset: int) -> str | None:
    """Category painted over the byte at ``offset``, or None."""
    for h in highlights:
        if h.span.start <= offset < h.span.end:
            return h.category
    return None
