"""Highlight rule records and the Markdown rule table."""

from __future__ import annotations
from dataclasses import dataclass

from .errors import UnknownFeatureError
from .patterns import Child, Either, NodeType, Pattern

BLOCK = "block"
INLINE = "inline"

KEYWORD = "keyword"
STRING = "string"
DOC = "doc"
SHADOW = "shadow"
LINK = "link"
UNDERLINE = "underline"
BOLD = "bold"

CATEGORIES = frozenset({KEYWORD, STRING, DOC, SHADOW, LINK, UNDERLINE, BOLD})


@dataclass(frozen=True)
class HighlightRule:
    tree: str  # BLOCK or INLINE
    pattern: Pattern
    category: str


@dataclass(frozen=True)
class Feature:
    name: str
    rules: tuple[HighlightRule, ...]
    override: bool = False


def _block(pattern: Pattern, category: str) -> HighlightRule:
    return HighlightRule(BLOCK, pattern, category)


def _inline(pattern: Pattern, category: str) -> HighlightRule:
    return HighlightRule(INLINE, pattern, category)


_LIST_MARKERS = NodeType.of(
    "list_marker_star", "list_marker_plus", "list_marker_minus", "list_marker_dot"
)

PARAGRAPH = Feature(
    name="paragraph",
    rules=(
        _block(NodeType.of("setext_heading", "atx_heading"), KEYWORD),
        _block(NodeType.of("thematic_break"), SHADOW),
        _block(NodeType.of("indented_code_block"), STRING),
        _block(Child(NodeType.of("list_item"), _LIST_MARKERS), KEYWORD),
        _block(
            Child(NodeType.of("fenced_code_block"), NodeType.of("fenced_code_block_delimiter")),
            DOC,
        ),
        _block(
            Child(NodeType.of("fenced_code_block"), NodeType.of("code_fence_content")),
            STRING,
        ),
        _block(NodeType.of("block_quote_marker"), STRING),
        _block(Child(NodeType.of("block_quote"), NodeType.of("paragraph")), STRING),
        # Same marker reached through the quote itself; both paths stay.
        _block(Child(NodeType.of("block_quote"), NodeType.of("block_quote_marker")), STRING),
    ),
)

PARAGRAPH_INLINE = Feature(
    name="paragraph-inline",
    rules=(
        _inline(NodeType.of("image_description"), LINK),
        _inline(NodeType.of("link_destination"), STRING),
        _inline(NodeType.of("code_span"), STRING),
        _inline(NodeType.of("emphasis"), UNDERLINE),
        _inline(NodeType.of("strong_emphasis"), BOLD),
        _inline(
            Either((
                Child(NodeType.of("inline_link"), NodeType.of("link_text")),
                Child(NodeType.of("shortcut_link"), NodeType.of("link_text")),
            )),
            LINK,
        ),
        _inline(Child(NodeType.of("inline_link"), NodeType.of("link_destination")), STRING),
    ),
)

DELIMITER = Feature(
    name="delimiter",
    rules=(_inline(NodeType.of("[", "]", "(", ")"), SHADOW),),
    override=True,
)

MARKDOWN_FEATURES: tuple[Feature, ...] = (PARAGRAPH, PARAGRAPH_INLINE, DELIMITER)


def feature_names(features: tuple[Feature, ...] = MARKDOWN_FEATURES) -> list[str]:
    return [f.name for f in features]


def select_features(
    features: tuple[Feature, ...], enabled: "set[str] | frozenset[str] | None"
) -> tuple[Feature, ...]:
    """
    Filter ``features`` down to ``enabled``, keeping declaration order.

    None enables everything. Names not declared raise UnknownFeatureError.
    """
    if enabled is None:
        return tuple(features)
    known = {f.name for f in features}
    unknown = sorted(set(enabled) - known)
    if unknown:
        raise UnknownFeatureError(
            f"Unknown feature(s): {', '.join(unknown)} (known: {', '.join(sorted(known))})"
        )
    return tuple(f for f in features if f.name in enabled)
