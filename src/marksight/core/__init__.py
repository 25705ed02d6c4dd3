from .engine import HighlightEngine, category_at, evaluate
from .model import DocumentTrees, Highlight, Outline, OutlineEntry, Span
from .outline import build_outline, heading_name, is_heading_section, outline_entries

__all__ = [
    "HighlightEngine",
    "evaluate",
    "category_at",
    "build_outline",
    "outline_entries",
    "heading_name",
    "is_heading_section",
    "DocumentTrees",
    "Highlight",
    "Outline",
    "OutlineEntry",
    "Span",
]
