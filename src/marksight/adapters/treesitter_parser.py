"""Drive tree-sitter's block and inline Markdown grammars over one document."""

import logging

from tree_sitter import Parser
from tree_sitter_language_pack import get_language

from ..core.errors import GrammarUnavailableError
from ..core.model import DocumentTrees, Span
from ..core.tree import walk

logger = logging.getLogger(__name__)

BLOCK_LANGUAGE = "markdown"
INLINE_LANGUAGE = "markdown_inline"
INLINE_REGION_TYPE = "inline"


class MarkdownTreeParser:
    """
    Dual-grammar parser: the block grammar first, then the inline grammar
    over every ``inline`` region of the block tree as a single tree.
    """

    def __init__(self, block_language: str = BLOCK_LANGUAGE, inline_language: str = INLINE_LANGUAGE):
        self.block_language = block_language
        self.inline_language = inline_language
        self.errors: dict[str, str] = {}
        self._block = self._load(block_language)
        self._inline = self._load(inline_language)

    def _load(self, name: str) -> Parser | None:
        try:
            language = get_language(name)  # type: ignore[arg-type]
        except (LookupError, ValueError, OSError) as exc:
            logger.warning("grammar %s unavailable: %s", name, exc)
            self.errors[name] = str(exc)
            return None
        parser = Parser()
        parser.language = language
        return parser

    @property
    def ready(self) -> bool:
        return self._block is not None and self._inline is not None

    def ensure_ready(self) -> None:
        if not self.ready:
            missing = ", ".join(f"{k} ({v})" for k, v in self.errors.items())
            raise GrammarUnavailableError(f"Markdown grammars not ready: {missing}")

    def parse(self, text: str | bytes) -> DocumentTrees:
        self.ensure_ready()
        source = text.encode("utf-8") if isinstance(text, str) else bytes(text)

        block_tree = self._block.parse(source)  # type: ignore[union-attr]
        regions = [
            node for node, _parent in walk(block_tree.root_node)
            if node.type == INLINE_REGION_TYPE
        ]

        inline_parser = self._inline
        if regions:
            inline_parser.included_ranges = [node.range for node in regions]  # type: ignore[union-attr]
            inline_tree = inline_parser.parse(source)  # type: ignore[union-attr]
        else:
            inline_parser.included_ranges = []  # type: ignore[union-attr]
            inline_tree = inline_parser.parse(b"")  # type: ignore[union-attr]

        logger.debug("parsed %d bytes, %d inline region(s)", len(source), len(regions))
        return DocumentTrees(
            block_root=block_tree.root_node,
            inline_root=inline_tree.root_node,
            source=source,
            inline_regions=tuple(Span(n.start_byte, n.end_byte) for n in regions),
        )
