"""Runtime wiring helper for the CLI and the API."""

from dataclasses import dataclass
from pathlib import Path

from .adapters.treesitter_parser import MarkdownTreeParser
from .config import MarksightConfig, load_config
from .core.engine import HighlightEngine
from .core.model import DocumentTrees, Highlight, Outline
from .core.outline import build_outline
from .core.ports import TreeProvider


@dataclass
class Runtime:
    """Container for all wired components."""
    parser: TreeProvider
    engine: HighlightEngine
    config: MarksightConfig

    def parse(self, text: str | bytes) -> DocumentTrees:
        return self.parser.parse(text)

    def highlight(self, text: str | bytes, features: list[str] | None = None) -> list[Highlight]:
        trees = self.parse(text)
        return self.engine.evaluate(trees.block_root, trees.inline_root, features)

    def outline(self, text: str | bytes) -> Outline:
        trees = self.parse(text)
        return build_outline(
            trees.block_root,
            heading_types=self.config.outline.heading_types,
            group=self.config.outline.group,
        )


def build_runtime(
    config_path: Path | None = None,
    config: MarksightConfig | None = None,
) -> Runtime:
    """
    Build and wire all components.

    Refuses to build unless both grammars loaded
    (raises GrammarUnavailableError).
    """
    if config is None:
        config = load_config(config_path=config_path)

    parser = MarkdownTreeParser(
        block_language=config.parser.block_language,
        inline_language=config.parser.inline_language,
    )
    parser.ensure_ready()

    engine = HighlightEngine(enabled=config.highlight.features)

    return Runtime(parser=parser, engine=engine, config=config)
