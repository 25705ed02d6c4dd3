"""End-to-end tests against the real tree-sitter Markdown grammars."""

import pytest

from marksight.adapters.treesitter_parser import MarkdownTreeParser
from marksight.core.engine import HighlightEngine, category_at
from marksight.core.errors import GrammarUnavailableError
from marksight.core.outline import build_outline


@pytest.fixture(scope="module")
def parser():
    p = MarkdownTreeParser()
    if not p.ready:
        pytest.skip(f"markdown grammars unavailable: {p.errors}")
    return p


def test_outline_from_markdown(parser):
    trees = parser.parse("# Title\n\nSome text.\n\n## Sub\n")
    outline = build_outline(trees.block_root)

    assert outline.names() == ["Title", "Sub"]
    assert len({e.depth for e in outline.entries}) == 1


def test_inline_highlights_from_markdown(parser):
    source = "**bold** and *em* and [text](dest)\n"
    trees = parser.parse(source)
    highlights = HighlightEngine().evaluate(trees.block_root, trees.inline_root)

    assert category_at(highlights, source.index("bold")) == "bold"
    assert category_at(highlights, source.index("*em*") + 1) == "underline"
    assert category_at(highlights, source.index("text")) == "link"
    assert category_at(highlights, source.index("dest")) == "string"
    assert category_at(highlights, source.index("[")) == "shadow"


def test_document_without_inline_regions(parser):
    trees = parser.parse("***\n")
    assert trees.inline_regions == ()
    highlights = HighlightEngine().evaluate(trees.block_root, trees.inline_root)
    assert category_at(highlights, 0) == "shadow"


def test_missing_grammar_refuses_to_parse():
    p = MarkdownTreeParser(inline_language="no_such_grammar")
    assert not p.ready
    with pytest.raises(GrammarUnavailableError):
        p.parse("# x\n")


def test_grammar_lookup_failure_is_recorded(monkeypatch):
    from marksight.adapters import treesitter_parser

    def missing(name):
        raise LookupError(f"Language not found: {name}")

    monkeypatch.setattr(treesitter_parser, "get_language", missing)
    p = MarkdownTreeParser()

    assert not p.ready
    assert set(p.errors) == {"markdown", "markdown_inline"}


def test_unexpected_grammar_error_propagates(monkeypatch):
    from marksight.adapters import treesitter_parser

    def broken(name):
        raise RuntimeError("boom")

    monkeypatch.setattr(treesitter_parser, "get_language", broken)
    with pytest.raises(RuntimeError):
        MarkdownTreeParser()
