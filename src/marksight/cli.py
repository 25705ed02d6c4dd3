"""CLI for marksight - Markdown highlighting and heading outlines."""

import argparse
import json
import logging
import platform
import sys
from pathlib import Path
from typing import Any

from . import __version__
from .adapters.yaml_tree import dump_tree, dump_trees, load_trees
from .config import MarksightConfig, load_config
from .core.engine import HighlightEngine
from .core.errors import GrammarUnavailableError, MarksightError
from .core.model import DocumentTrees, Highlight, Outline
from .core.outline import build_outline
from .core.rules import MARKDOWN_FEATURES


def version_string() -> str:
    return (
        f"marksight {__version__}\n"
        f"python {platform.python_version()}\n"
        f"platform {platform.platform()}"
    )


def _read_source(path: str) -> bytes:
    if path == "-":
        return sys.stdin.buffer.read()
    return Path(path).read_bytes()


def _load_document(args: argparse.Namespace, config: MarksightConfig) -> DocumentTrees:
    """Trees from a YAML snapshot, or from the tree-sitter grammars."""
    if getattr(args, "snapshot", False):
        block, inline, source = load_trees(_read_source(args.file).decode("utf-8"))
        return DocumentTrees(block_root=block, inline_root=inline, source=source.encode("utf-8"))

    from .runtime import build_runtime

    rt = build_runtime(config=config)
    return rt.parse(_read_source(args.file))


def _snippet(source: bytes, h: Highlight, width: int = 40) -> str:
    text = source[h.span.start:h.span.end].decode("utf-8", errors="replace")
    text = text.replace("\n", "\\n")
    return text if len(text) <= width else text[: width - 3] + "..."


def cmd_highlight(args: argparse.Namespace, config: MarksightConfig) -> int:
    """Print category runs for a document."""
    trees = _load_document(args, config)
    features = args.feature or config.highlight.features
    engine = HighlightEngine(enabled=features)
    highlights = engine.evaluate(trees.block_root, trees.inline_root)

    if args.json:
        print(json.dumps([
            {
                "start": h.span.start,
                "end": h.span.end,
                "category": h.category,
                "feature": h.feature,
            }
            for h in highlights
        ], indent=2))
        return 0

    for h in highlights:
        print(f"{h.span.start}-{h.span.end}\t{h.category}\t{h.feature}\t{_snippet(trees.source, h)}")
    return 0


def cmd_outline(args: argparse.Namespace, config: MarksightConfig) -> int:
    """Print the heading outline for a document."""
    trees = _load_document(args, config)
    outline: Outline = build_outline(
        trees.block_root,
        heading_types=config.outline.heading_types,
        group=config.outline.group,
    )

    if args.json:
        print(json.dumps({
            "group": outline.group,
            "entries": [
                {"name": e.name, "start": e.span.start, "end": e.span.end, "depth": e.depth}
                for e in outline.entries
            ],
        }, indent=2))
        return 0

    print(outline.group)
    for e in outline.entries:
        print(f"{'  ' * e.depth}{e.name}\t{e.span.start}-{e.span.end}")
    return 0


def cmd_features(args: argparse.Namespace, config: MarksightConfig) -> int:
    """List highlight features."""
    enabled = set(config.highlight.features)
    for feature in MARKDOWN_FEATURES:
        flags = []
        if feature.name in enabled:
            flags.append("enabled")
        if feature.override:
            flags.append("override")
        print(f"{feature.name}\t{len(feature.rules)} rule(s)\t{','.join(flags)}")
    return 0


def render_dump(trees: DocumentTrees, inline: bool = False, both: bool = False) -> str:
    """
    YAML for ``dump``. With ``both`` the output is a full snapshot that
    ``highlight --snapshot`` and ``outline --snapshot`` accept.
    """
    if both:
        return dump_trees(trees.block_root, trees.inline_root, trees.source)
    return dump_tree(trees.inline_root if inline else trees.block_root)


def cmd_dump(args: argparse.Namespace, config: MarksightConfig) -> int:
    """Dump parse trees as a YAML snapshot."""
    from .runtime import build_runtime

    rt = build_runtime(config=config)
    trees = rt.parse(_read_source(args.file))
    sys.stdout.write(render_dump(trees, inline=args.inline, both=args.both))
    return 0


def cmd_serve(args: argparse.Namespace, config: MarksightConfig) -> int:
    """Start local JSON API server."""
    try:
        import uvicorn

        from .api.app import create_app, generate_token
    except ImportError as e:
        print(
            "Error: API dependencies not installed. "
            "Install with: pip install marksight[api]",
            file=sys.stderr
        )
        print(f"Details: {e}", file=sys.stderr)
        return 1

    from .runtime import build_runtime

    rt = build_runtime(config=config)

    token_arg = getattr(args, 'token', 'auto')
    token: str | None
    if token_arg == 'auto':
        token = generate_token()
        print(f"Generated bearer token: {token}")
    elif token_arg == 'none':
        print("Warning: Running without authentication. Only use in trusted environments.")
        token = None
    else:
        token = token_arg

    app = create_app(rt, token=token, enable_cors=args.cors)

    print(f"Starting server on http://{args.host}:{args.port}")
    uvicorn.run(app, host=args.host, port=args.port, log_level="info")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="marksight", description="Markdown highlighting and outlines"
    )
    parser.add_argument(
        "--version", action="version", version=version_string()
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: search cwd/marksight.toml)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Debug logging to stderr"
    )

    subparsers = parser.add_subparsers(dest="cmd", required=True)

    # highlight command
    parser_highlight = subparsers.add_parser("highlight", help="Print category runs")
    parser_highlight.add_argument("file", help="Markdown file (- for stdin)")
    parser_highlight.add_argument(
        "--feature",
        action="append",
        default=[],
        help="Enable only this feature (repeatable)",
    )
    parser_highlight.add_argument(
        "--snapshot", action="store_true",
        help="FILE is a YAML snapshot with source/block/inline keys"
    )
    parser_highlight.add_argument(
        "--json", action="store_true", help="Machine-readable output"
    )

    # outline command
    parser_outline = subparsers.add_parser("outline", help="Print heading outline")
    parser_outline.add_argument("file", help="Markdown file (- for stdin)")
    parser_outline.add_argument(
        "--snapshot", action="store_true",
        help="FILE is a YAML snapshot with source/block/inline keys"
    )
    parser_outline.add_argument(
        "--json", action="store_true", help="Machine-readable output"
    )

    # features command
    subparsers.add_parser("features", help="List highlight features")

    # dump command
    parser_dump = subparsers.add_parser("dump", help="Dump a parse tree as YAML")
    parser_dump.add_argument("file", help="Markdown file (- for stdin)")
    parser_dump.add_argument(
        "--inline", action="store_true", help="Dump the inline tree instead of the block tree"
    )
    parser_dump.add_argument(
        "--both", action="store_true",
        help="Dump source, block and inline trees as one snapshot"
    )

    # serve command
    parser_serve = subparsers.add_parser("serve", help="Start local JSON API server")
    parser_serve.add_argument(
        "--host", default="127.0.0.1",
        help="Host to bind to (default: 127.0.0.1)"
    )
    parser_serve.add_argument(
        "--port", type=int, default=8766,
        help="Port to bind to (default: 8766)"
    )
    parser_serve.add_argument(
        "--token", default="auto",
        help="Bearer token (auto|<string>|none, default: auto)"
    )
    parser_serve.add_argument(
        "--cors", action="store_true",
        help="Enable CORS (default: false)"
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    handlers: dict[str, Any] = {
        "highlight": cmd_highlight,
        "outline": cmd_outline,
        "features": cmd_features,
        "dump": cmd_dump,
        "serve": cmd_serve,
    }
    handler = handlers.get(args.cmd)
    if handler is None:
        print(f"Unknown command: {args.cmd}", file=sys.stderr)
        return 1

    try:
        config = load_config(config_path=args.config)
        return handler(args, config)
    except GrammarUnavailableError as e:
        print(f"Error: feature unavailable: {e}", file=sys.stderr)
        return 1
    except (MarksightError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
