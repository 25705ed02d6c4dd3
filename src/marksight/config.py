"""Configuration loader for marksight.toml."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomllib

from .core.errors import ConfigError
from .core.outline import HEADINGS_GROUP, HEADING_MARKER_TYPES
from .core.rules import feature_names


@dataclass
class HighlightConfig:
    """Features enabled when the engine is built."""
    features: list[str] = field(default_factory=feature_names)


@dataclass
class OutlineConfig:
    """Outline group label and heading marker types."""
    group: str = HEADINGS_GROUP
    heading_types: list[str] = field(default_factory=lambda: sorted(HEADING_MARKER_TYPES))


@dataclass
class ParserConfig:
    """Grammar names looked up in tree-sitter-language-pack."""
    block_language: str = "markdown"
    inline_language: str = "markdown_inline"


@dataclass
class MarksightConfig:
    """Complete marksight configuration."""
    highlight: HighlightConfig
    outline: OutlineConfig
    parser: ParserConfig
    path: Path | None = None


def _string_list(value: Any, key: str) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"{key} must be a list of strings, got {value!r}")
    return list(value)


def load_config(config_path: Path | None = None) -> MarksightConfig:
    """
    Load configuration from marksight.toml.

    Search order:
    1. config_path (if provided)
    2. cwd/marksight.toml

    Missing files and missing keys fall back to defaults.
    """
    toml_data: dict[str, Any] = {}
    found: Path | None = None

    search_paths = []
    if config_path:
        search_paths.append(Path(config_path))
    search_paths.append(Path.cwd() / "marksight.toml")

    for path in search_paths:
        if path.exists():
            with open(path, "rb") as f:
                toml_data = tomllib.load(f)
            found = path
            break

    highlight_data = toml_data.get("highlight", {})
    highlight_config = HighlightConfig()
    if "features" in highlight_data:
        highlight_config.features = _string_list(highlight_data["features"], "highlight.features")

    outline_data = toml_data.get("outline", {})
    outline_config = OutlineConfig(group=str(outline_data.get("group", HEADINGS_GROUP)))
    if "heading_types" in outline_data:
        outline_config.heading_types = _string_list(outline_data["heading_types"], "outline.heading_types")

    parser_data = toml_data.get("parser", {})
    parser_config = ParserConfig(
        block_language=parser_data.get("block_language", "markdown"),
        inline_language=parser_data.get("inline_language", "markdown_inline"),
    )

    return MarksightConfig(
        highlight=highlight_config,
        outline=outline_config,
        parser=parser_config,
        path=found,
    )
