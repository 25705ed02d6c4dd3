"""Tests for configuration loading."""

import os
import tempfile
from pathlib import Path

import pytest

from marksight.config import load_config
from marksight.core.errors import ConfigError


def test_load_config_defaults():
    """Test loading config with defaults when no file exists."""
    with tempfile.TemporaryDirectory() as tmpdir:
        config = load_config(config_path=Path(tmpdir) / "missing.toml")

    assert config.highlight.features == ["paragraph", "paragraph-inline", "delimiter"]
    assert config.outline.group == "Headings"
    assert config.outline.heading_types == ["atx_heading"]
    assert config.parser.block_language == "markdown"
    assert config.parser.inline_language == "markdown_inline"


def test_load_config_from_file():
    """Test loading config from a file."""
    with tempfile.TemporaryDirectory() as tmpdir:
        config_path = Path(tmpdir) / "marksight.toml"
        config_path.write_text("""
[highlight]
features = ["paragraph", "delimiter"]

[outline]
group = "Sections"
heading_types = ["atx_heading", "setext_heading"]

[parser]
block_language = "md_block"
""")

        config = load_config(config_path=config_path)

        assert config.path == config_path
        assert config.highlight.features == ["paragraph", "delimiter"]
        assert config.outline.group == "Sections"
        assert config.outline.heading_types == ["atx_heading", "setext_heading"]
        assert config.parser.block_language == "md_block"
        assert config.parser.inline_language == "markdown_inline"


def test_load_config_search_cwd():
    """Test config search in current working directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        orig_cwd = os.getcwd()
        try:
            os.chdir(tmpdir)
            Path(tmpdir, "marksight.toml").write_text("""
[highlight]
features = []
""")

            config = load_config()
            assert config.highlight.features == []
        finally:
            os.chdir(orig_cwd)


@pytest.mark.parametrize("section, body", [
    ("highlight", 'features = "paragraph"'),
    ("outline", 'heading_types = "atx_heading"'),
    ("highlight", "features = [1, 2]"),
])
def test_load_config_rejects_non_list(tmp_path, section, body):
    path = tmp_path / "marksight.toml"
    path.write_text(f"[{section}]\n{body}\n")

    with pytest.raises(ConfigError, match="must be a list of strings"):
        load_config(config_path=path)
