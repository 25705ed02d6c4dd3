"""Tree-driven highlighting and heading outlines for Markdown."""

__version__ = "0.1.0"
