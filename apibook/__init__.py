"""Compile a reflection tree of a library's public API into a Markdown book."""

__version__ = "0.1.0"
