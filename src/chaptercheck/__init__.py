"""Conformance checker for Markdown book chapters."""

__version__ = "0.1.0"
