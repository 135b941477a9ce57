"""
Changelog document rendering.
"""

from .renderer import insert_release, read_document, render, render_release  # noqa: F401
