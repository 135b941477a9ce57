"""
Top-level package for vc_changelog.

This package exposes the main CLI entry point via the
``vc_changelog.cli`` module and the changelog pipeline via
``vc_changelog.release``.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
