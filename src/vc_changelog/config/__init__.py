"""
Configuration loading for vc_changelog.

Provides the :class:`ChangelogConfig` structure and a loader for the
optional ``.changelog.json`` file. See :mod:`vc_changelog.config.loader`
for implementation details.
"""

from .loader import ChangelogConfig, ConfigError, load_config  # noqa: F401
