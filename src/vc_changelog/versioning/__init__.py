"""
Semantic versioning helpers: bump computation and the version file.
"""

from .semver import SemanticVersion, next_version  # noqa: F401
from .store import read_version, write_text_atomic, write_version  # noqa: F401
