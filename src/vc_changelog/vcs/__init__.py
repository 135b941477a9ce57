"""
Version control system (VCS) integrations.

This package contains the commit source protocol and the Git client used
to read commit history. Only read-only queries are performed.
"""

from .base import CommitSource  # noqa: F401
from .git_client import GitClient, GitError  # noqa: F401
