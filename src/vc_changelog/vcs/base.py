"""
Protocol for commit sources.

Anything that can answer the two history queries below can feed the
changelog pipeline, which lets tests substitute a fake client for
:class:`~vc_changelog.vcs.git_client.GitClient`.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class CommitSource(Protocol):
    """Read-only access to a repository's commit history."""

    def find_last_changelog_commit(self, changelog_file: str) -> str:
        """Hash of the newest commit touching ``changelog_file``, or ``""``."""
        ...

    def list_commits(self, since: str = "") -> str:
        """Raw ``<hash> <email> <subject>`` lines after ``since``, newest first."""
        ...
