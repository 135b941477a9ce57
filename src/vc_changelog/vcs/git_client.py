"""
Git client implementation for vc_changelog.

This module wraps the two read-only Git queries the changelog generator
needs: the last commit that touched the changelog file, and the log of
commits made after it. All subprocess calls go through :meth:`GitClient._run`
so that unit tests can mock them easily.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import List, Optional


logger = logging.getLogger(__name__)
# Attach a null handler to avoid logging errors when the root logger is not
# configured. Logs will propagate to the root when configured by the CLI.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())

# One line per commit: "<short hash> <author email> <subject>"
LOG_FORMAT = "%h %ae %s"


class GitError(Exception):
    """Raised when a Git command fails or Git cannot be executed."""

    pass


class GitClient:
    """Client for reading commit history from a Git repository."""

    def __init__(self, repo_root: Path) -> None:
        self.repo_root = repo_root

    # ------------------------------------------------------------------
    # Static helpers
    # ------------------------------------------------------------------
    @staticmethod
    def find_repo_root(start: Path) -> Optional[Path]:
        """Find the root of the Git repository starting from ``start``.

        Walk upwards until a ``.git`` entry is found or the filesystem
        root is reached.
        """
        current = start.resolve()
        while True:
            if (current / ".git").exists():
                return current
            if current.parent == current:
                return None
            current = current.parent

    # ------------------------------------------------------------------
    # Basic Git commands
    # ------------------------------------------------------------------
    def _run(self, args: List[str]) -> subprocess.CompletedProcess:
        """Run a Git command in the working directory.

        Raises
        ------
        GitError
            If Git is not installed or the command exits with a non-zero
            status.
        """
        full_cmd = ["git"] + args
        logger.debug("Executing Git command: %s", " ".join(full_cmd))
        try:
            result = subprocess.run(
                full_cmd,
                cwd=self.repo_root,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except FileNotFoundError as e:
            logger.error("Git executable not found: %s", e)
            raise GitError("git executable not found") from e

        if result.returncode != 0:
            logger.error(
                "Git command failed: %s\nSTDOUT: %s\nSTDERR: %s",
                " ".join(full_cmd),
                result.stdout,
                result.stderr,
            )
            raise GitError(result.stderr.strip() or result.stdout.strip())
        return result

    # ------------------------------------------------------------------
    # History queries
    # ------------------------------------------------------------------
    def find_last_changelog_commit(self, changelog_file: str) -> str:
        """Return the short hash of the newest commit touching ``changelog_file``.

        Parameters
        ----------
        changelog_file : str
            Path of the changelog relative to the working directory.

        Returns
        -------
        str
            The short commit hash, or an empty string if the file has never
            been committed.
        """
        result = self._run(["log", "-n", "1", "--format=%h", "--", changelog_file])
        return result.stdout.strip()

    def list_commits(self, since: str = "") -> str:
        """Return the raw commit log, newest first.

        Each line has the form ``<short hash> <author email> <subject>``.
        When ``since`` is given only commits made after it are listed; the
        ``since`` commit itself is excluded.
        """
        args = ["log", f"--format={LOG_FORMAT}"]
        if since:
            args.append(f"{since}..HEAD")
        result = self._run(args)
        return result.stdout
