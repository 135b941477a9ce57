import shutil
import subprocess
from pathlib import Path

import pytest


class FakeCommitSource:
    """In-memory commit source recording the queries it receives."""

    def __init__(self, log: str = "", last_changelog_commit: str = ""):
        self.log = log
        self.last_changelog_commit = last_changelog_commit
        self.calls = []

    def find_last_changelog_commit(self, changelog_file: str) -> str:
        self.calls.append(("find_last_changelog_commit", changelog_file))
        return self.last_changelog_commit

    def list_commits(self, since: str = "") -> str:
        self.calls.append(("list_commits", since))
        return self.log


@pytest.fixture
def fake_source():
    """Factory for :class:`FakeCommitSource` instances."""
    return FakeCommitSource


def _git(repo: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", "-c", "user.name=Dev", "-c", "user.email=dev@example.com", "-c", "commit.gpgsign=false", *args],
        cwd=repo,
        check=True,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
    )
    return result.stdout


@pytest.fixture
def git_repo(tmp_path):
    """A fresh Git repository with a ``commit(subject, *files)`` helper."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    _git(tmp_path, "init", "-q")

    class Repo:
        path = tmp_path

        @staticmethod
        def git(*args: str) -> str:
            return _git(tmp_path, *args)

        @staticmethod
        def commit(subject: str, *files: str) -> None:
            for name in files:
                _git(tmp_path, "add", "--", name)
            _git(tmp_path, "commit", "-q", "--allow-empty", "-m", subject)

    return Repo
