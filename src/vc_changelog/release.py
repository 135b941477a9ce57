"""
The changelog update pipeline.

:func:`update_changelog` runs one release: it reads the current version,
lists the commits made since the changelog was last committed, classifies
them, and writes the new changelog section and version number. Nothing is
written when no commit matches a rule.
"""

from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from vc_changelog.changelog.renderer import read_document, render, render_release
from vc_changelog.config.loader import ChangelogConfig
from vc_changelog.grouping.change_classifier import classify
from vc_changelog.grouping.group_model import ChangeSection
from vc_changelog.grouping.subject_parser import parse_log
from vc_changelog.vcs.base import CommitSource
from vc_changelog.vcs.git_client import GitClient
from vc_changelog.versioning.semver import SemanticVersion, next_version
from vc_changelog.versioning.store import read_version, write_text_atomic, write_version


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


STATUS_UPDATED = "updated"
STATUS_NO_CHANGES = "no-changes"
STATUS_DRY_RUN = "dry-run"


class ChangelogWriteError(Exception):
    """Raised when the changelog or the version file cannot be written."""

    pass


@dataclass
class ChangelogResult:
    """Outcome of one :func:`update_changelog` run."""

    status: str
    previous_version: SemanticVersion
    version: SemanticVersion
    commit_count: int = 0
    sections: List[ChangeSection] = field(default_factory=list)
    release_text: str = ""


def update_changelog(
    repo_root: Path,
    config: Optional[ChangelogConfig] = None,
    client: Optional[CommitSource] = None,
    today: Optional[datetime.date] = None,
    dry_run: bool = False,
) -> ChangelogResult:
    """Generate a changelog section for the commits since the last update.

    Parameters
    ----------
    repo_root : Path
        Working directory holding the changelog and version files.
    config : ChangelogConfig, optional
        File names, top heading and rules; defaults apply when omitted.
    client : CommitSource, optional
        History source; a :class:`GitClient` on ``repo_root`` by default.
    today : datetime.date, optional
        Release date written to the heading; the current date by default.
    dry_run : bool
        Compute and render the release without writing any file.

    Raises
    ------
    GitError
        If Git fails. No file has been touched at that point.
    ChangelogWriteError
        If writing either file fails. When the version file cannot be
        written, the changelog is restored to its previous contents.
    """
    config = config or ChangelogConfig()
    client = client if client is not None else GitClient(repo_root)
    changelog_path = repo_root / config.changelog_file
    version_path = repo_root / config.version_file

    current = read_version(version_path)
    logger.debug("Current version: %s", current)

    since = client.find_last_changelog_commit(config.changelog_file)
    if since:
        logger.debug("Listing commits after %s", since)
    else:
        logger.debug("%s was never committed; listing the full history", config.changelog_file)
    commits = parse_log(client.list_commits(since))
    logger.debug("Parsed %d commit(s)", len(commits))

    sections = classify(config.rules, commits)
    if not sections:
        logger.info("No changes found since %s", since or "the first commit")
        return ChangelogResult(
            status=STATUS_NO_CHANGES,
            previous_version=current,
            version=current,
            commit_count=len(commits),
        )

    version = next_version(current, [section.rank for section in sections])
    date_iso = (today or datetime.date.today()).isoformat()
    release_text = render_release(version, date_iso, sections)
    result = ChangelogResult(
        status=STATUS_DRY_RUN if dry_run else STATUS_UPDATED,
        previous_version=current,
        version=version,
        commit_count=len(commits),
        sections=sections,
        release_text=release_text,
    )
    if dry_run:
        return result

    existed = changelog_path.exists()
    try:
        previous_document = read_document(changelog_path)
    except OSError as exc:
        raise ChangelogWriteError(f"Cannot read {changelog_path}: {exc}") from exc
    document = render(config.top_heading, version, date_iso, sections, previous_document)

    try:
        write_text_atomic(changelog_path, document)
    except OSError as exc:
        raise ChangelogWriteError(f"Cannot write {changelog_path}: {exc}") from exc

    try:
        write_version(version_path, version)
    except OSError as exc:
        logger.error("Writing %s failed; restoring %s", version_path, changelog_path)
        try:
            if existed:
                write_text_atomic(changelog_path, previous_document)
            else:
                changelog_path.unlink()
        except OSError as restore_exc:
            logger.error("Could not restore %s: %s", changelog_path, restore_exc)
            raise ChangelogWriteError(
                f"Cannot write {version_path}: {exc}; {changelog_path} already lists "
                f"v{version} and must be fixed by hand"
            ) from exc
        raise ChangelogWriteError(f"Cannot write {version_path}: {exc}") from exc

    logger.info("Released v%s with %d section(s)", version, len(sections))
    return result
