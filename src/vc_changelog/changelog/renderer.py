"""
Rendering of release sections into an Org-mode changelog.

The changelog keeps a single top-level heading (``* Changelog`` by
default). Every run inserts a new second-level heading directly beneath
it, so the newest release is always listed first::

    * Changelog
    ** [2024-05-01] v1.3.0

    *** New features
     - *cli* : add --dry-run (a1b2c3d)

Insertion is a pure splice: nothing that was already in the document is
modified or removed. A document using CRLF line endings keeps them, and
the inserted lines follow suit.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Sequence

from vc_changelog.grouping.group_model import ChangeSection
from vc_changelog.versioning.semver import SemanticVersion


def _heading_pattern(top_heading: str) -> "re.Pattern[str]":
    return re.compile(rf"^\*[ \t]+{re.escape(top_heading)}[ \t]*\r?$", re.MULTILINE)


def render_release(version: SemanticVersion, date_iso: str, sections: Sequence[ChangeSection]) -> str:
    """Render the release heading and its sections, in the order given."""
    body = "".join(section.text for section in sections)
    return f"** [{date_iso}] v{version}\n\n{body}\n"


def _line_ending(document: str) -> str:
    return "\r\n" if "\r\n" in document else "\n"


def insert_release(document: str, top_heading: str, release_text: str) -> str:
    """Insert ``release_text`` right below the top heading of ``document``.

    When the heading is missing it is appended to the end of the document
    together with the release. The inserted text uses the line ending of
    ``document``.
    """
    newline = _line_ending(document)
    if newline != "\n":
        release_text = release_text.replace("\n", newline)

    match = _heading_pattern(top_heading).search(document)
    if match is None:
        separator = "" if not document or document.endswith("\n") else newline
        return f"{document}{separator}* {top_heading}{newline}{release_text}"

    end = match.end()
    if end == len(document):
        return f"{document}{newline}{release_text}"
    # Skip the newline that terminates the heading line.
    end += 1
    return document[:end] + release_text + document[end:]


def render(
    top_heading: str,
    version: SemanticVersion,
    date_iso: str,
    sections: Sequence[ChangeSection],
    document: str = "",
) -> str:
    """Return ``document`` with a new release section for ``version`` inserted."""
    return insert_release(document, top_heading, render_release(version, date_iso, sections))


def read_document(path: Path) -> str:
    """Return the current changelog text, or an empty string if there is none."""
    if not path.exists():
        return ""
    with open(path, encoding="utf-8", newline="") as handle:
        return handle.read()
