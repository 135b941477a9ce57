"""
Parsing of Git log lines into :class:`Commit` records.

A log line has the form ``<hash> <email> <subject>``. The subject is then
matched against the Conventional Commit grammars in order:

1. ``type!: message``
2. ``type(scope)!: message``
3. anything else, kept verbatim as the message.

The grammars are tried one after another rather than through a single
combined expression, so the simpler form always wins when both could apply.
"""

from __future__ import annotations

import logging
import re
from typing import List, NamedTuple, Optional

from vc_changelog.grouping.group_model import Commit


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


_TYPE_ONLY = re.compile(r"^(?P<type>[a-z]+)(?P<bang>!?):\s*(?P<message>.*)$")
# The marker is accepted after the scope (standard form) or before it.
_TYPE_SCOPE = re.compile(
    r"^(?P<type>[a-z]+)(?P<pre>!?)\((?P<scope>[^()]+)\)(?P<bang>!?):\s*(?P<message>.*)$"
)


class ParsedSubject(NamedTuple):
    """Conventional Commit fields extracted from a subject line."""

    type: Optional[str]
    scope: Optional[str]
    breaking_changes: bool
    message: str


def parse_subject(subject: str) -> ParsedSubject:
    """Decompose a commit subject into its Conventional Commit fields.

    The message part is taken as-is and never parsed again, so a subject
    like ``feat: fix!: thing`` yields the message ``fix!: thing``.
    """
    match = _TYPE_ONLY.match(subject)
    if match:
        return ParsedSubject(
            type=match.group("type"),
            scope=None,
            breaking_changes=match.group("bang") == "!",
            message=match.group("message"),
        )

    match = _TYPE_SCOPE.match(subject)
    if match:
        return ParsedSubject(
            type=match.group("type"),
            scope=match.group("scope"),
            breaking_changes="!" in (match.group("pre") + match.group("bang")),
            message=match.group("message"),
        )

    return ParsedSubject(type=None, scope=None, breaking_changes=False, message=subject)


def parse_line(line: str) -> Optional[Commit]:
    """Parse one ``<hash> <email> <subject>`` log line.

    Returns ``None`` when the line has fewer than three whitespace separated
    tokens.
    """
    parts = line.strip().split(None, 2)
    if len(parts) < 3:
        return None
    commit_hash, email, subject = parts
    parsed = parse_subject(subject)
    return Commit(
        hash=commit_hash,
        email=email,
        subject=subject,
        type=parsed.type,
        scope=parsed.scope,
        breaking_changes=parsed.breaking_changes,
        message=parsed.message,
    )


def parse_log(text: str) -> List[Commit]:
    """Parse a raw Git log, dropping blank and malformed lines."""
    commits: List[Commit] = []
    for line in text.splitlines():
        if not line.strip():
            continue
        commit = parse_line(line)
        if commit is None:
            logger.debug("Skipping malformed log line: %r", line)
            continue
        commits.append(commit)
    return commits
