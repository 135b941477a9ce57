"""
Data models for commit grouping.

A :class:`Commit` is one parsed line of the Git log. A :class:`ChangeSection`
is a rendered group of commits that matched one classification rule.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Commit:
    """Representation of a single parsed commit.

    Attributes
    ----------
    hash : str
        Short commit hash.
    email : str
        Author e-mail address.
    subject : str
        First line of the commit message, verbatim.
    type : Optional[str]
        Conventional Commit type (feat, fix, ...), ``None`` when the subject
        has no conventional prefix.
    scope : Optional[str]
        Scope given in parentheses, if any.
    breaking_changes : bool
        True when the subject carries the ``!`` marker.
    message : str
        Subject without its conventional prefix, or the full subject when
        no prefix matched.
    """

    hash: str
    email: str
    subject: str
    type: Optional[str] = None
    scope: Optional[str] = None
    breaking_changes: bool = False
    message: str = ""


@dataclass(frozen=True)
class ChangeSection:
    """One changelog group: heading line plus formatted entries."""

    rank: int
    heading: str
    text: str
    entry_count: int = 0
