"""
Classification of parsed commits into changelog sections.

Each :class:`ClassificationRule` carries a heading, a severity rank and a
predicate. Rules are evaluated independently, so a commit may appear in
more than one section: a breaking ``feat`` commit is listed both under
"BREAKING CHANGES" and under "New features".
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Sequence

from vc_changelog.grouping.group_model import ChangeSection, Commit


Predicate = Callable[[Commit], bool]


@dataclass(frozen=True)
class ClassificationRule:
    """A named changelog section with a severity rank.

    Attributes
    ----------
    heading : str
        Section heading written to the changelog.
    rank : int
        Severity; 0 bumps the major version, 1 the minor, 2 the patch.
    predicate : Callable[[Commit], bool]
        Selects the commits listed in this section.
    """

    heading: str
    rank: int
    predicate: Predicate


def make_rule(
    heading: str,
    rank: int,
    types: Optional[Iterable[str]] = None,
    exclude_types: Optional[Iterable[str]] = None,
    breaking: Optional[bool] = None,
) -> ClassificationRule:
    """Build a rule from declarative criteria.

    All given criteria must hold for a commit to match. ``types`` restricts
    to the listed commit types, ``exclude_types`` rejects them (commits
    without a type are never excluded), and ``breaking`` pins the
    breaking-change flag. A rule with no criteria matches every commit.
    """
    wanted = frozenset(types) if types is not None else None
    rejected = frozenset(exclude_types or ())

    def predicate(commit: Commit) -> bool:
        if wanted is not None and commit.type not in wanted:
            return False
        if commit.type is not None and commit.type in rejected:
            return False
        if breaking is not None and commit.breaking_changes != breaking:
            return False
        return True

    return ClassificationRule(heading=heading, rank=rank, predicate=predicate)


DEFAULT_RULES: List[ClassificationRule] = [
    make_rule("BREAKING CHANGES", 0, breaking=True),
    make_rule("New features", 1, types=["feat"]),
    make_rule("Bugfixes", 2, types=["fix"]),
    make_rule("Other changes", 2, exclude_types=["feat", "fix"], breaking=False),
]


def format_entry(commit: Commit) -> str:
    """Format a commit as a changelog list item."""
    scope = f"*{commit.scope}* : " if commit.scope else ""
    return f" - {scope}{commit.message} ({commit.hash})\n"


def classify(rules: Sequence[ClassificationRule], commits: Sequence[Commit]) -> List[ChangeSection]:
    """Group commits into sections, one per rule with at least one match.

    Sections come back in rule order; entries keep the order of
    ``commits`` (newest first as listed by Git).
    """
    sections: List[ChangeSection] = []
    for rule in rules:
        matched = [c for c in commits if rule.predicate(c)]
        if not matched:
            continue
        entries = "".join(format_entry(c) for c in matched)
        sections.append(
            ChangeSection(
                rank=rule.rank,
                heading=rule.heading,
                text=f"*** {rule.heading}\n{entries}",
                entry_count=len(matched),
            )
        )
    return sections
