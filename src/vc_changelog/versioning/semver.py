"""
Semantic version arithmetic.

The severity of a release is the lowest rank among the classification
rules that matched at least one commit. That rank is the index of the
version component to increment; earlier components are kept and later
ones are reset to zero.
"""

from __future__ import annotations

from typing import Iterable, NamedTuple


class SemanticVersion(NamedTuple):
    """A ``major.minor.patch`` version triple."""

    major: int = 0
    minor: int = 0
    patch: int = 0

    def __str__(self) -> str:
        return ".".join(str(part) for part in self)


def next_version(current: SemanticVersion, ranks: Iterable[int]) -> SemanticVersion:
    """Compute the version following ``current``.

    Parameters
    ----------
    current : SemanticVersion
        The version recorded before this run.
    ranks : Iterable[int]
        Ranks of all rules that matched at least one commit.

    Returns
    -------
    SemanticVersion
        The bumped version. A severity beyond the patch component leaves the
        version unchanged.

    Raises
    ------
    ValueError
        If ``ranks`` is empty; callers must not compute a new version when
        nothing changed.
    """
    ranks = list(ranks)
    if not ranks:
        raise ValueError("cannot compute the next version without any changes")
    severity = min(ranks)

    parts = []
    for index, value in enumerate(current):
        if index < severity:
            parts.append(value)
        elif index == severity:
            parts.append(value + 1)
        else:
            parts.append(0)
    return SemanticVersion(*parts)
