"""
Grouping logic for commits.

This package parses Git log lines into :class:`Commit` records and
classifies them into changelog sections. See
:mod:`vc_changelog.grouping.subject_parser` and
:mod:`vc_changelog.grouping.change_classifier` for details.
"""

from .change_classifier import DEFAULT_RULES, ClassificationRule, classify, make_rule  # noqa: F401
from .group_model import ChangeSection, Commit  # noqa: F401
from .subject_parser import parse_line, parse_log, parse_subject  # noqa: F401
