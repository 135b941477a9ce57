"""
Configuration loader for vc_changelog.

The tool works without any configuration file. A JSON file named
``.changelog.json`` in the working directory (or any file passed
explicitly) may override the changelog and version file names, the top
heading of the changelog, and the list of classification rules::

    {
        "changelog_file": "CHANGELOG.org",
        "version_file": "VERSION",
        "top_heading": "Changelog",
        "rules": [
            {"heading": "BREAKING CHANGES", "rank": 0, "breaking": true},
            {"heading": "Features", "rank": 1, "types": ["feat"]},
            {"heading": "Fixes", "rank": 2, "types": ["fix", "perf"]}
        ]
    }

If the file is malformed or has fields of the wrong type, a
:class:`ConfigError` is raised.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from vc_changelog.grouping.change_classifier import DEFAULT_RULES, ClassificationRule, make_rule


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


CONFIG_FILE_NAME = ".changelog.json"
DEFAULT_CHANGELOG_FILE = "Changelog.org"
DEFAULT_VERSION_FILE = "VERSION"
DEFAULT_TOP_HEADING = "Changelog"

_STRING_KEYS = ("changelog_file", "version_file", "top_heading")


class ConfigError(Exception):
    """Raised when the changelog configuration is invalid."""

    pass


@dataclass(frozen=True)
class ChangelogConfig:
    """Settings for one changelog run.

    Attributes
    ----------
    changelog_file : str
        Changelog path, relative to the working directory.
    version_file : str
        Version file path, relative to the working directory.
    top_heading : str
        Text of the top-level heading all releases are nested under.
    rules : List[ClassificationRule]
        Ordered classification rules; sections are written in this order.
    """

    changelog_file: str = DEFAULT_CHANGELOG_FILE
    version_file: str = DEFAULT_VERSION_FILE
    top_heading: str = DEFAULT_TOP_HEADING
    rules: List[ClassificationRule] = field(default_factory=lambda: list(DEFAULT_RULES))


def _parse_string_list(value: Any, key: str, index: int) -> List[str]:
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"rules[{index}].{key} must be a list of strings")
    return value


def parse_rule(data: Any, index: int = 0) -> ClassificationRule:
    """Build a :class:`ClassificationRule` from its JSON representation."""
    if not isinstance(data, dict):
        raise ConfigError(f"rules[{index}] must be an object")

    missing = [key for key in ("heading", "rank") if key not in data]
    if missing:
        raise ConfigError(f"rules[{index}] missing required keys: {', '.join(missing)}")

    heading = data["heading"]
    rank = data["rank"]
    if not isinstance(heading, str) or not heading:
        raise ConfigError(f"rules[{index}].heading must be a non-empty string")
    # bool is a subclass of int
    if not isinstance(rank, int) or isinstance(rank, bool) or rank < 0:
        raise ConfigError(f"rules[{index}].rank must be a non-negative integer")

    types = data.get("types")
    if types is not None:
        types = _parse_string_list(types, "types", index)
    exclude_types = data.get("exclude_types")
    if exclude_types is not None:
        exclude_types = _parse_string_list(exclude_types, "exclude_types", index)
    breaking = data.get("breaking")
    if breaking is not None and not isinstance(breaking, bool):
        raise ConfigError(f"rules[{index}].breaking must be a boolean")

    unknown = set(data) - {"heading", "rank", "types", "exclude_types", "breaking"}
    if unknown:
        logger.warning("Ignoring unknown keys in rules[%d]: %s", index, ", ".join(sorted(unknown)))

    return make_rule(heading, rank, types=types, exclude_types=exclude_types, breaking=breaking)


def _read_config_file(config_path: Path) -> Dict[str, Any]:
    try:
        content = config_path.read_text(encoding="utf-8")
        data = json.loads(content)
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Failed to read or parse configuration file: %s", exc)
        raise ConfigError(f"Invalid configuration file {config_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"{config_path.name} must contain a JSON object")
    return data


def load_config(
    repo_root: Path,
    config_path: Optional[Path] = None,
    overrides: Optional[Mapping[str, Optional[str]]] = None,
) -> ChangelogConfig:
    """Load the changelog configuration for ``repo_root``.

    Args:
        repo_root: Working directory; ``.changelog.json`` is looked up here
            when ``config_path`` is not given.
        config_path: Explicit configuration file. It must exist.
        overrides: Values for ``changelog_file``, ``version_file`` or
            ``top_heading`` that take precedence over the file. ``None``
            values are ignored.

    Returns:
        The validated :class:`ChangelogConfig`.

    Raises:
        ConfigError: If the configuration file is missing (when given
            explicitly), malformed, or invalid.
    """
    data: Dict[str, Any] = {}
    if config_path is not None:
        if not config_path.exists():
            raise ConfigError(f"Configuration file not found: {config_path}")
        data = _read_config_file(config_path)
    else:
        default_path = repo_root / CONFIG_FILE_NAME
        if default_path.exists():
            config_path = default_path
            data = _read_config_file(default_path)

    config = ChangelogConfig()

    for key in _STRING_KEYS:
        if key in data:
            if not isinstance(data[key], str) or not data[key]:
                raise ConfigError(f"'{key}' must be a non-empty string")
            config = replace(config, **{key: data[key]})

    if "rules" in data:
        rules = data["rules"]
        if not isinstance(rules, list) or not rules:
            raise ConfigError("'rules' must be a non-empty list")
        config = replace(config, rules=[parse_rule(rule, i) for i, rule in enumerate(rules)])

    for key, value in (overrides or {}).items():
        if key not in _STRING_KEYS:
            raise ConfigError(f"Unknown configuration override: {key}")
        if value is not None:
            if not value:
                raise ConfigError(f"'{key}' must be a non-empty string")
            config = replace(config, **{key: value})

    if config_path is not None:
        logger.debug("Loaded changelog configuration from: %s", config_path)
    return config
