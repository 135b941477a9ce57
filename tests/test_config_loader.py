import json
import tempfile
import unittest
from pathlib import Path

from vc_changelog.config.loader import (
    CONFIG_FILE_NAME,
    ChangelogConfig,
    ConfigError,
    load_config,
    parse_rule,
)
from vc_changelog.grouping.change_classifier import DEFAULT_RULES
from vc_changelog.grouping.subject_parser import parse_line


class TestConfigLoader(unittest.TestCase):
    """Tests for the configuration loader."""

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def write_config(self, data, name=CONFIG_FILE_NAME) -> Path:
        path = self.root / name
        path.write_text(json.dumps(data) if not isinstance(data, str) else data)
        return path

    def test_defaults_without_file(self) -> None:
        config = load_config(self.root)
        self.assertEqual(config.changelog_file, "Changelog.org")
        self.assertEqual(config.version_file, "VERSION")
        self.assertEqual(config.top_heading, "Changelog")
        self.assertEqual(config.rules, DEFAULT_RULES)

    def test_default_config_does_not_share_rule_list(self) -> None:
        config = ChangelogConfig()
        config.rules.append(DEFAULT_RULES[0])
        self.assertEqual(len(DEFAULT_RULES), 4)

    def test_file_values_are_loaded(self) -> None:
        self.write_config(
            {
                "changelog_file": "CHANGES.org",
                "version_file": "version.txt",
                "top_heading": "Release history",
                "rules": [
                    {"heading": "Features", "rank": 1, "types": ["feat"]},
                    {"heading": "Everything else", "rank": 2, "exclude_types": ["feat"]},
                ],
            }
        )
        config = load_config(self.root)
        self.assertEqual(config.changelog_file, "CHANGES.org")
        self.assertEqual(config.version_file, "version.txt")
        self.assertEqual(config.top_heading, "Release history")
        self.assertEqual([(r.heading, r.rank) for r in config.rules], [("Features", 1), ("Everything else", 2)])

    def test_overrides_take_precedence(self) -> None:
        self.write_config({"changelog_file": "CHANGES.org", "top_heading": "History"})
        config = load_config(
            self.root,
            overrides={"changelog_file": "NEWS.org", "version_file": None, "top_heading": None},
        )
        self.assertEqual(config.changelog_file, "NEWS.org")
        self.assertEqual(config.version_file, "VERSION")
        self.assertEqual(config.top_heading, "History")

    def test_explicit_config_path(self) -> None:
        path = self.write_config({"version_file": "REL"}, name="custom.json")
        config = load_config(self.root, config_path=path)
        self.assertEqual(config.version_file, "REL")

    def test_explicit_config_path_missing(self) -> None:
        with self.assertRaises(ConfigError):
            load_config(self.root, config_path=self.root / "nope.json")

    def test_invalid_json(self) -> None:
        self.write_config("{invalid}")
        with self.assertRaises(ConfigError):
            load_config(self.root)

    def test_top_level_must_be_object(self) -> None:
        self.write_config([1, 2, 3])
        with self.assertRaises(ConfigError):
            load_config(self.root)

    def test_string_keys_are_validated(self) -> None:
        for key in ("changelog_file", "version_file", "top_heading"):
            with self.subTest(key=key):
                self.write_config({key: 42})
                with self.assertRaises(ConfigError):
                    load_config(self.root)

    def test_empty_rules_rejected(self) -> None:
        self.write_config({"rules": []})
        with self.assertRaises(ConfigError):
            load_config(self.root)

    def test_unknown_override_rejected(self) -> None:
        with self.assertRaises(ConfigError):
            load_config(self.root, overrides={"colour": "blue"})

    def test_empty_override_rejected(self) -> None:
        for key in ("changelog_file", "version_file", "top_heading"):
            with self.subTest(key=key):
                with self.assertRaises(ConfigError):
                    load_config(self.root, overrides={key: ""})

class TestParseRule(unittest.TestCase):
    def test_breaking_rule(self) -> None:
        rule = parse_rule({"heading": "BREAKING", "rank": 0, "breaking": True})
        self.assertTrue(rule.predicate(parse_line("a1 a@x fix!: x")))
        self.assertFalse(rule.predicate(parse_line("a1 a@x fix: x")))

    def test_invalid_rules(self) -> None:
        bad_rules = [
            "not an object",
            {"rank": 1},
            {"heading": "X"},
            {"heading": "", "rank": 1},
            {"heading": "X", "rank": -1},
            {"heading": "X", "rank": True},
            {"heading": "X", "rank": "1"},
            {"heading": "X", "rank": 1, "types": "feat"},
            {"heading": "X", "rank": 1, "exclude_types": [1]},
            {"heading": "X", "rank": 1, "breaking": "yes"},
        ]
        for data in bad_rules:
            with self.subTest(data=data):
                with self.assertRaises(ConfigError):
                    parse_rule(data)

    def test_unknown_keys_are_ignored(self) -> None:
        rule = parse_rule({"heading": "X", "rank": 2, "colour": "red"})
        self.assertEqual(rule.heading, "X")


if __name__ == "__main__":
    unittest.main()
