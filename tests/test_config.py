"""Tests for perfcompare.config: comparison configuration."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from perfcompare.config import (
    DEFAULT_MIN_ALLOWED_REQUEST_COUNT,
    CompareConfig,
    config_from_mapping,
    load_config,
    validate_config,
)


class TestCompareConfig(unittest.TestCase):
    """Tests for CompareConfig defaults."""

    def test_defaults(self) -> None:
        config = CompareConfig()
        self.assertIsNone(config.left_job)
        self.assertIsNone(config.right_job)
        self.assertEqual(config.min_allowed_request_count, DEFAULT_MIN_ALLOWED_REQUEST_COUNT)
        self.assertEqual(config.output_format, "table")


class TestValidateConfig(unittest.TestCase):
    """Tests for validate_config()."""

    def _valid(self) -> CompareConfig:
        return CompareConfig(left_job=Path("a"), right_job=Path("b"))

    def test_valid(self) -> None:
        self.assertEqual(validate_config(self._valid()), [])

    def test_missing_jobs(self) -> None:
        fields = {e.field for e in validate_config(CompareConfig())}
        self.assertEqual(fields, {"left_job", "right_job"})

    def test_negative_threshold(self) -> None:
        config = self._valid()
        config.min_allowed_request_count = -1
        errors = validate_config(config)
        self.assertEqual([e.field for e in errors], ["min_allowed_request_count"])

    def test_unknown_format(self) -> None:
        config = self._valid()
        config.output_format = "html"
        errors = validate_config(config)
        self.assertEqual(errors[0].field, "output_format")
        self.assertEqual(errors[0].severity, "error")

    def test_output_with_table_is_warning(self) -> None:
        config = self._valid()
        config.output = Path("out.txt")
        errors = validate_config(config)
        self.assertEqual(len(errors), 1)
        self.assertEqual(errors[0].severity, "warning")


class TestLoadConfig(unittest.TestCase):
    """Tests for load_config()."""

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_load_mapping(self) -> None:
        path = self.tmp / "compare.yaml"
        path.write_text("left_job: base\nright_job: cand\nmin_allowed_request_count: 50\n")
        data = load_config(path)
        self.assertEqual(data["left_job"], "base")
        self.assertEqual(data["min_allowed_request_count"], 50)

    def test_empty_file(self) -> None:
        path = self.tmp / "empty.yaml"
        path.write_text("")
        self.assertEqual(load_config(path), {})

    def test_missing_file(self) -> None:
        with self.assertRaises(FileNotFoundError):
            load_config(self.tmp / "missing.yaml")

    def test_invalid_yaml(self) -> None:
        path = self.tmp / "bad.yaml"
        path.write_text("invalid: yaml: [unterminated\n")
        with self.assertRaises(ValueError):
            load_config(path)

    def test_not_a_mapping(self) -> None:
        path = self.tmp / "list.yaml"
        path.write_text("- a\n- b\n")
        with self.assertRaises(ValueError):
            load_config(path)


class TestConfigFromMapping(unittest.TestCase):
    """Tests for config_from_mapping()."""

    def test_values_from_mapping(self) -> None:
        config = config_from_mapping(
            {
                "left_job": "base",
                "right_job": "cand",
                "min_allowed_request_count": 50,
                "output_format": "csv",
            }
        )
        self.assertEqual(config.left_job, Path("base"))
        self.assertEqual(config.right_job, Path("cand"))
        self.assertEqual(config.min_allowed_request_count, 50)
        self.assertEqual(config.output_format, "csv")

    def test_cli_overrides_win(self) -> None:
        config = config_from_mapping(
            {"left_job": "base", "min_allowed_request_count": 50},
            cli_overrides={"left_job": Path("other"), "min_allowed_request_count": 5},
        )
        self.assertEqual(config.left_job, Path("other"))
        self.assertEqual(config.min_allowed_request_count, 5)

    def test_none_overrides_ignored(self) -> None:
        config = config_from_mapping(
            {"min_allowed_request_count": 50},
            cli_overrides={"min_allowed_request_count": None},
        )
        self.assertEqual(config.min_allowed_request_count, 50)

    def test_string_threshold_parsed(self) -> None:
        config = config_from_mapping({"min_allowed_request_count": "25"})
        self.assertEqual(config.min_allowed_request_count, 25)

    def test_bad_threshold(self) -> None:
        with self.assertRaises(ValueError):
            config_from_mapping({"min_allowed_request_count": "many"})
        with self.assertRaises(ValueError):
            config_from_mapping({"min_allowed_request_count": True})

    def test_unknown_key_warns(self) -> None:
        with self.assertLogs("perfcompare", level="WARNING") as cm:
            config = config_from_mapping({"colour": "blue"})
        self.assertIsInstance(config, CompareConfig)
        self.assertTrue(any("colour" in line for line in cm.output))


if __name__ == "__main__":
    unittest.main()
