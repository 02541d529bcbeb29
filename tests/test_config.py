"""Persisted preference loading and fallbacks."""

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from bolt import config
from bolt.constants import BOLT_QUIT_TIMES, BOLT_STATUS_TIMEOUT


class ConfigTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.path = Path(self.tmp.name) / "bolt.json"
        patcher = mock.patch.object(config, "CONFIG_PATH", self.path)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.addCleanup(self.tmp.cleanup)

    def test_missing_file_gives_defaults(self) -> None:
        self.assertEqual(config.load_config(), {})
        settings = config.load_settings()
        self.assertEqual(settings.quit_times, BOLT_QUIT_TIMES)
        self.assertEqual(settings.status_timeout, BOLT_STATUS_TIMEOUT)

    def test_valid_values_are_used(self) -> None:
        self.path.write_text(json.dumps({"quit_times": 0, "status_timeout": 2}), encoding="utf-8")
        settings = config.load_settings()
        self.assertEqual(settings.quit_times, 0)
        self.assertEqual(settings.status_timeout, 2.0)

    def test_malformed_json_falls_back(self) -> None:
        self.path.write_text("{nope", encoding="utf-8")
        with self.assertLogs("bolt.config", level="WARNING"):
            self.assertEqual(config.load_config(), {})

    def test_non_object_json_falls_back(self) -> None:
        self.path.write_text("[1, 2]", encoding="utf-8")
        self.assertEqual(config.load_config(), {})

    def test_invalid_values_fall_back_individually(self) -> None:
        self.path.write_text(json.dumps({"quit_times": -1, "status_timeout": 9}), encoding="utf-8")
        with self.assertLogs("bolt.config", level="WARNING"):
            settings = config.load_settings()
        self.assertEqual(settings.quit_times, BOLT_QUIT_TIMES)
        self.assertEqual(settings.status_timeout, 9.0)

    def test_booleans_are_not_numbers(self) -> None:
        self.path.write_text(json.dumps({"quit_times": True, "status_timeout": False}), encoding="utf-8")
        with self.assertLogs("bolt.config", level="WARNING"):
            settings = config.load_settings()
        self.assertEqual(settings.quit_times, BOLT_QUIT_TIMES)
        self.assertEqual(settings.status_timeout, BOLT_STATUS_TIMEOUT)


if __name__ == "__main__":
    unittest.main()
