"""Unit tests for the user configuration file."""

import json
import logging
import tempfile
import unittest
from pathlib import Path

from ded.constants import EditorConstants
from ded.settings import Settings, load_settings, validate_setting


class TestSettings(unittest.TestCase):
    """Test loading and validating settings."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.config_file = Path(self.temp_dir.name) / "config.json"

    def tearDown(self):
        self.temp_dir.cleanup()

    def write_config(self, data):
        with open(self.config_file, 'w', encoding='utf-8') as f:
            json.dump(data, f)

    def test_missing_file_gives_defaults(self):
        settings = load_settings(self.config_file)
        self.assertEqual(settings, Settings())
        self.assertEqual(settings.tab_stop, EditorConstants.TAB_STOP)
        self.assertEqual(settings.temp_file_ext, ".ded")

    def test_valid_values_are_applied(self):
        self.write_config({"tab_stop": 8, "message_timeout": 2.5, "temp_file_ext": ".tmp"})
        settings = load_settings(self.config_file)
        self.assertEqual(settings.tab_stop, 8)
        self.assertEqual(settings.message_timeout, 2.5)
        self.assertEqual(settings.temp_file_ext, ".tmp")

    def test_invalid_values_are_ignored(self):
        self.write_config({"tab_stop": 0, "message_timeout": "soon", "temp_file_ext": "tmp"})
        with self.assertLogs("ded.settings", level=logging.WARNING):
            settings = load_settings(self.config_file)
        self.assertEqual(settings, Settings())

    def test_unknown_keys_are_ignored(self):
        self.write_config({"theme": "dark", "tab_stop": 2})
        settings = load_settings(self.config_file)
        self.assertEqual(settings.tab_stop, 2)

    def test_corrupt_file_gives_defaults(self):
        self.config_file.write_text("{not json", encoding='utf-8')
        with self.assertLogs("ded.settings", level=logging.WARNING):
            settings = load_settings(self.config_file)
        self.assertEqual(settings, Settings())

    def test_non_dict_file_gives_defaults(self):
        self.write_config([1, 2, 3])
        settings = load_settings(self.config_file)
        self.assertEqual(settings, Settings())

    def test_validate_setting(self):
        self.assertTrue(validate_setting("tab_stop", 4))
        self.assertFalse(validate_setting("tab_stop", True))
        self.assertFalse(validate_setting("tab_stop", 17))
        self.assertTrue(validate_setting("message_timeout", 0))
        self.assertFalse(validate_setting("message_timeout", -1))
        self.assertTrue(validate_setting("temp_file_ext", ".swp"))
        self.assertFalse(validate_setting("temp_file_ext", "."))
        self.assertFalse(validate_setting("temp_file_ext", "./x"))
        self.assertFalse(validate_setting("unknown", 1))
