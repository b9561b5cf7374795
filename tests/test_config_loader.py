#!/usr/bin/env python3
"""
test_config_loader.py - Editor configuration loading and validation

Run with: python -m unittest tests.test_config_loader
"""

import sys
import os
import json
import tempfile
import unittest

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

from config_loader import ConfigLoader, get_config_loader
from shared.data_validation import ConfigurationError


VALID_CONFIG = {
    "mutator": {"key_column_width": 32, "insert_indent": "\t"},
    "session": {"default_view_mode": "ads", "default_variant_count": 5},
    "edit_log": {"enabled": True, "output_file": "edits.log"},
}


class TempConfigMixin:
    def make_loader(self, config=None, raw=None) -> ConfigLoader:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        config_dir = os.path.join(self._tmp.name, "config")
        os.makedirs(config_dir)
        with open(os.path.join(config_dir, "editor_config.json"), "w", encoding="utf-8") as f:
            f.write(raw if raw is not None else json.dumps(config))
        return ConfigLoader(root_path=self._tmp.name)


class TestShippedConfig(unittest.TestCase):
    def test_project_defaults(self) -> None:
        loader = ConfigLoader(root_path=PROJECT_ROOT)
        self.assertEqual(loader.get_key_column_width(), 40)
        self.assertEqual(loader.get_insert_indent(), "    ")
        self.assertEqual(loader.get_default_view_mode(), "hipfire")
        self.assertEqual(loader.get_default_variant_count(), 3)
        self.assertFalse(loader.get_edit_log_settings()["enabled"])

    def test_global_loader_is_shared(self) -> None:
        self.assertIs(get_config_loader(), get_config_loader())


class TestConfigLoader(TempConfigMixin, unittest.TestCase):
    def test_reads_custom_values(self) -> None:
        loader = self.make_loader(VALID_CONFIG)
        self.assertEqual(loader.get_key_column_width(), 32)
        self.assertEqual(loader.get_insert_indent(), "\t")
        self.assertEqual(loader.get_default_view_mode(), "ads")
        self.assertEqual(loader.get_default_variant_count(), 5)
        self.assertEqual(loader.get_edit_log_settings()["output_file"], "edits.log")

    def test_cache_and_force_reload(self) -> None:
        loader = self.make_loader(VALID_CONFIG)
        first = loader.load_config("editor_config", force_reload=False)
        self.assertIs(loader.load_config("editor_config", force_reload=False), first)
        self.assertIsNot(loader.load_config("editor_config", force_reload=True), first)

    def test_missing_file(self) -> None:
        loader = self.make_loader(VALID_CONFIG)
        with self.assertRaises(FileNotFoundError):
            loader.load_config("nope", force_reload=False)

    def test_invalid_json(self) -> None:
        loader = self.make_loader(raw="{not json")
        with self.assertRaises(RuntimeError):
            loader.get_editor_config()

    def test_missing_section(self) -> None:
        loader = self.make_loader({"session": VALID_CONFIG["session"]})
        with self.assertRaises(ConfigurationError):
            loader.get_key_column_width()

    def test_invalid_values(self) -> None:
        bad_width = dict(VALID_CONFIG, mutator={"key_column_width": 0, "insert_indent": ""})
        with self.assertRaises(ConfigurationError):
            self.make_loader(bad_width).get_key_column_width()

        bad_mode = dict(VALID_CONFIG, session={"default_view_mode": "scoped", "default_variant_count": 1})
        with self.assertRaises(ConfigurationError):
            self.make_loader(bad_mode).get_default_view_mode()

        bad_count = dict(VALID_CONFIG, session={"default_view_mode": "ads", "default_variant_count": True})
        with self.assertRaises(ConfigurationError):
            self.make_loader(bad_count).get_default_variant_count()


if __name__ == "__main__":
    unittest.main()
