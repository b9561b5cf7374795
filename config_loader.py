# config_loader.py - ROOT FOLDER
"""
Centralized configuration loader for the weapon KeyValue editor.
This module provides a single source of truth for editor settings.
Place this file in the PROJECT ROOT directory.
"""

import json
from typing import Dict, Any
from pathlib import Path

from shared.data_validation import ConfigurationError, require_key


class ConfigLoader:
    """Centralized configuration loader."""

    def __init__(self, root_path: str):
        """Initialize config loader.

        Args:
            root_path: Root path for configuration directory.
        """
        self.root_path = Path(root_path)
        self.config_dir = self.root_path / "config"
        self._cache = {}

    def load_config(self, config_name: str, force_reload: bool) -> Dict[str, Any]:
        """Load configuration file.

        Args:
            config_name: Name of config file (without .json extension)
            force_reload: Force reload from disk even if cached

        Returns:
            Configuration dictionary

        Raises:
            FileNotFoundError: If config file doesn't exist
            RuntimeError: If config file is invalid JSON
        """
        if not force_reload and config_name in self._cache:
            return self._cache[config_name]

        config_file = self.config_dir / f"{config_name}.json"

        if not config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_file}")

        try:
            with open(config_file, 'r', encoding='utf-8-sig') as f:
                config = json.load(f)
                self._cache[config_name] = config
                return config
        except json.JSONDecodeError as e:
            raise RuntimeError(f"Invalid JSON in {config_file}: {e}")

    def get_editor_config(self) -> Dict[str, Any]:
        """Get editor configuration."""
        return self.load_config("editor_config", force_reload=False)

    def get_key_column_width(self) -> int:
        """Column that edited values are aligned on - raises error if missing."""
        mutator = require_key(self.get_editor_config(), "mutator")
        width = require_key(mutator, "key_column_width")
        if not isinstance(width, int) or isinstance(width, bool) or width < 1:
            raise ConfigurationError(f"mutator.key_column_width must be a positive integer, got {width!r}")
        return width

    def get_insert_indent(self) -> str:
        """Indent used for inserted property lines."""
        mutator = require_key(self.get_editor_config(), "mutator")
        return require_key(mutator, "insert_indent")

    def get_default_view_mode(self) -> str:
        """Get default simulation view mode for new sessions."""
        session = require_key(self.get_editor_config(), "session")
        view_mode = require_key(session, "default_view_mode")
        if view_mode not in ("hipfire", "ads"):
            raise ConfigurationError(f"session.default_view_mode must be 'hipfire' or 'ads', got {view_mode!r}")
        return view_mode

    def get_default_variant_count(self) -> int:
        """Get default number of simulated trajectories for new sessions."""
        session = require_key(self.get_editor_config(), "session")
        count = require_key(session, "default_variant_count")
        if not isinstance(count, int) or isinstance(count, bool):
            raise ConfigurationError(f"session.default_variant_count must be an integer, got {count!r}")
        return count

    def get_edit_log_settings(self) -> Dict[str, Any]:
        """Get edit log settings ('enabled', 'output_file')."""
        edit_log = require_key(self.get_editor_config(), "edit_log")
        require_key(edit_log, "enabled")
        require_key(edit_log, "output_file")
        return edit_log

# Global instance for easy access
_config_loader = None

def get_config_loader() -> ConfigLoader:
    """Get global config loader instance."""
    global _config_loader
    if _config_loader is None:
        _config_loader = ConfigLoader(root_path=str(Path(__file__).resolve().parent))
    return _config_loader

def get_key_column_width() -> int:
    """Convenience function to get the value column width."""
    return get_config_loader().get_key_column_width()

def get_default_variant_count() -> int:
    """Convenience function to get the default variant count."""
    return get_config_loader().get_default_variant_count()

# Example usage:
if __name__ == "__main__":
    config = get_config_loader()

    print(f"Key column width: {config.get_key_column_width()}")
    print(f"Insert indent: {config.get_insert_indent()!r}")
    print(f"Default view mode: {config.get_default_view_mode()}")
    print(f"Default variant count: {config.get_default_variant_count()}")
    print(f"Edit log: {config.get_edit_log_settings()}")
