"""
session.py - Editing session for one weapon file

Holds the current text of one file and keeps its WeaponDocument in step:
every raw edit or property edit re-parses from scratch. Simulation results
are memoized per simulation arguments until the next edit.
"""

import logging
from typing import Dict, List, Optional, Tuple

from config_loader import get_config_loader
from kvdoc import mutator
from kvdoc.model import WeaponDocument
from kvdoc.scanner import parse
from kvdoc.templates import WeaponTemplate
from recoil.params import ViewMode, resolve_pattern_name
from recoil.simulator import MAX_VARIANTS, MIN_VARIANTS, Trajectory, simulate
from shared.edit_log import EditLogger

logger = logging.getLogger(__name__)


class WeaponEditorSession:
    """
    One open weapon file.

    Example:
        >>> session = WeaponEditorSession("r301.txt", text)
        >>> session.set_property("fire_rate", "13.5")
        >>> primary, variants = session.simulate(view_mode="ads", variant_count=4)
    """

    def __init__(self, name: str, text: str = "", edit_logger: Optional[EditLogger] = None,
                 column_width: Optional[int] = None):
        """
        Args:
            name: File name shown in logs and status
            text: Initial file content (treated as saved)
            edit_logger: Audit log for edits (defaults to editor_config.json edit_log settings)
            column_width: Value column for edited lines (defaults to editor_config.json)
        """
        config = get_config_loader()
        self.name = name
        self.column_width = column_width if column_width is not None else config.get_key_column_width()
        self.insert_indent = config.get_insert_indent()

        if edit_logger is None:
            settings = config.get_edit_log_settings()
            edit_logger = EditLogger(output_file=settings["output_file"], enabled=settings["enabled"])
        self.edit_logger = edit_logger

        self._text = text
        self._saved_text = text
        self._document = parse(text)
        self._simulation_cache: Dict[tuple, Tuple[Trajectory, List[Trajectory]]] = {}

    @classmethod
    def from_template(cls, name: str, template: WeaponTemplate, **kwargs) -> "WeaponEditorSession":
        """New, unsaved session whose text is a copy of the template."""
        session = cls(name, "", **kwargs)
        session.set_text(template.content)
        return session

    @property
    def text(self) -> str:
        return self._text

    @property
    def document(self) -> WeaponDocument:
        return self._document

    @property
    def is_modified(self) -> bool:
        return self._text != self._saved_text

    def mark_saved(self):
        self._saved_text = self._text

    def set_text(self, text: str):
        """Replace the whole text (raw editor edit)."""
        if text == self._text:
            return
        old_line_count = self._document.line_count
        self._apply(text)
        self.edit_logger.log_raw_edit(self.name, old_line_count, self._document.line_count)

    def set_property(self, key: str, value: str):
        """
        Set one property through the mutator; "" clears it.

        With duplicate keys the first line is rewritten, so the logged old
        value is read from that line rather than from the document.
        """
        old_value = mutator.find_value(self._text, key)
        new_text = mutator.update(self._text, key, value, column_width=self.column_width,
                                  insert_indent=self.insert_indent)
        if new_text == self._text:
            return
        self._apply(new_text)
        self.edit_logger.log_property_edit(self.name, key, old_value, value)

    def clear_property(self, key: str):
        self.set_property(key, "")

    def _apply(self, text: str):
        self._text = text
        self._document = parse(text)
        # Cached previews belong to the replaced text
        self._simulation_cache.clear()

    def status(self) -> Dict[str, object]:
        """Counts shown in the editor status bar."""
        return {
            "properties": len(self._document),
            "lines": self._document.line_count,
            "base_weapon": self._document.base_weapon,
        }

    def simulate(self, view_mode=None, airborne: bool = False, variant_count: Optional[int] = None,
                 pattern_name: Optional[str] = None) -> Tuple[Trajectory, List[Trajectory]]:
        """
        Recoil preview for the current properties.

        Args:
            view_mode: ViewMode or "hipfire" / "ads" (defaults to editor_config.json)
            airborne: Whether the shooter is in the air
            variant_count: Number of trajectories (defaults to editor_config.json)
            pattern_name: Pattern override; defaults to the weapon's viewkick_pattern

        Returns:
            Same as recoil.simulator.simulate
        """
        config = get_config_loader()
        if view_mode is None:
            view_mode = config.get_default_view_mode()
        if variant_count is None:
            variant_count = config.get_default_variant_count()

        view_mode = ViewMode.coerce(view_mode)
        variant_count = max(MIN_VARIANTS, min(MAX_VARIANTS, int(variant_count)))
        properties = self._document.values()
        if pattern_name is None:
            pattern_name = resolve_pattern_name(properties)

        cache_key = (tuple(properties.items()), pattern_name, view_mode, airborne, variant_count)
        cached = self._simulation_cache.get(cache_key)
        if cached is not None:
            return cached

        result = simulate(properties, pattern_name, view_mode, airborne, variant_count)
        self._simulation_cache[cache_key] = result
        logger.debug("Simulated %s (%s, %s): %d points", self.name, pattern_name, view_mode.value,
                     len(result[0]))
        return result
