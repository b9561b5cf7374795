"""
kvdoc - Weapon KeyValue document parsing and editing

This module provides the weapon file document functionality:
- Parse weapon text into a flat property map (last occurrence wins)
- Parse the Mods and RUI_CrosshairData special blocks
- Edit values in place without touching any other byte
- Property catalog and built-in weapon templates
- Editing session tying text, document and recoil preview together

PUBLIC API:
  From scanner.py:
    - parse() - Build a WeaponDocument from text
    - scan_lines() - Per-line classification
    - find_duplicate_keys() - Keys defined on more than one line

  From blocks.py:
    - parse_mods_block() - Mods entries
    - parse_rui_crosshair_data() - Crosshair data (None if absent)

  From mutator.py:
    - update() - Set a key's value (insert before final brace if absent)
    - clear() - Empty a key's value
    - find_value() - Value on the line update() would rewrite

  From catalog.py / templates.py:
    - get_property_catalog() - Property catalog singleton
    - get_template_library() - Template library singleton

  From session.py:
    - WeaponEditorSession - One open weapon file

USAGE:
  from kvdoc import parse, update

  doc = parse(text)
  print(doc["fire_rate"])
  text = update(text, "fire_rate", "15")
"""

from kvdoc.model import CrosshairData, CrosshairEntry, ModEntry, Property, WeaponDocument
from kvdoc.scanner import find_duplicate_keys, parse, scan_lines
from kvdoc.blocks import parse_mods_block, parse_rui_crosshair_data
from kvdoc.mutator import clear, find_value, update
from kvdoc.catalog import PropertyCatalog, get_property_catalog, reset_property_catalog
from kvdoc.templates import WeaponTemplate, WeaponTemplateLibrary, get_template_library, reset_template_library
from kvdoc.session import WeaponEditorSession

__all__ = [
    # Model
    "WeaponDocument",
    "Property",
    "ModEntry",
    "CrosshairData",
    "CrosshairEntry",
    # Parsing
    "parse",
    "scan_lines",
    "find_duplicate_keys",
    "parse_mods_block",
    "parse_rui_crosshair_data",
    # Editing
    "update",
    "clear",
    "find_value",
    # Catalog and templates
    "PropertyCatalog",
    "get_property_catalog",
    "reset_property_catalog",
    "WeaponTemplate",
    "WeaponTemplateLibrary",
    "get_template_library",
    "reset_template_library",
    # Session
    "WeaponEditorSession",
]
