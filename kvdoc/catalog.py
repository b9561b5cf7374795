"""
catalog.py - Catalog of known weapon properties

Groups the well-known weapon keys into categories (General, Damage, Ammo &
Reload, Recoil, ...) with a label, an input type and an optional list of
select options. The catalog is what a property form is built from; keys
found in a file but absent from the catalog are listed as "other" properties.

Definitions live in config/property_catalog.json and are validated on load.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

from shared.data_validation import ConfigurationError, require_key, require_type

logger = logging.getLogger(__name__)

PROPERTY_TYPES = ("string", "number", "select")


@dataclass(frozen=True)
class PropertyDef:
    key: str
    label: str
    type: str
    description: Optional[str] = None
    options: Tuple[str, ...] = ()
    step: Optional[float] = None

    def matches(self, query: str) -> bool:
        """Case-insensitive match on key, label or description."""
        query = query.lower()
        return (
            query in self.key.lower()
            or query in self.label.lower()
            or (self.description is not None and query in self.description.lower())
        )


@dataclass(frozen=True)
class CategoryDef:
    id: str
    name: str
    description: str
    properties: Tuple[PropertyDef, ...]


class PropertyCatalog:
    """
    Registry of property categories loaded from config/property_catalog.json.
    """

    def __init__(self, catalog_file_path: str = None):
        """
        Initialize property catalog.

        Args:
            catalog_file_path: Path to property_catalog.json (defaults to config/property_catalog.json)
        """
        if catalog_file_path is None:
            project_root = Path(__file__).parent.parent
            catalog_file_path = project_root / "config" / "property_catalog.json"

        self._catalog_file_path = Path(catalog_file_path)
        self._categories: List[CategoryDef] = []
        self._by_key: Dict[str, PropertyDef] = {}
        self._load_catalog()

    def _load_catalog(self):
        """Load and validate the catalog JSON file."""
        if not self._catalog_file_path.exists():
            raise ConfigurationError(
                f"Property catalog file not found: {self._catalog_file_path}"
            )

        with open(self._catalog_file_path, 'r', encoding='utf-8') as f:
            raw = json.load(f)

        for raw_category in require_type(require_key(raw, "categories"), list, "categories"):
            category = self._build_category(raw_category)
            self._categories.append(category)
            for prop in category.properties:
                if prop.key in self._by_key:
                    raise ConfigurationError(
                        f"Property '{prop.key}' is listed in more than one category"
                    )
                self._by_key[prop.key] = prop

        logger.info("Loaded %d property categories (%d keys)", len(self._categories), len(self._by_key))

    def _build_category(self, raw: Dict[str, Any]) -> CategoryDef:
        category_id = require_key(raw, "id")
        properties = tuple(
            self._build_property(category_id, raw_prop)
            for raw_prop in require_type(require_key(raw, "properties"), list, f"{category_id}.properties")
        )
        return CategoryDef(
            id=category_id,
            name=require_key(raw, "name"),
            description=require_key(raw, "description"),
            properties=properties,
        )

    def _build_property(self, category_id: str, raw: Dict[str, Any]) -> PropertyDef:
        key = require_key(raw, "key")
        prop_type = require_key(raw, "type")
        if prop_type not in PROPERTY_TYPES:
            raise ConfigurationError(
                f"Property '{key}' in category '{category_id}': unknown type '{prop_type}'"
            )

        options = tuple(raw.get("options", ()))
        if prop_type == "select" and not options:
            raise ConfigurationError(
                f"Property '{key}' in category '{category_id}': select requires options"
            )

        return PropertyDef(
            key=key,
            label=require_key(raw, "label"),
            type=prop_type,
            description=raw.get("description"),
            options=options,
            step=raw.get("step"),
        )

    @property
    def categories(self) -> List[CategoryDef]:
        return list(self._categories)

    def get_category(self, category_id: str) -> CategoryDef:
        """
        Get category by id.

        Raises:
            ConfigurationError: If the category doesn't exist
        """
        for category in self._categories:
            if category.id == category_id:
                return category
        raise ConfigurationError(f"Unknown property category '{category_id}'")

    def get_property(self, key: str) -> Optional[PropertyDef]:
        return self._by_key.get(key)

    def is_known(self, key: str) -> bool:
        """Check if a key belongs to any category."""
        return key in self._by_key

    def search(self, query: str) -> List[CategoryDef]:
        """
        Filter categories down to properties matching the query.

        Categories left without properties are dropped; an empty query
        returns every category unchanged.
        """
        if not query:
            return self.categories

        filtered = []
        for category in self._categories:
            matching = tuple(prop for prop in category.properties if prop.matches(query))
            if matching:
                filtered.append(CategoryDef(category.id, category.name, category.description, matching))
        return filtered

    def category_has_values(self, category_id: str, values: Mapping[str, Any]) -> bool:
        """True when any property of the category has a non-empty value."""
        category = self.get_category(category_id)
        return any(values.get(prop.key) not in (None, "") for prop in category.properties)

    def uncategorized(self, values: Mapping[str, Any]) -> Dict[str, Any]:
        """Properties of a document that no category lists, in document order."""
        return {key: value for key, value in values.items() if key not in self._by_key}


# Global singleton catalog
_property_catalog: Optional[PropertyCatalog] = None


def get_property_catalog() -> PropertyCatalog:
    """Get global property catalog singleton."""
    global _property_catalog
    if _property_catalog is None:
        _property_catalog = PropertyCatalog()
    return _property_catalog


def reset_property_catalog():
    """Reset global catalog (useful for testing)."""
    global _property_catalog
    _property_catalog = None
