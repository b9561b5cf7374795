"""
templates.py - Built-in weapon templates

Starting points for new weapon files (assault rifle, SMG, sniper, shotgun,
pistol, LMG, abilities, melee). The index lives in
config/weapon_templates.json; each template's text is a plain weapon file
under config/weapon_templates/.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from shared.data_validation import ConfigurationError, require_key, require_type

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WeaponTemplate:
    id: str
    name: str
    description: str
    category: str
    base_weapon: str
    content: str


@dataclass(frozen=True)
class TemplateCategory:
    id: str
    name: str


class WeaponTemplateLibrary:
    """Templates loaded from the index file, in index order."""

    def __init__(self, index_file_path: str = None):
        """
        Initialize template library.

        Args:
            index_file_path: Path to weapon_templates.json (defaults to config/weapon_templates.json)
        """
        if index_file_path is None:
            project_root = Path(__file__).parent.parent
            index_file_path = project_root / "config" / "weapon_templates.json"

        self._index_file_path = Path(index_file_path)
        self._templates_dir = self._index_file_path.parent / "weapon_templates"
        self._categories: List[TemplateCategory] = []
        self._templates: Dict[str, WeaponTemplate] = {}
        self._load_templates()

    def _load_templates(self):
        if not self._index_file_path.exists():
            raise ConfigurationError(
                f"Weapon template index not found: {self._index_file_path}"
            )

        with open(self._index_file_path, 'r', encoding='utf-8') as f:
            index = json.load(f)

        for raw in require_type(require_key(index, "categories"), list, "categories"):
            self._categories.append(TemplateCategory(require_key(raw, "id"), require_key(raw, "name")))
        category_ids = {category.id for category in self._categories}

        for raw in require_type(require_key(index, "templates"), list, "templates"):
            template_id = require_key(raw, "id")
            category = require_key(raw, "category")
            if category not in category_ids:
                raise ConfigurationError(
                    f"Template '{template_id}' uses unknown category '{category}'"
                )

            template_file = self._templates_dir / require_key(raw, "file")
            if not template_file.exists():
                raise ConfigurationError(
                    f"Template '{template_id}' file not found: {template_file}"
                )
            with open(template_file, 'r', encoding='utf-8') as f:
                content = f.read()

            self._templates[template_id] = WeaponTemplate(
                id=template_id,
                name=require_key(raw, "name"),
                description=require_key(raw, "description"),
                category=category,
                base_weapon=require_key(raw, "base_weapon"),
                content=content,
            )

        logger.info("Loaded %d weapon templates", len(self._templates))

    @property
    def categories(self) -> List[TemplateCategory]:
        return list(self._categories)

    @property
    def templates(self) -> List[WeaponTemplate]:
        return list(self._templates.values())

    def get_template(self, template_id: str) -> Optional[WeaponTemplate]:
        """Get a template by id, or None if there is no such template."""
        return self._templates.get(template_id)

    def templates_by_category(self, category_id: str) -> List[WeaponTemplate]:
        """
        Templates of one category, in index order.

        Raises:
            ConfigurationError: If the category doesn't exist
        """
        if category_id not in {category.id for category in self._categories}:
            raise ConfigurationError(f"Unknown template category '{category_id}'")
        return [template for template in self._templates.values() if template.category == category_id]


# Global singleton library
_template_library: Optional[WeaponTemplateLibrary] = None


def get_template_library() -> WeaponTemplateLibrary:
    """Get global template library singleton."""
    global _template_library
    if _template_library is None:
        _template_library = WeaponTemplateLibrary()
    return _template_library


def reset_template_library():
    """Reset global library (useful for testing)."""
    global _template_library
    _template_library = None
