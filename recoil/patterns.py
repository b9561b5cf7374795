"""
patterns.py - Named recoil pattern table

Each pattern is an ordered list of per-shot (yaw, pitch, yaw_random,
pitch_random) tuples plus a loop offset. Magazines longer than the table
keep cycling through bullets[loop_offset:].

Definitions live in config/recoil_patterns.json:

    "r301": {
        "description": "...",
        "bullets": [[0.05, 1.2, 0.1, 0.05], ...],
        "loop_offset": 6
    }
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from shared.data_validation import ConfigurationError, require_key, require_number_list, require_type

logger = logging.getLogger(__name__)

Bullet = Tuple[float, float, float, float]


@dataclass(frozen=True)
class RecoilPattern:
    name: str
    bullets: Tuple[Bullet, ...]
    loop_offset: int
    description: str = ""

    def bullet_index(self, shot: int) -> int:
        """
        Index into bullets for a 0-based shot number.

        Shots past the end of the table wrap around within
        [loop_offset, len(bullets)).
        """
        count = len(self.bullets)
        if shot < count:
            return shot
        return self.loop_offset + (shot - self.loop_offset) % (count - self.loop_offset)

    def bullet_indices(self, shots: int) -> List[int]:
        return [self.bullet_index(i) for i in range(shots)]

    def bullet(self, shot: int) -> Bullet:
        return self.bullets[self.bullet_index(shot)]


class RecoilPatternRegistry:
    """
    Registry of recoil patterns loaded from config/recoil_patterns.json.

    Lookups by unknown name return None: a weapon file naming a pattern the
    table does not know simply has no preview.
    """

    def __init__(self, patterns_file_path: str = None, definitions: Dict[str, Any] = None):
        """
        Initialize recoil pattern registry.

        Args:
            patterns_file_path: Path to recoil_patterns.json (defaults to config/recoil_patterns.json)
            definitions: Already-loaded definitions; skips reading the file
        """
        self._patterns: Dict[str, RecoilPattern] = {}

        if definitions is None:
            if patterns_file_path is None:
                project_root = Path(__file__).parent.parent
                patterns_file_path = project_root / "config" / "recoil_patterns.json"
            self._patterns_file_path = Path(patterns_file_path)
            definitions = self._read_file()
        else:
            self._patterns_file_path = None

        for pattern_name, pattern_def in require_type(definitions, dict, "recoil patterns").items():
            self._patterns[pattern_name] = self._build_pattern(pattern_name, pattern_def)

        logger.info("Loaded %d recoil patterns", len(self._patterns))

    @classmethod
    def from_definitions(cls, definitions: Dict[str, Any]) -> "RecoilPatternRegistry":
        """Build a registry from in-memory definitions (same shape as the JSON file)."""
        return cls(definitions=definitions)

    def _read_file(self) -> Dict[str, Any]:
        if not self._patterns_file_path.exists():
            raise ConfigurationError(
                f"Recoil patterns file not found: {self._patterns_file_path}"
            )

        with open(self._patterns_file_path, 'r', encoding='utf-8') as f:
            return json.load(f)

    def _build_pattern(self, pattern_name: str, pattern_def: Dict[str, Any]) -> RecoilPattern:
        """
        Validate a pattern definition and build the immutable pattern.

        Raises:
            ConfigurationError: If the definition is invalid
        """
        raw_bullets = require_type(require_key(pattern_def, "bullets"), list, f"{pattern_name}.bullets")
        if not raw_bullets:
            raise ConfigurationError(f"Recoil pattern '{pattern_name}' has no bullets")

        bullets = tuple(
            tuple(float(v) for v in require_number_list(raw, 4, f"{pattern_name}.bullets[{i}]"))
            for i, raw in enumerate(raw_bullets)
        )

        loop_offset = require_type(require_key(pattern_def, "loop_offset"), int, f"{pattern_name}.loop_offset")
        if not 0 <= loop_offset < len(bullets):
            raise ConfigurationError(
                f"Recoil pattern '{pattern_name}': loop_offset {loop_offset} "
                f"outside [0, {len(bullets)})"
            )

        return RecoilPattern(
            name=pattern_name,
            bullets=bullets,
            loop_offset=loop_offset,
            description=pattern_def.get("description", ""),
        )

    def get_pattern(self, pattern_name: str) -> Optional[RecoilPattern]:
        return self._patterns.get(pattern_name)

    def pattern_exists(self, pattern_name: str) -> bool:
        """Check if a pattern exists in the registry."""
        return pattern_name in self._patterns

    def pattern_names(self) -> List[str]:
        return list(self._patterns.keys())


# Global singleton registry
_pattern_registry: Optional[RecoilPatternRegistry] = None


def get_recoil_pattern_registry() -> RecoilPatternRegistry:
    """Get global recoil pattern registry singleton."""
    global _pattern_registry
    if _pattern_registry is None:
        _pattern_registry = RecoilPatternRegistry()
    return _pattern_registry


def reset_recoil_pattern_registry():
    """Reset global registry (useful for testing)."""
    global _pattern_registry
    _pattern_registry = None
